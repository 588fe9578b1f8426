# SPDX-FileCopyrightText: 2024-2025 Pathway Bio, Inc. <https://pwbio.ai>
# SPDX-FileContributor: Kimberly Robasky
# SPDX-License-Identifier: Apache-2.0

"""
Update composer.json for installation from git
Usage: magecloud update-composer [--root DIR] [--no-update]

Reads DEPLOY_FROM_GIT_OPTIONS from the global stage of .magento.env.yaml,
writes the generated composer.json to the Magento root and runs
composer update.
"""

import json
import logging
import subprocess
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..composer.generator import ComposerGenerator
from ..utils.config_types import GitDeployOptions
from ..utils.directory_list import DirectoryList
from ..utils.filesystem import File, FileSystemError
from ..utils.package_version import MagentoVersion, UndefinedPackageError
from ..utils.stage_config import GlobalSection, StageConfigReader

logger = logging.getLogger(__name__)

COMPOSER_UPDATE_COMMAND = ['composer', 'update', '--ansi', '--no-interaction']


class UpdateComposer:
    """Regenerates composer.json from git deploy options"""

    def __init__(
        self,
        directory_list: DirectoryList,
        file: File,
        global_section: GlobalSection,
        generator: ComposerGenerator,
    ):
        self.directory_list = directory_list
        self.file = file
        self.global_section = global_section
        self.generator = generator

    def execute(self, run_update: bool = True) -> int:
        """Generate and write composer.json, returns a process exit code"""
        try:
            options = GitDeployOptions.model_validate(
                self.global_section.get(GlobalSection.DEPLOY_FROM_GIT_OPTIONS) or {}
            )
        except (ValidationError, FileSystemError) as e:
            logger.error(f"Invalid {GlobalSection.DEPLOY_FROM_GIT_OPTIONS}: {e}")
            return 1

        if not options.repositories:
            logger.error(
                f"{GlobalSection.DEPLOY_FROM_GIT_OPTIONS} has no repositories. "
                "Add them to stage.global in .magento.env.yaml"
            )
            return 1

        try:
            composer = self.generator.generate(options.repositories)
            self.write_composer(composer)
        except (FileSystemError, UndefinedPackageError) as e:
            logger.error(f"Failed to update composer.json: {e}")
            return 1

        if not run_update:
            return 0

        return self.run_composer_update()

    def write_composer(self, composer: Dict[str, Any]) -> str:
        path = self.directory_list.get_composer_json()
        self.file.file_put_contents(path, json.dumps(composer, indent=4) + '\n')
        logger.info(f"composer.json written to: {path}")
        return path

    def run_composer_update(self) -> int:
        root = self.directory_list.get_magento_root()
        logger.info(f"Running: {' '.join(COMPOSER_UPDATE_COMMAND)}")
        try:
            subprocess.run(COMPOSER_UPDATE_COMMAND, cwd=root, check=True)
        except FileNotFoundError:
            logger.error("composer executable not found in PATH")
            return 1
        except subprocess.CalledProcessError as e:
            logger.error(f"composer update failed with exit code {e.returncode}")
            return e.returncode or 1
        return 0


def create_command(root: Optional[str] = None) -> UpdateComposer:
    """Factory function wiring the command with its collaborators"""
    directory_list = DirectoryList(root)
    file = File()
    generator = ComposerGenerator(directory_list, MagentoVersion(directory_list, file), file)
    global_section = GlobalSection(StageConfigReader(directory_list, file))
    return UpdateComposer(directory_list, file, global_section, generator)
