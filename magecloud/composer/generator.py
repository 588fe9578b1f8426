# SPDX-FileCopyrightText: 2024-2025 Pathway Bio, Inc. <https://pwbio.ai>
# SPDX-FileContributor: Kimberly Robasky
# SPDX-License-Identifier: Apache-2.0

"""
Composer.json generator for installation from git

Builds a project composer.json that clones the configured repositories
before install/update and registers every module found in them as a
path repository with symlinks disabled.
"""

import logging
import re
from typing import Any, Callable, Dict, List, Mapping, Optional

from ..utils.config_types import RepoType, to_repo_options
from ..utils.directory_list import DirectoryList
from ..utils.filesystem import File
from ..utils.merge import overlay
from ..utils.package_version import MagentoVersion

logger = logging.getLogger(__name__)

# Local path packages must not be version-pinned
UNPINNED_PACKAGE_PATTERN = re.compile(r'/(framework|module)')

TOOLS_PACKAGE = 'magento/ece-tools'
TOOLS_VERSION = '2002.0.*'

GIT_CLONE_COMMAND = 'git clone -b {branch} --single-branch --depth 1 {repo} {name}'

PREPARE_PACKAGE_COMMAND = (
    "rsync -azh --stats --exclude='app/code/Magento/' --exclude='app/i18n/' --exclude='app/design/' "
    "--exclude='dev/tests' --exclude='lib/internal/Magento' --exclude='.git' ./{name}/ ./"
)


class ComposerGenerator:
    """Generates composer.json data for installation from git"""

    def __init__(self, directory_list: DirectoryList, magento_version: MagentoVersion, file: File):
        self.directory_list = directory_list
        self.magento_version = magento_version
        self.file = file
        self._module_handlers: Dict[RepoType, Callable[[str, Dict[str, Any]], None]] = {
            RepoType.SINGLE_PACKAGE: self._add_single_package,
            RepoType.FLAT_STRUCTURE: self._add_flat_structure,
            RepoType.MODULAR: self._add_modular,
        }

    def generate(self, repo_options: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Generate composer.json data.

        Args:
            repo_options: Repository name -> RepoOption (or raw dict)

        Returns:
            The composer.json document

        Raises:
            UndefinedPackageError: Magento version can't be resolved
            FileSystemError: An existing composer.json can't be read
        """
        options = to_repo_options(repo_options)
        composer = self.get_base_composer(options)
        root = self.directory_list.get_magento_root()

        root_composer_path = self.directory_list.get_composer_json()
        if self.file.is_exists(root_composer_path):
            logger.info(f"Merging root composer.json: {root_composer_path}")
            root_composer = self.file.read_json(root_composer_path)
            composer['require'] = overlay(composer['require'], root_composer.get('require'))
            composer['repositories'] = overlay(
                composer['repositories'],
                _as_mapping(root_composer.get('repositories')),
            )
        else:
            composer['require'] = overlay(composer['require'], {TOOLS_PACKAGE: TOOLS_VERSION})

        for repo_name in options:
            repo_composer_path = f"{root}/{repo_name}/composer.json"
            if not self.file.is_exists(repo_composer_path):
                continue

            logger.debug(f"Merging requirements from {repo_composer_path}")
            repo_composer = self.file.read_json(repo_composer_path)
            composer['require'] = overlay(composer['require'], repo_composer.get('require'))

        composer = self.add_modules(options, composer)

        # Mirror and index keys such as 'repo.example.com' or '0' are not packages
        for name in composer['repositories']:
            if '/' in name:
                composer['require'].setdefault(name, '*')

        for package_name in composer['require']:
            if UNPINNED_PACKAGE_PATTERN.search(package_name):
                composer['require'][package_name] = '*'

        logger.info(
            f"Generated composer.json with {len(composer['repositories'])} repositories "
            f"and {len(composer['require'])} requirements"
        )
        return composer

    def get_install_from_git_scripts(self, repo_options: Mapping[str, Any]) -> List[str]:
        """Shell commands that clone every repository into the root"""
        options = to_repo_options(repo_options)

        scripts = ['php -r"@mkdir(__DIR__ . \'/app/etc\', 0777, true);"']
        scripts.append('rm -rf ' + ' '.join(options))
        for repo_name, option in options.items():
            scripts.append(GIT_CLONE_COMMAND.format(branch=option.branch, repo=option.repo, name=repo_name))

        return scripts

    def get_base_composer(self, repo_options: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Base skeleton for composer.json.

        Raises:
            UndefinedPackageError: Magento version can't be resolved
        """
        options = to_repo_options(repo_options)
        install_from_git_scripts = self.get_install_from_git_scripts(options)

        prepare_packages_scripts = [
            PREPARE_PACKAGE_COMMAND.format(name=repo_name)
            for repo_name, option in options.items()
            if option.type == RepoType.MODULAR
        ]

        return {
            'name': 'magento/cloud-dev',
            'description': 'eCommerce Platform for Growth',
            'type': 'project',
            'version': self.magento_version.get_version(),
            'license': [
                'OSL-3.0',
            ],
            'bin': [
                'ce/bin/magento',
            ],
            'repositories': {
                'magento/framework': {
                    'type': 'path',
                    'url': './ce/lib/internal/Magento/Framework/',
                    'transport-options': {
                        'symlink': False,
                    },
                    'options': {
                        'symlink': False,
                    },
                },
            },
            'require': {},
            'config': {
                'use-include-path': True,
            },
            'autoload': {
                'psr-4': {
                    'Magento\\Setup\\': 'setup/src/Magento/Setup/',
                    'Zend\\Mvc\\Controller\\': 'setup/src/Zend/Mvc/Controller/',
                },
            },
            'minimum-stability': 'dev',
            'prefer-stable': True,
            'extra': {
                'magento-force': 'override',
                'magento-deploystrategy': 'copy',
            },
            'scripts': {
                'install-from-git': install_from_git_scripts,
                'prepare-packages': prepare_packages_scripts,
                'pre-install-cmd': [
                    '@install-from-git',
                ],
                'pre-update-cmd': [
                    '@install-from-git',
                ],
                'post-install-cmd': [
                    '@prepare-packages',
                ],
            },
        }

    def add_modules(self, repo_options: Mapping[str, Any], composer: Dict[str, Any]) -> Dict[str, Any]:
        """
        Register modules of every repository as path repositories.

        Raises:
            FileSystemError: A module composer.json can't be read
        """
        root = self.directory_list.get_magento_root()
        for repo_name, option in to_repo_options(repo_options).items():
            self._module_handlers[option.type](f"{root}/{repo_name}", composer)
        return composer

    def add_module(self, directory: str, composer: Dict[str, Any], version: Optional[str] = None) -> None:
        """Register a single module directory, skipped if it has no composer.json"""
        directory = directory.rstrip('/')
        module_composer_path = f"{directory}/composer.json"
        if not self.file.is_exists(module_composer_path):
            return

        module_composer = self.file.read_json(module_composer_path)
        name = module_composer.get('name')
        if not name:
            logger.warning(f"Skipping {module_composer_path}: package name is missing")
            return

        root = self.directory_list.get_magento_root()
        url = directory[len(root):] if directory.startswith(root) else directory
        composer['repositories'][name] = {
            'type': 'path',
            'url': url.lstrip('/'),
            'options': {
                'symlink': False,
            },
        }
        composer['require'][name] = version or module_composer.get('version') or '*'
        logger.debug(f"Registered module {name} at {url.lstrip('/')}")

    def _add_single_package(self, repo_folder: str, composer: Dict[str, Any]) -> None:
        self.add_module(repo_folder, composer, '*')

    def _add_flat_structure(self, repo_folder: str, composer: Dict[str, Any]) -> None:
        for directory in self.file.glob(f"{repo_folder}/*"):
            self.add_module(directory, composer)

    def _add_modular(self, repo_folder: str, composer: Dict[str, Any]) -> None:
        for directory in self.file.glob(f"{repo_folder}/app/code/Magento/*"):
            self.add_module(directory, composer)
        for directory in self.file.glob(f"{repo_folder}/app/design/*/Magento/*/"):
            self.add_module(directory, composer)
        if self.file.is_directory(f"{repo_folder}/lib/internal/Magento/Framework/"):
            for directory in self.file.glob(f"{repo_folder}/lib/internal/Magento/Framework/*"):
                self.add_module(directory, composer)


def _as_mapping(repositories: Any) -> Dict[str, Any]:
    """Composer allows repositories as a list, key those by position"""
    if not repositories:
        return {}
    if isinstance(repositories, list):
        return {str(index): repository for index, repository in enumerate(repositories)}
    return dict(repositories)
