# SPDX-FileCopyrightText: 2024-2025 Pathway Bio, Inc. <https://pwbio.ai>
# SPDX-FileContributor: Kimberly Robasky
# SPDX-License-Identifier: Apache-2.0

"""
Stage configuration loader
Reads stage variables from .magento.env.yaml in the Magento root

    stage:
      global:
        DEPLOY_FROM_GIT_OPTIONS:
          repositories: {...}
      deploy:
        SESSION_CONFIGURATION:
          save: redis
"""

import logging
from copy import deepcopy
from typing import Any, Dict, Optional

import yaml

from .directory_list import DirectoryList
from .environment import Environment
from .filesystem import File, FileSystemError
from .merge import overlay

logger = logging.getLogger(__name__)


class StageConfigError(KeyError):
    """Unknown stage variable"""
    pass


class StageConfigReader:
    """Loads .magento.env.yaml once per instance"""

    def __init__(self, directory_list: DirectoryList, file: File):
        self.directory_list = directory_list
        self.file = file
        self._cache: Optional[Dict[str, Any]] = None

    def read(self) -> Dict[str, Any]:
        """
        Load the environment configuration file.

        Returns:
            Parsed YAML, empty dict when the file is absent or empty

        Raises:
            FileSystemError: The file exists but can't be read or parsed
        """
        if self._cache is not None:
            return self._cache

        path = self.directory_list.get_env_config()
        if not self.file.is_exists(path):
            logger.debug(f"No environment config at {path}")
            self._cache = {}
            return self._cache

        try:
            data = yaml.safe_load(self.file.file_get_contents(path)) or {}
        except yaml.YAMLError as e:
            raise FileSystemError(f"The file \"{path}\" does not contain valid YAML: {e}") from e

        if not isinstance(data, dict):
            raise FileSystemError(f"The file \"{path}\" must contain a mapping")

        logger.info(f"Loaded environment config from {path}")
        self._cache = data
        return self._cache

    def get_stage(self, stage: str) -> Dict[str, Any]:
        """Variables of one stage section, e.g. 'global' or 'deploy'"""
        stages = self.read().get('stage') or {}
        return stages.get(stage) or {}


class GlobalSection:
    """Variables of the global stage"""

    DEPLOY_FROM_GIT_OPTIONS = 'DEPLOY_FROM_GIT_OPTIONS'

    DEFAULTS = {
        DEPLOY_FROM_GIT_OPTIONS: {},
    }

    def __init__(self, reader: StageConfigReader):
        self.reader = reader

    def get(self, name: str) -> Any:
        if name not in self.DEFAULTS:
            raise StageConfigError(f"Config {name} is not supported")
        return deepcopy(overlay(self.DEFAULTS, self.reader.get_stage('global'))[name])


class DeployStageConfig:
    """
    Variables of the deploy stage.

    Priority, lowest first: defaults, stage.global, stage.deploy,
    MAGENTO_CLOUD_VARIABLES.
    """

    SESSION_CONFIGURATION = 'SESSION_CONFIGURATION'

    DEFAULTS = {
        SESSION_CONFIGURATION: {},
    }

    def __init__(self, reader: StageConfigReader, environment: Environment):
        self.reader = reader
        self.environment = environment

    def get(self, name: str) -> Any:
        if name not in self.DEFAULTS:
            raise StageConfigError(f"Config {name} is not supported")

        config = overlay(
            self.DEFAULTS,
            self.reader.get_stage('global'),
            self.reader.get_stage('deploy'),
            self.environment.get_variables(),
        )
        return deepcopy(config[name])
