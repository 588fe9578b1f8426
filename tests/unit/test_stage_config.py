# SPDX-FileCopyrightText: 2024-2025 Pathway Bio, Inc. <https://pwbio.ai>
# SPDX-FileContributor: Kimberly Robasky
# SPDX-License-Identifier: Apache-2.0

"""
Tests for .magento.env.yaml stage configuration
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from magecloud.utils.environment import Environment
from magecloud.utils.filesystem import FileSystemError
from magecloud.utils.stage_config import (
    DeployStageConfig,
    GlobalSection,
    StageConfigError,
    StageConfigReader,
)

ENV_YAML = """
stage:
  global:
    DEPLOY_FROM_GIT_OPTIONS:
      repositories:
        ce:
          repo: https://example.com/ce.git
          branch: 2.3-develop
    SESSION_CONFIGURATION:
      save: files
  deploy:
    SESSION_CONFIGURATION:
      save: db
"""


@pytest.fixture
def reader(directory_list, file):
    return StageConfigReader(directory_list, file)


def write_env_yaml(directory_list, content):
    Path(directory_list.get_env_config()).write_text(content)


class TestStageConfigReader:
    """Test loading of the environment configuration file"""

    def test_missing_file_is_empty(self, reader):
        assert reader.read() == {}
        assert reader.get_stage('deploy') == {}

    def test_empty_file_is_empty(self, reader, directory_list):
        write_env_yaml(directory_list, '')

        assert reader.read() == {}

    def test_invalid_yaml_raises(self, reader, directory_list):
        write_env_yaml(directory_list, 'stage: [unclosed')

        with pytest.raises(FileSystemError):
            reader.read()

    def test_non_mapping_raises(self, reader, directory_list):
        write_env_yaml(directory_list, '- a\n- b\n')

        with pytest.raises(FileSystemError):
            reader.read()

    def test_file_is_read_once(self, reader, directory_list):
        write_env_yaml(directory_list, ENV_YAML)

        with patch.object(reader.file, 'file_get_contents', wraps=reader.file.file_get_contents) as spy:
            reader.read()
            reader.read()

        assert spy.call_count == 1


class TestGlobalSection:
    """Test global stage variables"""

    def test_default(self, reader):
        assert GlobalSection(reader).get(GlobalSection.DEPLOY_FROM_GIT_OPTIONS) == {}

    def test_value_from_file(self, reader, directory_list):
        write_env_yaml(directory_list, ENV_YAML)

        options = GlobalSection(reader).get(GlobalSection.DEPLOY_FROM_GIT_OPTIONS)

        assert options['repositories']['ce']['branch'] == '2.3-develop'

    def test_unknown_variable(self, reader):
        with pytest.raises(StageConfigError):
            GlobalSection(reader).get('UNKNOWN')

    def test_default_is_a_copy(self, reader):
        section = GlobalSection(reader)

        section.get(GlobalSection.DEPLOY_FROM_GIT_OPTIONS)['repositories'] = {'ce': {}}

        assert section.get(GlobalSection.DEPLOY_FROM_GIT_OPTIONS) == {}
        assert GlobalSection.DEFAULTS[GlobalSection.DEPLOY_FROM_GIT_OPTIONS] == {}


class TestDeployStageConfig:
    """Test deploy stage priority"""

    def test_default(self, reader):
        config = DeployStageConfig(reader, Environment({}))

        assert config.get(DeployStageConfig.SESSION_CONFIGURATION) == {}

    def test_deploy_overrides_global(self, reader, directory_list):
        write_env_yaml(directory_list, ENV_YAML)
        config = DeployStageConfig(reader, Environment({}))

        assert config.get(DeployStageConfig.SESSION_CONFIGURATION) == {'save': 'db'}

    def test_global_used_without_deploy(self, reader, directory_list):
        write_env_yaml(directory_list, "stage:\n  global:\n    SESSION_CONFIGURATION:\n      save: files\n")
        config = DeployStageConfig(reader, Environment({}))

        assert config.get(DeployStageConfig.SESSION_CONFIGURATION) == {'save': 'files'}

    def test_cloud_variables_override_file(self, reader, directory_list, encode_env):
        write_env_yaml(directory_list, ENV_YAML)
        environment = Environment({
            'MAGENTO_CLOUD_VARIABLES': encode_env({'SESSION_CONFIGURATION': {'save': 'memcached'}}),
        })
        config = DeployStageConfig(reader, environment)

        assert config.get(DeployStageConfig.SESSION_CONFIGURATION) == {'save': 'memcached'}

    def test_unknown_variable(self, reader):
        with pytest.raises(StageConfigError):
            DeployStageConfig(reader, Environment({})).get('DEPLOY_FROM_GIT_OPTIONS')

    def test_returned_value_is_a_copy(self, reader):
        config = DeployStageConfig(reader, Environment({}))

        config.get(DeployStageConfig.SESSION_CONFIGURATION)['save'] = 'files'

        assert config.get(DeployStageConfig.SESSION_CONFIGURATION) == {}
        assert DeployStageConfig.DEFAULTS[DeployStageConfig.SESSION_CONFIGURATION] == {}

    def test_file_values_not_shared(self, reader, directory_list):
        write_env_yaml(directory_list, ENV_YAML)
        config = DeployStageConfig(reader, Environment({}))

        config.get(DeployStageConfig.SESSION_CONFIGURATION)['save'] = 'files'

        assert config.get(DeployStageConfig.SESSION_CONFIGURATION) == {'save': 'db'}
