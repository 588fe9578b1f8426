# SPDX-FileCopyrightText: 2024-2025 Pathway Bio, Inc. <https://pwbio.ai>
# SPDX-FileContributor: Kimberly Robasky
# SPDX-License-Identifier: Apache-2.0

"""
Tests for deploy option and relationship models
"""

import pytest
from pydantic import ValidationError

from magecloud.utils.config_types import (
    GitDeployOptions,
    RelationshipEndpoint,
    RepoOption,
    RepoType,
    to_repo_options,
)
from magecloud.utils.merge import overlay


class TestRepoOption:
    """Test repository option validation"""

    def test_type_defaults_to_modular(self):
        assert RepoOption(repo='u', branch='b').type == RepoType.MODULAR
        assert RepoOption(repo='u', branch='b', type=None).type == RepoType.MODULAR

    def test_known_types(self):
        assert RepoOption(repo='u', branch='b', type='single-package').type == RepoType.SINGLE_PACKAGE
        assert RepoOption(repo='u', branch='b', type='flat-structure').type == RepoType.FLAT_STRUCTURE

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            RepoOption(repo='u', branch='b', type='monorepo')

    def test_repo_and_branch_required(self):
        with pytest.raises(ValidationError):
            RepoOption(branch='b')
        with pytest.raises(ValidationError):
            RepoOption(repo='u')

    def test_to_repo_options_keeps_order(self):
        options = to_repo_options({
            'ee': {'repo': 'u2', 'branch': 'b'},
            'ce': RepoOption(repo='u1', branch='b'),
        })

        assert list(options) == ['ee', 'ce']
        assert all(isinstance(option, RepoOption) for option in options.values())


class TestGitDeployOptions:
    """Test DEPLOY_FROM_GIT_OPTIONS parsing"""

    def test_defaults(self):
        options = GitDeployOptions()

        assert options.repositories == {}

    def test_repositories(self):
        options = GitDeployOptions.model_validate({
            'repositories': {'ce': {'repo': 'u', 'branch': 'b', 'type': 'single-package'}},
        })

        assert options.repositories['ce'].type == RepoType.SINGLE_PACKAGE


class TestRelationshipEndpoint:
    """Test relationship endpoint validation"""

    def test_port_type_preserved(self):
        assert RelationshipEndpoint(host='h', port='6379').port == '6379'
        assert RelationshipEndpoint(host='h', port=6379).port == 6379

    def test_extra_fields_kept(self):
        endpoint = RelationshipEndpoint.model_validate({'host': 'h', 'port': 1, 'scheme': 'redis'})

        assert endpoint.model_dump() == {'host': 'h', 'port': 1, 'scheme': 'redis'}

    def test_host_required(self):
        with pytest.raises(ValidationError):
            RelationshipEndpoint(port=6379)


class TestOverlay:
    """Test ordered merge precedence"""

    def test_later_layer_wins(self):
        assert overlay({'a': 1, 'b': 1}, {'b': 2}, {'b': 3, 'c': 3}) == {'a': 1, 'b': 3, 'c': 3}

    def test_key_position_kept(self):
        assert list(overlay({'a': 1, 'b': 1}, {'a': 2})) == ['a', 'b']

    def test_shallow(self):
        assert overlay({'a': {'x': 1}}, {'a': {'y': 2}}) == {'a': {'y': 2}}

    def test_none_layers_skipped_and_inputs_untouched(self):
        base = {'a': 1}

        result = overlay(base, None, {'a': 2})

        assert result == {'a': 2}
        assert base == {'a': 1}
