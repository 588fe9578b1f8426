# SPDX-FileCopyrightText: 2024-2025 Pathway Bio, Inc. <https://pwbio.ai>
# SPDX-FileContributor: Kimberly Robasky
# SPDX-License-Identifier: Apache-2.0

"""
Configuration types and validation for deployment tools

Pydantic models for the git deploy options read from .magento.env.yaml
and the service relationships provided by the cloud environment
"""

from typing import Any, Dict, Mapping, Union
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator


class RepoType(str, Enum):
    """Layout of a git repository used to assemble the project"""
    # One package at the repository root
    SINGLE_PACKAGE = "single-package"
    # Modules directly in the repository root, e.g. Inventory
    FLAT_STRUCTURE = "flat-structure"
    # app/code, app/design and lib/internal layout
    MODULAR = "modular"


class RepoOption(BaseModel):
    """One entry of the repositories table"""
    model_config = ConfigDict(extra='allow')

    repo: str
    branch: str
    type: RepoType = RepoType.MODULAR

    @field_validator('type', mode='before')
    @classmethod
    def default_type(cls, v):
        """Missing or empty type means modular layout"""
        if v is None or v == '':
            return RepoType.MODULAR
        return v


class GitDeployOptions(BaseModel):
    """DEPLOY_FROM_GIT_OPTIONS global stage variable"""
    repositories: Dict[str, RepoOption] = Field(default_factory=dict)


class RelationshipEndpoint(BaseModel):
    """Service endpoint from MAGENTO_CLOUD_RELATIONSHIPS"""
    model_config = ConfigDict(extra='allow')

    host: str
    # Kept as provided by the platform, may be a string or an int
    port: Union[int, str]


def to_repo_options(repo_options: Mapping[str, Any]) -> Dict[str, RepoOption]:
    """Validate a raw repositories table, preserving its order"""
    return {
        name: option if isinstance(option, RepoOption) else RepoOption.model_validate(option)
        for name, option in repo_options.items()
    }
