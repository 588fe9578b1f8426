# SPDX-FileCopyrightText: 2024-2025 Pathway Bio, Inc. <https://pwbio.ai>
# SPDX-FileContributor: Kimberly Robasky
# SPDX-License-Identifier: Apache-2.0

"""
Session storage configuration
"""

import logging
from typing import Any, Dict

from ..utils.environment import Environment
from ..utils.stage_config import DeployStageConfig

logger = logging.getLogger(__name__)


class SessionConfig:
    """Resolves session storage configuration for env.php"""

    RELATIONSHIP = 'redis'

    def __init__(self, environment: Environment, stage_config: DeployStageConfig):
        self.environment = environment
        self.stage_config = stage_config

    def get(self) -> Dict[str, Any]:
        """
        Get session configuration.

        Explicit SESSION_CONFIGURATION with a 'save' key wins. Otherwise the
        first redis relationship endpoint is used, database 0. Without either
        an empty config is returned and the platform default applies.
        """
        env_config = self.stage_config.get(DeployStageConfig.SESSION_CONFIGURATION)
        if isinstance(env_config, dict) and 'save' in env_config:
            logger.info(f"Using session configuration from environment: save={env_config['save']}")
            return env_config

        redis_config = self.environment.get_relationship(self.RELATIONSHIP)
        if not redis_config:
            logger.debug("No redis relationship found, session config is empty")
            return {}

        endpoint = redis_config[0]
        logger.info(f"Using redis relationship for session storage: {endpoint['host']}:{endpoint['port']}")
        return {
            'save': 'redis',
            'redis': {
                'host': endpoint['host'],
                'port': endpoint['port'],
                'database': 0,
            },
        }
