# SPDX-FileCopyrightText: 2024-2025 Pathway Bio, Inc. <https://pwbio.ai>
# SPDX-FileContributor: Kimberly Robasky
# SPDX-License-Identifier: Apache-2.0

"""
Cloud environment data
Decodes platform-provided variables (base64-encoded JSON)
"""

import base64
import binascii
import json
import logging
import os
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from .config_types import RelationshipEndpoint

logger = logging.getLogger(__name__)


class Environment:
    """Access to MAGENTO_CLOUD_* environment variables"""

    RELATIONSHIPS = 'MAGENTO_CLOUD_RELATIONSHIPS'
    VARIABLES = 'MAGENTO_CLOUD_VARIABLES'

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._environ = os.environ if environ is None else environ
        self._cache: Dict[str, Dict[str, Any]] = {}

    def get_env(self, name: str) -> Dict[str, Any]:
        """
        Decode a base64-encoded JSON object variable.
        Missing or undecodable values are treated as empty.
        """
        if name in self._cache:
            return self._cache[name]

        raw = self._environ.get(name)
        value: Dict[str, Any] = {}
        if raw:
            try:
                decoded = json.loads(base64.b64decode(raw))
            except (binascii.Error, ValueError) as e:
                logger.warning(f"Could not decode {name}: {e}")
            else:
                if isinstance(decoded, dict):
                    value = decoded
                else:
                    logger.warning(f"{name} is not a JSON object, ignoring")

        self._cache[name] = value
        return value

    def get_relationships(self) -> Dict[str, Any]:
        return self.get_env(self.RELATIONSHIPS)

    def get_relationship(self, name: str) -> List[Dict[str, Any]]:
        """
        Get service endpoints for a relationship name.

        Returns:
            Endpoint dicts in platform order, empty list if not configured
        """
        endpoints = self.get_relationships().get(name) or []
        result = []
        for endpoint in endpoints:
            try:
                result.append(RelationshipEndpoint.model_validate(endpoint).model_dump())
            except ValidationError as e:
                logger.warning(f"Skipping invalid '{name}' relationship endpoint: {e}")
        return result

    def get_variables(self) -> Dict[str, Any]:
        return self.get_env(self.VARIABLES)
