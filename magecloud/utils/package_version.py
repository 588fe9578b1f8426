# SPDX-FileCopyrightText: 2024-2025 Pathway Bio, Inc. <https://pwbio.ai>
# SPDX-FileContributor: Kimberly Robasky
# SPDX-License-Identifier: Apache-2.0

"""
Magento version resolution
Reads the installed magento/magento2-base version from composer metadata
"""

import logging
from typing import Any, Dict, List, Optional

from .directory_list import DirectoryList
from .filesystem import File

logger = logging.getLogger(__name__)

BASE_PACKAGE = 'magento/magento2-base'


class UndefinedPackageError(Exception):
    """Package is not installed or has no version"""
    pass


class MagentoVersion:
    """Resolves the current Magento version"""

    def __init__(self, directory_list: DirectoryList, file: File):
        self.directory_list = directory_list
        self.file = file
        self._version: Optional[str] = None

    def get_version(self) -> str:
        """
        Get the Magento version.

        Lookup order:
        1. magento/magento2-base in composer.lock
        2. magento/magento2-base in vendor/composer/installed.json
        3. version of the root composer.json (installation from git)

        Raises:
            UndefinedPackageError: No source provides a version
            FileSystemError: A source exists but can't be read
        """
        if self._version is not None:
            return self._version

        version = (
            self._find_in_packages(self.directory_list.get_composer_lock())
            or self._find_in_packages(self.directory_list.get_path('vendor/composer/installed.json'))
            or self._root_version()
        )
        if not version:
            raise UndefinedPackageError(f"Package {BASE_PACKAGE} was not found")

        self._version = version.lstrip('v')
        logger.info(f"Resolved Magento version: {self._version}")
        return self._version

    def _find_in_packages(self, path: str) -> Optional[str]:
        if not self.file.is_exists(path):
            return None

        data = self.file.read_json(path)
        for package in self._packages(data):
            if package.get('name') == BASE_PACKAGE and package.get('version'):
                logger.debug(f"Found {BASE_PACKAGE} {package['version']} in {path}")
                return package['version']
        return None

    @staticmethod
    def _packages(data: Any) -> List[Dict[str, Any]]:
        # installed.json is a plain list in composer 1, {"packages": [...]} in composer 2
        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            return list(data.get('packages', [])) + list(data.get('packages-dev', []))
        return []

    def _root_version(self) -> Optional[str]:
        path = self.directory_list.get_composer_json()
        if not self.file.is_exists(path):
            return None
        data = self.file.read_json(path)
        if isinstance(data, dict):
            return data.get('version')
        return None
