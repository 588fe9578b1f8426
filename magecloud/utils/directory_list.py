# SPDX-FileCopyrightText: 2024-2025 Pathway Bio, Inc. <https://pwbio.ai>
# SPDX-FileContributor: Kimberly Robasky
# SPDX-License-Identifier: Apache-2.0

"""
Deployment root resolution
"""

import os
from pathlib import Path
from typing import Optional


class DirectoryList:
    """Resolves paths relative to the Magento root"""

    def __init__(self, root: Optional[str] = None):
        if root is None:
            root = os.environ.get('MAGENTO_ROOT') or os.getcwd()
        # No trailing separator, callers append '/<name>'
        self._root = str(Path(root).resolve())

    def get_magento_root(self) -> str:
        return self._root

    def get_path(self, relative: str) -> str:
        """Join a relative path onto the root"""
        return os.path.join(self._root, relative.lstrip('/'))

    def get_composer_json(self) -> str:
        return self.get_path('composer.json')

    def get_composer_lock(self) -> str:
        return self.get_path('composer.lock')

    def get_env_config(self) -> str:
        """Path to .magento.env.yaml"""
        return self.get_path('.magento.env.yaml')
