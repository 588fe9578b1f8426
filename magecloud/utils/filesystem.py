# SPDX-FileCopyrightText: 2024-2025 Pathway Bio, Inc. <https://pwbio.ai>
# SPDX-FileContributor: Kimberly Robasky
# SPDX-License-Identifier: Apache-2.0

"""
File system driver for deployment tools
Thin wrapper over local file operations with a single error type
"""

import glob as globlib
import json
import logging
import os
from pathlib import Path
from typing import Any, List

logger = logging.getLogger(__name__)


class FileSystemError(Exception):
    """File system operation failed"""
    pass


class File:
    """Local file system driver"""

    def is_exists(self, path: str) -> bool:
        """Check if file or directory exists"""
        return os.path.exists(path)

    def is_directory(self, path: str) -> bool:
        """Check if path is an existing directory"""
        return os.path.isdir(path)

    def file_get_contents(self, path: str) -> str:
        """Read the whole file"""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return f.read()
        except OSError as e:
            raise FileSystemError(f"The contents from the file \"{path}\" can't be read: {e}") from e

    def file_put_contents(self, path: str, content: str) -> int:
        """Write content to file, creating parent directories"""
        try:
            Path(path).parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                written = f.write(content)
        except OSError as e:
            raise FileSystemError(f"The specified \"{path}\" file couldn't be written: {e}") from e

        logger.debug(f"Wrote {written} characters to {path}")
        return written

    def read_json(self, path: str) -> Any:
        """Read and decode a JSON file"""
        content = self.file_get_contents(path)
        try:
            return json.loads(content)
        except ValueError as e:
            raise FileSystemError(f"The file \"{path}\" does not contain valid JSON: {e}") from e

    def glob(self, pattern: str) -> List[str]:
        """Non-recursive glob, results sorted by path"""
        return sorted(globlib.glob(pattern))
