# SPDX-FileCopyrightText: 2024-2025 Pathway Bio, Inc. <https://pwbio.ai>
# SPDX-FileContributor: Kimberly Robasky
# SPDX-License-Identifier: Apache-2.0

"""
Shared pytest fixtures for all tests
"""
import base64
import json
import os
import shutil
import tempfile

import pytest

from magecloud.utils.directory_list import DirectoryList
from magecloud.utils.filesystem import File


@pytest.fixture
def temp_dir():
    """Create temporary directory for testing"""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir)


@pytest.fixture
def directory_list(temp_dir):
    """DirectoryList rooted at the temporary directory"""
    return DirectoryList(temp_dir)


@pytest.fixture
def file():
    return File()


@pytest.fixture
def write_json(directory_list):
    """Write a JSON file relative to the Magento root"""
    def _write(relative_path, data):
        path = directory_list.get_path(relative_path)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'w') as f:
            json.dump(data, f)
        return path
    return _write


@pytest.fixture
def encode_env():
    """Encode data the way the cloud platform does for MAGENTO_CLOUD_* variables"""
    def _encode(data):
        return base64.b64encode(json.dumps(data).encode('utf-8')).decode('ascii')
    return _encode
