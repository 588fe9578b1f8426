# SPDX-FileCopyrightText: 2024-2025 Pathway Bio, Inc. <https://pwbio.ai>
# SPDX-FileContributor: Kimberly Robasky
# SPDX-License-Identifier: Apache-2.0

"""
Print the resolved session storage configuration
"""

import json
import logging
import sys
from typing import Optional, TextIO

from ..deploy.session_config import SessionConfig
from ..utils.directory_list import DirectoryList
from ..utils.environment import Environment
from ..utils.filesystem import File, FileSystemError
from ..utils.stage_config import DeployStageConfig, StageConfigReader

logger = logging.getLogger(__name__)


def show_session_config(root: Optional[str] = None, out: Optional[TextIO] = None) -> int:
    out = out or sys.stdout
    directory_list = DirectoryList(root)
    environment = Environment()
    stage_config = DeployStageConfig(StageConfigReader(directory_list, File()), environment)

    try:
        config = SessionConfig(environment, stage_config).get()
    except FileSystemError as e:
        logger.error(f"Failed to read stage configuration: {e}")
        return 1

    json.dump(config, out, indent=2)
    out.write('\n')
    return 0
