# SPDX-FileCopyrightText: 2024-2025 Pathway Bio, Inc. <https://pwbio.ai>
# SPDX-FileContributor: Kimberly Robasky
# SPDX-License-Identifier: Apache-2.0

"""
Mapping merge helpers
"""

from typing import Any, Dict, Mapping, Optional


def overlay(*layers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Merge mappings in order, later layers win on key collision.

    Shallow: a later layer replaces the whole value of a key, nested dicts
    are not merged. None or empty layers are skipped and inputs are not
    mutated. A key overridden by a later layer keeps its original position.

    Args:
        *layers: Mappings in ascending priority

    Returns:
        New dictionary with merged values
    """
    result: Dict[str, Any] = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            result[key] = value
    return result
