"""Instrumentation options consumed by the pre-compile step."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstrumentationOptions:
    """User-facing settings of the scoverage pre-compile step.

    ``data_directory`` of None means ``<build directory>/scoverage-data``.
    """
    skip: bool = False
    scala_version: Optional[str] = None
    data_directory: Optional[Path] = None
    excluded_packages: str = ""
    excluded_files: str = ""
    highlighting: bool = True
    scalac_plugin_version: Optional[str] = None
    additional_forked_project_properties: str = ""


def parse_forked_properties(raw: Optional[str]) -> Dict[str, str]:
    """Parse ``key=value;key2=value2`` pairs, skipping malformed entries with a warning."""
    result: Dict[str, str] = {}
    if not raw:
        return result
    for entry in raw.split(";"):
        if not entry.strip():
            continue
        key, sep, value = entry.partition("=")
        if sep and key.strip():
            result[key.strip()] = value.strip()
        else:
            logger.warning(
                'Skipping invalid additional forked project property "%s", must be in "key=value" format',
                entry,
            )
    return result
