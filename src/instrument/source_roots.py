"""Persist compile source roots for the report step."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

from constants import Constants
from errors import DirectoryCreateFailed, ManifestWriteFailed

logger = logging.getLogger(__name__)


def save_source_roots(data_directory: Path, source_roots: Sequence[str]) -> Optional[Path]:
    """Write ``source_roots`` one per line to ``<data_directory>/source.roots``.

    Does nothing and returns None when there are no roots. Any previous
    content is replaced.
    """
    if not source_roots:
        return None
    data_directory = Path(data_directory)
    if not data_directory.is_dir():
        try:
            data_directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DirectoryCreateFailed(data_directory.absolute()) from exc

    manifest = data_directory / Constants.SOURCE_ROOTS_FILE
    try:
        with open(manifest, "w", encoding="utf-8", newline="\n") as handle:
            for root in source_roots:
                handle.write(root)
                handle.write("\n")
    except OSError as exc:
        raise ManifestWriteFailed(manifest, str(exc)) from exc
    logger.debug("Saved %d source roots to %s", len(source_roots), manifest)
    return manifest
