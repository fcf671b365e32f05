"""Scala version resolution and binary-family classification."""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence, Tuple

from constants import Constants
from errors import UnsupportedVersion, VersionNotResolved
from versioning.models import CompatibilityFamily, ResolvedVersion

logger = logging.getLogger(__name__)

# Tested in order; the first prefix that matches wins.
FAMILY_TABLE: Tuple[Tuple[str, CompatibilityFamily], ...] = (
    ("2.10", CompatibilityFamily.SCALA_2_10),
    ("2.11", CompatibilityFamily.SCALA_2_11),
    ("2.12", CompatibilityFamily.SCALA_2_12),
    ("2.13", CompatibilityFamily.SCALA_2_13),
)


class VersionMatcher:
    """Determines the Scala version of a project and its binary family."""

    def __init__(self, table: Sequence[Tuple[str, CompatibilityFamily]] = FAMILY_TABLE):
        self.table = tuple(table)

    def resolve(self, configured: Optional[str], dependencies: Iterable) -> ResolvedVersion:
        """Return the configured Scala version or the scala-library dependency version.

        Only direct dependencies are considered. Raises ``VersionNotResolved``
        when neither source yields a version.
        """
        version = configured if configured else None
        if version is None:
            for dependency in dependencies:
                if (dependency.group_id == Constants.SCALA_LIBRARY_GROUP_ID
                        and dependency.artifact_id == Constants.SCALA_LIBRARY_ARTIFACT_ID):
                    version = dependency.version
                    break
        if not version:
            raise VersionNotResolved()
        logger.debug("Resolved Scala version %s", version)
        return ResolvedVersion.parse(version)

    def classify(self, version: str) -> CompatibilityFamily:
        """Map a version string to its family, UNSUPPORTED on a table miss."""
        for prefix, family in self.table:
            if version == prefix or version.startswith(prefix + "."):
                return family
        return CompatibilityFamily.UNSUPPORTED

    def match(self, configured: Optional[str], dependencies: Iterable) -> Tuple[ResolvedVersion, CompatibilityFamily]:
        """Resolve and classify in one step.

        Raises:
            VersionNotResolved: no version available.
            UnsupportedVersion: version outside every supported family.
        """
        resolved = self.resolve(configured, dependencies)
        family = self.classify(resolved.raw)
        if family is CompatibilityFamily.UNSUPPORTED:
            raise UnsupportedVersion(resolved.raw)
        return resolved, family
