"""Data models for Scala and plugin version handling."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CompatibilityFamily(Enum):
    """Binary-compatible Scala lines supported by scoverage."""
    SCALA_2_10 = "2.10"
    SCALA_2_11 = "2.11"
    SCALA_2_12 = "2.12"
    SCALA_2_13 = "2.13"
    UNSUPPORTED = "unsupported"


# Maven DefaultArtifactVersion shape: N[.N[.N]][-qualifier]
_VERSION_RE = re.compile(r"^(\d+)(?:\.(\d+))?(?:\.(\d+))?(?:-(.+))?$")


@dataclass(frozen=True)
class ResolvedVersion:
    """A parsed version string.

    Strings that do not follow the numeric shape parse as 0.0.0 with the whole
    string kept as qualifier, matching how Maven treats them.
    """
    raw: str
    major: int
    minor: int
    patch: int
    qualifier: Optional[str] = None

    @classmethod
    def parse(cls, raw: str) -> "ResolvedVersion":
        """Parse ``raw`` into its numeric components."""
        text = raw.strip()
        match = _VERSION_RE.match(text)
        if not match:
            return cls(raw=raw, major=0, minor=0, patch=0, qualifier=text or None)
        major, minor, patch, qualifier = match.groups()
        return cls(
            raw=raw,
            major=int(major),
            minor=int(minor or 0),
            patch=int(patch or 0),
            qualifier=qualifier,
        )

    def __str__(self) -> str:
        return self.raw
