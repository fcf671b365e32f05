"""Artifact coordinate models."""

from dataclasses import dataclass
from pathlib import Path

from constants import Constants


@dataclass(frozen=True)
class ArtifactCoordinate:
    """Maven coordinate of a single artifact."""
    group_id: str
    artifact_id: str
    version: str
    packaging: str = Constants.DEFAULT_PACKAGING

    @classmethod
    def parse(cls, token: str) -> "ArtifactCoordinate":
        """Parse ``group:artifact:version[:packaging]``.

        Raises:
            ValueError: when fewer than three non-empty parts are present.
        """
        parts = [part.strip() for part in token.strip().split(":")]
        if len(parts) not in (3, 4) or not all(parts):
            raise ValueError(
                f"Invalid Maven coordinate '{token}'. Expected 'groupId:artifactId:version'."
            )
        if len(parts) == 4:
            return cls(parts[0], parts[1], parts[3], parts[2])
        return cls(parts[0], parts[1], parts[2])

    def gav(self) -> str:
        """Return the ``group:artifact:version`` triple."""
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    def file_name(self) -> str:
        return f"{self.artifact_id}-{self.version}.{self.packaging}"

    def repository_path(self) -> str:
        """Relative path of the artifact inside a Maven-layout repository."""
        return "/".join([
            self.group_id.replace(".", "/"),
            self.artifact_id,
            self.version,
            self.file_name(),
        ])

    def __str__(self) -> str:
        return self.gav()


@dataclass(frozen=True)
class ResolvedArtifact:
    """A coordinate together with the local file it resolved to."""
    coordinate: ArtifactCoordinate
    file: Path

    def gav(self) -> str:
        return self.coordinate.gav()
