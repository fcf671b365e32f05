"""In-memory model of the Maven project being configured."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from artifacts.models import ArtifactCoordinate, ResolvedArtifact
from constants import Constants
from project.properties import PropertyStore


@dataclass(frozen=True)
class Dependency:
    """A dependency declared directly in the project."""
    group_id: str
    artifact_id: str
    version: Optional[str]
    scope: str = "compile"


@dataclass
class MavenProject:
    """The subset of a Maven project the pre-compile step reads and mutates.

    ``properties``, ``final_name`` and ``dependency_artifacts`` are mutated by
    a successful run; everything else is read-only.
    """
    basedir: Path
    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    version: Optional[str] = None
    packaging: str = Constants.DEFAULT_PACKAGING
    dependencies: List[Dependency] = field(default_factory=list)
    compile_source_roots: List[str] = field(default_factory=list)
    properties: PropertyStore = field(default_factory=PropertyStore)
    build_directory: Optional[Path] = None
    final_name: Optional[str] = None
    plugin_artifacts: List[ArtifactCoordinate] = field(default_factory=list)
    dependency_artifacts: List[ResolvedArtifact] = field(default_factory=list)

    def __post_init__(self):
        self.basedir = Path(self.basedir)
        if self.build_directory is None:
            self.build_directory = self.basedir / "target"
        else:
            self.build_directory = Path(self.build_directory)
        if self.final_name is None and self.artifact_id:
            self.final_name = f"{self.artifact_id}-{self.version}" if self.version else self.artifact_id

    def add_dependency_artifact(self, artifact: ResolvedArtifact) -> None:
        """Append ``artifact`` unless an artifact with the same coordinate is present."""
        if all(existing.coordinate != artifact.coordinate for existing in self.dependency_artifacts):
            self.dependency_artifacts.append(artifact)
