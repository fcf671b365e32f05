"""Artifact coordinates, selection and repository resolution."""

from .models import ArtifactCoordinate, ResolvedArtifact
from .resolver import ArtifactResolver, MavenRepositoryResolver
from .selector import ArtifactSelector

__all__ = [
    "ArtifactCoordinate",
    "ResolvedArtifact",
    "ArtifactResolver",
    "MavenRepositoryResolver",
    "ArtifactSelector",
]
