"""Shared fixtures for scoverage-prep tests."""

from pathlib import Path
from typing import Dict, List, Optional

import pytest

from artifacts.models import ArtifactCoordinate, ResolvedArtifact
from artifacts.resolver import ArtifactResolver
from errors import ArtifactNotFound, ArtifactResolutionFailed


class FakeResolver(ArtifactResolver):
    """In-memory resolver recording every requested coordinate."""

    def __init__(self, repo: Path, missing=(), broken=(), latest: Optional[Dict[str, str]] = None):
        self.repo = Path(repo)
        self.missing = set(missing)
        self.broken = set(broken)
        self.latest = dict(latest or {})
        self.calls: List[ArtifactCoordinate] = []

    def resolve(self, coordinate: ArtifactCoordinate) -> ResolvedArtifact:
        self.calls.append(coordinate)
        if coordinate.gav() in self.missing:
            raise ArtifactNotFound(coordinate)
        if coordinate.gav() in self.broken:
            raise ArtifactResolutionFailed(coordinate)
        return ResolvedArtifact(coordinate=coordinate, file=self.repo / coordinate.file_name())

    def latest_version(self, group_id: str, artifact_id: str) -> Optional[str]:
        return self.latest.get(f"{group_id}:{artifact_id}")


@pytest.fixture
def fake_resolver(tmp_path):
    """Resolver that succeeds for every coordinate."""
    return FakeResolver(tmp_path / "repo")
