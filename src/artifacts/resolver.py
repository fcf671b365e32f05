"""Artifact resolution against a local repository and remote Maven repositories."""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence

import requests
from packaging import version

from artifacts.models import ArtifactCoordinate, ResolvedArtifact
from common import http_client
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from constants import Constants
from errors import ArtifactNotFound, ArtifactResolutionFailed

logger = logging.getLogger(__name__)


class ArtifactResolver(ABC):
    """Turns coordinates into local files."""

    @abstractmethod
    def resolve(self, coordinate: ArtifactCoordinate) -> ResolvedArtifact:
        """Resolve ``coordinate`` to a local file.

        Raises:
            ArtifactNotFound: no repository has the artifact.
            ArtifactResolutionFailed: the artifact could not be fetched.
        """

    def latest_version(self, group_id: str, artifact_id: str) -> Optional[str]:
        """Latest release of ``group_id:artifact_id``, or None when unknown."""
        return None


def pick_latest(candidates: Sequence[str]) -> Optional[str]:
    """Pick the highest stable (non-SNAPSHOT) version, skipping unparsable ones."""
    parsed = []
    for candidate in candidates:
        if candidate.endswith("-SNAPSHOT"):
            continue
        try:
            parsed.append((version.Version(candidate), candidate))
        except version.InvalidVersion:
            continue
    if not parsed:
        return None
    parsed.sort(key=lambda item: item[0], reverse=True)
    return parsed[0][1]


def parse_metadata_version(text: str) -> Optional[str]:
    """Extract the release version from maven-metadata.xml content."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError:
        return None
    versioning = root.find("versioning")
    if versioning is None:
        return None
    for tag in ("release", "latest"):
        elem = versioning.find(tag)
        if elem is not None and elem.text and elem.text.strip():
            return elem.text.strip()
    versions = [
        item.text.strip()
        for item in versioning.findall("versions/version")
        if item.text and item.text.strip()
    ]
    return pick_latest(versions)


class MavenRepositoryResolver(ArtifactResolver):
    """Resolver for Maven-layout repositories.

    The local repository is consulted first; missing artifacts are downloaded
    from each remote repository in order and stored locally.
    """

    def __init__(
        self,
        local_repository: Optional[str] = None,
        remote_repositories: Optional[List[str]] = None,
        offline: bool = False,
    ):
        self.local_repository = Path(local_repository or Constants.DEFAULT_LOCAL_REPOSITORY)
        if remote_repositories is None:
            remote_repositories = list(Constants.DEFAULT_REMOTE_REPOSITORIES)
        self.remote_repositories = [url.rstrip("/") for url in remote_repositories]
        self.offline = offline

    def local_path(self, coordinate: ArtifactCoordinate) -> Path:
        return self.local_repository.joinpath(*coordinate.repository_path().split("/"))

    def resolve(self, coordinate: ArtifactCoordinate) -> ResolvedArtifact:
        target = self.local_path(coordinate)
        if target.is_file():
            logger.debug("Artifact %s found in local repository", coordinate)
            return ResolvedArtifact(coordinate=coordinate, file=target)
        if self.offline or not self.remote_repositories:
            raise ArtifactNotFound(
                coordinate,
                f'Artifact "{coordinate}" not found in local repository {self.local_repository}',
            )

        failures: List[str] = []
        for base in self.remote_repositories:
            url = f"{base}/{coordinate.repository_path()}"
            try:
                response = http_client.safe_get(url, context="maven")
            except requests.RequestException as exc:
                failures.append(f"{safe_url(base)}: {exc}")
                continue
            if response.status_code == 404:
                if is_debug_enabled(logger):
                    logger.debug(
                        "Artifact not in repository",
                        extra=extra_context(
                            event="resolve", component="resolver", outcome="not_found",
                            target=safe_url(url), package_manager="maven"
                        )
                    )
                continue
            if response.status_code != 200:
                failures.append(f"{safe_url(base)}: HTTP {response.status_code}")
                continue
            self._store(coordinate, target, response.content)
            logger.info("Downloaded %s from %s", coordinate, safe_url(base))
            return ResolvedArtifact(coordinate=coordinate, file=target)

        if failures:
            raise ArtifactResolutionFailed(
                coordinate,
                f'Artifact "{coordinate}" could not be resolved: ' + "; ".join(failures),
            )
        raise ArtifactNotFound(coordinate)

    @staticmethod
    def _store(coordinate: ArtifactCoordinate, target: Path, content: bytes) -> None:
        partial = target.with_name(target.name + ".part")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(partial, "wb") as handle:
                handle.write(content)
            partial.replace(target)
        except OSError as exc:
            raise ArtifactResolutionFailed(
                coordinate, f'Artifact "{coordinate}" could not be stored at {target}: {exc}'
            ) from exc

    def latest_version(self, group_id: str, artifact_id: str) -> Optional[str]:
        if self.offline:
            return None
        group_path = group_id.replace(".", "/")
        for base in self.remote_repositories:
            url = f"{base}/{group_path}/{artifact_id}/{Constants.MAVEN_METADATA_FILE}"
            status_code, _, text = http_client.robust_get(url)
            if status_code != 200 or not text:
                continue
            found = parse_metadata_version(text)
            if found:
                logger.debug("Latest %s:%s in %s is %s", group_id, artifact_id, safe_url(base), found)
                return found
        return None
