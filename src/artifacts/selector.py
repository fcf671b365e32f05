"""Selection of scalac-scoverage-plugin artifacts for a Scala version.

Three packaging generations exist:

* 2.0.0 onwards - plugin, domain and serializer artifacts; the plugin is
  qualified by the full Scala version, the others by the binary version.
* 1.4.2 - a single plugin artifact qualified by the full Scala version,
  falling back to the binary version when that one cannot be resolved.
* 1.4.1 and older - a single plugin artifact qualified by the binary version.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from artifacts.models import ArtifactCoordinate, ResolvedArtifact
from artifacts.resolver import ArtifactResolver
from constants import Constants
from errors import ArtifactNotFound, ArtifactResolutionFailed, PluginVersionNotResolved
from versioning.models import CompatibilityFamily, ResolvedVersion

logger = logging.getLogger(__name__)


def _is_plugin_artifact(artifact: ArtifactCoordinate) -> bool:
    return (artifact.group_id == Constants.SCOVERAGE_GROUP_ID
            and artifact.artifact_id.startswith(Constants.PLUGIN_ARTIFACT_PREFIX))


def discover_plugin_version(plugin_artifacts: Sequence[ArtifactCoordinate]) -> Optional[str]:
    """Version of the first scalac-scoverage-plugin artifact in ``plugin_artifacts``.

    List order decides; a warning is logged when more than one candidate matches.
    """
    candidates = [artifact for artifact in plugin_artifacts if _is_plugin_artifact(artifact)]
    if not candidates:
        return None
    chosen = candidates[0]
    if len(candidates) > 1:
        others = [a.gav() for a in candidates[1:]]
        logger.warning(
            'Several scalac-scoverage-plugin artifacts found, using "%s" (ignored: %s)',
            chosen.gav(), ", ".join(others),
        )
    return chosen.version


def plugin_coordinate(qualifier: str, plugin_version: str) -> ArtifactCoordinate:
    return ArtifactCoordinate(
        Constants.SCOVERAGE_GROUP_ID, Constants.PLUGIN_ARTIFACT_PREFIX + qualifier, plugin_version
    )


def runtime_coordinate(family: CompatibilityFamily, plugin_version: str) -> ArtifactCoordinate:
    return ArtifactCoordinate(
        Constants.SCOVERAGE_GROUP_ID, Constants.RUNTIME_ARTIFACT_PREFIX + family.value, plugin_version
    )


class ArtifactSelector:
    """Chooses and resolves the compiler plugin artifacts."""

    def __init__(self, resolver: ArtifactResolver, plugin_artifacts: Sequence[ArtifactCoordinate] = ()):
        self.resolver = resolver
        self.plugin_artifacts = list(plugin_artifacts)

    def plugin_version(
        self,
        scala_version: ResolvedVersion,
        family: CompatibilityFamily,
        override: Optional[str] = None,
    ) -> ResolvedVersion:
        """Explicit override, else the plugin's own artifacts, else repository metadata."""
        raw = override or discover_plugin_version(self.plugin_artifacts)
        if not raw:
            for qualifier in (scala_version.raw, family.value):
                raw = self.resolver.latest_version(
                    Constants.SCOVERAGE_GROUP_ID, Constants.PLUGIN_ARTIFACT_PREFIX + qualifier
                )
                if raw:
                    logger.info("Using latest scalac-scoverage-plugin version %s", raw)
                    break
        if not raw:
            raise PluginVersionNotResolved(
                "scalac-scoverage-plugin version not set and not discoverable"
            )
        return ResolvedVersion.parse(raw)

    def coordinates(
        self,
        scala_version: ResolvedVersion,
        family: CompatibilityFamily,
        plugin_version: ResolvedVersion,
    ) -> List[ArtifactCoordinate]:
        """Coordinates to put on the plugin path, in order.

        For 1.4.2 only the primary coordinate is returned; the fallback is
        applied by ``select``.
        """
        pv = plugin_version.raw
        if plugin_version.major >= 2:
            return [
                plugin_coordinate(scala_version.raw, pv),
                ArtifactCoordinate(Constants.SCOVERAGE_GROUP_ID, Constants.DOMAIN_ARTIFACT_PREFIX + family.value, pv),
                ArtifactCoordinate(Constants.SCOVERAGE_GROUP_ID, Constants.SERIALIZER_ARTIFACT_PREFIX + family.value, pv),
            ]
        if _is_transitional(plugin_version):
            return [plugin_coordinate(scala_version.raw, pv)]
        return [plugin_coordinate(family.value, pv)]

    def select(
        self,
        scala_version: ResolvedVersion,
        family: CompatibilityFamily,
        plugin_version: ResolvedVersion,
    ) -> List[ResolvedArtifact]:
        """Resolve the plugin artifacts in order."""
        coordinates = self.coordinates(scala_version, family, plugin_version)
        if not _is_transitional(plugin_version):
            return [self.resolver.resolve(coordinate) for coordinate in coordinates]

        primary = coordinates[0]
        try:
            return [self.resolver.resolve(primary)]
        except (ArtifactNotFound, ArtifactResolutionFailed):
            fallback = plugin_coordinate(family.value, plugin_version.raw)
            logger.warning(
                'Artifact "%s" not found, falling back to "%s"', primary.gav(), fallback.gav()
            )
            return [self.resolver.resolve(fallback)]

    def runtime(self, family: CompatibilityFamily, plugin_version: ResolvedVersion) -> ResolvedArtifact:
        """Resolve the scoverage runtime library for the test classpath."""
        return self.resolver.resolve(runtime_coordinate(family, plugin_version.raw))


def _is_transitional(plugin_version: ResolvedVersion) -> bool:
    return (plugin_version.major, plugin_version.minor, plugin_version.patch) == (1, 4, 2)
