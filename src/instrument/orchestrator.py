"""Pre-compile configuration run.

Configures a project for compilation with scoverage instrumentation:
resolves the Scala version, picks and resolves the compiler plugin artifacts,
publishes scalac arguments as project properties and records source roots.

Property writes are batched and committed only after every step that can fail
has succeeded, so a hard error leaves the project untouched.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from artifacts.models import ArtifactCoordinate, ResolvedArtifact
from artifacts.resolver import ArtifactResolver
from artifacts.selector import ArtifactSelector
from common.logging_utils import Timer, extra_context, is_debug_enabled
from constants import Constants, Outcome
from errors import ConfigurationError, ScoveragePrepError, UnsupportedVersion, VersionNotResolved
from instrument import arguments
from instrument.options import InstrumentationOptions, parse_forked_properties
from instrument.source_roots import save_source_roots
from project.model import MavenProject
from project.properties import PropertyBatch, PropertyEdit, set_property
from versioning.matcher import VersionMatcher
from versioning.models import CompatibilityFamily, ResolvedVersion

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """What a run did; soft skips carry a ``reason``."""
    outcome: Outcome
    reason: Optional[str] = None
    scala_version: Optional[ResolvedVersion] = None
    family: Optional[CompatibilityFamily] = None
    plugin_version: Optional[ResolvedVersion] = None
    plugin_artifacts: List[ResolvedArtifact] = field(default_factory=list)
    runtime_artifact: Optional[ResolvedArtifact] = None
    scalac: Optional[arguments.ScalacArguments] = None
    edits: List[PropertyEdit] = field(default_factory=list)
    source_roots_file: Optional[Path] = None

    @property
    def configured(self) -> bool:
        return self.outcome is Outcome.CONFIGURED

    @property
    def is_soft_skip(self) -> bool:
        return self.outcome in (Outcome.VERSION_NOT_RESOLVED, Outcome.UNSUPPORTED_VERSION)

    def summary(self) -> Dict[str, object]:
        """JSON-friendly description of the run."""
        return {
            "outcome": self.outcome.value,
            "reason": self.reason,
            "scalaVersion": self.scala_version.raw if self.scala_version else None,
            "scalaBinaryVersion": self.family.value if self.family else None,
            "pluginVersion": self.plugin_version.raw if self.plugin_version else None,
            "pluginArtifacts": [
                {"coordinate": a.gav(), "file": str(a.file)} for a in self.plugin_artifacts
            ],
            "runtimeArtifact": (
                {"coordinate": self.runtime_artifact.gav(), "file": str(self.runtime_artifact.file)}
                if self.runtime_artifact else None
            ),
            "sourceRootsFile": str(self.source_roots_file) if self.source_roots_file else None,
            "edits": [
                {"key": e.key, "value": e.new_value, "previous": e.previous_value} for e in self.edits
            ],
        }


class PreCompileConfigurator:
    """Runs the scoverage pre-compile configuration for one project."""

    def __init__(
        self,
        project: MavenProject,
        options: InstrumentationOptions,
        resolver: ArtifactResolver,
        plugin_artifacts: Optional[Sequence[ArtifactCoordinate]] = None,
        matcher: Optional[VersionMatcher] = None,
    ):
        self.project = project
        self.options = options
        self.resolver = resolver
        if plugin_artifacts is None:
            plugin_artifacts = project.plugin_artifacts
        self.selector = ArtifactSelector(resolver, plugin_artifacts)
        self.matcher = matcher or VersionMatcher()

    @property
    def data_directory(self) -> Path:
        if self.options.data_directory is not None:
            return Path(self.options.data_directory)
        return Path(self.project.build_directory) / Constants.DATA_DIRECTORY_NAME

    def execute(self) -> RunResult:
        """Run the configuration.

        Raises:
            ConfigurationError: artifact resolution or file I/O failed; the
                original error is chained as ``__cause__``.
        """
        if self.project.packaging == Constants.AGGREGATOR_PACKAGING:
            logger.info("Skipping SCoverage execution for project with packaging type 'pom'")
            return RunResult(outcome=Outcome.AGGREGATOR)

        if self.options.skip:
            logger.info("Skipping SCoverage execution")
            store = self.project.properties
            # test compilation and execution (surefire, scalatest, scala-maven-plugin, sbt-compiler)
            edits = [set_property(store, Constants.PROP_MAVEN_TEST_SKIP, "true")]
            # scalatest-maven-plugin and specs2-maven-plugin
            edits.append(set_property(store, Constants.PROP_SKIP_TESTS, "true"))
            return RunResult(outcome=Outcome.SKIPPED, edits=edits)

        with Timer() as timer:
            try:
                scala_version, family = self.matcher.match(
                    self.options.scala_version, self.project.dependencies
                )
            except VersionNotResolved as exc:
                logger.warning("Skipping SCoverage execution - %s", exc)
                return RunResult(outcome=Outcome.VERSION_NOT_RESOLVED, reason=str(exc))
            except UnsupportedVersion as exc:
                logger.warning("Skipping SCoverage execution - %s", exc)
                return RunResult(outcome=Outcome.UNSUPPORTED_VERSION, reason=str(exc))

            try:
                result = self._configure(scala_version, family)
            except ScoveragePrepError as exc:
                logger.error("SCoverage preparation failed: %s", exc)
                raise ConfigurationError() from exc

        if is_debug_enabled(logger):
            logger.debug(
                "Pre-compile execution time: %d ms", timer.duration_ms(),
                extra=extra_context(
                    event="function_exit", component="orchestrator", action="execute",
                    outcome=result.outcome.value, duration_ms=timer.duration_ms()
                )
            )
        return result

    def _configure(self, scala_version: ResolvedVersion, family: CompatibilityFamily) -> RunResult:
        batch = PropertyBatch()
        for key, value in parse_forked_properties(self.options.additional_forked_project_properties).items():
            batch.set(key, value)

        plugin_version = self.selector.plugin_version(
            scala_version, family, self.options.scalac_plugin_version
        )
        plugin_artifacts = self.selector.select(scala_version, family, plugin_version)
        runtime_artifact = self.selector.runtime(family, plugin_version)

        flags = arguments.build_flags(
            data_directory=self.data_directory,
            source_root=self.project.basedir,
            excluded_packages=self.options.excluded_packages,
            excluded_files=self.options.excluded_files,
            highlighting=self.options.highlighting,
        )
        scalac = arguments.assemble(flags, plugin_artifacts)

        # sbt-compiler-maven-plugin (1.0.0-beta5+)
        batch.set(Constants.PROP_SBT_SCALAC_OPTIONS, scalac.scalac_options)
        batch.set(Constants.PROP_SBT_SCALAC_PLUGINS, scalac.scalac_plugins)
        # scala-maven-plugin (3.0.0+, analysisCacheFile 3.1.0+)
        batch.set(Constants.PROP_ADD_SCALAC_ARGS, scalac.add_scalac_args)
        batch.set(Constants.PROP_ANALYSIS_CACHE_FILE, Constants.ANALYSIS_CACHE_FILE)
        # maven-surefire-plugin and scalatest-maven-plugin
        batch.set(Constants.PROP_TEST_FAILURE_IGNORE, "true")

        manifest = save_source_roots(self.data_directory, self.project.compile_source_roots)

        edits = batch.commit(self.project.properties)
        self.project.add_dependency_artifact(runtime_artifact)
        # keeps the instrumented jar from overwriting the regular artifact
        self.project.final_name = Constants.FINAL_NAME_PREFIX + (self.project.final_name or "")

        logger.info(
            "Configured SCoverage for Scala %s with scalac-scoverage-plugin %s",
            scala_version.raw, plugin_version.raw,
        )
        return RunResult(
            outcome=Outcome.CONFIGURED,
            scala_version=scala_version,
            family=family,
            plugin_version=plugin_version,
            plugin_artifacts=plugin_artifacts,
            runtime_artifact=runtime_artifact,
            scalac=scalac,
            edits=edits,
            source_roots_file=manifest,
        )
