"""Tests for scalac-scoverage-plugin artifact selection."""

import logging

import pytest

from artifacts.models import ArtifactCoordinate
from artifacts.selector import ArtifactSelector, discover_plugin_version
from conftest import FakeResolver
from errors import ArtifactNotFound, ArtifactResolutionFailed, PluginVersionNotResolved
from versioning.models import CompatibilityFamily, ResolvedVersion

SCALA = ResolvedVersion.parse("2.13.9")
FAMILY = CompatibilityFamily.SCALA_2_13


def gavs(artifacts):
    return [a.gav() for a in artifacts]


class TestDiscoverPluginVersion:
    """Plugin version discovery from the plugin's own artifacts."""

    def test_first_match_wins(self):
        artifacts = [
            ArtifactCoordinate("org.apache.maven", "maven-core", "3.8.1"),
            ArtifactCoordinate("org.scoverage", "scalac-scoverage-plugin_2.13.9", "2.0.7"),
            ArtifactCoordinate("org.scoverage", "scalac-scoverage-plugin_2.12", "1.4.1"),
        ]
        assert discover_plugin_version(artifacts) == "2.0.7"

    def test_group_must_match(self):
        artifacts = [ArtifactCoordinate("com.example", "scalac-scoverage-plugin_2.13", "9.9.9")]
        assert discover_plugin_version(artifacts) is None

    def test_warns_on_conflicting_candidates(self, caplog):
        artifacts = [
            ArtifactCoordinate("org.scoverage", "scalac-scoverage-plugin_2.13.9", "2.0.7"),
            ArtifactCoordinate("org.scoverage", "scalac-scoverage-plugin_2.13", "1.4.11"),
        ]
        with caplog.at_level(logging.WARNING):
            assert discover_plugin_version(artifacts) == "2.0.7"
        assert "Several scalac-scoverage-plugin artifacts" in caplog.text

    def test_no_warning_for_single_candidate(self, caplog):
        artifacts = [ArtifactCoordinate("org.scoverage", "scalac-scoverage-plugin_2.13.9", "2.0.7")]
        with caplog.at_level(logging.WARNING):
            discover_plugin_version(artifacts)
        assert caplog.text == ""

    def test_warns_on_duplicate_candidates_with_same_version(self, caplog):
        artifacts = [
            ArtifactCoordinate("org.scoverage", "scalac-scoverage-plugin_2.13.9", "2.0.1"),
            ArtifactCoordinate("org.scoverage", "scalac-scoverage-plugin_2.13", "2.0.1"),
        ]
        with caplog.at_level(logging.WARNING):
            assert discover_plugin_version(artifacts) == "2.0.1"
        assert "org.scoverage:scalac-scoverage-plugin_2.13:2.0.1" in caplog.text


class TestPluginVersion:
    """Plugin version precedence."""

    def test_override(self, fake_resolver):
        selector = ArtifactSelector(fake_resolver, [
            ArtifactCoordinate("org.scoverage", "scalac-scoverage-plugin_2.13.9", "2.0.7"),
        ])
        assert selector.plugin_version(SCALA, FAMILY, "2.0.1").raw == "2.0.1"

    def test_from_plugin_artifacts(self, fake_resolver):
        selector = ArtifactSelector(fake_resolver, [
            ArtifactCoordinate("org.scoverage", "scalac-scoverage-plugin_2.13.9", "2.0.7"),
        ])
        assert selector.plugin_version(SCALA, FAMILY).raw == "2.0.7"

    def test_from_repository_metadata(self, tmp_path):
        resolver = FakeResolver(tmp_path, latest={"org.scoverage:scalac-scoverage-plugin_2.13": "1.4.11"})
        selector = ArtifactSelector(resolver)
        assert selector.plugin_version(SCALA, FAMILY).raw == "1.4.11"

    def test_not_resolvable(self, fake_resolver):
        with pytest.raises(PluginVersionNotResolved):
            ArtifactSelector(fake_resolver).plugin_version(SCALA, FAMILY)


class TestSelect:
    """Three-tier compatibility policy."""

    def test_multi_module_packaging(self, fake_resolver):
        selector = ArtifactSelector(fake_resolver)
        result = selector.select(SCALA, FAMILY, ResolvedVersion.parse("2.0.1"))
        assert gavs(result) == [
            "org.scoverage:scalac-scoverage-plugin_2.13.9:2.0.1",
            "org.scoverage:scalac-scoverage-domain_2.13:2.0.1",
            "org.scoverage:scalac-scoverage-serializer_2.13:2.0.1",
        ]

    @pytest.mark.parametrize("plugin", ["2.0.0", "2.1.0", "3.0.0-M1", "10.0"])
    def test_major_two_and_up_yield_three(self, fake_resolver, plugin):
        coords = ArtifactSelector(fake_resolver).coordinates(
            ResolvedVersion.parse("2.12.17"), CompatibilityFamily.SCALA_2_12, ResolvedVersion.parse(plugin)
        )
        assert len(coords) == 3
        assert coords[0].artifact_id == "scalac-scoverage-plugin_2.12.17"
        assert coords[1].artifact_id.endswith("_2.12")
        assert coords[2].artifact_id.endswith("_2.12")

    @pytest.mark.parametrize("plugin", ["1.4.1", "1.4.3", "1.4.11", "1.3.1", "1.0.4", "0.99"])
    def test_older_versions_use_binary_qualifier(self, fake_resolver, plugin):
        result = ArtifactSelector(fake_resolver).select(SCALA, FAMILY, ResolvedVersion.parse(plugin))
        assert gavs(result) == [f"org.scoverage:scalac-scoverage-plugin_2.13:{plugin}"]

    def test_transitional_release_uses_full_version(self, fake_resolver):
        result = ArtifactSelector(fake_resolver).select(SCALA, FAMILY, ResolvedVersion.parse("1.4.2"))
        assert gavs(result) == ["org.scoverage:scalac-scoverage-plugin_2.13.9:1.4.2"]
        assert len(fake_resolver.calls) == 1

    @pytest.mark.parametrize("failure", ["missing", "broken"])
    def test_transitional_release_falls_back(self, tmp_path, caplog, failure):
        primary = "org.scoverage:scalac-scoverage-plugin_2.13.9:1.4.2"
        resolver = FakeResolver(tmp_path, **{failure: [primary]})
        with caplog.at_level(logging.WARNING):
            result = ArtifactSelector(resolver).select(SCALA, FAMILY, ResolvedVersion.parse("1.4.2"))
        assert gavs(result) == ["org.scoverage:scalac-scoverage-plugin_2.13:1.4.2"]
        assert [c.gav() for c in resolver.calls] == [
            primary, "org.scoverage:scalac-scoverage-plugin_2.13:1.4.2",
        ]
        assert primary in caplog.text
        assert "org.scoverage:scalac-scoverage-plugin_2.13:1.4.2" in caplog.text

    def test_transitional_fallback_failure_propagates(self, tmp_path):
        resolver = FakeResolver(tmp_path, missing=[
            "org.scoverage:scalac-scoverage-plugin_2.13.9:1.4.2",
            "org.scoverage:scalac-scoverage-plugin_2.13:1.4.2",
        ])
        with pytest.raises(ArtifactNotFound) as info:
            ArtifactSelector(resolver).select(SCALA, FAMILY, ResolvedVersion.parse("1.4.2"))
        assert info.value.coordinate.artifact_id == "scalac-scoverage-plugin_2.13"

    def test_no_fallback_for_other_versions(self, tmp_path):
        resolver = FakeResolver(tmp_path, broken=["org.scoverage:scalac-scoverage-domain_2.13:2.0.1"])
        with pytest.raises(ArtifactResolutionFailed):
            ArtifactSelector(resolver).select(SCALA, FAMILY, ResolvedVersion.parse("2.0.1"))

    def test_runtime_artifact(self, fake_resolver):
        runtime = ArtifactSelector(fake_resolver).runtime(FAMILY, ResolvedVersion.parse("2.0.1"))
        assert runtime.gav() == "org.scoverage:scalac-scoverage-runtime_2.13:2.0.1"
