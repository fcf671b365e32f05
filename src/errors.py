"""Exception taxonomy for the pre-compile configuration run.

Soft errors (``VersionNotResolved``, ``UnsupportedVersion``) end a run without
configuring anything and are turned into an ``Outcome`` by the orchestrator.
Everything else is hard and reaches callers wrapped in ``ConfigurationError``.
"""
from __future__ import annotations

from typing import Optional


class ScoveragePrepError(Exception):
    """Base class for all errors raised by this package."""


class SoftSkip(ScoveragePrepError):
    """Nothing to configure; the run ends successfully."""


class VersionNotResolved(SoftSkip):
    """No Scala version was configured or found among direct dependencies."""

    def __init__(self, message: str = "Scala version not set"):
        super().__init__(message)


class UnsupportedVersion(SoftSkip):
    """The Scala version does not belong to a supported binary family."""

    def __init__(self, version: str):
        super().__init__(f'unsupported Scala version "{version}"')
        self.version = version


class ArtifactNotFound(ScoveragePrepError):
    """The artifact is absent from every configured repository."""

    def __init__(self, coordinate, message: Optional[str] = None):
        super().__init__(message or f'Artifact "{coordinate}" not found')
        self.coordinate = coordinate


class ArtifactResolutionFailed(ScoveragePrepError):
    """The artifact could not be fetched (connection, server or disk failure)."""

    def __init__(self, coordinate, message: Optional[str] = None):
        super().__init__(message or f'Artifact "{coordinate}" could not be resolved')
        self.coordinate = coordinate


class PluginVersionNotResolved(ScoveragePrepError):
    """No scalac-scoverage-plugin version could be determined."""


class DirectoryCreateFailed(ScoveragePrepError):
    """The data directory could not be created."""

    def __init__(self, path):
        super().__init__(f'Cannot create "{path}" directory')
        self.path = path


class ManifestWriteFailed(ScoveragePrepError):
    """The source roots manifest could not be written."""

    def __init__(self, path, reason: str = ""):
        detail = f": {reason}" if reason else ""
        super().__init__(f'Cannot write "{path}"{detail}')
        self.path = path


class ConfigurationError(ScoveragePrepError):
    """A hard failure aborted the configuration run.

    The underlying error is available as ``__cause__``.
    """

    def __init__(self, message: str = "SCoverage preparation failed"):
        super().__init__(message)
