"""scalac argument assembly.

One ordered list of flags is built and then rendered twice: space-separated
with quoting for sbt-compiler-maven-plugin, and pipe-separated for
scala-maven-plugin's ``addScalacArgs``.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from artifacts.models import ResolvedArtifact
from constants import Constants


@dataclass(frozen=True)
class ScalacFlag:
    name: str
    value: str = ""

    def token(self) -> str:
        return self.name + self.value


def quote_argument(arg: str) -> str:
    """Wrap ``arg`` in double quotes when it contains a space."""
    return f'"{arg}"' if " " in arg else arg


def build_flags(
    data_directory: Path,
    source_root: Path,
    excluded_packages: Optional[str] = None,
    excluded_files: Optional[str] = None,
    highlighting: bool = True,
) -> List[ScalacFlag]:
    flags = [
        ScalacFlag(Constants.DATA_DIR_OPTION, str(Path(data_directory).absolute())),
        ScalacFlag(Constants.SOURCE_ROOT_OPTION, str(Path(source_root).absolute())),
    ]
    if excluded_packages:
        flags.append(ScalacFlag(
            Constants.EXCLUDED_PACKAGES_OPTION,
            excluded_packages.replace(Constants.EMPTY_PACKAGE_SENTINEL, Constants.EMPTY_PACKAGE_MARKER),
        ))
    if excluded_files:
        flags.append(ScalacFlag(Constants.EXCLUDED_FILES_OPTION, excluded_files))
    if highlighting:
        flags.append(ScalacFlag(Constants.RANGEPOS_OPTION))
    return flags


def space_encoding(flags: Sequence[ScalacFlag]) -> str:
    return " ".join(quote_argument(flag.token()) for flag in flags)


def pipe_encoding(flags: Sequence[ScalacFlag]) -> str:
    return "|".join(flag.token() for flag in flags)


def plugin_path(artifacts: Sequence[ResolvedArtifact]) -> str:
    return os.pathsep.join(str(Path(artifact.file).absolute()) for artifact in artifacts)


def plugin_gavs(artifacts: Sequence[ResolvedArtifact]) -> str:
    return " ".join(artifact.gav() for artifact in artifacts)


@dataclass(frozen=True)
class ScalacArguments:
    """Rendered scalac settings ready to be published as properties."""
    flags: List[ScalacFlag]
    scalac_options: str
    scalac_plugins: str
    add_scalac_args: str


def assemble(flags: Sequence[ScalacFlag], artifacts: Sequence[ResolvedArtifact]) -> ScalacArguments:
    """Render ``flags`` and the plugin artifacts for both compiler plugins."""
    xplugin = Constants.PLUGIN_OPTION + plugin_path(artifacts)
    return ScalacArguments(
        flags=list(flags),
        scalac_options=space_encoding(flags),
        scalac_plugins=plugin_gavs(artifacts),
        add_scalac_args="|".join(part for part in (pipe_encoding(flags), xplugin) if part),
    )
