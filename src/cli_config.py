"""Build runtime settings from pom properties, config files and CLI flags.

Precedence, lowest first: built-in defaults, pom ``<properties>``, the config
file, ``--set KEY=VALUE`` overrides, explicit CLI flags.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from artifacts.models import ArtifactCoordinate
from constants import Constants
from instrument.options import InstrumentationOptions

logger = logging.getLogger(__name__)

_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0", ""}


class ConfigError(ValueError):
    """Raised for unreadable or malformed configuration input."""


def to_bool(value: Any, key: str = "") -> bool:
    """Interpret booleans written as Maven/YAML properties."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"Invalid boolean value '{value}' for {key or 'property'}")


def load_config_file(config_path: Optional[str]) -> Dict[str, Any]:
    """Load a flat mapping of property names from YAML or JSON.

    A top-level ``scoverage`` mapping is accepted as well and merged in.
    """
    if not config_path:
        return {}
    if not os.path.isfile(config_path):
        raise ConfigError(f"Config file not found: {config_path}")
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            if config_path.lower().endswith(".json"):
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config {config_path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")
    nested = data.pop("scoverage", None)
    if isinstance(nested, dict):
        for key, value in nested.items():
            data.setdefault(key if "." in key else f"scoverage.{key}", value)
    return data


def parse_overrides(pairs: List[str]) -> Dict[str, str]:
    """Parse ``KEY=VALUE`` strings from ``--set``."""
    result: Dict[str, str] = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise ConfigError(f"Invalid override '{pair}', expected KEY=VALUE")
        key, value = pair.split("=", 1)
        result[key.strip()] = value.strip()
    return result


def _cli_values(args) -> Dict[str, Any]:
    mapping = {
        Constants.CFG_SKIP: getattr(args, "SKIP", None),
        Constants.CFG_SCALA_VERSION: getattr(args, "SCALA_VERSION", None),
        Constants.CFG_DATA_DIRECTORY: getattr(args, "DATA_DIRECTORY", None),
        Constants.CFG_EXCLUDED_PACKAGES: getattr(args, "EXCLUDED_PACKAGES", None),
        Constants.CFG_EXCLUDED_FILES: getattr(args, "EXCLUDED_FILES", None),
        Constants.CFG_HIGHLIGHTING: getattr(args, "HIGHLIGHTING", None),
        Constants.CFG_PLUGIN_VERSION: getattr(args, "PLUGIN_VERSION", None),
        Constants.CFG_ADDITIONAL_FORKED_PROPERTIES: getattr(args, "FORKED_PROPERTIES", None),
        Constants.CFG_LOCAL_REPOSITORY: getattr(args, "LOCAL_REPO", None),
        Constants.CFG_REMOTE_REPOSITORIES: getattr(args, "REMOTE_REPOS", None),
        Constants.CFG_PLUGIN_ARTIFACTS: getattr(args, "PLUGIN_ARTIFACTS", None) or None,
    }
    return {key: value for key, value in mapping.items() if value is not None}


def merge_settings(*layers: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge layers; later layers win."""
    merged: Dict[str, Any] = {}
    for layer in layers:
        merged.update(layer)
    return merged


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.replace(",", ";").split(";") if item.strip()]
    return [str(item).strip() for item in value if str(item).strip()]


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def build_options(settings: Mapping[str, Any], basedir: Optional[Path] = None) -> InstrumentationOptions:
    """Create InstrumentationOptions from merged settings."""
    data_directory = _optional_str(settings.get(Constants.CFG_DATA_DIRECTORY))
    data_path = None
    if data_directory:
        data_path = Path(data_directory)
        if basedir is not None and not data_path.is_absolute():
            data_path = Path(basedir) / data_path
    return InstrumentationOptions(
        skip=to_bool(settings.get(Constants.CFG_SKIP, False), Constants.CFG_SKIP),
        scala_version=_optional_str(settings.get(Constants.CFG_SCALA_VERSION)),
        data_directory=data_path,
        excluded_packages=str(settings.get(Constants.CFG_EXCLUDED_PACKAGES) or ""),
        excluded_files=str(settings.get(Constants.CFG_EXCLUDED_FILES) or ""),
        highlighting=to_bool(settings.get(Constants.CFG_HIGHLIGHTING, True), Constants.CFG_HIGHLIGHTING),
        scalac_plugin_version=_optional_str(settings.get(Constants.CFG_PLUGIN_VERSION)),
        additional_forked_project_properties=str(
            settings.get(Constants.CFG_ADDITIONAL_FORKED_PROPERTIES) or ""
        ),
    )


@dataclass(frozen=True)
class RepositorySettings:
    """Where artifacts are resolved from."""
    local_repository: str
    remote_repositories: List[str]
    offline: bool = False


def build_repository_settings(settings: Mapping[str, Any], offline: bool = False) -> RepositorySettings:
    remotes = _as_list(settings.get(Constants.CFG_REMOTE_REPOSITORIES))
    return RepositorySettings(
        local_repository=os.path.expanduser(
            str(settings.get(Constants.CFG_LOCAL_REPOSITORY) or Constants.DEFAULT_LOCAL_REPOSITORY)
        ),
        remote_repositories=remotes or list(Constants.DEFAULT_REMOTE_REPOSITORIES),
        offline=offline,
    )


def build_plugin_artifacts(settings: Mapping[str, Any]) -> List[ArtifactCoordinate]:
    """Parse the plugin artifact list.

    Raises:
        ConfigError: an entry is not a group:artifact:version coordinate.
    """
    artifacts = []
    for token in _as_list(settings.get(Constants.CFG_PLUGIN_ARTIFACTS)):
        try:
            artifacts.append(ArtifactCoordinate.parse(token))
        except ValueError as e:
            raise ConfigError(str(e)) from e
    return artifacts


def resolve_settings(args, pom_properties: Mapping[str, str]) -> Dict[str, Any]:
    """Merge every configuration layer for ``args``."""
    file_settings = load_config_file(getattr(args, "CONFIG", None))
    overrides = parse_overrides(getattr(args, "OVERRIDES", []))
    settings = merge_settings(dict(pom_properties), file_settings, overrides, _cli_values(args))
    logger.debug("Effective settings: %s", sorted(settings))
    return settings
