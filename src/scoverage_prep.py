"""scoverage-prep - configure a Maven/Scala build for scoverage instrumentation

    Returns:
        int: Exit code
"""
import json
import logging
import os
import sys
import xml.etree.ElementTree as ET

from args import parse_args
from artifacts.resolver import MavenRepositoryResolver
from cli_config import (
    ConfigError,
    build_options,
    build_plugin_artifacts,
    build_repository_settings,
    resolve_settings,
)
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from constants import Constants, ExitCodes
from errors import ConfigurationError
from instrument.orchestrator import PreCompileConfigurator, RunResult
from project.model import MavenProject
from project.pom import load_project

logger = logging.getLogger(__name__)


def _setup_logging(args) -> None:
    """Configure logging based on CLI arguments."""
    if getattr(args, "LOG_LEVEL", None):
        os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging()

    level_name = str(getattr(args, "LOG_LEVEL", "INFO")).upper()
    logging.getLogger().setLevel(getattr(logging, level_name, logging.INFO))

    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        logging.getLogger().addHandler(file_handler)

    if getattr(args, "QUIET", False):
        for handler in logging.getLogger().handlers:
            if type(handler) is logging.StreamHandler:  # pylint: disable=unidiomatic-typecheck
                handler.setLevel(logging.CRITICAL + 1)


def _escape_properties(text: str, is_key: bool = False) -> str:
    escaped = (text.replace("\\", "\\\\")
               .replace("\n", "\\n")
               .replace("\r", "\\r")
               .replace("\t", "\\t"))
    if is_key:
        for char in (" ", ":", "="):
            escaped = escaped.replace(char, "\\" + char)
    return escaped


def render_report(project: MavenProject, result: RunResult, fmt: str) -> str:
    """Render the project properties (and run summary for JSON)."""
    properties = project.properties.as_dict()
    if fmt == "properties":
        lines = [
            f"{_escape_properties(key, is_key=True)}={_escape_properties(value)}"
            for key, value in sorted(properties.items())
        ]
        return "\n".join(lines) + ("\n" if lines else "")
    payload = {
        "project": ":".join(part for part in (project.group_id, project.artifact_id, project.version) if part),
        "finalName": project.final_name,
        "properties": properties,
        "dependencyArtifacts": [a.gav() for a in project.dependency_artifacts],
        "run": result.summary(),
    }
    return json.dumps(payload, indent=2, sort_keys=False) + "\n"


def _output_format(args) -> str:
    fmt = getattr(args, "OUTPUT_FORMAT", None)
    if fmt:
        return fmt
    output = getattr(args, "OUTPUT", None) or ""
    return "properties" if output.lower().endswith(".properties") else "json"


def export_report(project: MavenProject, result: RunResult, args) -> None:
    """Write the report to --output or print it to stdout."""
    text = render_report(project, result, _output_format(args))
    path = getattr(args, "OUTPUT", None)
    if not path:
        if not getattr(args, "QUIET", False):
            sys.stdout.write(text)
        return
    try:
        with open(path, "w", encoding="utf-8") as file:
            file.write(text)
        logging.info("Report has been successfully exported at: %s", path)
    except OSError as e:
        logging.error("Report couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def run(args) -> ExitCodes:
    """Execute one configuration run for parsed ``args``."""
    try:
        project = load_project(args.POM)
    except FileNotFoundError as e:
        logging.error("pom.xml not found: %s", e)
        return ExitCodes.FILE_ERROR
    except ET.ParseError as e:
        logging.error("Couldn't parse %s: %s", args.POM, e)
        return ExitCodes.FILE_ERROR
    except OSError as e:
        logging.error("Couldn't read %s: %s", args.POM, e)
        return ExitCodes.FILE_ERROR

    try:
        settings = resolve_settings(args, project.properties.as_dict())
        options = build_options(settings, project.basedir)
        repositories = build_repository_settings(settings, offline=getattr(args, "OFFLINE", False))
        project.plugin_artifacts = build_plugin_artifacts(settings)
    except ConfigError as e:
        logging.error("%s", e)
        return ExitCodes.FILE_ERROR

    resolver = MavenRepositoryResolver(
        local_repository=repositories.local_repository,
        remote_repositories=repositories.remote_repositories,
        offline=repositories.offline,
    )
    configurator = PreCompileConfigurator(project, options, resolver)
    try:
        result = configurator.execute()
    except ConfigurationError as e:
        logging.error("%s: %s", e, e.__cause__)
        return ExitCodes.CONFIGURATION_ERROR

    if is_debug_enabled(logger):
        logger.debug(
            "Run finished",
            extra=extra_context(event="function_exit", component="cli", action="run",
                                outcome=result.outcome.value)
        )
    export_report(project, result, args)
    if result.is_soft_skip and getattr(args, "ERROR_ON_WARNINGS", False):
        return ExitCodes.EXIT_WARNINGS
    return ExitCodes.SUCCESS


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)
    logging.info("Arguments parsed.")
    sys.exit(run(args).value)


if __name__ == "__main__":
    main()
