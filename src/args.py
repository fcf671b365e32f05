"""Argument parsing functionality for scoverage-prep."""

import argparse
from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="scoverage-prep",
        description=(
            "Configure a Maven/Scala project for scoverage instrumentation"
        ),
        add_help=True,
    )

    parser.add_argument("-f", "--file",
                        dest="POM",
                        help="Path to pom.xml or its directory (default: pom.xml)",
                        action="store", type=str,
                        default=Constants.POM_XML_FILE)

    parser.add_argument("--skip",
                        dest="SKIP",
                        help="Skip instrumentation and disable tests",
                        action="store_true",
                        default=None)
    parser.add_argument("--scala-version",
                        dest="SCALA_VERSION",
                        help="Scala version used for compiler plugin resolution",
                        action="store", type=str)
    parser.add_argument("--data-directory",
                        dest="DATA_DIRECTORY",
                        help="Directory where coverage data is written (default: <build dir>/scoverage-data)",
                        action="store", type=str)
    parser.add_argument("--excluded-packages",
                        dest="EXCLUDED_PACKAGES",
                        help='Semicolon-separated package regexes to exclude, "(empty)" for the default package',
                        action="store", type=str)
    parser.add_argument("--excluded-files",
                        dest="EXCLUDED_FILES",
                        help="Semicolon-separated source path regexes to exclude",
                        action="store", type=str)
    parser.add_argument("--no-highlighting",
                        dest="HIGHLIGHTING",
                        help="Do not pass -Yrangepos to scalac",
                        action="store_false",
                        default=None)
    parser.add_argument("--plugin-version",
                        dest="PLUGIN_VERSION",
                        help="Force the scalac-scoverage-plugin version",
                        action="store", type=str)
    parser.add_argument("--additional-forked-project-properties",
                        dest="FORKED_PROPERTIES",
                        help="Semicolon-separated key=value properties set for the forked build",
                        action="store", type=str)
    parser.add_argument("--plugin-artifact",
                        dest="PLUGIN_ARTIFACTS",
                        help="Artifact available to the plugin (groupId:artifactId:version), repeatable",
                        action="append", type=str,
                        default=[])

    parser.add_argument("--local-repo",
                        dest="LOCAL_REPO",
                        help="Local Maven repository (default: ~/.m2/repository)",
                        action="store", type=str)
    parser.add_argument("--remote-repo",
                        dest="REMOTE_REPOS",
                        help="Remote Maven repository URL, repeatable (default: Maven Central)",
                        action="append", type=str)
    parser.add_argument("--offline",
                        dest="OFFLINE",
                        help="Resolve artifacts from the local repository only",
                        action="store_true")

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--set",
                        dest="OVERRIDES",
                        help="Set a configuration property (KEY=VALUE format, can be used multiple times)",
                        action="append",
                        type=str,
                        default=[])

    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Write the resulting project properties to this file",
                        action="store",
                        type=str)
    parser.add_argument("--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (json or properties). If not specified, inferred from --output extension; defaults to json.",
                        action="store",
                        type=str.lower,
                        choices=Constants.OUTPUT_FORMATS)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("--error-on-warnings",
                        dest="ERROR_ON_WARNINGS",
                        help="Exit with a non-zero status code when instrumentation was skipped with a warning.",
                        action="store_true")
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Do not output to console.",
                        action="store_true")

    return parser.parse_args(argv)
