"""Constants used in the project."""

import os
from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    EXIT_WARNINGS = 3
    CONFIGURATION_ERROR = 4


class Outcome(Enum):
    """Terminal states of a pre-compile run.

    Args:
        Enum (string): Outcome reported by the orchestrator.
    """

    AGGREGATOR = "aggregator"
    SKIPPED = "skipped"
    VERSION_NOT_RESOLVED = "version_not_resolved"
    UNSUPPORTED_VERSION = "unsupported_version"
    CONFIGURED = "configured"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    SCALA_LIBRARY_GROUP_ID = "org.scala-lang"
    SCALA_LIBRARY_ARTIFACT_ID = "scala-library"

    SCOVERAGE_GROUP_ID = "org.scoverage"
    PLUGIN_ARTIFACT_PREFIX = "scalac-scoverage-plugin_"
    DOMAIN_ARTIFACT_PREFIX = "scalac-scoverage-domain_"
    SERIALIZER_ARTIFACT_PREFIX = "scalac-scoverage-serializer_"
    RUNTIME_ARTIFACT_PREFIX = "scalac-scoverage-runtime_"

    AGGREGATOR_PACKAGING = "pom"
    DEFAULT_PACKAGING = "jar"

    # scalac options understood by the scoverage compiler plugin
    DATA_DIR_OPTION = "-P:scoverage:dataDir:"
    SOURCE_ROOT_OPTION = "-P:scoverage:sourceRoot:"
    EXCLUDED_PACKAGES_OPTION = "-P:scoverage:excludedPackages:"
    EXCLUDED_FILES_OPTION = "-P:scoverage:excludedFiles:"
    PLUGIN_OPTION = "-Xplugin:"
    RANGEPOS_OPTION = "-Yrangepos"
    EMPTY_PACKAGE_SENTINEL = "(empty)"
    EMPTY_PACKAGE_MARKER = "<empty>"

    BACKUP_PREFIX = "scoverage.backup."
    FINAL_NAME_PREFIX = "scoverage-"
    DATA_DIRECTORY_NAME = "scoverage-data"
    SOURCE_ROOTS_FILE = "source.roots"

    # Published properties
    PROP_SBT_SCALAC_OPTIONS = "sbt._scalacOptions"
    PROP_SBT_SCALAC_PLUGINS = "sbt._scalacPlugins"
    PROP_ADD_SCALAC_ARGS = "addScalacArgs"
    PROP_ANALYSIS_CACHE_FILE = "analysisCacheFile"
    PROP_TEST_FAILURE_IGNORE = "maven.test.failure.ignore"
    PROP_MAVEN_TEST_SKIP = "maven.test.skip"
    PROP_SKIP_TESTS = "skipTests"
    ANALYSIS_CACHE_FILE = "${project.build.directory}/scoverage-analysis/compile"

    # Configuration property names
    CFG_SKIP = "scoverage.skip"
    CFG_SCALA_VERSION = "scala.version"
    CFG_DATA_DIRECTORY = "scoverage.dataDirectory"
    CFG_EXCLUDED_PACKAGES = "scoverage.excludedPackages"
    CFG_EXCLUDED_FILES = "scoverage.excludedFiles"
    CFG_HIGHLIGHTING = "scoverage.highlighting"
    CFG_PLUGIN_VERSION = "scoverage.scalacPluginVersion"
    CFG_ADDITIONAL_FORKED_PROPERTIES = "scoverage.additionalForkedProjectProperties"
    CFG_PLUGIN_ARTIFACTS = "plugin.artifacts"
    CFG_LOCAL_REPOSITORY = "localRepository"
    CFG_REMOTE_REPOSITORIES = "remoteRepositories"

    POM_XML_FILE = "pom.xml"
    POM_NAMESPACE = "http://maven.apache.org/POM/4.0.0"
    MAVEN_METADATA_FILE = "maven-metadata.xml"
    DEFAULT_LOCAL_REPOSITORY = os.path.join(os.path.expanduser("~"), ".m2", "repository")
    DEFAULT_REMOTE_REPOSITORIES = ["https://repo1.maven.org/maven2"]

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    ENV_LOG_LEVEL = "SCOVERAGE_LOG_LEVEL"
    OUTPUT_FORMATS = ["json", "properties"]
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests
    HTTP_RETRY_MAX = 3
    HTTP_CACHE_TTL_SEC = 300
