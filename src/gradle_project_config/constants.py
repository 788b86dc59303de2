"""Constants used throughout gradle-project-config."""

from enum import Enum


# Gradle distribution kinds
class DistributionType(str, Enum):
    """Gradle distribution kinds.

    Attributes:
        WRAPPER: Use the Gradle wrapper declared by the build
        LOCAL_INSTALLATION: Use a Gradle installation on the local filesystem
        REMOTE_DISTRIBUTION: Download the distribution from a URI
        VERSION: Use a specific Gradle version
    """

    WRAPPER = "WRAPPER"
    LOCAL_INSTALLATION = "LOCAL_INSTALLATION"
    REMOTE_DISTRIBUTION = "REMOTE_DISTRIBUTION"
    VERSION = "VERSION"


# Serialized distribution wrapper, e.g. GRADLE_DISTRIBUTION(WRAPPER)
DISTRIBUTION_PREFIX = "GRADLE_DISTRIBUTION("
DISTRIBUTION_SUFFIX = ")"

# Legacy json-based project configuration
LEGACY_PREFERENCES_LOCATION = ".settings/gradle.prefs"
LEGACY_PREFERENCES_NODE_NAME = "gradle"
LEGACY_VERSION_KEY = "1.0"
LEGACY_KEY_PROJECT_PATH = "project_path"
LEGACY_KEY_PROJECT_DIR = "connection_project_dir"
LEGACY_KEY_GRADLE_DISTRIBUTION = "connection_gradle_distribution"
LEGACY_FILE_ENCODING = "utf-8"

# Current project configuration store
PROJECT_CONFIGURATION_LOCATION = ".settings/org.eclipse.buildship.core.toml"
PROJECT_CONFIGURATION_SCHEMA_VERSION = 1

# Workspace database
WORKSPACE_DB_FILE_NAME = "workspace.json"
DB_TABLE_PROJECTS = "projects"
DB_TABLE_RESOURCES = "resources"
DB_TABLE_PREFERENCES = "preferences"

# Directories skipped when refreshing a project's resource tree
REFRESH_IGNORED_DIRS = frozenset({".git", ".gradle", "build", "__pycache__"})

# JSON output formatting
JSON_OUTPUT_INDENT = 2

# Logging configuration
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
