"""Persistence delegate which cleans up the legacy, json-based project configuration format."""

import json
import logging
from pathlib import Path
from typing import Any

from ..constants import (
    LEGACY_FILE_ENCODING,
    LEGACY_KEY_GRADLE_DISTRIBUTION,
    LEGACY_KEY_PROJECT_DIR,
    LEGACY_KEY_PROJECT_PATH,
    LEGACY_PREFERENCES_LOCATION,
    LEGACY_PREFERENCES_NODE_NAME,
    LEGACY_VERSION_KEY,
)
from ..errors import BackingStoreError, LegacyCleanupError, MalformedLegacyConfigurationError, ResourceError
from ..model import ProjectConfiguration, ProjectConfigurationProperties
from ..workspace import Project
from .base import ProjectConfigurationPersistence

logger = logging.getLogger(__name__)


def _legacy_value(config: dict[str, Any], key: str) -> Any:
    """Get a legacy value; numbers (kept as text by the parser) and booleans are read as strings."""
    value = config.get(key)
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


class LegacyCleaningProjectConfigurationPersistence(ProjectConfigurationPersistence):
    """
    Wraps another persistence and absorbs the legacy gradle.prefs format.

    Reads prefer the legacy file while it exists. Saves remove the legacy
    artifacts first, so after a successful save only the delegate's format
    remains. Deletes are forwarded unchanged and leave legacy artifacts alone.
    """

    def __init__(
        self,
        delegate: ProjectConfigurationPersistence,
        *,
        legacy_location: str = LEGACY_PREFERENCES_LOCATION,
        legacy_node_name: str = LEGACY_PREFERENCES_NODE_NAME,
    ):
        """
        Initialize the legacy cleaning persistence.

        Args:
            delegate: Persistence for the current configuration format
            legacy_location: Legacy file location relative to the project root
            legacy_node_name: Name of the legacy preference node
        """
        if delegate is None:
            raise ValueError("delegate must not be None")
        self.delegate = delegate
        self.legacy_location = legacy_location
        self.legacy_node_name = legacy_node_name

    def save_project_configuration(self, configuration: ProjectConfiguration, project: Project) -> None:
        self._cleanup_legacy_configuration(project)
        self.delegate.save_project_configuration(configuration, project)

    def delete_project_configuration(self, project: Project) -> None:
        self.delegate.delete_project_configuration(project)

    def read_project_configuration(self, project: Project) -> ProjectConfiguration:
        if self.has_legacy_configuration(project):
            logger.info(f"Reading legacy configuration of project {project.name}")
            return self._read_legacy_project_configuration(project)
        return self.delegate.read_project_configuration(project)

    def legacy_configuration_file(self, project: Project) -> Path:
        """Filesystem location of the legacy configuration file of a project."""
        return project.location / self.legacy_location

    def has_legacy_configuration(self, project: Project) -> bool:
        """Whether the legacy configuration file exists on disk."""
        return self.legacy_configuration_file(project).exists()

    def _read_legacy_project_configuration(self, project: Project) -> ProjectConfiguration:
        properties = self._read_legacy_properties(project)
        try:
            return properties.to_project_configuration(project)
        except ValueError as e:
            raise MalformedLegacyConfigurationError(project.name) from e

    def _read_legacy_properties(self, project: Project) -> ProjectConfigurationProperties:
        parsed = self._parse_legacy_configuration_file(project)
        try:
            config = parsed[LEGACY_VERSION_KEY]
            return ProjectConfigurationProperties.from_values(
                project_path=_legacy_value(config, LEGACY_KEY_PROJECT_PATH),
                project_dir=_legacy_value(config, LEGACY_KEY_PROJECT_DIR),
                gradle_distribution=_legacy_value(config, LEGACY_KEY_GRADLE_DISTRIBUTION),
            )
        except (KeyError, AttributeError, ValueError) as e:
            raise MalformedLegacyConfigurationError(project.name) from e

    def _parse_legacy_configuration_file(self, project: Project) -> dict[str, Any]:
        legacy_file = self.legacy_configuration_file(project)
        try:
            parsed = json.loads(
                legacy_file.read_text(encoding=LEGACY_FILE_ENCODING), parse_int=str, parse_float=str
            )
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MalformedLegacyConfigurationError(project.name) from e

        if not isinstance(parsed, dict):
            raise MalformedLegacyConfigurationError(project.name)
        return parsed

    def _cleanup_legacy_configuration(self, project: Project) -> None:
        if project is None:
            raise ValueError("project must not be None")
        if not project.is_accessible():
            raise ValueError(f"Project {project.name} is not accessible")

        if self.has_legacy_configuration(project):
            logger.info(f"Removing legacy configuration of project {project.name}")
            # remove preferences by descending order of abstraction layer
            self._remove_legacy_preference_node(project)
            self._delete_legacy_managed_file(project)
            self._delete_legacy_file(project)

    def _remove_legacy_preference_node(self, project: Project) -> None:
        try:
            node = project.preferences().get_node(self.legacy_node_name)
            if node is not None:
                node.remove_node()
                logger.debug(f"Removed preference node {self.legacy_node_name} of project {project.name}")
        except BackingStoreError as e:
            raise LegacyCleanupError(project.name) from e

    def _delete_legacy_managed_file(self, project: Project) -> None:
        try:
            managed_file = project.get_file(self.legacy_location)
            if managed_file.exists():
                managed_file.delete()
                logger.debug(f"Deleted workspace file {self.legacy_location} of project {project.name}")
        except ResourceError as e:
            raise LegacyCleanupError(project.name) from e

    def _delete_legacy_file(self, project: Project) -> None:
        legacy_file = self.legacy_configuration_file(project)
        if legacy_file.exists():
            try:
                legacy_file.unlink()
            except OSError as e:
                raise LegacyCleanupError(project.name) from e
            logger.debug(f"Deleted {legacy_file}")
