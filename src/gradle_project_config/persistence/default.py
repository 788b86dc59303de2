"""TOML-based project configuration store."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from ..constants import PROJECT_CONFIGURATION_LOCATION, PROJECT_CONFIGURATION_SCHEMA_VERSION
from ..errors import ProjectConfigurationError, ProjectConfigurationNotFoundError, ResourceError
from ..model import ProjectConfiguration, ProjectConfigurationProperties
from ..workspace import Project
from .base import ProjectConfigurationPersistence

logger = logging.getLogger(__name__)


def _check_accessible(project: Project) -> None:
    if project is None:
        raise ValueError("project must not be None")
    if not project.is_accessible():
        raise ValueError(f"Project {project.name} is not accessible")


def _relative_root_dir(configuration: ProjectConfiguration) -> str:
    """Store the root project directory relative to the project when possible."""
    try:
        relative = os.path.relpath(configuration.root_project_dir, configuration.project_dir)
    except ValueError:
        # Different drives on Windows
        return str(configuration.root_project_dir)
    return Path(relative).as_posix()


class DefaultProjectConfigurationPersistence(ProjectConfigurationPersistence):
    """Stores project configuration as a TOML document in the project's .settings directory."""

    def __init__(self, location: str = PROJECT_CONFIGURATION_LOCATION):
        """
        Initialize the store.

        Args:
            location: File location relative to the project root
        """
        self.location = location

    def save_project_configuration(self, configuration: ProjectConfiguration, project: Project) -> None:
        """Write the configuration document, replacing any previous one."""
        _check_accessible(project)

        data = {
            "meta": {"schema_version": PROJECT_CONFIGURATION_SCHEMA_VERSION},
            "connection": {
                "root_project_dir": _relative_root_dir(configuration),
                "gradle_distribution": configuration.gradle_distribution.to_string(),
            },
            "project": {"path": configuration.project_path},
        }

        try:
            project.get_file(self.location).create(tomli_w.dumps(data).encode("utf-8"))
        except ResourceError as e:
            raise ProjectConfigurationError(f"Cannot save project configuration for project {project.name}.") from e

        logger.debug(f"Saved project configuration for {project.name}")

    def delete_project_configuration(self, project: Project) -> None:
        """Delete the configuration document if present."""
        _check_accessible(project)

        configuration_file = project.get_file(self.location)
        try:
            if configuration_file.exists() or configuration_file.location.exists():
                configuration_file.delete()
        except ResourceError as e:
            raise ProjectConfigurationError(f"Cannot delete project configuration for project {project.name}.") from e

        logger.debug(f"Deleted project configuration for {project.name}")

    def read_project_configuration(self, project: Project) -> ProjectConfiguration:
        """
        Read the configuration document.

        Raises:
            ProjectConfigurationNotFoundError: If the project has no configuration
            ProjectConfigurationError: If the document is unreadable or invalid
        """
        _check_accessible(project)

        path = project.location / self.location
        if not path.exists():
            raise ProjectConfigurationNotFoundError(project.name)

        message = f"Project {project.name} contains an invalid project configuration file {self.location}."
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ProjectConfigurationError(message) from e

        connection: dict[str, Any] = data.get("connection", {})
        project_section: dict[str, Any] = data.get("project", {})
        try:
            properties = ProjectConfigurationProperties.from_values(
                project_path=project_section.get("path"),
                project_dir=connection.get("root_project_dir"),
                gradle_distribution=connection.get("gradle_distribution"),
            )
            return properties.to_project_configuration(project)
        except (AttributeError, ValueError) as e:
            raise ProjectConfigurationError(message) from e
