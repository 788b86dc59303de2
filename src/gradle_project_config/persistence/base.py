"""Base class for project configuration persistence."""

from abc import ABC, abstractmethod

from ..model import ProjectConfiguration
from ..workspace import Project


class ProjectConfigurationPersistence(ABC):
    """Reads, writes and deletes the Gradle configuration of workspace projects."""

    @abstractmethod
    def save_project_configuration(self, configuration: ProjectConfiguration, project: Project) -> None:
        """
        Persist the configuration of a project.

        Args:
            configuration: Configuration to store
            project: Accessible workspace project
        """
        pass

    @abstractmethod
    def delete_project_configuration(self, project: Project) -> None:
        """
        Delete the stored configuration of a project.

        Args:
            project: Accessible workspace project
        """
        pass

    @abstractmethod
    def read_project_configuration(self, project: Project) -> ProjectConfiguration:
        """
        Read the stored configuration of a project.

        Args:
            project: Accessible workspace project

        Returns:
            The project configuration
        """
        pass
