"""Exceptions and actionable guidance for project configuration failures."""

from dataclasses import dataclass


class ProjectConfigurationError(RuntimeError):
    """Base error for project configuration persistence failures."""


class MalformedLegacyConfigurationError(ProjectConfigurationError):
    """Raised when a legacy gradle.prefs file cannot be parsed."""

    def __init__(self, project_name: str):
        self.project_name = project_name
        super().__init__(
            f"Project {project_name} contains a malformed gradle.prefs file. Please re-run the import wizard."
        )


class LegacyCleanupError(ProjectConfigurationError):
    """Raised when the legacy configuration artifacts cannot be removed."""

    def __init__(self, project_name: str):
        self.project_name = project_name
        super().__init__(f"Cannot clean up legacy project configuration for project {project_name}.")


class ProjectConfigurationNotFoundError(ProjectConfigurationError):
    """Raised when a project has no stored configuration."""

    def __init__(self, project_name: str):
        self.project_name = project_name
        super().__init__(f"Project {project_name} has no Gradle project configuration.")


class WorkspaceError(Exception):
    """Base error for workspace (host environment) failures."""


class BackingStoreError(WorkspaceError):
    """Raised when the preference backing store cannot be read or written."""


class ResourceError(WorkspaceError):
    """Raised when a managed workspace resource cannot be modified."""


@dataclass
class ErrorGuidance:
    """Structured error guidance with checks and suggestions."""

    title: str
    checks: list[str]  # Things to check
    fixes: list[str]  # How to fix


def guidance_for(error: Exception) -> ErrorGuidance | None:
    """
    Get guidance for a project configuration error.

    Args:
        error: Error raised by a persistence operation

    Returns:
        ErrorGuidance for known errors, None otherwise
    """
    if isinstance(error, MalformedLegacyConfigurationError):
        return ErrorGuidance(
            title="Legacy gradle.prefs file is malformed",
            checks=[
                "The file is valid UTF-8 JSON",
                'The document has a top-level "1.0" object',
                "project_path, connection_project_dir and connection_gradle_distribution are set",
            ],
            fixes=["Re-run the import wizard for the project to regenerate its configuration"],
        )

    if isinstance(error, LegacyCleanupError):
        return ErrorGuidance(
            title="Legacy configuration could not be removed",
            checks=[
                "You have write permission on the project's .settings directory",
                "No other process holds .settings/gradle.prefs open",
            ],
            fixes=[
                "Fix the permissions and save the configuration again",
                "The legacy file is kept and cleanup is retried on the next save",
            ],
        )

    if isinstance(error, ProjectConfigurationNotFoundError):
        return ErrorGuidance(
            title="Project has no Gradle configuration",
            checks=["The project was imported as a Gradle project"],
            fixes=["Import the project first"],
        )

    return None
