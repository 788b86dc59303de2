"""Project configuration persistence."""

from ..config import Config
from .base import ProjectConfigurationPersistence
from .default import DefaultProjectConfigurationPersistence
from .legacy import LegacyCleaningProjectConfigurationPersistence


def create_persistence(config: Config) -> ProjectConfigurationPersistence:
    """
    Create the project configuration persistence used by the application.

    Args:
        config: Application configuration

    Returns:
        The default store, wrapped by the legacy cleaning persistence unless disabled
    """
    persistence: ProjectConfigurationPersistence = DefaultProjectConfigurationPersistence()
    if config.legacy.enabled:
        persistence = LegacyCleaningProjectConfigurationPersistence(
            persistence,
            legacy_location=config.legacy.location,
            legacy_node_name=config.legacy.node_name,
        )
    return persistence


__all__ = [
    "DefaultProjectConfigurationPersistence",
    "LegacyCleaningProjectConfigurationPersistence",
    "ProjectConfigurationPersistence",
    "create_persistence",
]
