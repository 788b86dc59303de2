"""Shared helpers for persistence and CLI tests."""

import json
from pathlib import Path

from gradle_project_config.model import ProjectConfiguration
from gradle_project_config.persistence import ProjectConfigurationPersistence
from gradle_project_config.workspace import Project

LEGACY_DOCUMENT = {
    "1.0": {
        "project_path": "p",
        "connection_project_dir": "/abs/dir",
        "connection_gradle_distribution": "GRADLE_DISTRIBUTION(WRAPPER)",
    }
}


class RecordingPersistence(ProjectConfigurationPersistence):
    """Persistence double that records every call."""

    def __init__(self, configuration: ProjectConfiguration | None = None):
        self.configuration = configuration
        self.saved: list[tuple[ProjectConfiguration, Project]] = []
        self.deleted: list[Project] = []
        self.read_count = 0

    def save_project_configuration(self, configuration: ProjectConfiguration, project: Project) -> None:
        self.saved.append((configuration, project))

    def delete_project_configuration(self, project: Project) -> None:
        self.deleted.append(project)

    def read_project_configuration(self, project: Project) -> ProjectConfiguration:
        self.read_count += 1
        assert self.configuration is not None
        return self.configuration


def _write_legacy_prefs(project_dir: Path, content: dict | str = LEGACY_DOCUMENT) -> Path:
    """Write a legacy .settings/gradle.prefs file and return its path."""
    prefs = project_dir / ".settings" / "gradle.prefs"
    prefs.parent.mkdir(parents=True, exist_ok=True)
    text = content if isinstance(content, str) else json.dumps(content)
    prefs.write_text(text, encoding="utf-8")
    return prefs


def _write_config(config_path: Path, metadata_dir: Path, legacy_enabled: bool = True) -> None:
    config_path.write_text(
        "\n".join(
            [
                "[workspace]",
                f'metadata_dir = "{metadata_dir}"',
                "",
                "[legacy]",
                f"enabled = {'true' if legacy_enabled else 'false'}",
            ]
        ),
        encoding="utf-8",
    )
