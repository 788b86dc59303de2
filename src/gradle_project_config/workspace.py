"""Workspace model: projects, managed files and project preferences."""

import logging
from pathlib import Path
from typing import Any

from tinydb import Query, TinyDB

from .constants import (
    DB_TABLE_PREFERENCES,
    DB_TABLE_PROJECTS,
    DB_TABLE_RESOURCES,
    REFRESH_IGNORED_DIRS,
    WORKSPACE_DB_FILE_NAME,
)
from .errors import BackingStoreError, ResourceError, WorkspaceError
from .utils import ensure_dir

logger = logging.getLogger(__name__)


class Workspace:
    """Registry of projects and their managed resources, stored with TinyDB."""

    def __init__(self, metadata_dir: Path):
        """
        Initialize workspace.

        Args:
            metadata_dir: Directory holding the workspace database
        """
        self.metadata_dir = metadata_dir
        ensure_dir(metadata_dir)

        self.db = TinyDB(metadata_dir / WORKSPACE_DB_FILE_NAME)
        self.projects = self.db.table(DB_TABLE_PROJECTS)
        self.resources = self.db.table(DB_TABLE_RESOURCES)
        self.preferences = self.db.table(DB_TABLE_PREFERENCES)

    def add_project(self, name: str, location: Path) -> "Project":
        """
        Add or update a project in the workspace.

        Args:
            name: Unique project name
            location: Project root directory

        Returns:
            The registered, open project
        """
        location = location.resolve()
        ProjectQuery = Query()
        self.projects.upsert(
            {"name": name, "location": str(location), "open": True},
            ProjectQuery.name == name,
        )
        logger.debug(f"Registered project {name} at {location}")
        return Project(self, name, location, is_open=True)

    def get_project(self, name: str) -> "Project | None":
        """Get project by name."""
        ProjectQuery = Query()
        doc = self.projects.get(ProjectQuery.name == name)
        if not doc or isinstance(doc, list):
            return None
        return Project(self, doc["name"], Path(doc["location"]), is_open=doc.get("open", True))

    def list_projects(self) -> list["Project"]:
        """List all projects in the workspace."""
        return [
            Project(self, doc["name"], Path(doc["location"]), is_open=doc.get("open", True))
            for doc in self.projects.all()
        ]

    def remove_project(self, name: str) -> None:
        """Remove a project and its resource and preference records."""
        self.projects.remove(Query().name == name)
        self.resources.remove(Query().project == name)
        self.preferences.remove(Query().project == name)

    def refresh(self, project: "Project") -> int:
        """
        Synchronize the resource tree of a project with the filesystem.

        Args:
            project: Project to refresh

        Returns:
            Number of files registered as managed resources
        """
        if not project.is_accessible():
            raise WorkspaceError(f"Project {project.name} is not accessible")

        Resource = Query()
        self.resources.remove(Resource.project == project.name)

        paths = []
        for path in sorted(project.location.rglob("*")):
            relative = path.relative_to(project.location)
            if any(part in REFRESH_IGNORED_DIRS for part in relative.parts):
                continue
            if path.is_file():
                paths.append(relative.as_posix())

        self.resources.insert_multiple({"project": project.name, "path": p} for p in paths)
        logger.debug(f"Refreshed project {project.name}: {len(paths)} resource(s)")
        return len(paths)

    def close(self) -> None:
        """Close the workspace database."""
        self.db.close()


class Project:
    """A project in the workspace."""

    def __init__(self, workspace: Workspace, name: str, location: Path, is_open: bool = True):
        self.workspace = workspace
        self.name = name
        self.location = location
        self.is_open = is_open

    def __repr__(self) -> str:
        return f"Project(name={self.name!r}, location={str(self.location)!r})"

    def exists(self) -> bool:
        """Whether the project is registered in the workspace."""
        return self.workspace.get_project(self.name) is not None

    def is_accessible(self) -> bool:
        """Whether the project exists, is open and its location is a directory."""
        return self.is_open and self.exists() and self.location.is_dir()

    def open(self) -> None:
        """Open the project."""
        self._set_open(True)

    def close(self) -> None:
        """Close the project."""
        self._set_open(False)

    def _set_open(self, value: bool) -> None:
        self.workspace.projects.update({"open": value}, Query().name == self.name)
        self.is_open = value

    def get_file(self, relative_path: str) -> "ManagedFile":
        """Get a handle to a file in the project; the file does not have to exist."""
        return ManagedFile(self, relative_path)

    def preferences(self) -> "ProjectPreferences":
        """Get the preference store scoped to this project."""
        return ProjectPreferences(self)


class ManagedFile:
    """Handle to a file tracked in the workspace resource tree."""

    def __init__(self, project: Project, relative_path: str):
        self.project = project
        self.relative_path = Path(relative_path).as_posix()

    def __repr__(self) -> str:
        return f"ManagedFile(project={self.project.name!r}, path={self.relative_path!r})"

    @property
    def location(self) -> Path:
        """Absolute filesystem location of the file."""
        return self.project.location / self.relative_path

    def _query(self) -> Any:
        Resource = Query()
        return (Resource.project == self.project.name) & (Resource.path == self.relative_path)

    def exists(self) -> bool:
        """
        Whether the file is part of the workspace resource tree.

        Raises:
            ResourceError: If the resource tree cannot be read
        """
        try:
            return self.project.workspace.resources.contains(self._query())
        except (OSError, ValueError) as e:
            raise ResourceError(f"Could not read resource tree for {self.location}: {e}") from e

    def create(self, content: bytes) -> None:
        """
        Write the file to disk and add it to the resource tree.

        Raises:
            ResourceError: If the file cannot be written
        """
        try:
            ensure_dir(self.location.parent)
            self.location.write_bytes(content)
        except OSError as e:
            raise ResourceError(f"Could not write {self.location}: {e}") from e

        try:
            self.project.workspace.resources.upsert(
                {"project": self.project.name, "path": self.relative_path}, self._query()
            )
        except (OSError, ValueError) as e:
            raise ResourceError(f"Could not register {self.location}: {e}") from e

    def delete(self) -> None:
        """
        Delete the file from disk and remove it from the resource tree.

        Raises:
            ResourceError: If the file cannot be deleted
        """
        try:
            self.location.unlink(missing_ok=True)
        except OSError as e:
            raise ResourceError(f"Could not delete {self.location}: {e}") from e

        try:
            self.project.workspace.resources.remove(self._query())
        except (OSError, ValueError) as e:
            raise ResourceError(f"Could not unregister {self.location}: {e}") from e


class ProjectPreferences:
    """Hierarchical preference nodes scoped to a single project."""

    def __init__(self, project: Project):
        self.project = project

    def _query(self, name: str) -> Any:
        Preference = Query()
        return (Preference.project == self.project.name) & (Preference.node == name)

    def get_node(self, name: str) -> "PreferenceNode | None":
        """
        Get an existing preference node.

        Args:
            name: Node name

        Returns:
            PreferenceNode if stored, None otherwise

        Raises:
            BackingStoreError: If the backing store cannot be read
        """
        try:
            doc = self.project.workspace.preferences.get(self._query(name))
        except (OSError, ValueError) as e:
            raise BackingStoreError(f"Could not read preference node {name}: {e}") from e

        if not doc or isinstance(doc, list):
            return None
        return PreferenceNode(self, name, dict(doc.get("values", {})))

    def node(self, name: str) -> "PreferenceNode":
        """Get a preference node, creating an empty one if it doesn't exist."""
        return self.get_node(name) or PreferenceNode(self, name, {})

    def node_names(self) -> list[str]:
        """List the names of all stored nodes of the project."""
        Preference = Query()
        docs = self.project.workspace.preferences.search(Preference.project == self.project.name)
        return sorted(doc["node"] for doc in docs)


class PreferenceNode:
    """A named key/value preference node; changes are persisted by flush()."""

    def __init__(self, scope: ProjectPreferences, name: str, values: dict[str, str]):
        self.scope = scope
        self.name = name
        self._values = values
        self._removed = False

    def _check_not_removed(self) -> None:
        if self._removed:
            raise BackingStoreError(f"Preference node {self.name} has been removed")

    def get(self, key: str, default: str | None = None) -> str | None:
        """Get a preference value."""
        self._check_not_removed()
        return self._values.get(key, default)

    def put(self, key: str, value: str) -> None:
        """Set a preference value; call flush() to persist it."""
        self._check_not_removed()
        self._values[key] = value

    def keys(self) -> list[str]:
        """List the keys of the node."""
        self._check_not_removed()
        return sorted(self._values)

    def flush(self) -> None:
        """
        Persist the node to the backing store.

        Raises:
            BackingStoreError: If the node cannot be written
        """
        self._check_not_removed()
        try:
            self.scope.project.workspace.preferences.upsert(
                {"project": self.scope.project.name, "node": self.name, "values": self._values},
                self.scope._query(self.name),
            )
        except (OSError, ValueError) as e:
            raise BackingStoreError(f"Could not write preference node {self.name}: {e}") from e

    def remove_node(self) -> None:
        """
        Remove the node from the backing store.

        Raises:
            BackingStoreError: If the node cannot be removed
        """
        self._check_not_removed()
        try:
            self.scope.project.workspace.preferences.remove(self.scope._query(self.name))
        except (OSError, ValueError) as e:
            raise BackingStoreError(f"Could not remove preference node {self.name}: {e}") from e
        self._removed = True
