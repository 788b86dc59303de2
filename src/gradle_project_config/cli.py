"""CLI interface for gradle-project-config."""

import json
import sys
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console

from . import __version__
from .config import load_config
from .constants import JSON_OUTPUT_INDENT, PROJECT_CONFIGURATION_LOCATION
from .display import display_configuration, display_guidance, display_status
from .errors import ProjectConfigurationError, WorkspaceError, guidance_for
from .persistence import create_persistence
from .utils import is_valid_project_name, prompt_confirm, setup_logging
from .workspace import Project, Workspace

console = Console()


def _report_error(error: Exception) -> NoReturn:
    """Print an error with guidance and exit."""
    console.print(f"[red]Error:[/red] {error}")
    guidance = guidance_for(error)
    if guidance:
        display_guidance(guidance, console)
    sys.exit(1)


def _get_project(ctx: click.Context, name: str) -> Project:
    """Look up a project or exit with an error."""
    workspace: Workspace = ctx.obj["workspace"]
    project = workspace.get_project(name)
    if project is None:
        console.print(f"[red]Error:[/red] Project '{name}' not found in workspace.")
        sys.exit(1)
    return project


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Custom config file path",
)
@click.option(
    "--workspace",
    "workspace_dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Workspace metadata directory (overrides config)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config: Path | None, workspace_dir: Path | None, verbose: bool) -> None:
    """Manage Gradle project configuration and migrate legacy gradle.prefs files."""
    ctx.ensure_object(dict)

    try:
        ctx.obj["config"] = app_config = load_config(config)
    except (FileNotFoundError, ValueError, OSError, PermissionError) as e:
        console.print(f"[red]Error:[/red] Configuration: {e}")
        sys.exit(1)

    setup_logging("DEBUG" if verbose else app_config.logging.level)

    workspace = Workspace(workspace_dir or app_config.metadata_dir)
    ctx.call_on_close(workspace.close)
    ctx.obj["workspace"] = workspace
    ctx.obj["persistence"] = create_persistence(app_config)


@cli.command("add-project")
@click.argument("name")
@click.argument("location", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.pass_context
def add_project(ctx: click.Context, name: str, location: Path) -> None:
    """Add a project to the workspace."""
    if not is_valid_project_name(name):
        console.print(f"[red]Error:[/red] Invalid project name: '{name}'")
        sys.exit(1)

    workspace: Workspace = ctx.obj["workspace"]
    project = workspace.add_project(name, location)
    try:
        count = workspace.refresh(project)
    except WorkspaceError as e:
        _report_error(e)

    console.print(f"[green]✓[/green] Added project [cyan]{name}[/cyan] ({count} file(s))")


@cli.command()
@click.argument("names", nargs=-1)
@click.pass_context
def status(ctx: click.Context, names: tuple[str, ...]) -> None:
    """Show legacy and current configuration status of projects."""
    workspace: Workspace = ctx.obj["workspace"]
    legacy_location = ctx.obj["config"].legacy.location

    projects = [_get_project(ctx, name) for name in names] if names else workspace.list_projects()
    if not projects:
        console.print("No projects in workspace.")
        return

    rows = [
        (
            project,
            (project.location / legacy_location).exists(),
            (project.location / PROJECT_CONFIGURATION_LOCATION).exists(),
        )
        for project in projects
    ]
    display_status(rows, console)


@cli.command()
@click.argument("name")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def show(ctx: click.Context, name: str, as_json: bool) -> None:
    """Show the Gradle configuration of a project."""
    project = _get_project(ctx, name)

    try:
        configuration = ctx.obj["persistence"].read_project_configuration(project)
    except (ProjectConfigurationError, ValueError) as e:
        _report_error(e)

    if as_json:
        data = {"project": project.name, **configuration.model_dump(mode="json")}
        click.echo(json.dumps(data, indent=JSON_OUTPUT_INDENT))
    else:
        display_configuration(project, configuration, console)


@cli.command()
@click.argument("name")
@click.pass_context
def migrate(ctx: click.Context, name: str) -> None:
    """Rewrite a project's configuration in the current format."""
    project = _get_project(ctx, name)
    persistence = ctx.obj["persistence"]

    try:
        configuration = persistence.read_project_configuration(project)
        persistence.save_project_configuration(configuration, project)
    except (ProjectConfigurationError, ValueError) as e:
        _report_error(e)

    console.print(f"[green]✓[/green] Saved configuration of project [cyan]{name}[/cyan]")


@cli.command()
@click.argument("name")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete(ctx: click.Context, name: str, force: bool) -> None:
    """Delete the Gradle configuration of a project."""
    project = _get_project(ctx, name)

    if not force and not prompt_confirm(f"Delete Gradle configuration of project {name}?"):
        console.print("Cancelled.")
        return

    try:
        ctx.obj["persistence"].delete_project_configuration(project)
    except (ProjectConfigurationError, ValueError) as e:
        _report_error(e)

    console.print(f"[green]✓[/green] Deleted configuration of project [cyan]{name}[/cyan]")

    legacy_location = ctx.obj["config"].legacy.location
    if (project.location / legacy_location).exists():
        console.print(
            f"[yellow]Warning:[/yellow] {legacy_location} is still present and will be read until the next save."
        )


if __name__ == "__main__":
    cli()
