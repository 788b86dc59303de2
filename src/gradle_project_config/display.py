"""Display functions for gradle-project-config CLI output."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .errors import ErrorGuidance
from .model import ProjectConfiguration
from .workspace import Project


def display_configuration(project: Project, configuration: ProjectConfiguration, console: Console) -> None:
    """
    Display a project configuration in a table.

    Args:
        project: Project the configuration belongs to
        configuration: Configuration to display
        console: Rich console instance for output
    """
    table = Table(title=f"Gradle configuration: {project.name}", show_header=False)
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Project directory", str(configuration.project_dir))
    table.add_row("Root project directory", str(configuration.root_project_dir))
    table.add_row("Project path", configuration.project_path)
    table.add_row("Distribution", configuration.gradle_distribution.type.value)
    if configuration.gradle_distribution.configuration:
        table.add_row("Distribution value", configuration.gradle_distribution.configuration)

    console.print(table)


def display_status(
    projects: list[tuple[Project, bool, bool]],
    console: Console,
) -> None:
    """
    Display legacy/current configuration status of projects.

    Args:
        projects: List of tuples (project, has_legacy, has_current)
        console: Rich console instance for output
    """
    table = Table(title="Project Configuration Status")
    table.add_column("Project", style="cyan", no_wrap=True)
    table.add_column("Location", overflow="fold")
    table.add_column("Open", no_wrap=True)
    table.add_column("Legacy gradle.prefs", no_wrap=True)
    table.add_column("Configuration", no_wrap=True)

    for project, has_legacy, has_current in projects:
        table.add_row(
            project.name,
            str(project.location),
            "yes" if project.is_open else "no",
            "[yellow]present[/yellow]" if has_legacy else "-",
            "[green]present[/green]" if has_current else "-",
        )

    console.print(table)


def display_guidance(guidance: ErrorGuidance, console: Console) -> None:
    """
    Display error guidance in a panel.

    Args:
        guidance: Guidance to display
        console: Rich console instance for output
    """
    lines = ["[bold]Check:[/bold]"]
    lines.extend(f"  • {check}" for check in guidance.checks)
    lines.append("[bold]Fix:[/bold]")
    lines.extend(f"  • {fix}" for fix in guidance.fixes)

    console.print(Panel("\n".join(lines), title=guidance.title, border_style="yellow"))
