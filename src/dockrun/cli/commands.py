"""Command implementations for CLI."""

import logging

import typer
from rich.console import Console
from rich.table import Table

from dockrun.builder import build_and_run, render_command
from dockrun.config import ConfigManager
from dockrun.utils.interpolate import shell_interpolate
from dockrun.utils.process import get_cli_path


logger = logging.getLogger(__name__)

console = Console()


def list_runs(manager: ConfigManager):
    """List configured runs with formatted output."""
    runs = manager.runs
    if not runs:
        console.print("[yellow]No runs configured[/yellow]")
        return

    table = Table(title="Runs")
    table.add_column("Name", style="cyan")
    table.add_column("Image", style="magenta")
    table.add_column("Help", style="dim", max_width=60)

    for name, spec in sorted(runs.items()):
        table.add_row(name, spec.image, spec.help or "")

    console.print(table)


def show_run(manager: ConfigManager, name: str):
    """Print the interpolated docker command for a run without executing it."""
    spec = manager.get_run_spec(name)
    if spec.help:
        console.print(f"[dim]# {spec.help}[/dim]", highlight=False)
    typer.echo(render_command(spec, manager.config.settings.docker_binary))


def run_container(manager: ConfigManager, name: str) -> int:
    """Build and run a configured container, returning its exit status."""
    spec = manager.get_run_spec(name)
    docker_cmd = get_cli_path(manager.config.settings.docker_binary)
    result = build_and_run(spec, docker_cmd)
    if result.returncode != 0:
        logger.warning(f"Run {name} exited with status {result.returncode}")
    return result.returncode


def expand_text(text: str, quiet: bool = False) -> str:
    """Interpolate a single string and print it."""
    expanded = shell_interpolate(text)
    if not quiet:
        typer.echo(expanded)
    return expanded
