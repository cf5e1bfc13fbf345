"""Main CLI implementation using Typer."""

from pathlib import Path
from typing import Optional, Callable, Any

import typer
from rich.console import Console
from rich.markup import escape

from dockrun.cli.commands import (
    list_runs,
    show_run,
    run_container,
    expand_text,
)
from dockrun.config import ConfigManager
from dockrun.errors import DockrunError
from dockrun.utils.logging import setup_logging


# Create Typer app
app = typer.Typer(
    name="dockrun",
    help="Run docker containers from declarative YAML specs",
    add_completion=False,
)

# Errors go to stderr so stdout only carries command output
console = Console(stderr=True)


def _run_cli_command(
    handler: Callable[..., Any],
    config: Optional[Path],
    log_level: Optional[str],
    **kwargs: Any,
):
    """Helper to run a CLI command with a loaded config and error handling."""
    if log_level:
        setup_logging(log_level)
    try:
        manager = ConfigManager(config_path=config)
        manager.load()
        if not log_level:
            setup_logging(manager.config.settings.log_level)
        return handler(manager, **kwargs)
    except DockrunError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e


ConfigOption = typer.Option(
    None, "--config", "-c", help="Path to the YAML config (default: $DOCKRUN_CONFIG or ./dockrun.yaml)"
)
LogLevelOption = typer.Option(
    None, "--log-level", "-l", help="Override the configured log level"
)


@app.command("list")
def list_command(
    config: Optional[Path] = ConfigOption,
    log_level: Optional[str] = LogLevelOption,
):
    """List configured runs."""
    _run_cli_command(list_runs, config=config, log_level=log_level)


@app.command("show")
def show_command(
    name: str = typer.Argument(..., help="Run name"),
    config: Optional[Path] = ConfigOption,
    log_level: Optional[str] = LogLevelOption,
):
    """Print the docker command a run would execute."""
    _run_cli_command(show_run, config=config, log_level=log_level, name=name)


@app.command("run")
def run_command(
    name: str = typer.Argument(..., help="Run name"),
    config: Optional[Path] = ConfigOption,
    log_level: Optional[str] = LogLevelOption,
):
    """Run a configured container."""
    returncode = _run_cli_command(
        run_container, config=config, log_level=log_level, name=name
    )
    if returncode:
        raise typer.Exit(returncode)


@app.command("expand")
def expand_command(
    text: str = typer.Argument(..., help="String to interpolate"),
    log_level: Optional[str] = LogLevelOption,
):
    """Interpolate variables and command substitutions in a string."""
    if log_level:
        setup_logging(log_level)
    try:
        expand_text(text)
    except DockrunError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e


def main():
    """Main entry point for CLI."""
    app()
