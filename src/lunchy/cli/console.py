"""Shared console utilities for CLI commands."""

import typer
from rich.console import Console
from rich.markup import escape

from lunchy import __version__

# Shared console instance for all CLI commands
console = Console(soft_wrap=True)

USAGE = (
    "Usage: lunchy [start|stop|restart|list|status|install|show|edit|remove|scan]"
    " [options]"
)


def error(msg: str) -> None:
    """Print an error message to stderr."""
    typer.echo(msg, err=True)


def success(msg: str) -> None:
    """Print a success message in green."""
    console.print(f"[green]{escape(msg)}[/green]")


def dim(msg: str) -> None:
    """Print a dimmed message."""
    console.print(f"[dim]{escape(msg)}[/dim]")


def print_usage() -> None:
    """Print the version banner and verb summary."""
    typer.echo(f"Lunchy {__version__}, the friendly launchctl wrapper")
    typer.echo(USAGE)
