"""Catalog, inspection and install commands."""

from pathlib import Path

import typer

from lunchy.cli.console import dim, error, print_usage, success
from lunchy.service import ServiceManager


def print_list(manager: ServiceManager, _: str | None = None) -> None:
    """Print the names of all installed agents."""
    for name in manager.list_agents():
        typer.echo(name)


def print_status(manager: ServiceManager, pattern: str | None = None) -> None:
    """Print loaded jobs for installed agents, optionally filtered."""
    for row in manager.status(pattern):
        typer.echo(row)


def scan_path(manager: ServiceManager, root: str | None = None) -> None:
    """Print the names of all plists under a directory."""
    for name in manager.scan(root):
        typer.echo(name)


def show_usage(manager: ServiceManager, _: str | None = None) -> None:
    """Print the version banner and verb summary."""
    print_usage()


def show_plist(manager: ServiceManager, fragment: str) -> None:
    """Print the raw contents of the first matching plist."""
    typer.echo(manager.show(fragment), nl=False)


def edit_plist(manager: ServiceManager, fragment: str) -> None:
    """Open the first matching plist in $EDITOR."""
    path = manager.edit(fragment)
    dim(f"edited {path}")


def install_plist(manager: ServiceManager, source: str) -> None:
    """Copy a plist into the agents directory."""
    manager.install(Path(source).expanduser())
    success(f"{source} installed to {manager.config.agents_path}")


def remove_plist(manager: ServiceManager, fragment: str) -> None:
    """Delete every matching plist, reporting each one."""
    for outcome in manager.remove(fragment):
        if outcome.ok:
            success(outcome.message)
        else:
            error(f"{outcome.message}: {outcome.error}")
