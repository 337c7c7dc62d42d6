"""CLI command modules."""

from lunchy.cli.commands import agents, lifecycle

__all__ = [
    "agents",
    "lifecycle",
]
