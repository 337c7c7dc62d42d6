"""Verb routing for the lunchy command line.

Every verb maps to one Route. The route's kind decides how the optional
command line argument is validated before the handler runs:

- ZERO_ARG: the argument is optional and passed through as-is
- PROFILE_OR_PATTERN: the argument is a fragment; without one, the
  fragments come from the working directory's profile
- REQUIRED_ARG: the argument is mandatory
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType

import typer

from lunchy.cli.commands import agents, lifecycle
from lunchy.cli.console import dim, error
from lunchy.config import ConfigError
from lunchy.service import ServiceError, ServiceManager, load_profile

logger = logging.getLogger(__name__)


class HandlerKind(Enum):
    """Argument policy of a verb."""

    ZERO_ARG = "zero_arg"
    PROFILE_OR_PATTERN = "profile_or_pattern"
    REQUIRED_ARG = "required_arg"


@dataclass(frozen=True, slots=True)
class Route:
    """A verb's handler and argument policy."""

    kind: HandlerKind
    handler: Callable[..., None]
    help: str
    metavar: str = "NAME"
    missing_message: str = "name required"
    hidden: bool = False


class UsageError(Exception):
    """The command line is missing something a verb requires."""


_list = Route(HandlerKind.ZERO_ARG, agents.print_list, "List installed agents.")
_status = Route(
    HandlerKind.ZERO_ARG,
    agents.print_status,
    "Show loaded agents, optionally filtered by name.",
    metavar="[PATTERN]",
)
_install = Route(
    HandlerKind.REQUIRED_ARG,
    agents.install_plist,
    "Copy a plist into the launch agents directory.",
    metavar="PATH",
    missing_message="path required",
)
_remove = Route(
    HandlerKind.REQUIRED_ARG,
    agents.remove_plist,
    "Delete every matching plist.",
)

ROUTES: MappingProxyType[str, Route] = MappingProxyType(
    {
        "start": Route(
            HandlerKind.PROFILE_OR_PATTERN,
            lifecycle.start_agents,
            "Load matching agents, or the agents in ./.lunchy.",
            metavar="[NAME]",
        ),
        "stop": Route(
            HandlerKind.PROFILE_OR_PATTERN,
            lifecycle.stop_agents,
            "Unload matching agents, or the agents in ./.lunchy.",
            metavar="[NAME]",
        ),
        "restart": Route(
            HandlerKind.PROFILE_OR_PATTERN,
            lifecycle.restart_agents,
            "Reload matching agents, or the agents in ./.lunchy.",
            metavar="[NAME]",
        ),
        "list": _list,
        "ls": Route(_list.kind, _list.handler, _list.help, hidden=True),
        "status": _status,
        "ps": Route(
            _status.kind, _status.handler, _status.help, _status.metavar, hidden=True
        ),
        "install": _install,
        "add": Route(
            _install.kind,
            _install.handler,
            _install.help,
            _install.metavar,
            _install.missing_message,
            hidden=True,
        ),
        "show": Route(
            HandlerKind.REQUIRED_ARG,
            agents.show_plist,
            "Print the first matching plist.",
        ),
        "edit": Route(
            HandlerKind.REQUIRED_ARG,
            agents.edit_plist,
            "Open the first matching plist in $EDITOR.",
        ),
        "remove": _remove,
        "rm": Route(_remove.kind, _remove.handler, _remove.help, hidden=True),
        "scan": Route(
            HandlerKind.ZERO_ARG,
            agents.scan_path,
            'List plists under a directory ("homebrew" for the cellar).',
            metavar="[PATH]",
        ),
        "help": Route(HandlerKind.ZERO_ARG, agents.show_usage, "Show usage."),
    }
)


def resolve_fragments(manager: ServiceManager, arg: str | None) -> list[str]:
    """Fragments for a batch verb: the argument, else the profile.

    Raises:
        UsageError: If the argument is empty, or absent with no profile.
        ProfileError: If the profile exists but cannot be read.
    """
    if arg is not None:
        if not arg:
            raise UsageError("name required")
        return [arg]

    cwd = Path.cwd()
    profile = load_profile(cwd, manager.config.profile_name)
    if profile is None:
        raise UsageError("name required")

    dim(f"Using daemons in profile: {profile.path}")
    return profile.fragments


def dispatch(manager: ServiceManager, verb: str, arg: str | None = None) -> None:
    """Run a verb's handler, turning fatal errors into exit status 1."""
    route = ROUTES[verb]
    logger.debug("Dispatching %s (%s)", verb, route.kind.value)

    try:
        match route.kind:
            case HandlerKind.ZERO_ARG:
                route.handler(manager, arg)
            case HandlerKind.PROFILE_OR_PATTERN:
                route.handler(manager, resolve_fragments(manager, arg))
            case HandlerKind.REQUIRED_ARG:
                if not arg:
                    raise UsageError(route.missing_message)
                route.handler(manager, arg)
    except (UsageError, ServiceError, ConfigError) as e:
        error(str(e))
        raise typer.Exit(1) from None
