"""Launch agent management for Lunchy.

Discovers installed agent plists, resolves name fragments and profiles
against them, and loads or unloads them through launchctl.

Example:
    from lunchy.config import load_config
    from lunchy.service import Action, ServiceManager

    manager = ServiceManager(load_config())
    outcomes = manager.run_batch(["redis"], Action.START)
"""

from lunchy.service.base import (
    Action,
    ActionOutcome,
    CommandError,
    CommandNotFoundError,
    CommandResult,
    EditorError,
    InstallError,
    NotFoundError,
    Profile,
    ProfileError,
    RemoveOutcome,
    ServiceError,
)
from lunchy.service.catalog import list_descriptors
from lunchy.service.launchctl import LaunchctlDispatcher
from lunchy.service.manager import ServiceManager
from lunchy.service.process import CommandRunner, SubprocessRunner
from lunchy.service.profile import load_profile, parse_profile
from lunchy.service.resolver import all_matches, first_match

__all__ = [
    "Action",
    "ActionOutcome",
    "CommandError",
    "CommandNotFoundError",
    "CommandResult",
    "CommandRunner",
    "EditorError",
    "InstallError",
    "LaunchctlDispatcher",
    "NotFoundError",
    "Profile",
    "ProfileError",
    "RemoveOutcome",
    "ServiceError",
    "ServiceManager",
    "SubprocessRunner",
    "all_matches",
    "first_match",
    "list_descriptors",
    "load_profile",
    "parse_profile",
]
