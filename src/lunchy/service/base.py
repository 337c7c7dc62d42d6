"""Core types and errors for launch agent management."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ServiceError(Exception):
    """Error that aborts a lunchy command."""


class NotFoundError(ServiceError):
    """No installed agent matches a name fragment."""


class ProfileError(ServiceError):
    """A profile file exists but could not be read."""


class CommandError(ServiceError):
    """An external command could not be run or failed."""


class CommandNotFoundError(CommandError):
    """The external command is not installed."""


class InstallError(ServiceError):
    """Error while installing a plist."""


class EditorError(ServiceError):
    """The editor could not be launched or exited with an error."""


class Action(Enum):
    """Lifecycle action applied to an agent."""

    START = "start"
    STOP = "stop"
    RESTART = "restart"


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured result of an external command."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def error_text(self) -> str:
        """Best description of why the command failed."""
        text = self.stderr.strip() or self.stdout.strip()
        return text or f"exit status {self.returncode}"


@dataclass(frozen=True, slots=True)
class ActionOutcome:
    """Result of applying one lifecycle action to one agent."""

    name: str
    action: Action
    ok: bool
    message: str


@dataclass(frozen=True, slots=True)
class RemoveOutcome:
    """Result of removing one agent's plist."""

    path: Path
    ok: bool
    error: str | None = None

    @property
    def message(self) -> str:
        if self.ok:
            return f"removed {self.path}"
        return f"failed to remove {self.path}"


@dataclass(frozen=True, slots=True)
class Profile:
    """Fragments read from a profile dotfile."""

    path: Path
    fragments: list[str]
