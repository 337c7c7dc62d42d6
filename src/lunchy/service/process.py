"""Synchronous execution of external commands.

Everything that shells out (launchctl, the editor) goes through a
CommandRunner so tests can substitute a fake.
"""

import logging
import subprocess
from collections.abc import Sequence
from typing import Protocol

from lunchy.service.base import CommandNotFoundError, CommandResult

logger = logging.getLogger(__name__)


class CommandRunner(Protocol):
    """Narrow interface for running external commands."""

    def run(self, command: str, args: Sequence[str]) -> CommandResult:
        """Run a command to completion, capturing its output."""
        ...

    def attach(self, command: str, args: Sequence[str]) -> int:
        """Run a command attached to the current terminal.

        Returns:
            The command's exit status.
        """
        ...


class SubprocessRunner:
    """CommandRunner backed by subprocess.run.

    Calls block until the command exits. No timeout is applied.
    """

    def run(self, command: str, args: Sequence[str]) -> CommandResult:
        argv = [command, *args]
        logger.debug("Running %s", " ".join(argv))
        try:
            result = subprocess.run(
                argv,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as e:
            raise CommandNotFoundError(f"{command}: command not found") from e
        logger.debug("%s exited with status %d", command, result.returncode)
        return CommandResult(
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )

    def attach(self, command: str, args: Sequence[str]) -> int:
        argv = [command, *args]
        logger.debug("Launching %s", " ".join(argv))
        try:
            result = subprocess.run(argv)
        except FileNotFoundError as e:
            raise CommandNotFoundError(f"{command}: command not found") from e
        return result.returncode
