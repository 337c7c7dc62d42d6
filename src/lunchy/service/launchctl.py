"""Lifecycle actions through launchctl."""

import logging

from lunchy.config.models import LunchyConfig
from lunchy.service.base import Action, ActionOutcome, CommandError, CommandResult
from lunchy.service.process import CommandRunner

logger = logging.getLogger(__name__)


class LaunchctlDispatcher:
    """Applies start/stop/restart to launch agents via launchctl.

    Each call reports an ActionOutcome instead of raising, so callers can
    keep going through a batch when one agent fails.

    Example:
        dispatcher = LaunchctlDispatcher(config, SubprocessRunner())
        outcome = dispatcher.apply("homebrew.mxcl.redis", Action.START)
    """

    def __init__(self, config: LunchyConfig, runner: CommandRunner):
        self._config = config
        self._runner = runner

    def _run_launchctl(self, *args: str) -> CommandResult:
        return self._runner.run(self._config.launchctl, args)

    def _control(self, verb: str, name: str, action: Action) -> ActionOutcome:
        """Run ``launchctl <verb> <plist>`` for one agent."""
        path = self._config.plist_path(name)
        try:
            result = self._run_launchctl(verb, str(path))
        except CommandError as e:
            return ActionOutcome(name, action, False, f"failed to {verb} {name}: {e}")

        if not result.ok:
            return ActionOutcome(
                name,
                action,
                False,
                f"failed to {verb} {name}: {result.error_text}",
            )
        return ActionOutcome(name, action, True, f"{verb} {name}")

    def start(self, name: str) -> ActionOutcome:
        """Load the agent."""
        return self._control("load", name, Action.START)

    def stop(self, name: str) -> ActionOutcome:
        """Unload the agent."""
        return self._control("unload", name, Action.STOP)

    def restart(self, name: str) -> ActionOutcome:
        """Unload then load the agent.

        Not atomic. An unload failure is ignored because an agent that
        was never loaded has nothing to unload; the load result is the
        restart result. Only restart ignores stop errors.
        """
        stopped = self.stop(name)
        if not stopped.ok:
            logger.debug("Ignoring stop failure during restart: %s", stopped.message)

        started = self._control("load", name, Action.RESTART)
        if started.ok:
            return ActionOutcome(name, Action.RESTART, True, f"reload {name}")
        return started

    def apply(self, name: str, action: Action) -> ActionOutcome:
        """Apply a lifecycle action to one agent."""
        handlers = {
            Action.START: self.start,
            Action.STOP: self.stop,
            Action.RESTART: self.restart,
        }
        return handlers[action](name)
