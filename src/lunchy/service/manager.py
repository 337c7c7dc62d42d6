"""High-level launch agent management interface."""

import logging
import shlex
import shutil
from collections.abc import Callable, Iterable
from pathlib import Path

from lunchy.config.models import ConfigError, LunchyConfig
from lunchy.service.base import (
    Action,
    ActionOutcome,
    CommandError,
    EditorError,
    InstallError,
    NotFoundError,
    RemoveOutcome,
    ServiceError,
)
from lunchy.service.catalog import list_descriptors
from lunchy.service.launchctl import LaunchctlDispatcher
from lunchy.service.process import CommandRunner, SubprocessRunner
from lunchy.service.resolver import all_matches, first_match

logger = logging.getLogger(__name__)

HOMEBREW_ALIAS = "homebrew"

OutcomeCallback = Callable[[ActionOutcome], None]


class ServiceManager:
    """High-level launch agent management interface.

    Every operation rediscovers the catalog; nothing is cached between
    calls.

    Example:
        manager = ServiceManager(load_config())
        manager.run_batch(["redis"], Action.RESTART, on_outcome=print)
        print(manager.show("redis"))
    """

    def __init__(
        self,
        config: LunchyConfig,
        runner: CommandRunner | None = None,
    ):
        """Initialize the service manager.

        Args:
            config: Lunchy configuration.
            runner: Command runner, or None for real subprocesses.
        """
        self.config = config
        self._runner = runner or SubprocessRunner()
        self._dispatcher = LaunchctlDispatcher(config, self._runner)

    def catalog(self) -> list[str]:
        """Names of all installed agents."""
        return list_descriptors(self.config.agents_path)

    def list_agents(self) -> list[str]:
        return self.catalog()

    def scan(self, root: str | None = None) -> list[str]:
        """Names of all plists under an arbitrary root.

        Args:
            root: Directory to scan. None scans the agents directory and
                "homebrew" scans the Homebrew cellar.
        """
        if root is None:
            path = self.config.agents_path
        elif root == HOMEBREW_ALIAS:
            path = self.config.homebrew_cellar
        else:
            path = Path(root).expanduser()
        return list_descriptors(path)

    def status(self, pattern: str | None = None) -> list[str]:
        """Loaded jobs that belong to installed agents.

        Parses ``launchctl list`` output (``PID\\tStatus\\tLabel``) and keeps
        rows whose label is in the catalog, optionally containing pattern.

        Returns:
            Matching rows with tabs condensed to spaces.

        Raises:
            CommandError: If launchctl cannot list jobs.
        """
        try:
            result = self._runner.run(self.config.launchctl, ["list"])
        except CommandError as e:
            raise CommandError(f"failed to get process list: {e}") from e
        if not result.ok:
            raise CommandError(f"failed to get process list: {result.error_text}")

        installed = set(self.catalog())
        rows = []
        for line in result.stdout.strip().splitlines():
            chunks = line.split("\t")
            if len(chunks) < 3:
                continue
            label = chunks[2]
            if label not in installed:
                continue
            if pattern and pattern not in label:
                continue
            rows.append(line.replace("\t", " "))
        return rows

    def run_batch(
        self,
        fragments: Iterable[str],
        action: Action,
        on_outcome: OutcomeCallback | None = None,
    ) -> list[ActionOutcome]:
        """Apply an action to every agent matching any of the fragments.

        Fragments are processed in order, and each fragment's matches in
        catalog order. A failing agent does not stop the batch, and a
        fragment with no matches is skipped.

        Args:
            fragments: Name fragments to resolve.
            action: Lifecycle action to apply.
            on_outcome: Called with each outcome as soon as it is known.

        Returns:
            All outcomes, in the order they were produced.
        """
        catalog = self.catalog()
        outcomes = []
        for fragment in fragments:
            matches = all_matches(fragment, catalog)
            if not matches:
                logger.debug("No agents match %r", fragment)
            for name in matches:
                outcome = self._dispatcher.apply(name, action)
                if not outcome.ok:
                    logger.debug("%s failed: %s", action.value, outcome.message)
                if on_outcome is not None:
                    on_outcome(outcome)
                outcomes.append(outcome)
        return outcomes

    def resolve(self, fragment: str) -> str:
        """Name of the first installed agent matching fragment.

        Raises:
            NotFoundError: If nothing matches.
        """
        return first_match(fragment, self.catalog())

    def show(self, fragment: str) -> bytes:
        """Raw contents of the first matching agent's plist.

        Plists may be binary, so no decoding is attempted.
        """
        path = self.config.plist_path(self.resolve(fragment))
        try:
            return path.read_bytes()
        except OSError as e:
            raise ServiceError(f"unable to read plist: {e}") from e

    def edit(self, fragment: str) -> Path:
        """Open the first matching agent's plist in $EDITOR.

        Returns:
            Path of the edited plist.

        Raises:
            NotFoundError: If no agent matches.
            ConfigError: If EDITOR is not set or cannot be parsed.
            EditorError: If the editor cannot be launched or fails.
        """
        path = self.config.plist_path(self.resolve(fragment))
        try:
            editor = shlex.split(self.config.require_editor())
        except ValueError as e:
            raise ConfigError(f"invalid EDITOR: {e}") from e
        if not editor:
            raise ConfigError("invalid EDITOR: no command")

        try:
            returncode = self._runner.attach(editor[0], [*editor[1:], str(path)])
        except CommandError as e:
            raise EditorError(f"unable to launch editor: {e}") from e
        if returncode != 0:
            raise EditorError(f"editor exited with status {returncode}")
        return path

    def install(self, source: Path) -> Path:
        """Copy a plist into the agents directory.

        An existing plist with the same file name is deleted first. If it
        cannot be deleted nothing is written.

        Returns:
            Path of the installed plist.

        Raises:
            InstallError: If the source is missing or the copy fails.
        """
        if not source.is_file():
            raise InstallError(f'source file "{source}" does not exist')

        agents_path = self.config.agents_path
        destination = agents_path / source.name

        try:
            agents_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise InstallError(f"unable to create {agents_path}: {e}") from e

        if destination.exists():
            if destination.samefile(source):
                raise InstallError(f"{source} is already installed")
            try:
                destination.unlink()
            except OSError as e:
                raise InstallError("unable to delete existing plist") from e

        try:
            shutil.copyfile(source, destination)
        except OSError as e:
            raise InstallError("failed to copy file") from e

        logger.info("Installed %s to %s", source, destination)
        return destination

    def remove(self, fragment: str) -> list[RemoveOutcome]:
        """Delete the plist of every agent matching fragment.

        Each deletion is reported on its own; one failure does not stop
        the rest.

        Raises:
            NotFoundError: If nothing matches.
        """
        matches = all_matches(fragment, self.catalog())
        if not matches:
            raise NotFoundError(f"not found: {fragment}")

        outcomes = []
        for name in matches:
            path = self.config.plist_path(name)
            try:
                path.unlink()
            except OSError as e:
                outcomes.append(RemoveOutcome(path=path, ok=False, error=str(e)))
                continue
            logger.info("Removed %s", path)
            outcomes.append(RemoveOutcome(path=path, ok=True))
        return outcomes
