"""Shared test fixtures and factories."""

from collections.abc import Sequence
from pathlib import Path

import pytest

from lunchy.config import LunchyConfig
from lunchy.service import CommandNotFoundError, CommandResult, ServiceManager


class FakeRunner:
    """CommandRunner that records calls and returns canned results.

    Results are keyed by the argument tuple, e.g. ``("unload", "/x.plist")``.
    Anything not configured succeeds with empty output.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []
        self.results: dict[tuple[str, ...], CommandResult] = {}
        self.missing: set[str] = set()
        self.attach_status = 0

    def run(self, command: str, args: Sequence[str]) -> CommandResult:
        self.calls.append((command, *args))
        if command in self.missing:
            raise CommandNotFoundError(f"{command}: command not found")
        return self.results.get(tuple(args), CommandResult(returncode=0))

    def attach(self, command: str, args: Sequence[str]) -> int:
        self.calls.append((command, *args))
        if command in self.missing:
            raise CommandNotFoundError(f"{command}: command not found")
        return self.attach_status


def write_plists(root: Path, *names: str) -> None:
    """Create minimal plist files under root."""
    root.mkdir(parents=True, exist_ok=True)
    for name in names:
        (root / f"{name}.plist").write_text(f"<plist>{name}</plist>\n")


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def agents_dir(tmp_path: Path) -> Path:
    """Empty launch agents directory."""
    path = tmp_path / "LaunchAgents"
    path.mkdir()
    return path


@pytest.fixture
def config(tmp_path: Path, agents_dir: Path) -> LunchyConfig:
    """Configuration pointing at temporary directories."""
    return LunchyConfig(
        agents_path=agents_dir,
        homebrew_cellar=tmp_path / "Cellar",
    )


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def manager(config: LunchyConfig, runner: FakeRunner) -> ServiceManager:
    return ServiceManager(config, runner)


@pytest.fixture
def cli_runner():
    """Create a Typer CLI test runner with colors disabled."""
    from typer.testing import CliRunner

    return CliRunner(env={"NO_COLOR": "1"})


@pytest.fixture
def make_plists():
    """Factory creating plist files: make_plists(root, "foo", "bar")."""
    return write_plists
