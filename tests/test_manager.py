"""Tests for the high-level service manager."""

from pathlib import Path

import pytest

from lunchy.config import ConfigError
from lunchy.service import (
    Action,
    CommandError,
    CommandResult,
    EditorError,
    InstallError,
    NotFoundError,
    ServiceError,
)

# =============================================================================
# Catalog Tests
# =============================================================================


class TestCatalog:
    def test_list_agents(self, manager, agents_dir, make_plists):
        make_plists(agents_dir, "foobar", "foo")
        assert manager.list_agents() == ["foo", "foobar"]

    def test_scan_defaults_to_agents_dir(self, manager, agents_dir, make_plists):
        make_plists(agents_dir, "foo", "foobar")
        assert manager.scan() == ["foo", "foobar"]

    def test_scan_other_root(self, manager, tmp_path: Path, make_plists):
        make_plists(tmp_path / "other", "x.y")
        assert manager.scan(str(tmp_path / "other")) == ["x.y"]

    def test_scan_homebrew(self, manager, tmp_path: Path, make_plists):
        make_plists(tmp_path / "Cellar" / "redis" / "7.0", "homebrew.mxcl.redis")
        assert manager.scan("homebrew") == ["homebrew.mxcl.redis"]

    def test_scan_missing_root(self, manager, tmp_path: Path):
        assert manager.scan(str(tmp_path / "missing")) == []


# =============================================================================
# Batch Tests
# =============================================================================


class TestRunBatch:
    def test_zero_match_fragment_contributes_nothing(
        self, manager, runner, agents_dir, make_plists
    ):
        make_plists(agents_dir, "bx", "by", "cz")

        outcomes = manager.run_batch(["a", "b"], Action.START)

        assert [o.name for o in outcomes] == ["bx", "by"]
        assert all(o.ok for o in outcomes)
        assert [call[1] for call in runner.calls] == ["load", "load"]

    def test_failure_does_not_stop_batch(
        self, manager, runner, config, agents_dir, make_plists
    ):
        make_plists(agents_dir, "web1", "web2", "web3")
        runner.results[("unload", str(config.plist_path("web1")))] = CommandResult(
            returncode=1, stderr="boom"
        )

        outcomes = manager.run_batch(["web"], Action.STOP)

        assert [(o.name, o.ok) for o in outcomes] == [
            ("web1", False),
            ("web2", True),
            ("web3", True),
        ]

    def test_outcomes_reported_in_order(self, manager, agents_dir, make_plists):
        make_plists(agents_dir, "db", "web")
        seen = []

        manager.run_batch(["web", "db"], Action.RESTART, on_outcome=seen.append)

        assert [o.name for o in seen] == ["web", "db"]
        assert [o.message for o in seen] == ["reload web", "reload db"]

    def test_fragment_matching_several_agents(self, manager, agents_dir, make_plists):
        make_plists(agents_dir, "foo", "foobar", "baz")
        outcomes = manager.run_batch(["foo"], Action.START)
        assert [o.name for o in outcomes] == ["foo", "foobar"]

    def test_empty_catalog(self, manager, runner):
        assert manager.run_batch(["foo"], Action.START) == []
        assert runner.calls == []

    def test_missing_launchctl_does_not_raise(
        self, manager, runner, agents_dir, make_plists
    ):
        make_plists(agents_dir, "a1", "a2")
        runner.missing.add("launchctl")

        outcomes = manager.run_batch(["a"], Action.START)

        assert [o.ok for o in outcomes] == [False, False]


# =============================================================================
# Status Tests
# =============================================================================

LAUNCHCTL_LIST = (
    "PID\tStatus\tLabel\n"
    "123\t0\tfoo\n"
    "-\t0\tcom.apple.Finder\n"
    "-\t78\tfoobar\n"
    "garbage line\n"
)


class TestStatus:
    def test_filters_to_installed_agents(
        self, manager, runner, agents_dir, make_plists
    ):
        make_plists(agents_dir, "foo", "foobar")
        runner.results[("list",)] = CommandResult(0, stdout=LAUNCHCTL_LIST)

        assert manager.status() == ["123 0 foo", "- 78 foobar"]

    def test_pattern(self, manager, runner, agents_dir, make_plists):
        make_plists(agents_dir, "foo", "foobar")
        runner.results[("list",)] = CommandResult(0, stdout=LAUNCHCTL_LIST)

        assert manager.status("bar") == ["- 78 foobar"]

    def test_not_loaded_agents_are_absent(
        self, manager, runner, agents_dir, make_plists
    ):
        make_plists(agents_dir, "idle")
        runner.results[("list",)] = CommandResult(0, stdout=LAUNCHCTL_LIST)

        assert manager.status() == []

    def test_list_failure(self, manager, runner):
        runner.results[("list",)] = CommandResult(1, stderr="denied")
        with pytest.raises(CommandError, match="failed to get process list: denied"):
            manager.status()

    def test_missing_launchctl(self, manager, runner):
        runner.missing.add("launchctl")
        with pytest.raises(CommandError, match="failed to get process list"):
            manager.status()


# =============================================================================
# Show / Edit Tests
# =============================================================================


class TestShow:
    def test_first_match_contents(self, manager, agents_dir):
        (agents_dir / "foo.plist").write_text("short")
        (agents_dir / "foobar.plist").write_text("long")
        assert manager.show("foo") == b"short"

    def test_fragment_inside_name(self, manager, agents_dir):
        (agents_dir / "foobar.plist").write_text("long")
        assert manager.show("bar") == b"long"

    def test_binary_plist(self, manager, agents_dir):
        data = b"bplist00\xd1\x01\x02\xff\xfe"
        (agents_dir / "foo.plist").write_bytes(data)
        assert manager.show("foo") == data

    def test_not_found(self, manager):
        with pytest.raises(NotFoundError, match="not found: nope"):
            manager.show("nope")

    def test_unreadable_plist(self, manager, agents_dir, monkeypatch):
        (agents_dir / "foo.plist").write_text("x")

        def fail_read(self, *args, **kwargs):
            raise PermissionError("denied")

        monkeypatch.setattr(Path, "read_bytes", fail_read)

        with pytest.raises(ServiceError, match="unable to read plist"):
            manager.show("foo")


class TestEdit:
    def test_requires_editor(self, manager, agents_dir, make_plists):
        make_plists(agents_dir, "foo")
        with pytest.raises(ConfigError, match="EDITOR"):
            manager.edit("foo")

    def test_launches_editor(self, config, runner, agents_dir, make_plists):
        from lunchy.service import ServiceManager

        make_plists(agents_dir, "foobar", "foo")
        manager = ServiceManager(config.model_copy(update={"editor": "code -w"}), runner)

        path = manager.edit("foo")

        assert path == agents_dir / "foo.plist"
        assert runner.calls == [("code", "-w", str(agents_dir / "foo.plist"))]

    def test_editor_failure(self, config, runner, agents_dir, make_plists):
        from lunchy.service import ServiceManager

        make_plists(agents_dir, "foo")
        runner.attach_status = 1
        manager = ServiceManager(config.model_copy(update={"editor": "vim"}), runner)

        with pytest.raises(EditorError, match="status 1"):
            manager.edit("foo")

    def test_editor_not_installed(self, config, runner, agents_dir, make_plists):
        from lunchy.service import ServiceManager

        make_plists(agents_dir, "foo")
        runner.missing.add("vim")
        manager = ServiceManager(config.model_copy(update={"editor": "vim"}), runner)

        with pytest.raises(EditorError, match="unable to launch editor"):
            manager.edit("foo")

    def test_not_found(self, config, runner):
        from lunchy.service import ServiceManager

        manager = ServiceManager(config.model_copy(update={"editor": "vim"}), runner)
        with pytest.raises(NotFoundError):
            manager.edit("foo")
        assert runner.calls == []

    def test_not_found_reported_before_missing_editor(self, manager, runner):
        with pytest.raises(NotFoundError, match="not found: ghost"):
            manager.edit("ghost")
        assert runner.calls == []

    def test_unbalanced_editor_quotes(self, config, runner, agents_dir, make_plists):
        from lunchy.service import ServiceManager

        make_plists(agents_dir, "foo")
        manager = ServiceManager(config.model_copy(update={"editor": 'vim "'}), runner)

        with pytest.raises(ConfigError, match="invalid EDITOR"):
            manager.edit("foo")
        assert runner.calls == []

    def test_empty_editor_command(self, config, runner, agents_dir, make_plists):
        from lunchy.service import ServiceManager

        make_plists(agents_dir, "foo")
        manager = ServiceManager(config.model_copy(update={"editor": '""'}), runner)

        with pytest.raises(ConfigError, match="invalid EDITOR"):
            manager.edit("foo")


# =============================================================================
# Install / Remove Tests
# =============================================================================


class TestInstall:
    def test_copies_into_agents_dir(self, manager, tmp_path: Path, agents_dir):
        source = tmp_path / "com.example.agent.plist"
        source.write_text("new")

        destination = manager.install(source)

        assert destination == agents_dir / "com.example.agent.plist"
        assert destination.read_text() == "new"
        assert source.exists()

    def test_creates_agents_dir(self, config, runner, tmp_path: Path):
        from lunchy.service import ServiceManager

        agents = tmp_path / "fresh" / "LaunchAgents"
        manager = ServiceManager(config.model_copy(update={"agents_path": agents}), runner)
        source = tmp_path / "x.plist"
        source.write_text("x")

        manager.install(source)

        assert (agents / "x.plist").read_text() == "x"

    def test_replaces_existing(self, manager, tmp_path: Path, agents_dir):
        (agents_dir / "foo.plist").write_text("old")
        source = tmp_path / "foo.plist"
        source.write_text("new")

        manager.install(source)

        assert [p.name for p in agents_dir.iterdir()] == ["foo.plist"]
        assert (agents_dir / "foo.plist").read_text() == "new"

    def test_failed_delete_aborts(
        self, manager, tmp_path: Path, agents_dir, monkeypatch
    ):
        (agents_dir / "foo.plist").write_text("old")
        source = tmp_path / "foo.plist"
        source.write_text("new")

        def fail_unlink(self, missing_ok=False):
            raise PermissionError("denied")

        monkeypatch.setattr(Path, "unlink", fail_unlink)

        with pytest.raises(InstallError, match="unable to delete existing plist"):
            manager.install(source)

        monkeypatch.undo()
        assert (agents_dir / "foo.plist").read_text() == "old"

    def test_missing_source(self, manager, tmp_path: Path):
        with pytest.raises(InstallError, match="does not exist"):
            manager.install(tmp_path / "missing.plist")

    def test_source_already_installed(self, manager, agents_dir):
        (agents_dir / "foo.plist").write_text("keep")

        with pytest.raises(InstallError, match="already installed"):
            manager.install(agents_dir / "foo.plist")

        assert (agents_dir / "foo.plist").read_text() == "keep"


class TestRemove:
    def test_removes_all_matches(self, manager, agents_dir, make_plists):
        make_plists(agents_dir, "foo", "foobar", "baz")

        outcomes = manager.remove("foo")

        assert [o.ok for o in outcomes] == [True, True]
        assert outcomes[0].message == f"removed {agents_dir / 'foo.plist'}"
        assert manager.list_agents() == ["baz"]

    def test_not_found(self, manager, agents_dir, make_plists):
        make_plists(agents_dir, "baz")
        with pytest.raises(NotFoundError, match="not found: foo"):
            manager.remove("foo")

    def test_failure_does_not_stop_others(
        self, manager, agents_dir, make_plists, monkeypatch
    ):
        make_plists(agents_dir, "foo", "foobar")
        original_unlink = Path.unlink

        def flaky_unlink(self, missing_ok=False):
            if self.name == "foo.plist":
                raise PermissionError("denied")
            original_unlink(self, missing_ok=missing_ok)

        monkeypatch.setattr(Path, "unlink", flaky_unlink)

        outcomes = manager.remove("foo")

        assert [o.ok for o in outcomes] == [False, True]
        assert outcomes[0].message.startswith("failed to remove")
        assert outcomes[0].error is not None
        assert not (agents_dir / "foobar.plist").exists()
