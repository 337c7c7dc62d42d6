"""Start, stop and restart commands."""

from lunchy.cli.console import error, success
from lunchy.service import Action, ActionOutcome, ServiceManager


def _report(outcome: ActionOutcome) -> None:
    if outcome.ok:
        success(outcome.message)
    else:
        error(outcome.message)


def _run(manager: ServiceManager, fragments: list[str], action: Action) -> None:
    # Per-agent failures are printed and never change the exit status.
    manager.run_batch(fragments, action, on_outcome=_report)


def start_agents(manager: ServiceManager, fragments: list[str]) -> None:
    _run(manager, fragments, Action.START)


def stop_agents(manager: ServiceManager, fragments: list[str]) -> None:
    _run(manager, fragments, Action.STOP)


def restart_agents(manager: ServiceManager, fragments: list[str]) -> None:
    _run(manager, fragments, Action.RESTART)
