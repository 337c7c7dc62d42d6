"""Centralized logging configuration for Lunchy.

The CLI calls configure_logging() once, before any command runs.

Logging Levels:
- DEBUG: launchctl invocations, catalog scans, swallowed restart errors
- INFO: Profile selection, installs and removals
- WARNING: Recoverable issues (unreadable catalog entries)
- ERROR: Failures that abort a command

User-facing output goes through the console, not the logger. Logs are
diagnostics and stay quiet unless --verbose or LUNCHY_LOG_LEVEL asks.
"""

import logging
import os

LEVEL_ENV_VAR = "LUNCHY_LOG_LEVEL"
DEFAULT_LEVEL = "WARNING"
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ComponentFormatter(logging.Formatter):
    """Formatter that extracts component name from logger path.

    Converts full module paths to short component names:
    - lunchy.service.launchctl -> service
    - lunchy.cli.router -> cli
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = record.name.split(".")
        if len(parts) >= 2 and parts[0] == "lunchy":
            record.component = parts[1]
        else:
            record.component = parts[0]
        return super().format(record)


def resolve_level(level: str | None = None) -> str:
    """Resolve a log level name, falling back to LUNCHY_LOG_LEVEL then WARNING."""
    if level is None:
        level = os.environ.get(LEVEL_ENV_VAR, DEFAULT_LEVEL)
    level = level.upper()
    if level not in VALID_LEVELS:
        level = DEFAULT_LEVEL
    return level


def configure_logging(
    level: str | None = None,
    use_rich: bool = False,
) -> None:
    """Configure logging for Lunchy.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
            If None, uses LUNCHY_LOG_LEVEL env var or WARNING.
        use_rich: Use Rich handler for colorful output (verbose mode).
    """
    log_level = getattr(logging, resolve_level(level))

    handler: logging.Handler
    if use_rich:
        from rich.console import Console
        from rich.logging import RichHandler

        handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=False,
            show_path=False,
            show_time=True,
            markup=False,
        )
        handler.setFormatter(ComponentFormatter("%(component)s | %(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            ComponentFormatter(
                "%(asctime)s | %(levelname)-8s | %(component)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )

    logging.basicConfig(
        level=log_level,
        handlers=[handler],
        force=True,
    )
