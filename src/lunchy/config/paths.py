"""Default filesystem locations for Lunchy.

Launch agents live in a per-user directory under the home directory.
Every location can be overridden through the environment:

- LUNCHY_AGENTS_PATH: the launch agents directory
- HOMEBREW_CELLAR: the cellar searched by ``lunchy scan homebrew``
"""

from pathlib import Path

AGENTS_ENV_VAR = "LUNCHY_AGENTS_PATH"
CELLAR_ENV_VAR = "HOMEBREW_CELLAR"

PLIST_EXTENSION = ".plist"
PROFILE_FILENAME = ".lunchy"
DEFAULT_HOMEBREW_CELLAR = Path("/usr/local/Cellar")


def get_launch_agents_path(home: Path) -> Path:
    """Get the per-user launch agents directory for a home directory."""
    return home / "Library" / "LaunchAgents"
