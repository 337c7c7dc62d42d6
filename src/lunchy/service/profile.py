"""Profile dotfile loading.

A profile is a ``.lunchy`` file in the working directory naming the agents
a project needs, one fragment per line::

    # services for this app
    postgresql
    redis
"""

import logging
from pathlib import Path

from lunchy.config.paths import PROFILE_FILENAME
from lunchy.service.base import Profile, ProfileError

logger = logging.getLogger(__name__)


def parse_profile(text: str) -> list[str]:
    """Extract fragments from profile text.

    Lines are stripped; blank lines and lines starting with ``#`` are
    dropped. Order is preserved.
    """
    fragments = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        fragments.append(line)
    return fragments


def load_profile(cwd: Path, filename: str = PROFILE_FILENAME) -> Profile | None:
    """Load the profile from a working directory.

    Args:
        cwd: Directory containing the profile.
        filename: Profile file name.

    Returns:
        The profile, or None when no profile file exists. An existing
        empty file gives a profile with no fragments.

    Raises:
        ProfileError: If the file exists but cannot be read.
    """
    path = cwd / filename
    if not path.exists():
        return None

    try:
        text = path.read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise ProfileError(f"unable to read profile {path}: {e}") from e

    fragments = parse_profile(text)
    logger.info("Loaded %d fragments from %s", len(fragments), path)
    return Profile(path=path, fragments=fragments)
