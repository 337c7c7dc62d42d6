"""Discovery of installed launch agent plists."""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from lunchy.config.paths import PLIST_EXTENSION

logger = logging.getLogger(__name__)


def _walk_plists(root: Path) -> Iterator[str]:
    """Yield plist file names under root, following symlinks.

    Directories reached through more than one path (symlink cycles,
    aliased links) are only visited once.
    """
    seen: set[tuple[int, int]] = set()

    def on_error(err: OSError) -> None:
        logger.debug("Skipping %s: %s", err.filename, err.strerror)

    for dirpath, dirnames, filenames in os.walk(
        root, onerror=on_error, followlinks=True
    ):
        try:
            st = os.stat(dirpath)
        except OSError:
            dirnames[:] = []
            continue
        key = (st.st_dev, st.st_ino)
        if key in seen:
            dirnames[:] = []
            continue
        seen.add(key)

        for filename in filenames:
            if not filename.endswith(PLIST_EXTENSION):
                continue
            # Broken links and special files are skipped, like find -type f
            if os.path.isfile(os.path.join(dirpath, filename)):
                yield filename


def list_descriptors(root: Path) -> list[str]:
    """List the logical names of every plist under root.

    The scan is recursive and follows symbolic links. Names are the file
    names with the .plist extension removed, sorted so that matching and
    batch order are the same on every run.

    A root that is missing or unreadable yields an empty list: the agents
    directory may legitimately not exist yet.

    Args:
        root: Directory to scan.

    Returns:
        Sorted, de-duplicated logical names.
    """
    if not root.is_dir():
        logger.debug("Catalog root %s does not exist", root)
        return []

    names = {
        filename.removesuffix(PLIST_EXTENSION) for filename in _walk_plists(root)
    }
    names.discard("")
    logger.debug("Found %d plists under %s", len(names), root)
    return sorted(names)
