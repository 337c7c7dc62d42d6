"""Name fragment resolution against the agent catalog.

Fragments match by case-sensitive substring, so a short unambiguous piece
of a label (``redis``) addresses the full name (``homebrew.mxcl.redis``).
Results follow catalog order, which is sorted.
"""

from collections.abc import Sequence

from lunchy.service.base import NotFoundError


def all_matches(fragment: str, catalog: Sequence[str]) -> list[str]:
    """Every catalog entry containing fragment.

    Raises:
        ValueError: If fragment is empty, since it would match everything.
    """
    if not fragment:
        raise ValueError("fragment must not be empty")
    return [name for name in catalog if fragment in name]


def first_match(fragment: str, catalog: Sequence[str]) -> str:
    """The first catalog entry containing fragment.

    Raises:
        NotFoundError: If no entry matches.
    """
    if fragment:
        for name in catalog:
            if fragment in name:
                return name
    raise NotFoundError(f"not found: {fragment}")
