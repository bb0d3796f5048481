"""Selection policy: pragma detection and the group admission rule.

Every function here is pure. Documentation text is matched line by line
with an exact, case-sensitive prefix test; lines are not trimmed, so a
pragma preceded by indentation does not count.
"""

from __future__ import annotations

from enum import Enum
from typing import Final

INCLUDE_PRAGMA: Final[str] = "easyjson:json"
IGNORE_PRAGMA: Final[str] = "easyjson:ignore"


class Verdict(Enum):
    """What the walker does with a node."""

    SKIP = "skip"
    DESCEND = "descend"
    SELECT = "select"


def has_pragma(doc: str | None, pragma: str) -> bool:
    """Return True if any line of ``doc`` starts with ``pragma``."""
    if not doc:
        return False
    return any(line.startswith(pragma) for line in doc.split("\n"))


def needs_generation(doc: str | None) -> bool:
    """Return True if the documentation carries the inclusion pragma."""
    return has_pragma(doc, INCLUDE_PRAGMA)


def is_ignored(doc: str | None) -> bool:
    """Return True if the documentation carries the exclusion pragma."""
    return has_pragma(doc, IGNORE_PRAGMA)


def admit_group(explicit: bool, ignored: bool, all_mode: bool) -> Verdict:
    """Decide whether the walker enters a declaration group.

    Without ``all_mode`` only explicitly marked groups are entered. With
    ``all_mode`` every group is entered unless it is ignored, and the
    exclusion pragma wins even when the inclusion pragma is present too.
    """
    if all_mode:
        return Verdict.SKIP if ignored else Verdict.DESCEND
    return Verdict.DESCEND if explicit else Verdict.SKIP


def type_verdict(explicit: bool) -> Verdict:
    """Explicitly marked types are selected whatever their shape."""
    return Verdict.SELECT if explicit else Verdict.DESCEND


class SelectionPolicy:
    """Binds the pure predicates to one run's ``all_mode`` flag.

    Args:
        all_mode: Select every struct type unless it is ignored.
    """

    def __init__(self, all_mode: bool = False) -> None:
        self.all_mode = all_mode

    def group_verdict(self, doc: str | None) -> tuple[Verdict, bool]:
        """Return the admission verdict and the group's ``explicit`` flag."""
        explicit = needs_generation(doc)
        ignored = is_ignored(doc)
        return admit_group(explicit, ignored, self.all_mode), explicit

    def __repr__(self) -> str:
        return f"SelectionPolicy(all_mode={self.all_mode})"
