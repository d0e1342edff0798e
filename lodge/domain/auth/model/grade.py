"""Grade hierarchy: the single ordering primitive for grade-scoped content."""

import logging
from enum import IntEnum

from lodge.domain.shared.error import UnknownGradeError

logger = logging.getLogger(__name__)

GENERAL_CATEGORY = "general"
"""Category label for content visible to every grade."""


class Grade(IntEnum):
    """Hierarchical grades with a fixed numeric ordering.

    A higher grade sees content of its own and every lower grade,
    never the reverse. The order is compile-time, not data-driven.
    """

    APPRENTICE = 1
    COMPANION = 2
    MASTER = 3

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, value: object) -> "Grade":
        """Coerce a stored label (``"companion"``) or ordinal into a Grade.

        Raises UnknownGradeError for anything outside the hierarchy.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            member = cls.__members__.get(value.strip().upper())
            if member is not None:
                return member
        elif isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                pass
        raise UnknownGradeError(value)


def at_least(viewer: object, target: object) -> bool:
    """True iff ``viewer`` ranks at or above ``target``.

    Undefined or unknown grades fail closed. Unknown non-empty labels are
    logged as data defects.
    """
    if viewer is None or target is None:
        return False
    try:
        return Grade.parse(viewer) >= Grade.parse(target)
    except UnknownGradeError as e:
        logger.error("Grade comparison failed closed: %s", e.message)
        return False


def grades_at_or_above(grade: Grade) -> frozenset[Grade]:
    """All grades allowed to view content of ``grade``."""
    return frozenset(g for g in Grade if at_least(g, grade))


def normalize_category(value: object) -> str:
    """Canonical content label: ``general`` or a grade label.

    Raises UnknownGradeError for anything else.
    """
    if isinstance(value, str) and value.strip().lower() == GENERAL_CATEGORY:
        return GENERAL_CATEGORY
    return Grade.parse(value).label
