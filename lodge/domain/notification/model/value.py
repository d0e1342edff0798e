from enum import StrEnum

from lodge.domain.shared.model.value import Identifier


class NotificationId(Identifier):
    pass


class NotificationEventId(Identifier):
    """Identity of one emitted event, shared by every record it fans out to."""


class NotificationCategory(StrEnum):
    PROGRAM = "program"
    DOCUMENT = "document"
    MEMBER = "member"
    ADMINISTRATIVE = "administrative"
    SYSTEM = "system"
    SUBMISSION = "submission"
    ATTENDANCE = "attendance"


class Priority(StrEnum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        """Sort weight, higher is more pressing."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    Priority.LOW: 0,
    Priority.NORMAL: 1,
    Priority.HIGH: 2,
    Priority.URGENT: 3,
}
