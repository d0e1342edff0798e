from __future__ import annotations

from datetime import UTC, datetime

from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.notification.model.event import NotificationEvent
from lodge.domain.notification.model.value import (
    NotificationCategory,
    NotificationEventId,
    NotificationId,
    Priority,
)
from lodge.domain.shared.model.aggregate import Aggregate


class NotificationRecord(Aggregate):
    """One recipient's copy of an event.

    Content is snapshotted at dispatch time. Only the recipient mutates it,
    and only by marking it read.
    """

    id: NotificationId
    event_id: NotificationEventId
    recipient_id: PrincipalId
    title: str
    body: str
    category: NotificationCategory
    priority: Priority
    link: str | None = None
    link_text: str | None = None
    related_kind: str | None = None
    related_id: str | None = None
    sender_id: PrincipalId | None = None
    expires_at: datetime | None = None
    read: bool = False
    read_at: datetime | None = None
    created_at: datetime

    @classmethod
    def for_recipient(
        cls,
        event: NotificationEvent,
        recipient_id: PrincipalId,
        now: datetime | None = None,
    ) -> NotificationRecord:
        return cls(
            id=NotificationId.generate(),
            event_id=event.id,
            recipient_id=recipient_id,
            title=event.title,
            body=event.body,
            category=event.category,
            priority=event.priority,
            link=event.link,
            link_text=event.link_text,
            related_kind=event.related_kind,
            related_id=event.related_id,
            sender_id=event.sender_id,
            expires_at=event.expires_at,
            created_at=now or datetime.now(UTC),
        )

    def mark_read(self, now: datetime | None = None) -> bool:
        """Mark as read. Returns False if it already was; read_at is set once."""
        if self.read:
            return False
        self.read = True
        self.read_at = now or datetime.now(UTC)
        return True

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= now
