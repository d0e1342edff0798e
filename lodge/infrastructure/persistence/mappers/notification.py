from typing import Any
from uuid import UUID

from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.notification.model.aggregate import NotificationRecord
from lodge.domain.notification.model.value import (
    NotificationCategory,
    NotificationEventId,
    NotificationId,
    Priority,
)
from lodge.infrastructure.persistence.mappers._time import as_utc


def row_to_notification(row: dict[str, Any]) -> NotificationRecord:
    sender_id = row.get("sender_id")
    return NotificationRecord(
        id=NotificationId(UUID(row["id"])),
        event_id=NotificationEventId(UUID(row["event_id"])),
        recipient_id=PrincipalId(UUID(row["recipient_id"])),
        title=row["title"],
        body=row["body"],
        category=NotificationCategory(row["category"]),
        priority=Priority(row["priority"]),
        link=row.get("link"),
        link_text=row.get("link_text"),
        related_kind=row.get("related_kind"),
        related_id=row.get("related_id"),
        sender_id=PrincipalId(UUID(sender_id)) if sender_id else None,
        expires_at=as_utc(row.get("expires_at")),
        read=bool(row["read"]),
        read_at=as_utc(row.get("read_at")),
        created_at=as_utc(row["created_at"]),
    )


def notification_to_dict(record: NotificationRecord) -> dict[str, Any]:
    return {
        "id": str(record.id),
        "event_id": str(record.event_id),
        "recipient_id": str(record.recipient_id),
        "title": record.title,
        "body": record.body,
        "category": str(record.category),
        "priority": str(record.priority),
        "link": record.link,
        "link_text": record.link_text,
        "related_kind": record.related_kind,
        "related_id": record.related_id,
        "sender_id": str(record.sender_id) if record.sender_id else None,
        "expires_at": record.expires_at,
        "read": record.read,
        "read_at": record.read_at,
        "created_at": record.created_at,
    }
