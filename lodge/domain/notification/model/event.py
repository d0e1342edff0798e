from datetime import datetime

from pydantic import Field

from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.notification.model.target import TargetSpec
from lodge.domain.notification.model.value import (
    NotificationCategory,
    NotificationEventId,
    Priority,
)
from lodge.domain.shared.model.value import ValueObject


class NotificationEvent(ValueObject):
    """Notification payload plus the spec of who should receive it."""

    id: NotificationEventId = Field(default_factory=NotificationEventId.generate)
    title: str
    body: str
    category: NotificationCategory
    priority: Priority = Priority.NORMAL
    target: TargetSpec
    link: str | None = None
    link_text: str | None = None
    related_kind: str | None = None
    related_id: str | None = None
    expires_at: datetime | None = None
    sender_id: PrincipalId | None = None
