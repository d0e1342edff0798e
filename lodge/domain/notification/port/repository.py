from __future__ import annotations

from abc import abstractmethod
from datetime import datetime
from typing import List, Protocol

from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.notification.model.aggregate import NotificationRecord
from lodge.domain.notification.model.value import (
    NotificationCategory,
    NotificationId,
    Priority,
)
from lodge.domain.shared.port import Port


class NotificationRepository(Port, Protocol):
    """Storage for per-recipient notification records.

    ``save`` must be safe to call concurrently for different records: the
    fan-out issues one independent write per recipient.
    """

    @abstractmethod
    async def save(self, record: NotificationRecord) -> None: ...

    @abstractmethod
    async def get(self, id: NotificationId) -> NotificationRecord | None: ...

    @abstractmethod
    async def delete(self, id: NotificationId) -> bool: ...

    @abstractmethod
    async def list_for(
        self,
        recipient_id: PrincipalId,
        *,
        now: datetime,
        include_read: bool = True,
        category: NotificationCategory | None = None,
        priority: Priority | None = None,
        limit: int | None = None,
    ) -> List[NotificationRecord]:
        """Unexpired records for a recipient, most pressing then newest first."""
        ...

    @abstractmethod
    async def count_for(
        self,
        recipient_id: PrincipalId,
        *,
        now: datetime,
        unread_only: bool = False,
    ) -> int: ...

    @abstractmethod
    async def unread_by_category(
        self, recipient_id: PrincipalId, *, now: datetime
    ) -> dict[NotificationCategory, int]: ...

    @abstractmethod
    async def mark_all_read(self, recipient_id: PrincipalId, *, now: datetime) -> int: ...

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int: ...
