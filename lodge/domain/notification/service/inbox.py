import logging
from datetime import UTC, datetime

from lodge.domain.auth.model.principal import Principal
from lodge.domain.notification.model.aggregate import NotificationRecord
from lodge.domain.notification.model.stats import InboxStats
from lodge.domain.notification.model.value import (
    NotificationCategory,
    NotificationId,
    Priority,
)
from lodge.domain.notification.port.repository import NotificationRepository
from lodge.domain.shared.error import AuthorizationError, NotFoundError
from lodge.domain.shared.service import Service

logger = logging.getLogger(__name__)


class InboxService(Service):
    """Recipient-owned operations on notification records."""

    notification_repo: NotificationRepository

    async def list(
        self,
        principal: Principal,
        *,
        include_read: bool = True,
        category: NotificationCategory | None = None,
        priority: Priority | None = None,
        limit: int = 50,
    ) -> list[NotificationRecord]:
        return await self.notification_repo.list_for(
            principal.id,
            now=datetime.now(UTC),
            include_read=include_read,
            category=category,
            priority=priority,
            limit=limit,
        )

    async def unread_count(self, principal: Principal) -> int:
        return await self.notification_repo.count_for(
            principal.id, now=datetime.now(UTC), unread_only=True
        )

    async def mark_read(self, principal: Principal, id: NotificationId) -> NotificationRecord:
        record = await self._owned(principal, id)
        if record.mark_read():
            await self.notification_repo.save(record)
        return record

    async def mark_all_read(self, principal: Principal) -> int:
        count = await self.notification_repo.mark_all_read(principal.id, now=datetime.now(UTC))
        logger.debug("Marked %d notifications read for principal=%s", count, principal.id)
        return count

    async def delete(self, principal: Principal, id: NotificationId) -> None:
        await self._owned(principal, id)
        await self.notification_repo.delete(id)

    async def sweep_expired(self, now: datetime | None = None) -> int:
        count = await self.notification_repo.delete_expired(now or datetime.now(UTC))
        if count:
            logger.info("Swept %d expired notifications", count)
        return count

    async def stats(self, principal: Principal) -> InboxStats:
        now = datetime.now(UTC)
        return InboxStats(
            total=await self.notification_repo.count_for(principal.id, now=now),
            unread=await self.notification_repo.count_for(principal.id, now=now, unread_only=True),
            unread_by_category=await self.notification_repo.unread_by_category(
                principal.id, now=now
            ),
        )

    async def _owned(self, principal: Principal, id: NotificationId) -> NotificationRecord:
        record = await self.notification_repo.get(id)
        if record is None:
            raise NotFoundError(f"Notification not found: {id}")
        if record.recipient_id != principal.id:
            logger.warning(
                "Authorization denied: principal=%s action=access:notification", principal.id
            )
            raise AuthorizationError("Access denied: not the recipient", code="access_denied")
        return record
