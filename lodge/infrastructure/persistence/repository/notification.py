from __future__ import annotations

from datetime import datetime
from typing import List

from sqlalchemy import and_, case, delete, func, insert, or_, select, update
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.notification.model.aggregate import NotificationRecord
from lodge.domain.notification.model.value import (
    NotificationCategory,
    NotificationId,
    Priority,
)
from lodge.domain.notification.port.repository import NotificationRepository
from lodge.domain.shared.error import StorageUnavailableError
from lodge.infrastructure.persistence.mappers.notification import (
    notification_to_dict,
    row_to_notification,
)
from lodge.infrastructure.persistence.tables import notifications_table

_t = notifications_table

_priority_rank = case(
    {str(p): p.rank for p in Priority},
    value=_t.c.priority,
    else_=0,
)


def _unexpired(now: datetime):
    return or_(_t.c.expires_at.is_(None), _t.c.expires_at > now)


class SqlNotificationRepository(NotificationRepository):
    """Notification storage where every call runs in its own short transaction.

    Fan-out issues concurrent saves, so this repository does not share the
    unit-of-work session: a failure on one recipient cannot roll back another.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def save(self, record: NotificationRecord) -> None:
        values = notification_to_dict(record)
        try:
            async with self._session_factory.begin() as session:
                existing = (
                    await session.execute(select(_t.c.id).where(_t.c.id == values["id"]))
                ).first()
                if existing:
                    stmt = update(_t).where(_t.c.id == values["id"]).values(**values)
                else:
                    stmt = insert(_t).values(**values)
                await session.execute(stmt)
        except OperationalError as e:
            raise StorageUnavailableError(f"Could not store notification {record.id}: {e}") from e

    async def get(self, id: NotificationId) -> NotificationRecord | None:
        async with self._session_factory() as session:
            result = await session.execute(select(_t).where(_t.c.id == str(id)))
            row = result.mappings().first()
        return row_to_notification(dict(row)) if row else None

    async def delete(self, id: NotificationId) -> bool:
        async with self._session_factory.begin() as session:
            result = await session.execute(delete(_t).where(_t.c.id == str(id)))
        return result.rowcount > 0

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
        stmt = (
            select(_t)
            .where(_t.c.recipient_id == str(recipient_id))
            .where(_unexpired(now))
            .order_by(_priority_rank.desc(), _t.c.created_at.desc())
        )
        if not include_read:
            stmt = stmt.where(_t.c.read.is_(False))
        if category is not None:
            stmt = stmt.where(_t.c.category == str(category))
        if priority is not None:
            stmt = stmt.where(_t.c.priority == str(priority))
        if limit is not None:
            stmt = stmt.limit(limit)

        async with self._session_factory() as session:
            result = await session.execute(stmt)
            rows = result.mappings().all()
        return [row_to_notification(dict(r)) for r in rows]

    async def count_for(
        self,
        recipient_id: PrincipalId,
        *,
        now: datetime,
        unread_only: bool = False,
    ) -> int:
        stmt = (
            select(func.count())
            .select_from(_t)
            .where(_t.c.recipient_id == str(recipient_id))
            .where(_unexpired(now))
        )
        if unread_only:
            stmt = stmt.where(_t.c.read.is_(False))
        async with self._session_factory() as session:
            return (await session.execute(stmt)).scalar_one()

    async def unread_by_category(
        self, recipient_id: PrincipalId, *, now: datetime
    ) -> dict[NotificationCategory, int]:
        stmt = (
            select(_t.c.category, func.count())
            .where(_t.c.recipient_id == str(recipient_id))
            .where(_t.c.read.is_(False))
            .where(_unexpired(now))
            .group_by(_t.c.category)
        )
        async with self._session_factory() as session:
            rows = (await session.execute(stmt)).all()
        return {NotificationCategory(category): count for category, count in rows}

    async def mark_all_read(self, recipient_id: PrincipalId, *, now: datetime) -> int:
        stmt = (
            update(_t)
            .where(and_(_t.c.recipient_id == str(recipient_id), _t.c.read.is_(False)))
            .values(read=True, read_at=now)
        )
        async with self._session_factory.begin() as session:
            result = await session.execute(stmt)
        return result.rowcount

    async def delete_expired(self, now: datetime) -> int:
        stmt = delete(_t).where(_t.c.expires_at.is_not(None)).where(_t.c.expires_at <= now)
        async with self._session_factory.begin() as session:
            result = await session.execute(stmt)
        return result.rowcount
