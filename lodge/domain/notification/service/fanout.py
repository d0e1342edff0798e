"""NotificationFanoutService: one independent record write per recipient."""

import asyncio
import logging
from collections.abc import Iterable

from lodge.domain.auth.model.value import PrincipalId
from lodge.domain.notification.model.aggregate import NotificationRecord
from lodge.domain.notification.model.event import NotificationEvent
from lodge.domain.notification.port.repository import NotificationRepository
from lodge.domain.shared.error import PartialDispatchFailure
from lodge.domain.shared.service import Service

logger = logging.getLogger(__name__)


class NotificationFanoutService(Service):
    """Materializes an event into per-recipient records.

    Writes run concurrently, at most ``max_concurrency`` at a time. A failed
    write never rolls back the others. Delivery is at-least-once: retrying
    the failed subset may duplicate records, which is tolerated.
    """

    notification_repo: NotificationRepository
    max_concurrency: int = 10

    async def dispatch(
        self,
        event: NotificationEvent,
        recipients: Iterable[PrincipalId],
    ) -> int:
        """Create one record per distinct recipient and return how many were written.

        Raises PartialDispatchFailure when some writes failed. Cancellation
        stops further writes and propagates.
        """
        targets = list(dict.fromkeys(recipients))
        if not targets:
            logger.debug("Event %s has no recipients", event.id)
            return 0

        semaphore = asyncio.Semaphore(max(1, self.max_concurrency))

        async def write(recipient_id: PrincipalId) -> bool:
            async with semaphore:
                record = NotificationRecord.for_recipient(event, recipient_id)
                try:
                    await self.notification_repo.save(record)
                except Exception as e:
                    logger.warning(
                        "Notification write failed: event=%s recipient=%s error=%s",
                        event.id,
                        recipient_id,
                        e,
                    )
                    return False
                return True

        results = await asyncio.gather(*(write(r) for r in targets))

        created = sum(results)
        failed = [r for r, ok in zip(targets, results) if not ok]
        logger.info(
            "Dispatched notification event=%s category=%s created=%d requested=%d",
            event.id,
            event.category,
            created,
            len(targets),
        )
        if failed:
            raise PartialDispatchFailure(created=created, requested=len(targets), failed=failed)
        return created
