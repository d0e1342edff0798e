"""Periodic notification housekeeping."""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

from lodge.domain.notification.service.inbox import InboxService
from lodge.domain.notification.service.notification import NotificationService
from lodge.domain.program.port.repository import ProgramRepository
from lodge.domain.shared.error import PartialDispatchFailure
from lodge.domain.shared.schedule import Schedule

logger = logging.getLogger(__name__)

REMINDER_DAYS = (3, 1, 0)


@dataclass
class ExpiredNotificationSweep(Schedule):
    inbox: InboxService

    async def run(self, **params: Any) -> None:
        await self.inbox.sweep_expired()


@dataclass
class ProgramReminderSchedule(Schedule):
    """Sends reminders for programs 3 days, 1 day and 0 days ahead."""

    programs: ProgramRepository
    notifications: NotificationService
    days_before: tuple[int, ...] = field(default=REMINDER_DAYS)

    async def run(self, **params: Any) -> None:
        now = params.get("now") or datetime.now(UTC)
        today = now.replace(hour=0, minute=0, second=0, microsecond=0)
        sent = 0
        for days in sorted(set(self.days_before)):
            start = today + timedelta(days=days)
            for program in await self.programs.list_between(start, start + timedelta(days=1)):
                # Programs earlier today have already happened
                if program.scheduled_for < now:
                    continue
                try:
                    sent += await self.notifications.remind_upcoming_program(program, now=now)
                except PartialDispatchFailure as e:
                    sent += e.created
                    logger.warning("Reminder for program %s incomplete: %s", program.id, e.message)
        logger.info("Program reminders sent: %d", sent)
