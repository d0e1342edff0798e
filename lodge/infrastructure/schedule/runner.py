"""ScheduleRunner: cron-driven housekeeping on APScheduler."""

import asyncio
import logging
from contextlib import AsyncExitStack
from dataclasses import dataclass, field
from typing import Any

from apscheduler import AsyncScheduler
from apscheduler.triggers.cron import CronTrigger
from dishka import AsyncContainer

from lodge.config import SchedulerConfig
from lodge.domain.notification.schedule import (
    ExpiredNotificationSweep,
    ProgramReminderSchedule,
)
from lodge.domain.shared.schedule import Schedule
from lodge.util.di.scope import Scope

logger = logging.getLogger(__name__)

MAX_CONSECUTIVE_FAILURES = 5


@dataclass(frozen=True)
class CronJob:
    """A Schedule type bound to a crontab line."""

    id: str
    schedule_type: type[Schedule]
    cron: str
    params: dict[str, Any] = field(default_factory=dict)


def housekeeping_jobs(config: SchedulerConfig) -> list[CronJob]:
    """Jobs enabled by ``config``. A blank cron disables its job."""
    jobs = [
        CronJob("expired-sweep", ExpiredNotificationSweep, config.expired_sweep_cron),
        CronJob("program-reminders", ProgramReminderSchedule, config.program_reminder_cron),
    ]
    return [job for job in jobs if job.cron.strip()]


class ScheduleRunner:
    """Fires each CronJob on its trigger, resolving the Schedule per run.

    Every run gets a fresh unit-of-work scope, so a failed run never leaks
    a session into the next one.

        async with ScheduleRunner(container, housekeeping_jobs(config.scheduler)):
            await stop.wait()
    """

    def __init__(self, container: AsyncContainer, jobs: list[CronJob] | None = None) -> None:
        self._container = container
        self._jobs = list(jobs or [])
        self._stack: AsyncExitStack | None = None
        self._failures: dict[str, int] = {}

    @property
    def jobs(self) -> list[CronJob]:
        return self._jobs

    def failures(self, job_id: str) -> int:
        """Consecutive failures of a job since its last success."""
        return self._failures.get(job_id, 0)

    async def start(self) -> None:
        stack = AsyncExitStack()
        scheduler = await stack.enter_async_context(AsyncScheduler())
        try:
            for job in self._jobs:
                await scheduler.add_schedule(
                    self.run_job,
                    CronTrigger.from_crontab(job.cron),
                    id=job.id,
                    kwargs={"job": job},
                )
                logger.debug("Registered job %s cron=%r", job.id, job.cron)
            await scheduler.start_in_background()
        except BaseException:
            await stack.aclose()
            raise
        self._stack = stack
        logger.info("ScheduleRunner started with %d jobs", len(self._jobs))

    async def stop(self) -> None:
        stack, self._stack = self._stack, None
        if stack is not None:
            await stack.aclose()
            logger.info("ScheduleRunner stopped")

    async def run_job(self, job: CronJob) -> None:
        """One firing of ``job``. Errors are counted and logged, never raised."""
        try:
            async with self._container(scope=Scope.UOW) as uow:
                schedule = await uow.get(job.schedule_type)
                await schedule.run(**job.params)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self._record_failure(job, e)
        else:
            self._failures.pop(job.id, None)
            logger.debug("Job %s completed", job.id)

    def _record_failure(self, job: CronJob, error: Exception) -> None:
        count = self._failures[job.id] = self._failures.get(job.id, 0) + 1
        logger.error("Job %s failed (consecutive=%d): %s", job.id, count, error)
        if count >= MAX_CONSECUTIVE_FAILURES:
            logger.critical("Job %s keeps failing: %d runs in a row", job.id, count)

    async def __aenter__(self) -> "ScheduleRunner":
        await self.start()
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.stop()
