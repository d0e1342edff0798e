"""Process lifecycle: logging, schema, catalog validation, schedules."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from dishka import AsyncContainer
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine

from lodge.application.di import create_container
from lodge.config import Config, configure_logging
from lodge.domain.shared.authorization.catalog import PermissionCatalog
from lodge.infrastructure.persistence.database import create_tables
from lodge.infrastructure.schedule import ScheduleRunner, housekeeping_jobs

logger = logging.getLogger(__name__)


def _ensure_sqlite_dir(url: str) -> None:
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite" and parsed.database not in (None, "", ":memory:"):
        Path(parsed.database).expanduser().parent.mkdir(parents=True, exist_ok=True)


@asynccontextmanager
async def lifespan(config: Config | None = None) -> AsyncIterator[AsyncContainer]:
    """Open the container and background schedules; close both on exit."""
    config = config or Config()  # type: ignore[call-arg]
    configure_logging(config.logging)
    _ensure_sqlite_dir(config.database.url)

    container = create_container(config)
    try:
        # Fails fast on an incomplete permission catalog
        await container.get(PermissionCatalog)

        if config.database.create_tables:
            await create_tables(await container.get(AsyncEngine))

        if config.scheduler.enabled:
            async with ScheduleRunner(container, housekeeping_jobs(config.scheduler)):
                yield container
        else:
            yield container
    finally:
        await container.close()
        logger.info("%s stopped", config.server.name)


async def serve(config: Config | None = None) -> None:
    """Run until cancelled, executing housekeeping schedules."""
    async with lifespan(config):
        logger.info("Lodge background service running")
        await asyncio.Event().wait()
