"""Engine and session factory construction."""

import logging

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from lodge.config import DatabaseConfig
from lodge.infrastructure.persistence.tables import metadata

logger = logging.getLogger(__name__)


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (":memory:" in url or url.rstrip("/").endswith(":"))


def create_db_engine(config: DatabaseConfig) -> AsyncEngine:
    """Create the async engine for ``config.url``.

    In-memory SQLite shares one connection across sessions so every session
    sees the same database.
    """
    kwargs: dict = {"echo": config.echo}
    if _is_memory_sqlite(config.url):
        kwargs["poolclass"] = StaticPool
        kwargs["connect_args"] = {"check_same_thread": False}
    elif config.url.startswith("sqlite"):
        # Concurrent notification writes wait for the file lock instead of failing
        kwargs["connect_args"] = {"timeout": 30}
    logger.debug("Creating database engine for %s", config.url.split("@")[-1])
    return create_async_engine(config.url, **kwargs)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_tables(engine: AsyncEngine) -> None:
    """Create any missing tables."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    logger.info("Database tables ensured")
