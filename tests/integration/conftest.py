"""Fixtures for SQLite-backed persistence tests."""

from pathlib import Path

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from lodge.config import DatabaseConfig
from lodge.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
    create_tables,
)


@pytest_asyncio.fixture
async def engine(tmp_path: Path):
    """Per-test engine on a fresh SQLite file."""
    engine = create_db_engine(DatabaseConfig(url=f"sqlite+aiosqlite:///{tmp_path / 'lodge.db'}"))
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(engine)


@pytest_asyncio.fixture
async def session(session_factory: async_sessionmaker[AsyncSession]):
    async with session_factory() as session:
        yield session
        await session.rollback()
