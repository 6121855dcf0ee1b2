"""Shared pytest fixtures for all test suites."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool

from tripcore.db.models import Base


@pytest_asyncio.fixture
async def sqlite_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Create async engine over a throwaway SQLite file with all tables.

    Usage:
        @pytest.mark.asyncio
        async def test_something(sqlite_engine):
            async with AsyncSession(sqlite_engine) as session:
                # ... test code
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'trips.db'}",
        poolclass=NullPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def sqlite_session(sqlite_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create async session on the SQLite test engine."""
    async with AsyncSession(sqlite_engine) as session:
        yield session
