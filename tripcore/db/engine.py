"""Database engine and session factory."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine

from tripcore.config import Settings, get_settings
from tripcore.errors import MissingRequiredConfiguration


def resolve_async_database_url(settings: Settings) -> str:
    """Return the configured database URL with an async driver.

    Raises:
        MissingRequiredConfiguration: If DATABASE_URL is unset or empty.
    """
    database_url = settings.database_url

    if not database_url:
        raise MissingRequiredConfiguration(
            "DATABASE_URL must be set to a valid connection string. "
            "Please configure the database_url setting."
        )

    # Convert sync driver URLs to their async counterparts
    if database_url.startswith("postgresql://"):
        database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    elif database_url.startswith("sqlite://"):
        database_url = database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)

    return database_url


def resolve_sync_database_url(settings: Settings) -> str:
    """Return the configured database URL with a sync driver (for alembic)."""
    database_url = resolve_async_database_url(settings)

    if database_url.startswith("sqlite+aiosqlite://"):
        database_url = database_url.replace("sqlite+aiosqlite://", "sqlite://", 1)
    elif database_url.startswith("postgresql+asyncpg://"):
        database_url = database_url.replace("postgresql+asyncpg://", "postgresql://", 1)

    return database_url


def create_async_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Create async SQLAlchemy engine from settings.

    Raises:
        MissingRequiredConfiguration: If DATABASE_URL is unset or empty.
    """
    return create_async_engine(
        resolve_async_database_url(settings), pool_pre_ping=True, echo=False
    )


# Global async engine shared by the API process
_async_engine: AsyncEngine | None = None


def get_async_engine() -> AsyncEngine:
    """Get global async engine instance."""
    global _async_engine
    if _async_engine is None:
        _async_engine = create_async_engine_from_settings(get_settings())
    return _async_engine


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for async database session.

    Yields:
        AsyncSession instance
    """
    async with AsyncSession(get_async_engine()) as session:
        yield session
