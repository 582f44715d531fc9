"""Async database engine and session factory management."""
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from bulk_transfer.db import Base, models  # noqa: F401  # Ensure models are imported for metadata registration

from .settings import get_settings

_settings = get_settings()

ENGINE = create_async_engine(_settings.database_url, future=True, pool_pre_ping=True)
SessionLocal = async_sessionmaker(bind=ENGINE, class_=AsyncSession, expire_on_commit=False, autoflush=False)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Provide the session factory stores open their per-call sessions from."""

    return SessionLocal


async def create_database_schema() -> None:
    """Create database tables based on ORM metadata."""

    async with ENGINE.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
