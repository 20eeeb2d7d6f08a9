"""
Database connection and session management.

Entity services call add()/flush()/refresh() only, never commit().
session_scope() commits once on success and rolls back on any exception.
"""

from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)

from entity_service.core.config import DatabaseSettings, settings


def create_engine(database: DatabaseSettings) -> AsyncEngine:
    """Create an async engine from database settings."""
    if database.is_sqlite:
        # No pool sizing for SQLite
        return create_async_engine(database.url, echo=database.echo)

    return create_async_engine(
        database.url,
        echo=database.echo,
        pool_size=database.pool_size,
        max_overflow=database.pool_overflow,
        pool_timeout=database.pool_timeout,
        pool_pre_ping=True,
    )


@lru_cache
def get_engine() -> AsyncEngine:
    """Get the application engine (created on first use)."""
    return create_engine(settings.database)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return create_session_factory(get_engine())


@asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> AsyncGenerator[AsyncSession, None]:
    """
    Unit of work around a database session.

    Usage:
        async with session_scope() as session:
            service = BookService(session)
            await service.save(Book(title="Dune"))
    """
    factory = session_factory or get_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Initialize database (create tables)."""
    from .base import Base

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db(engine: AsyncEngine | None = None) -> None:
    """Close database connections."""
    await (engine or get_engine()).dispose()
