"""
Pytest fixtures for testing.

Provides:
- Async database engine and session with rollback
- A fresh hook manager per test
- Entity services for both backends
"""

from typing import AsyncGenerator, Callable
from uuid import UUID

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from entity_service.core.hooks import HookManager
from entity_service.implementations.memory import MemoryEntityService
from entity_service.models.base import Base
from tests.models import Book, BookRecord, BookService


# Test database URL (SQLite in-memory for speed)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture(scope="function")
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """
    Create database session with automatic rollback.

    Each test gets a fresh transaction that's rolled back after.
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def hook_manager() -> HookManager:
    """Isolated hook manager so tests never touch the global one."""
    return HookManager()


@pytest.fixture
def book_service(db: AsyncSession, hook_manager: HookManager) -> BookService:
    return BookService(db, hooks=hook_manager)


@pytest.fixture
def memory_service(hook_manager: HookManager) -> MemoryEntityService[BookRecord, UUID]:
    return MemoryEntityService(entity_name="book", hooks=hook_manager)


# ============ Backend-parametrized Fixtures ============


@pytest.fixture(params=["sqlalchemy", "memory"])
def backend(request) -> str:
    return request.param


@pytest.fixture
def service(backend: str, db: AsyncSession, hook_manager: HookManager):
    """Entity service for the current backend; both are named `book`."""
    if backend == "sqlalchemy":
        return BookService(db, hooks=hook_manager)
    return MemoryEntityService(entity_name="book", hooks=hook_manager)


@pytest.fixture
def new_book(backend: str) -> Callable[..., Book | BookRecord]:
    """Factory building an unsaved entity of the backend's type."""

    def make(title: str, author: str | None = None, id: UUID | None = None):
        entity_cls = Book if backend == "sqlalchemy" else BookRecord
        entity = entity_cls(title=title, author=author)
        if id is not None:
            entity.id = id
        return entity

    return make
