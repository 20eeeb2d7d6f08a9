"""
Tests for the SQLAlchemy backend.
"""

import pytest
import structlog
from sqlalchemy.exc import IntegrityError

from entity_service.implementations.sqlalchemy import SQLAlchemyEntityService
from entity_service.core.config import DatabaseSettings
from entity_service.models.database import (
    close_db,
    create_engine,
    create_session_factory,
    init_db,
    session_scope,
)
from tests.models import Book, BookService, Shelf, Tag, TagService


@pytest.mark.asyncio
async def test_database_assigns_integer_id(db, hook_manager):
    service = TagService(db, hooks=hook_manager)

    tag = await service.save(Tag(name="scifi"))

    assert isinstance(tag.id, int)
    assert (await service.find_by_id(tag.id)).name == "scifi"


@pytest.mark.asyncio
async def test_base_query_override_orders_results(db, hook_manager):
    service = TagService(db, hooks=hook_manager)
    for name in ("drama", "comedy", "horror"):
        await service.save(Tag(name=name))

    assert [t.name for t in await service.find_all()] == ["comedy", "drama", "horror"]


@pytest.mark.asyncio
async def test_natural_key_id_attribute(db, hook_manager):
    service = SQLAlchemyEntityService(db, model=Shelf, id_attribute="code", hooks=hook_manager)

    await service.save(Shelf(code="A1", label="Fiction"))
    await service.edit(Shelf(code="A1", label="Fiction & Fantasy"))

    assert service.entity_name == "shelf"
    assert (await service.find_by_id("A1")).label == "Fiction & Fantasy"

    await service.delete_by_id("A1")
    assert await service.find_by_id("A1") is None


@pytest.mark.asyncio
async def test_edit_persistent_instance_in_place(book_service):
    book = await book_service.save(Book(title="Dune"))
    book.author = "Frank Herbert"

    updated = await book_service.edit(book)

    assert updated is book
    assert (await book_service.find_by_id(book.id)).author == "Frank Herbert"


@pytest.mark.asyncio
async def test_save_populates_timestamps(book_service):
    book = await book_service.save(Book(title="Dune"))

    assert book.created_at is not None
    assert book.updated_at is not None
    assert set(book.to_dict()) == {"id", "title", "author", "created_at", "updated_at"}


@pytest.mark.asyncio
async def test_storage_errors_propagate(db, hook_manager):
    service = TagService(db, hooks=hook_manager)

    with pytest.raises(IntegrityError):
        await service.save(Tag(name=None))


@pytest.mark.asyncio
async def test_writes_are_logged(book_service):
    with structlog.testing.capture_logs() as logs:
        book = await book_service.save(Book(title="Dune"))

    assert {"event": "entity.saved", "entity": "book", "id": str(book.id), "log_level": "info"} in logs


@pytest.mark.asyncio
async def test_session_scope_commits(session_factory, hook_manager):
    async with session_scope(session_factory) as session:
        book = await BookService(session, hooks=hook_manager).save(Book(title="Dune"))

    async with session_factory() as session:
        assert await BookService(session, hooks=hook_manager).find_by_id(book.id) is not None


@pytest.mark.asyncio
async def test_session_scope_rolls_back_on_error(session_factory, hook_manager):
    with pytest.raises(RuntimeError):
        async with session_scope(session_factory) as session:
            await BookService(session, hooks=hook_manager).save(Book(title="Dune"))
            raise RuntimeError("boom")

    async with session_factory() as session:
        assert await BookService(session, hooks=hook_manager).find_all() == []


@pytest.mark.asyncio
async def test_engine_from_settings_and_init_db(hook_manager):
    engine = create_engine(DatabaseSettings(url="sqlite+aiosqlite:///:memory:"))
    await init_db(engine)

    async with session_scope(create_session_factory(engine)) as session:
        service = TagService(session, hooks=hook_manager)
        await service.save(Tag(name="scifi"))
        assert [t.name for t in await service.find_all()] == ["scifi"]

    await close_db(engine)
