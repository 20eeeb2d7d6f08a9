"""
Entity service backed by an async SQLAlchemy session.
"""

from typing import Any, Type, TypeVar

import structlog
from sqlalchemy import Select, select, func
from sqlalchemy.ext.asyncio import AsyncSession

from entity_service.core.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    MissingIdentifierError,
)
from entity_service.core.hooks import HookManager
from entity_service.models.base import Base
from .base import EntityServiceBase, ID

ModelT = TypeVar("ModelT", bound=Base)

logger = structlog.get_logger()


class SQLAlchemyEntityService(EntityServiceBase[ModelT, ID]):
    """
    Entity service over one AsyncSession.

    The service flushes but never commits; wrap calls in session_scope()
    (or your own transaction) to make writes durable. Not safe for
    concurrent use, because an AsyncSession is not.

    Usage:
        class BookService(SQLAlchemyEntityService[Book, UUID]):
            model = Book

        async with session_scope() as session:
            service = BookService(session)
            book = await service.save(Book(title="Dune"))
            same = await service.find_by_id(book.id)
    """

    model: Type[ModelT]

    def __init__(
        self,
        db: AsyncSession,
        *,
        model: Type[ModelT] | None = None,
        id_attribute: str | None = None,
        entity_name: str | None = None,
        hooks: HookManager | None = None,
    ):
        if model is not None:
            self.model = model
        super().__init__(
            id_attribute=id_attribute,
            entity_name=entity_name or self.entity_name or self.model.__name__.lower(),
            hooks=hooks,
        )
        self.db = db

    def _base_query(self) -> Select:
        """Base query - override to add default filters or ordering."""
        return select(self.model)

    @property
    def _id_column(self) -> Any:
        return getattr(self.model, self.id_attribute)

    async def _exists(self, id: ID) -> bool:
        """Check for a row with this id, ignoring _base_query() filters."""
        stmt = select(func.count()).select_from(self.model).where(self._id_column == id)
        count = await self.db.scalar(stmt)
        return (count or 0) > 0

    async def find_all(self) -> list[ModelT]:
        result = await self.db.execute(self._base_query())
        return list(result.scalars().all())

    async def find_by_id(self, id: ID) -> ModelT | None:
        if id is None:
            return None
        stmt = self._base_query().where(self._id_column == id)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def save(self, entity: ModelT) -> ModelT:
        """Insert entity. Column defaults fill in an unset identifier."""
        id = self._get_id(entity)
        if id is not None and await self._exists(id):
            raise DuplicateEntityError(self.entity_name, id)

        self.db.add(entity)
        await self.db.flush()
        await self.db.refresh(entity)

        await self._emit("saved", self._get_id(entity), entity=entity)
        return entity

    async def edit(self, entity: ModelT) -> ModelT:
        """
        Copy entity's state onto the persisted row with the same id.

        Returns the session's persistent instance, which may be a
        different object than the one passed in.
        """
        id = self._get_id(entity)
        if id is None:
            raise MissingIdentifierError(self.entity_name)
        if await self.find_by_id(id) is None:
            raise EntityNotFoundError(self.entity_name, id)

        persistent = await self.db.merge(entity)
        await self.db.flush()
        await self.db.refresh(persistent)

        await self._emit("edited", id, entity=persistent)
        return persistent

    async def delete(self, entity: ModelT) -> None:
        id = self._get_id(entity)
        if id is None:
            logger.debug("entity.delete_skipped", entity=self.entity_name, reason="no id")
            return
        await self.delete_by_id(id)

    async def delete_by_id(self, id: ID) -> None:
        entity = await self.find_by_id(id)
        if entity is None:
            return

        await self.db.delete(entity)
        await self.db.flush()

        await self._emit("deleted", id)
