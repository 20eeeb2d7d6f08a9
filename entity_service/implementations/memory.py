"""
In-memory entity service for development and testing.
"""

from __future__ import annotations

import asyncio
import copy
from typing import Callable, TypeVar
from uuid import uuid4

import structlog

from entity_service.core.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    MissingIdentifierError,
)
from entity_service.core.hooks import HookManager
from .base import EntityServiceBase, ID

T = TypeVar("T")

logger = structlog.get_logger()


class MemoryEntityService(EntityServiceBase[T, ID]):
    """
    In-memory entity service.

    Stores deep copies keyed by identifier, so changes to a returned
    entity are not visible until passed to edit(). Iteration order is
    insertion order. Identifiers must be hashable.

    Note: Not suitable for production or multi-process deployments.
    Data is not persisted and not shared between processes.

    Usage:
        @dataclass
        class Book:
            title: str
            id: UUID | None = None

        service = MemoryEntityService[Book, UUID](entity_name="book")
        book = await service.save(Book(title="Dune"))
        same = await service.find_by_id(book.id)
    """

    def __init__(
        self,
        *,
        id_factory: Callable[[], ID] = uuid4,
        id_attribute: str | None = None,
        entity_name: str | None = None,
        hooks: HookManager | None = None,
    ):
        super().__init__(
            id_attribute=id_attribute,
            entity_name=entity_name or self.entity_name or "entity",
            hooks=hooks,
        )
        self.id_factory = id_factory
        self._store: dict[ID, T] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._store)

    async def find_all(self) -> list[T]:
        async with self._lock:
            return [copy.deepcopy(entity) for entity in self._store.values()]

    async def find_by_id(self, id: ID) -> T | None:
        async with self._lock:
            entity = self._store.get(id)
            return copy.deepcopy(entity) if entity is not None else None

    async def save(self, entity: T) -> T:
        """Store entity, assigning id_factory() when it has no identifier."""
        async with self._lock:
            id = self._get_id(entity)
            if id is None:
                id = self.id_factory()
                if id in self._store:
                    raise DuplicateEntityError(self.entity_name, id)
                self._set_id(entity, id)
            elif id in self._store:
                raise DuplicateEntityError(self.entity_name, id)

            self._store[id] = copy.deepcopy(entity)

        await self._emit("saved", id, entity=entity)
        return entity

    async def edit(self, entity: T) -> T:
        async with self._lock:
            id = self._get_id(entity)
            if id is None:
                raise MissingIdentifierError(self.entity_name)
            if id not in self._store:
                raise EntityNotFoundError(self.entity_name, id)

            self._store[id] = copy.deepcopy(entity)

        await self._emit("edited", id, entity=entity)
        return entity

    async def delete(self, entity: T) -> None:
        id = self._get_id(entity)
        if id is None:
            logger.debug("entity.delete_skipped", entity=self.entity_name, reason="no id")
            return
        await self.delete_by_id(id)

    async def delete_by_id(self, id: ID) -> None:
        async with self._lock:
            removed = self._store.pop(id, None)

        if removed is not None:
            await self._emit("deleted", id)

    async def clear(self) -> None:
        """Remove all entities without triggering hooks."""
        async with self._lock:
            self._store.clear()
