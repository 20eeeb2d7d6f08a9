"""
Entity service protocol.
Implementations: SQLAlchemyEntityService, MemoryEntityService
"""
from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable


T = TypeVar("T")
ID = TypeVar("ID")


@runtime_checkable
class EntityService(Protocol[T, ID]):
    """
    Protocol for entity-backed services.

    T is the entity type, ID the type of its identifier. Callers depend on
    this protocol instead of a concrete storage mechanism.

    Example implementations:
    - SQLAlchemyEntityService: async SQLAlchemy session
    - MemoryEntityService: in-process dict (for testing/dev)
    """

    async def find_all(self) -> list[T]:
        """Get every persisted entity. Empty list if there are none."""
        ...

    async def find_by_id(self, id: ID) -> T | None:
        """Get entity by identifier. Returns None if not found."""
        ...

    async def save(self, entity: T) -> T:
        """Persist a new entity. Returns it with its identifier populated."""
        ...

    async def edit(self, entity: T) -> T:
        """Update an existing entity. Returns the updated entity."""
        ...

    async def delete(self, entity: T) -> None:
        """Delete the persisted record for entity."""
        ...

    async def delete_by_id(self, id: ID) -> None:
        """Delete the record with this identifier, if any."""
        ...
