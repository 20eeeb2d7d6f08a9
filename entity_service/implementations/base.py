"""
Plumbing shared by entity service backends.
"""

from typing import Any, Generic, TypeVar

import structlog

from entity_service.core.hooks import HookManager, hooks as default_hooks

T = TypeVar("T")
ID = TypeVar("ID")

logger = structlog.get_logger()


class EntityServiceBase(Generic[T, ID]):
    """
    Identifier access and lifecycle hooks for a backend.

    Subclasses implement the EntityService operations and call
    _emit() after every successful write.
    """

    id_attribute: str = "id"
    entity_name: str = ""

    def __init__(
        self,
        *,
        id_attribute: str | None = None,
        entity_name: str | None = None,
        hooks: HookManager | None = None,
    ):
        if id_attribute:
            self.id_attribute = id_attribute
        if entity_name:
            self.entity_name = entity_name
        self.hooks = hooks if hooks is not None else default_hooks

    def _get_id(self, entity: T) -> ID | None:
        return getattr(entity, self.id_attribute, None)

    def _set_id(self, entity: T, id: ID) -> None:
        setattr(entity, self.id_attribute, id)

    async def _emit(self, event: str, id: ID, **payload: Any) -> None:
        """Log the write and trigger <entity_name>.<event> with id and payload."""
        logger.info(f"entity.{event}", entity=self.entity_name, id=str(id))
        await self.hooks.trigger(f"{self.entity_name}.{event}", id=id, **payload)
