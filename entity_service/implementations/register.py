"""
Register entity service backends and build services from settings.

Import this module (or call register_backends()) before using
create_entity_service().
"""

from typing import Any

from entity_service.core.config import settings
from entity_service.core.interfaces import EntityService
from entity_service.core.registry import entity_backends


def register_backends() -> None:
    """Register all entity service backends."""

    def create_sqlalchemy_service(**config):
        from entity_service.implementations.sqlalchemy import SQLAlchemyEntityService

        session = config.pop("session", None)
        if session is None:
            raise ValueError("sqlalchemy backend requires a 'session'")
        return SQLAlchemyEntityService(
            session,
            model=config.get("model"),
            id_attribute=config.get("id_attribute"),
            entity_name=config.get("entity_name"),
            hooks=config.get("hooks"),
        )

    def create_memory_service(**config):
        from entity_service.implementations.memory import MemoryEntityService

        model = config.get("model")
        kwargs: dict[str, Any] = {
            "id_attribute": config.get("id_attribute"),
            "entity_name": config.get("entity_name")
            or (model.__name__.lower() if model is not None else None),
            "hooks": config.get("hooks"),
        }
        if config.get("id_factory") is not None:
            kwargs["id_factory"] = config["id_factory"]
        return MemoryEntityService(**kwargs)

    entity_backends.register("sqlalchemy", create_sqlalchemy_service, default=True)
    entity_backends.register("memory", create_memory_service)


def create_entity_service(
    model: type,
    *,
    backend: str | None = None,
    **config: Any,
) -> EntityService:
    """
    Build an entity service for model.

    Args:
        model: Entity class served
        backend: Backend name; defaults to settings.entity.backend
        **config: Backend options (session, id_attribute, entity_name,
            hooks, id_factory)
    """
    if "sqlalchemy" not in entity_backends or "memory" not in entity_backends:
        register_backends()
    backend_config = settings.get_backend_config()
    config.setdefault("id_attribute", backend_config["id_attribute"])
    return entity_backends.get(backend or backend_config["backend"], model=model, **config)
