"""
Generic entity service contract with SQLAlchemy and in-memory backends.
"""

from entity_service.core.exceptions import (
    EntityServiceError,
    EntityNotFoundError,
    DuplicateEntityError,
    MissingIdentifierError,
    BackendNotFoundError,
)
from entity_service.core.interfaces import EntityService
from entity_service.implementations import (
    MemoryEntityService,
    SQLAlchemyEntityService,
    create_entity_service,
)

__version__ = "0.1.0"

__all__ = [
    "EntityService",
    "MemoryEntityService",
    "SQLAlchemyEntityService",
    "create_entity_service",
    "EntityServiceError",
    "EntityNotFoundError",
    "DuplicateEntityError",
    "MissingIdentifierError",
    "BackendNotFoundError",
]
