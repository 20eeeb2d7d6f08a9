"""
Entity service errors.

A missing entity on lookup is not an error: find_by_id returns None.
These cover the write paths and backend selection.
"""

from typing import Any


class EntityServiceError(Exception):
    """Base error for entity services."""


class EntityNotFoundError(EntityServiceError):
    """Raised by edit when no record has the entity's identifier."""

    def __init__(self, entity_name: str, id: Any):
        self.entity_name = entity_name
        self.id = id
        super().__init__(f"{entity_name} with id {id!r} does not exist")


class DuplicateEntityError(EntityServiceError):
    """Raised by save when the caller-supplied identifier is already persisted."""

    def __init__(self, entity_name: str, id: Any):
        self.entity_name = entity_name
        self.id = id
        super().__init__(f"{entity_name} with id {id!r} already exists")


class MissingIdentifierError(EntityServiceError, ValueError):
    """Raised by edit when the entity has no identifier set."""

    def __init__(self, entity_name: str):
        self.entity_name = entity_name
        super().__init__(f"{entity_name} has no identifier; save it before editing")


class BackendNotFoundError(EntityServiceError, KeyError):
    """Raised when a registry has no backend under the requested name."""

    def __init__(self, kind: str, name: str, available: list[str]):
        self.kind = kind
        self.name = name
        self.available = available
        super().__init__(
            f"Unknown {kind} backend: {name!r}. Available: {', '.join(available) or 'none'}"
        )

    def __str__(self) -> str:
        return self.args[0]
