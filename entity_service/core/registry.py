"""
Registry for named backend implementations.
"""
from __future__ import annotations

from typing import TypeVar, Generic, Callable
import logging

from .exceptions import BackendNotFoundError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BackendRegistry(Generic[T]):
    """
    Generic registry mapping backend names to factories.

    Example usage:
    ```python
    registry = BackendRegistry[EntityService]("entity")

    registry.register("sqlalchemy", create_sqlalchemy_service, default=True)
    registry.register("memory", create_memory_service)

    service = registry.get("memory", model=Book)
    ```
    """

    def __init__(self, name: str):
        self.name = name
        self._factories: dict[str, Callable[..., T]] = {}
        self._default: str | None = None

    def register(
        self,
        name: str,
        factory: Callable[..., T],
        *,
        default: bool = False,
    ) -> None:
        """
        Register a backend implementation.

        Args:
            name: Unique identifier for this implementation
            factory: Callable that creates the implementation
            default: Set as default implementation
        """
        if name in self._factories:
            logger.warning(f"Overwriting existing {self.name} backend: {name}")

        self._factories[name] = factory

        if default or self._default is None:
            self._default = name

        logger.info(f"Registered {self.name} backend: {name}")

    def unregister(self, name: str) -> bool:
        """Remove a backend. Returns False if it was not registered."""
        if name not in self._factories:
            return False
        del self._factories[name]
        if self._default == name:
            self._default = next(iter(self._factories), None)
        return True

    def get(self, name: str | None = None, **config) -> T:
        """
        Create a backend instance.

        Args:
            name: Backend name, or None for the default
            **config: Passed to the factory
        """
        name = name or self._default
        if name is None or name not in self._factories:
            raise BackendNotFoundError(self.name, str(name), self.list())
        return self._factories[name](**config)

    @property
    def default(self) -> str | None:
        return self._default

    def list(self) -> list[str]:
        """List registered backend names."""
        return sorted(self._factories)

    def __contains__(self, name: str) -> bool:
        return name in self._factories


# Global registry for entity service backends
entity_backends: BackendRegistry = BackendRegistry("entity")
