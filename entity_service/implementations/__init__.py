"""
Entity service backends.
"""

from .memory import MemoryEntityService
from .sqlalchemy import SQLAlchemyEntityService
from .register import register_backends, create_entity_service

__all__ = [
    "MemoryEntityService",
    "SQLAlchemyEntityService",
    "register_backends",
    "create_entity_service",
]
