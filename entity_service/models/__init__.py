"""
Database models.
"""

from .base import (
    Base,
    TimestampMixin,
    UUIDMixin,
    StandardMixin,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    "StandardMixin",
]
