"""
Core interfaces.
"""

from .entity import EntityService

__all__ = ["EntityService"]
