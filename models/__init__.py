"""
Domain models - single source of truth for catalog records.

Design principles:
- Every record defined once
- Validation at the boundary
- Backend-agnostic (repository handles persistence)
"""

from .base import RecordModel
from .item import Item, ItemCollection

__all__ = [
    "RecordModel",
    "Item",
    "ItemCollection",
]
