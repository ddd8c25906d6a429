"""
Repository layer - abstracts item persistence.

Usage:
    from repositories import create_repository

    with create_repository() as repo:   # Backend from settings
        item = repo.insert(Item(name="shirt", category="fashion"))
        repo.get_by_id(item.id)

Backends are chosen once, at construction.
"""

from typing import Optional

from config import CatalogSettings, load_settings
from .base import ItemRepository
from .errors import (
    CatalogError,
    ImageNotFoundError,
    InvalidItemIdError,
    ItemNotFoundError,
    NotFoundError,
    StorageError,
    parse_item_id,
)
from .images import read_image, store_image
from .json_backend import JsonItemRepository
from .sqlite_backend import SqliteItemRepository

BACKENDS = ("json", "sqlite")


def create_repository(
    backend: Optional[str] = None,
    settings: Optional[CatalogSettings] = None,
) -> ItemRepository:
    """Open a new repository instance for the configured backend."""
    settings = settings or load_settings()
    backend = backend or settings.backend

    if backend not in BACKENDS:
        raise ValueError(f"Unknown backend: {backend}")

    if backend == "json":
        return JsonItemRepository(settings.json_path)
    return SqliteItemRepository(settings.db_path, busy_timeout=settings.busy_timeout)


__all__ = [
    "BACKENDS",
    "create_repository",
    "ItemRepository",
    "JsonItemRepository",
    "SqliteItemRepository",
    "CatalogError",
    "NotFoundError",
    "ItemNotFoundError",
    "ImageNotFoundError",
    "StorageError",
    "InvalidItemIdError",
    "parse_item_id",
    "store_image",
    "read_image",
]
