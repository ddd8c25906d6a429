"""
JSON file backend - stores the whole catalog as one JSON document.

File layout:
    {"items": [{"name": ..., "category": ..., "image_name": ...}, ...]}

Ids are never written; an item's id is its position in the list. This only
holds because items are never deleted.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from models import Item, ItemCollection
from .base import ItemRepository
from .errors import ItemNotFoundError, StorageError, parse_item_id

logger = logging.getLogger(__name__)


class AtomicWriter:
    """Atomic file writes, serialized per writer."""

    def __init__(self):
        self._lock = threading.Lock()

    def write_json(self, path: Path, data: dict) -> None:
        """Encode first, then write to a temp file and swap it in."""
        payload = json.dumps(data, indent=2, ensure_ascii=False)
        with self._lock:
            path.parent.mkdir(parents=True, exist_ok=True)
            temp = path.with_suffix(path.suffix + ".tmp")
            try:
                with open(temp, "w", encoding="utf-8") as f:
                    f.write(payload)
                temp.replace(path)
            except BaseException:
                temp.unlink(missing_ok=True)
                raise


class JsonItemRepository(ItemRepository):
    """
    JSON document implementation of the item repository.

    Every operation loads the whole collection. Inserts in this instance
    are serialized; writers in other processes are not.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)
        self._lock = threading.Lock()
        self._writer = AtomicWriter()
        self._closed = False
        logger.info("Opened JSON item store at %s", self._path)

    def _check_open(self) -> None:
        if self._closed:
            raise StorageError("repository is closed")

    def _load(self) -> ItemCollection:
        self._check_open()
        try:
            with open(self._path, "rb") as f:
                raw = f.read()
        except FileNotFoundError:
            return ItemCollection()
        except OSError as e:
            raise StorageError(f"cannot read {self._path}: {e}") from e

        # Empty file bootstraps an empty catalog
        if not raw.strip():
            return ItemCollection()

        try:
            return ItemCollection.from_document(json.loads(raw.decode("utf-8")))
        except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
            logger.warning("Corrupt item document %s: %s", self._path, e)
            raise StorageError(f"corrupt item document {self._path}: {e}") from e

    def insert(self, item: Item) -> Item:
        with self._lock:
            collection, stored = self._load().append(item)
            try:
                self._writer.write_json(self._path, collection.to_document())
            except (OSError, TypeError, ValueError) as e:
                raise StorageError(f"cannot write {self._path}: {e}") from e

        logger.info("Inserted item %d (%s)", stored.id, stored.name)
        return stored

    def get_all(self) -> list[Item]:
        return list(self._load().items)

    def get_by_id(self, item_id: Union[int, str]) -> Item:
        index = parse_item_id(item_id)
        items = self._load().items
        if not 0 <= index < len(items):
            raise ItemNotFoundError(index)
        return items[index]

    def search_by_name(self, keyword: str) -> list[Item]:
        logger.debug("Searching items for %r", keyword)
        return [item for item in self._load().items if keyword in item.name]

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            logger.info("Closed JSON item store at %s", self._path)
