"""
SQLite backend - normalized categories and items tables.

Items reference their category by id; reads join the category name back
into the flat Item shape.
"""

import logging
import sqlite3
import threading
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from models import Item
from .base import ItemRepository
from .errors import ItemNotFoundError, StorageError, parse_item_id

logger = logging.getLogger(__name__)


SCHEMA = """
CREATE TABLE IF NOT EXISTS categories (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE
);

CREATE TABLE IF NOT EXISTS items (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    category_id INTEGER NOT NULL,
    image_name TEXT NOT NULL,
    FOREIGN KEY (category_id) REFERENCES categories (id) ON DELETE CASCADE
);
"""

MAX_ROWID = 2**63 - 1

SELECT_ITEMS = """
SELECT items.id, items.name, categories.name AS category, items.image_name
FROM items
INNER JOIN categories ON items.category_id = categories.id
"""


def _row_to_item(row: sqlite3.Row) -> Item:
    return Item(
        id=row["id"],
        name=row["name"],
        category=row["category"],
        image_name=row["image_name"],
    )


class SqliteItemRepository(ItemRepository):
    """
    SQLite implementation of the item repository.

    The connection is owned by this instance and released by close().
    """

    def __init__(self, db_path: Union[str, Path], busy_timeout: float = 5.0):
        self._db_path = str(db_path)
        self._lock = threading.RLock()
        self._conn = None

        if self._db_path != ":memory:":
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)

        try:
            # Autocommit mode; insert() manages its own transaction
            conn = sqlite3.connect(
                self._db_path,
                timeout=busy_timeout,
                isolation_level=None,
                check_same_thread=False,
            )
        except sqlite3.Error as e:
            raise StorageError(f"cannot open database {self._db_path}: {e}") from e

        try:
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")
            conn.executescript(SCHEMA)
        except sqlite3.Error as e:
            conn.close()
            raise StorageError(f"cannot create schema in {self._db_path}: {e}") from e

        self._conn = conn
        logger.info("Opened SQLite item store at %s", self._db_path)

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageError("repository is closed")
        return self._conn

    def _resolve_category(self, conn: sqlite3.Connection, name: str) -> int:
        """Look up a category id by name, creating the row if missing."""
        row = conn.execute(
            "SELECT id FROM categories WHERE name = ?", (name,)
        ).fetchone()
        if row is not None:
            return row["id"]

        cursor = conn.execute("INSERT INTO categories (name) VALUES (?)", (name,))
        logger.info("Created category %d (%s)", cursor.lastrowid, name)
        return cursor.lastrowid

    def insert(self, item: Item) -> Item:
        with self._lock:
            conn = self._connection()
            try:
                # Hold the write lock across category lookup and item insert
                conn.execute("BEGIN IMMEDIATE")
            except sqlite3.Error as e:
                raise StorageError(f"cannot begin transaction: {e}") from e

            try:
                category_id = self._resolve_category(conn, item.category)
                cursor = conn.execute(
                    "INSERT INTO items (name, category_id, image_name) VALUES (?, ?, ?)",
                    (item.name, category_id, item.image_name),
                )
                item_id = cursor.lastrowid
                conn.execute("COMMIT")
            except sqlite3.Error as e:
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                raise StorageError(f"cannot insert item {item.name!r}: {e}") from e

        stored = item.with_id(item_id)
        logger.info("Inserted item %d (%s)", stored.id, stored.name)
        return stored

    def _query(self, sql: str, params: tuple = ()) -> list[Item]:
        with self._lock:
            conn = self._connection()
            try:
                rows = conn.execute(sql, params).fetchall()
            except sqlite3.Error as e:
                raise StorageError(f"item query failed: {e}") from e
        try:
            return [_row_to_item(row) for row in rows]
        except ValidationError as e:
            raise StorageError(f"invalid item row: {e}") from e

    def get_all(self) -> list[Item]:
        return self._query(SELECT_ITEMS + " ORDER BY items.id")

    def get_by_id(self, item_id: Union[int, str]) -> Item:
        item_id = parse_item_id(item_id)
        logger.debug("Fetching item %d", item_id)
        if not 0 <= item_id <= MAX_ROWID:
            raise ItemNotFoundError(item_id)
        items = self._query(SELECT_ITEMS + " WHERE items.id = ?", (item_id,))
        if not items:
            raise ItemNotFoundError(item_id)
        return items[0]

    def search_by_name(self, keyword: str) -> list[Item]:
        # instr() is case-sensitive, LIKE is not
        logger.debug("Searching items for %r", keyword)
        return self._query(
            SELECT_ITEMS + " WHERE instr(items.name, ?) > 0 ORDER BY items.id",
            (keyword,),
        )

    def category_id(self, name: str) -> Optional[int]:
        """Id of the named category, or None if no item has used it yet."""
        with self._lock:
            conn = self._connection()
            try:
                row = conn.execute(
                    "SELECT id FROM categories WHERE name = ?", (name,)
                ).fetchone()
            except sqlite3.Error as e:
                raise StorageError(f"category query failed: {e}") from e
        return None if row is None else row["id"]

    def close(self) -> None:
        with self._lock:
            if self._conn is None:
                return
            try:
                self._conn.close()
            except sqlite3.Error as e:
                raise StorageError(f"cannot close database {self._db_path}: {e}") from e
            finally:
                self._conn = None
        logger.info("Closed SQLite item store at %s", self._db_path)
