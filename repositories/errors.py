"""
Repository errors.

Not-found is a distinct outcome from storage failure so a front end can
map it to "no such resource" instead of an internal error.
"""

from typing import Union


class CatalogError(Exception):
    """Base exception for catalog repository errors."""


class NotFoundError(CatalogError):
    """The requested record does not exist."""


class ItemNotFoundError(NotFoundError):
    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"item not found: {item_id}")


class ImageNotFoundError(NotFoundError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"image not found: {path}")


class StorageError(CatalogError):
    """I/O failure, malformed persisted data, or backend failure."""


class InvalidItemIdError(CatalogError, ValueError):
    """An item id string that is not an integer."""

    def __init__(self, raw):
        self.raw = raw
        super().__init__(f"invalid item id: {raw!r}")


def parse_item_id(raw: Union[str, int]) -> int:
    """
    Parse an item id from untrusted input.

    Negative values parse fine and simply never match a record.
    """
    if isinstance(raw, bool):
        raise InvalidItemIdError(raw)
    if isinstance(raw, int):
        return raw
    if not isinstance(raw, str):
        raise InvalidItemIdError(raw)

    text = raw.strip()
    digits = text[1:] if text[:1] in ("+", "-") else text
    if not digits.isascii() or not digits.isdigit():
        raise InvalidItemIdError(raw)
    try:
        return int(text)
    except ValueError as e:
        # Longer than the interpreter allows for int conversion
        raise InvalidItemIdError(raw) from e
