"""
Item - a named, categorized catalog record.
"""

from typing import Optional
from pydantic import Field

from .base import RecordModel


class Item(RecordModel):
    """
    A catalog item.

    `id` is assigned by the repository on insert and is None until then.
    """
    id: Optional[int] = Field(default=None, ge=0)
    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    image_name: str = ""

    def with_id(self, item_id: int) -> "Item":
        """Return a copy of this item carrying the given id."""
        return self.model_validate({**self.model_dump(), "id": item_id})

    def to_document(self) -> dict:
        """Serialize for the document store (the id is never persisted)."""
        return self.model_dump(mode="json", exclude={"id"})


class ItemCollection(RecordModel):
    """
    The full contents of a document store file.

    Ids are positional: an item's id is its index in `items`.
    """
    items: list[Item] = Field(default_factory=list)

    @classmethod
    def from_document(cls, data: dict) -> "ItemCollection":
        """Load a persisted document, re-deriving each id from its position."""
        collection = cls.model_validate(data)
        return cls(items=[item.with_id(i) for i, item in enumerate(collection.items)])

    def to_document(self) -> dict:
        return {"items": [item.to_document() for item in self.items]}

    def append(self, item: Item) -> tuple["ItemCollection", Item]:
        """Return a new collection with `item` appended, and the stored item."""
        stored = item.with_id(len(self.items))
        return ItemCollection(items=[*self.items, stored]), stored
