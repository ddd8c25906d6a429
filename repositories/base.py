"""
Repository base class - defines the interface.
"""

from abc import ABC, abstractmethod
from typing import Union

from models import Item


class ItemRepository(ABC):
    """
    Abstract item repository.

    Backends are chosen once, at construction. Consumers only see this
    interface.
    """

    @abstractmethod
    def insert(self, item: Item) -> Item:
        """Persist a new item. Returns the stored item with its assigned id."""
        pass

    @abstractmethod
    def get_all(self) -> list[Item]:
        """List all items in backend-natural order."""
        pass

    @abstractmethod
    def get_by_id(self, item_id: Union[int, str]) -> Item:
        """
        Get item by id.

        Raises ItemNotFoundError when no item matches, InvalidItemIdError
        when a string id is not numeric.
        """
        pass

    @abstractmethod
    def search_by_name(self, keyword: str) -> list[Item]:
        """Items whose name contains `keyword` (case-sensitive)."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the storage handle."""
        pass

    def __enter__(self) -> "ItemRepository":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
