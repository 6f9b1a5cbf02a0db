"""Abstract repository for the Item aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Besides plain reads and writes the store must offer a
compare-and-swap on the stock counter: the predicate check and the
write happen as one atomic store operation, and the caller learns how
many rows were actually affected.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from orderledger.domain.model.item import Item


class ItemRepository(ABC):

    @abstractmethod
    def get_by_id(self, item_id: str) -> Item | None:
        """Return an item by its ID, or None if not found."""

    @abstractmethod
    def get_many(self, item_ids: Iterable[str]) -> dict[str, Item]:
        """Return the existing items among ``item_ids`` in one read, keyed by ID."""

    @abstractmethod
    def list_all(self) -> list[Item]:
        """Return every item, newest first."""

    @abstractmethod
    def add(self, item: Item) -> None:
        """Persist a new item."""

    @abstractmethod
    def save(self, item: Item) -> None:
        """Persist catalogue fields (name, price) of an existing item.

        Never writes ``stock`` or ``version``.
        """

    @abstractmethod
    def delete_if_unreferenced(self, item_id: str) -> int:
        """Remove an item, only where no order line points at it.

        Returns the number of rows affected (0 or 1).
        """

    @abstractmethod
    def decrement_stock_if_available(self, item_id: str, quantity: int) -> int:
        """stock -= quantity, version += 1, only where stock >= quantity.

        Returns the number of rows affected (0 or 1).
        """

    @abstractmethod
    def increment_stock(self, item_id: str, quantity: int) -> int:
        """stock += quantity, version += 1.  Returns rows affected."""
