"""Abstract unit of work — the transaction boundary of one request.

Usage::

    with uow:
        ...  # reads and writes through uow.items / uow.orders
        uow.commit()

Leaving the block rolls back anything that was not committed, so an
exception raised half-way through a multi-line reservation leaves no
trace in the store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderledger.domain.repository.item_repository import ItemRepository
from orderledger.domain.repository.order_repository import OrderRepository


class AbstractUnitOfWork(ABC):

    items: ItemRepository
    orders: OrderRepository

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every write of this unit of work durable and visible."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted write."""
