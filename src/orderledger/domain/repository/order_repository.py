"""Abstract repository for the Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from orderledger.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order with its lines, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order with its lines, newest first."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order and its lines, assigning ``order.id``."""

    @abstractmethod
    def transition_status(
        self,
        order_id: int,
        expected: OrderStatus,
        new: OrderStatus,
        updated_at: datetime,
    ) -> int:
        """status = new, only where the stored status is still ``expected``.

        Returns the number of rows affected (0 or 1).
        """
