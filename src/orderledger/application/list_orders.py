"""Application service: List Orders use case (query)."""

from __future__ import annotations

from orderledger.application.dto import OrderDTO
from orderledger.domain.repository.unit_of_work import AbstractUnitOfWork


class ListOrdersHandler:

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[OrderDTO]:
        """Every order with its lines, newest first."""
        with self._uow:
            orders = self._uow.orders.list_all()
        return [OrderDTO.from_domain(order) for order in orders]
