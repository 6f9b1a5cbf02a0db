"""Application service: Show Order use case (query)."""

from __future__ import annotations

from orderledger.application.dto import OrderDTO
from orderledger.domain.exceptions import EntityNotFoundError
from orderledger.domain.repository.unit_of_work import AbstractUnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> OrderDTO:
        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found", entity_id=order_id)
        return OrderDTO.from_domain(order)
