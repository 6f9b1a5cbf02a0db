"""Application service: Ship Order use case.

Marks a CREATED order as SHIPPED.  Stock was already taken at creation,
so nothing is adjusted here.
"""

from __future__ import annotations

import logging

from orderledger.application.dto import OrderDTO
from orderledger.application.order_transition import transition_order
from orderledger.domain.model.order import OrderAction
from orderledger.domain.repository.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)


class ShipOrderHandler:

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> OrderDTO:
        with self._uow:
            order, shipped = transition_order(
                self._uow.orders, order_id, OrderAction.SHIP
            )
            if shipped:
                self._uow.commit()
                logger.info("Order #%s shipped", order_id)

        return OrderDTO.from_domain(order)
