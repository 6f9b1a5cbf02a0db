"""Application service: Cancel Order use case.

Cancelling a CREATED order marks it CANCELLED and releases every line's
stock in one unit of work.  The status is swapped first, conditionally
on it still being CREATED, so of two overlapping cancels only one gets
to release stock.  Cancelling an already CANCELLED order is a
successful no-op that writes nothing.  SHIPPED orders cannot be
cancelled.
"""

from __future__ import annotations

import logging

from orderledger.application.dto import OrderDTO
from orderledger.application.order_transition import transition_order
from orderledger.domain.model.order import OrderAction
from orderledger.domain.repository.unit_of_work import AbstractUnitOfWork
from orderledger.domain.service.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)


class CancelOrderHandler:

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> OrderDTO:
        with self._uow:
            # Raises ConflictError for SHIPPED orders before any stock moves.
            order, cancelled = transition_order(
                self._uow.orders, order_id, OrderAction.CANCEL
            )
            if not cancelled:
                logger.info("Order #%s already cancelled", order_id)
                return OrderDTO.from_domain(order)

            ledger = InventoryLedger(self._uow.items)
            for line in order.lines:
                ledger.release(line.item_id, line.quantity.value)

            self._uow.commit()

        logger.info("Order #%s cancelled, stock released", order_id)
        return OrderDTO.from_domain(order)
