"""Application service: Create Order use case.

Everything happens inside one unit of work: either every line's stock
is decremented and the order exists, or nothing changed.

The stock pre-check is a plain read and only serves to fail fast with a
helpful message.  Correctness comes from the conditional write inside
``InventoryLedger.reserve``; the unit of work, not the individual
reserve calls, makes the whole order atomic.
"""

from __future__ import annotations

import logging
from collections import Counter

from orderledger.application.dto import OrderDTO, OrderItemSpec
from orderledger.domain.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ValidationError,
)
from orderledger.domain.model.order import Order, OrderLine
from orderledger.domain.model.value_objects import Quantity
from orderledger.domain.repository.unit_of_work import AbstractUnitOfWork
from orderledger.domain.service.inventory_ledger import InventoryLedger

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self._uow = uow

    def handle(self, item_specs: list[OrderItemSpec]) -> OrderDTO:
        """Create a new order.

        Steps:
        1. Read every referenced item in one batch (fail if missing or short).
        2. Reserve stock line by line with conditional writes.
        3. Build OrderLines with the prices read in step 1 (snapshot).
        4. Persist order and lines, commit, return a DTO.
        """
        if not item_specs:
            raise ValidationError("Order must contain at least one item")
        quantities = [Quantity(spec.quantity) for spec in item_specs]

        with self._uow:
            items = self._uow.items.get_many(spec.item_id for spec in item_specs)

            requested: Counter[str] = Counter()
            for spec in item_specs:
                requested[spec.item_id] += spec.quantity

            for spec in item_specs:
                item = items.get(spec.item_id)
                if item is None:
                    raise EntityNotFoundError(
                        f"Item not found: {spec.item_id}", entity_id=spec.item_id
                    )
                if item.stock < requested[spec.item_id]:
                    logger.warning("Order rejected, %s is out of stock", spec.item_id)
                    raise ConflictError(
                        f"Out of stock: {item.name}",
                        item_id=spec.item_id,
                        retryable=True,
                    )

            ledger = InventoryLedger(self._uow.items)
            for spec, qty in zip(item_specs, quantities):
                ledger.reserve(spec.item_id, qty.value)

            lines = [
                OrderLine(
                    item_id=spec.item_id,
                    quantity=qty,
                    unit_price=items[spec.item_id].price,  # <-- price snapshot
                )
                for spec, qty in zip(item_specs, quantities)
            ]
            order = Order.create(lines)
            self._uow.orders.add(order)
            self._uow.commit()

        logger.info(
            "Order #%s created with %d line(s), total %s",
            order.id, len(order.lines), order.total,
        )
        return OrderDTO.from_domain(order)
