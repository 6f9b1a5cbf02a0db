"""Moves an order along one action of the transition table.

The status change is a compare-and-swap on the stored status, written
before any side effect of the action.  When another request moved the
order between our read and our write, the swap matches nothing and the
action is judged again against the status that request left behind.
"""

from __future__ import annotations

import logging

from orderledger.domain.exceptions import ConflictError, EntityNotFoundError
from orderledger.domain.model.order import Order, OrderAction
from orderledger.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


def transition_order(
    orders: OrderRepository, order_id: int, action: OrderAction
) -> tuple[Order, bool]:
    """Apply ``action`` to the order and persist the new status.

    Returns the order as it now stands and whether this call changed
    it.  Raises ``EntityNotFoundError`` for an unknown order and
    ``ConflictError`` when the table rejects the action.
    """
    order = _load(orders, order_id)
    expected = order.status
    if not order.apply(action):
        return order, False

    if orders.transition_status(order.id, expected, order.status, order.updated_at):
        return order, True

    logger.warning(
        "Order #%s left %s before %s could be written",
        order_id, expected.value, action.value,
    )
    current = _load(orders, order_id)
    if current.apply(action):
        # The stored status moved and then matched again; not reachable
        # with the current table, where every move leaves CREATED.
        raise ConflictError(
            f"Order #{order_id} changed, please retry", retryable=True
        )
    return current, False


def _load(orders: OrderRepository, order_id: int) -> Order:
    order = orders.get_by_id(order_id)
    if order is None:
        raise EntityNotFoundError(f"Order #{order_id} not found", entity_id=order_id)
    return order
