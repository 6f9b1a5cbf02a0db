"""Unit tests for the Order aggregate and its state machine."""

import pytest

from orderledger.domain.exceptions import ConflictError, ValidationError
from orderledger.domain.model.order import (
    TRANSITIONS,
    Order,
    OrderAction,
    OrderLine,
    OrderStatus,
    TransitionOutcome,
    transition_outcome,
)
from orderledger.domain.model.value_objects import Money, Quantity


def _make_line(item_id: str = "A", qty: int = 1, price: int = 100) -> OrderLine:
    """Helper to build a valid order line."""
    return OrderLine(item_id=item_id, quantity=Quantity(qty), unit_price=Money(price))


class TestOrderCreation:

    def test_happy_path(self):
        order = Order.create([_make_line(qty=2, price=100)])
        assert order.status == OrderStatus.CREATED
        assert len(order.lines) == 1
        assert order.total == Money(200)

    def test_id_is_none_for_new_orders(self):
        order = Order.create([_make_line()])
        assert order.id is None  # assigned by repository

    def test_total_is_sum_of_lines(self):
        order = Order.create([
            _make_line("A", qty=3, price=1500),
            _make_line("B", qty=5, price=2500),
        ])
        assert order.total == Money(17000)

    def test_zero_priced_lines_give_zero_total(self):
        assert Order.create([_make_line(price=0)]).total == Money(0)

    def test_no_lines_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Order.create([])

    def test_total_is_not_recomputed(self):
        order = Order.create([_make_line(qty=2, price=100)])
        order.lines.append(_make_line(qty=1, price=999))
        assert order.total == Money(200)


class TestOrderLine:

    def test_line_total_calculation(self):
        assert _make_line(qty=3, price=1500).line_total == Money(4500)


class TestOrderCancel:

    def test_created_to_cancelled(self):
        order = Order.create([_make_line()])
        assert order.cancel() is True
        assert order.status == OrderStatus.CANCELLED

    def test_cancel_twice_is_noop(self):
        order = Order.create([_make_line()])
        order.cancel()
        updated_at = order.updated_at
        assert order.cancel() is False
        assert order.status == OrderStatus.CANCELLED
        assert order.updated_at == updated_at

    def test_cancel_shipped_rejected(self):
        order = Order.create([_make_line()])
        order.ship()
        with pytest.raises(ConflictError, match="Cannot cancel shipped order"):
            order.cancel()
        assert order.status == OrderStatus.SHIPPED


class TestOrderShip:

    def test_created_to_shipped(self):
        order = Order.create([_make_line()])
        assert order.ship() is True
        assert order.status == OrderStatus.SHIPPED

    def test_ship_twice_is_noop(self):
        order = Order.create([_make_line()])
        order.ship()
        assert order.ship() is False

    def test_ship_cancelled_rejected(self):
        order = Order.create([_make_line()])
        order.cancel()
        with pytest.raises(ConflictError, match="Cannot ship cancelled order"):
            order.ship()


class TestTransitionTable:

    def test_every_action_and_status_is_listed(self):
        for action in OrderAction:
            for status in OrderStatus:
                assert (action, status) in TRANSITIONS

    def test_terminal_states_never_apply(self):
        for action in OrderAction:
            for status in (OrderStatus.CANCELLED, OrderStatus.SHIPPED):
                assert transition_outcome(action, status) is not TransitionOutcome.APPLY

    def test_cancelled_stays_cancelled_for_cancel(self):
        assert (
            transition_outcome(OrderAction.CANCEL, OrderStatus.CANCELLED)
            is TransitionOutcome.NOOP
        )
