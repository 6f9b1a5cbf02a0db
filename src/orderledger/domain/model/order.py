"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its lines. Status changes go
through one explicit transition table so that no state can slip past
the rule that SHIPPED and CANCELLED are terminal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from orderledger.domain.exceptions import ConflictError, ValidationError
from orderledger.domain.model.value_objects import Money, Quantity


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderStatus(Enum):
    CREATED = "CREATED"
    CANCELLED = "CANCELLED"
    SHIPPED = "SHIPPED"


class OrderAction(Enum):
    CANCEL = "CANCEL"
    SHIP = "SHIP"


class TransitionOutcome(Enum):
    APPLY = "APPLY"
    NOOP = "NOOP"
    REJECT = "REJECT"


# (action, current status) -> outcome. Anything not listed is rejected.
TRANSITIONS: dict[tuple[OrderAction, OrderStatus], TransitionOutcome] = {
    (OrderAction.CANCEL, OrderStatus.CREATED): TransitionOutcome.APPLY,
    (OrderAction.CANCEL, OrderStatus.CANCELLED): TransitionOutcome.NOOP,
    (OrderAction.CANCEL, OrderStatus.SHIPPED): TransitionOutcome.REJECT,
    (OrderAction.SHIP, OrderStatus.CREATED): TransitionOutcome.APPLY,
    (OrderAction.SHIP, OrderStatus.SHIPPED): TransitionOutcome.NOOP,
    (OrderAction.SHIP, OrderStatus.CANCELLED): TransitionOutcome.REJECT,
}

TARGET_STATUS: dict[OrderAction, OrderStatus] = {
    OrderAction.CANCEL: OrderStatus.CANCELLED,
    OrderAction.SHIP: OrderStatus.SHIPPED,
}


def transition_outcome(action: OrderAction, status: OrderStatus) -> TransitionOutcome:
    return TRANSITIONS.get((action, status), TransitionOutcome.REJECT)


@dataclass
class OrderLine:
    """One requested item with the price locked at order-creation time."""

    item_id: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time
    id: int | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for orders.

    Use the ``Order.create()`` factory for new orders — it computes the
    total once.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without recomputing
    anything.
    """

    id: int | None
    lines: list[OrderLine]
    total: Money
    status: OrderStatus = OrderStatus.CREATED
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(lines: list[OrderLine]) -> Order:
        if not lines:
            raise ValidationError("Order must contain at least one item")

        total = Money.zero()
        for line in lines:
            total = total + line.line_total

        now = _utcnow()
        return Order(
            id=None,
            lines=list(lines),
            total=total,
            created_at=now,
            updated_at=now,
        )

    # --- State transitions ----------------------------------------------------

    def cancel(self) -> bool:
        """Transition CREATED -> CANCELLED.

        Returns False when the order was already cancelled (nothing to
        do).  Stock release must happen in the same unit of work,
        coordinated by the application handler.
        """
        return self.apply(OrderAction.CANCEL)

    def ship(self) -> bool:
        """Transition CREATED -> SHIPPED.  Returns False if already shipped."""
        return self.apply(OrderAction.SHIP)

    def apply(self, action: OrderAction) -> bool:
        """Run ``action`` through the transition table; True if the status changed."""
        outcome = transition_outcome(action, self.status)
        if outcome is TransitionOutcome.NOOP:
            return False
        if outcome is TransitionOutcome.REJECT:
            raise ConflictError(
                f"Cannot {action.value.lower()} {self.status.value.lower()} order"
            )
        self.status = TARGET_STATUS[action]
        self.updated_at = _utcnow()
        return True
