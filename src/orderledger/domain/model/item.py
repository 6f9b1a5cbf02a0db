"""Item aggregate — a sellable inventory row.

Items live independently of orders. Their catalogue fields (name, price)
change through the aggregate; their ``stock`` and ``version`` change only
through the conditional writes driven by the InventoryLedger.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from orderledger.domain.exceptions import ValidationError
from orderledger.domain.model.value_objects import Money

MAX_NAME_LENGTH = 200


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Item:
    """Aggregate root for inventory.

    Invariants:
    - ``stock`` is never negative
    - ``version`` grows by one on every stock mutation and never decreases
    """

    id: str
    name: str
    price: Money
    stock: int
    version: int = 0
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    @staticmethod
    def create(name: str, price: int, stock: int) -> Item:
        """Create a new item, enforcing all invariants."""
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Item name is required")
        name = name.strip()
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(
                f"Item name must be at most {MAX_NAME_LENGTH} characters"
            )
        if not isinstance(stock, int) or isinstance(stock, bool):
            raise ValidationError("Stock must be an integer")
        if stock < 0:
            raise ValidationError("Stock cannot be negative")

        now = _utcnow()
        return Item(
            id=uuid.uuid4().hex,
            name=name,
            price=Money.of(price),
            stock=stock,
            created_at=now,
            updated_at=now,
        )

    def update_price(self, new_price: Money) -> None:
        """Change the catalogue price.

        Existing orders keep the unit price they locked at creation.
        """
        self.price = new_price
        self.updated_at = _utcnow()
