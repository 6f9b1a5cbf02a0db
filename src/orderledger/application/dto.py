"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.  Amounts are integers
in the minor currency unit.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from orderledger.domain.model.item import Item
from orderledger.domain.model.order import Order


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (item ID + quantity)."""

    item_id: str
    quantity: int


@dataclass(frozen=True)
class OrderLineDTO:
    """Output: a single order line as displayed to the user."""

    id: int | None
    item_id: str
    quantity: int
    unit_price: int
    line_total: int


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    status: str
    lines: list[OrderLineDTO]
    total: int
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def from_domain(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            status=order.status.value,
            lines=[
                OrderLineDTO(
                    id=line.id,
                    item_id=line.item_id,
                    quantity=line.quantity.value,
                    unit_price=line.unit_price.amount,
                    line_total=line.line_total.amount,
                )
                for line in order.lines
            ],
            total=order.total.amount,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


@dataclass(frozen=True)
class ItemDTO:
    """Output: an inventory row."""

    id: str
    name: str
    price: int
    stock: int
    version: int
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def from_domain(item: Item) -> ItemDTO:
        return ItemDTO(
            id=item.id,
            name=item.name,
            price=item.price.amount,
            stock=item.stock,
            version=item.version,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )
