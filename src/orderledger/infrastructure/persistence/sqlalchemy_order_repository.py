"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from orderledger.domain.model.order import Order, OrderLine, OrderStatus
from orderledger.domain.model.value_objects import Money, Quantity
from orderledger.domain.repository.order_repository import OrderRepository
from orderledger.infrastructure.persistence.orm import OrderLineRow, OrderRow, as_utc


class SqlAlchemyOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        row = self._session.get(OrderRow, order_id, populate_existing=True)
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Order]:
        stmt = select(OrderRow).order_by(OrderRow.created_at.desc(), OrderRow.id.desc())
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    def add(self, order: Order) -> None:
        row = self._to_row(order)
        self._session.add(row)
        self._session.flush()

        # Hand the generated keys back to the aggregate.
        order.id = row.id
        for line, line_row in zip(order.lines, row.lines):
            line.id = line_row.id

    def transition_status(
        self,
        order_id: int,
        expected: OrderStatus,
        new: OrderStatus,
        updated_at: datetime,
    ) -> int:
        result = self._session.execute(
            update(OrderRow)
            .where(OrderRow.id == order_id, OrderRow.status == expected.value)
            .values(status=new.value, updated_at=updated_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_row(order: Order) -> OrderRow:
        return OrderRow(
            status=order.status.value,
            total=order.total.amount,
            currency=order.total.currency,
            created_at=order.created_at,
            updated_at=order.updated_at,
            lines=[
                OrderLineRow(
                    item_id=line.item_id,
                    quantity=line.quantity.value,
                    unit_price=line.unit_price.amount,
                )
                for line in order.lines
            ],
        )

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        lines = [
            OrderLine(
                id=line.id,
                item_id=line.item_id,
                quantity=Quantity(line.quantity),
                unit_price=Money(line.unit_price, row.currency),
            )
            for line in row.lines
        ]
        return Order(
            id=row.id,
            lines=lines,
            total=Money(row.total, row.currency),
            status=OrderStatus(row.status),
            created_at=as_utc(row.created_at),
            updated_at=as_utc(row.updated_at),
        )
