"""SQLAlchemy-backed implementation of ItemRepository.

Stock mutations are single UPDATE statements whose WHERE clause carries
the stock predicate, so the check and the write are atomic in the
database.  The number of rows the statement matched is the answer.
Deleting an item works the same way: the "no order line points here"
check rides in the DELETE itself.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete, exists, select, update
from sqlalchemy.orm import Session

from orderledger.domain.model.item import Item
from orderledger.domain.model.value_objects import Money
from orderledger.domain.repository.item_repository import ItemRepository
from orderledger.infrastructure.persistence.orm import (
    ItemRow,
    OrderLineRow,
    as_utc,
    utcnow,
)


class SqlAlchemyItemRepository(ItemRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- ItemRepository interface ---------------------------------------------

    def get_by_id(self, item_id: str) -> Item | None:
        row = self._session.get(ItemRow, item_id, populate_existing=True)
        return self._to_domain(row) if row is not None else None

    def get_many(self, item_ids: Iterable[str]) -> dict[str, Item]:
        ids = set(item_ids)
        if not ids:
            return {}
        stmt = (
            select(ItemRow)
            .where(ItemRow.id.in_(ids))
            .execution_options(populate_existing=True)
        )
        return {row.id: self._to_domain(row) for row in self._session.scalars(stmt)}

    def list_all(self) -> list[Item]:
        stmt = select(ItemRow).order_by(ItemRow.created_at.desc(), ItemRow.id.desc())
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    def add(self, item: Item) -> None:
        self._session.add(self._to_row(item))
        self._session.flush()

    def save(self, item: Item) -> None:
        self._session.execute(
            update(ItemRow)
            .where(ItemRow.id == item.id)
            .values(
                name=item.name,
                price=item.price.amount,
                currency=item.price.currency,
                updated_at=item.updated_at,
            )
            .execution_options(synchronize_session=False)
        )

    def delete_if_unreferenced(self, item_id: str) -> int:
        referenced = exists().where(OrderLineRow.item_id == item_id)
        result = self._session.execute(
            delete(ItemRow)
            .where(ItemRow.id == item_id, ~referenced)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def decrement_stock_if_available(self, item_id: str, quantity: int) -> int:
        result = self._session.execute(
            update(ItemRow)
            .where(ItemRow.id == item_id, ItemRow.stock >= quantity)
            .values(
                stock=ItemRow.stock - quantity,
                version=ItemRow.version + 1,
                updated_at=utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def increment_stock(self, item_id: str, quantity: int) -> int:
        result = self._session.execute(
            update(ItemRow)
            .where(ItemRow.id == item_id)
            .values(
                stock=ItemRow.stock + quantity,
                version=ItemRow.version + 1,
                updated_at=utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_row(item: Item) -> ItemRow:
        return ItemRow(
            id=item.id,
            name=item.name,
            price=item.price.amount,
            currency=item.price.currency,
            stock=item.stock,
            version=item.version,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )

    @staticmethod
    def _to_domain(row: ItemRow) -> Item:
        return Item(
            id=row.id,
            name=row.name,
            price=Money(row.price, row.currency),
            stock=row.stock,
            version=row.version,
            created_at=as_utc(row.created_at),
            updated_at=as_utc(row.updated_at),
        )
