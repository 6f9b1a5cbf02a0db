"""Application service: Update Item Price use case."""

from __future__ import annotations

from orderledger.application.dto import ItemDTO
from orderledger.domain.exceptions import EntityNotFoundError
from orderledger.domain.model.value_objects import Money
from orderledger.domain.repository.unit_of_work import AbstractUnitOfWork


class UpdateItemPriceHandler:

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self._uow = uow

    def handle(self, item_id: str, new_price: int) -> ItemDTO:
        """Update an item's price.

        This does NOT affect any existing orders — they captured a
        price snapshot at creation time.
        """
        price = Money.of(new_price)
        with self._uow:
            item = self._uow.items.get_by_id(item_id)
            if item is None:
                raise EntityNotFoundError(
                    f"Item with ID '{item_id}' not found", entity_id=item_id
                )
            item.update_price(price)
            self._uow.items.save(item)
            self._uow.commit()
        return ItemDTO.from_domain(item)
