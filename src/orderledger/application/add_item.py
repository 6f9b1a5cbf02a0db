"""Application service: Add Item use case."""

from __future__ import annotations

import logging

from orderledger.application.dto import ItemDTO
from orderledger.domain.model.item import Item
from orderledger.domain.repository.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)


class AddItemHandler:

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self._uow = uow

    def handle(self, name: str, price: int, stock: int) -> ItemDTO:
        """Add a new item to the inventory with ``version`` 0."""
        item = Item.create(name=name, price=price, stock=stock)
        with self._uow:
            self._uow.items.add(item)
            self._uow.commit()

        logger.info("Item %s '%s' added with stock %d", item.id, item.name, item.stock)
        return ItemDTO.from_domain(item)
