"""Application service: List Items use case (query)."""

from __future__ import annotations

from orderledger.application.dto import ItemDTO
from orderledger.domain.repository.unit_of_work import AbstractUnitOfWork


class ListItemsHandler:

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[ItemDTO]:
        with self._uow:
            items = self._uow.items.list_all()
        return [ItemDTO.from_domain(item) for item in items]
