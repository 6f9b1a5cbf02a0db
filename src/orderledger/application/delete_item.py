"""Application service: Delete Item use case.

Items referenced by any order line stay: cancelling that order must be
able to give the stock back.  The reference check is part of the
delete itself, so an order placed after our read still blocks it.
"""

from __future__ import annotations

import logging

from orderledger.domain.exceptions import ConflictError, EntityNotFoundError
from orderledger.domain.repository.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)


class DeleteItemHandler:

    def __init__(self, uow: AbstractUnitOfWork) -> None:
        self._uow = uow

    def handle(self, item_id: str) -> None:
        with self._uow:
            self._ensure_exists(item_id)
            if not self._uow.items.delete_if_unreferenced(item_id):
                # Gone in the meantime, or an order line points at it.
                self._ensure_exists(item_id)
                raise ConflictError(
                    f"Item '{item_id}' is referenced by existing orders",
                    item_id=item_id,
                )
            self._uow.commit()

        logger.info("Item %s deleted", item_id)

    def _ensure_exists(self, item_id: str) -> None:
        if self._uow.items.get_by_id(item_id) is None:
            raise EntityNotFoundError(
                f"Item with ID '{item_id}' not found", entity_id=item_id
            )
