"""Domain service: Inventory Ledger.

Reserve and release stock through the item store's conditional writes.
No process-level lock is taken: the existence/stock check and the
mutation are one atomic store operation, so two requests that both
observed enough stock cannot both take it.

Only ever used inside an open unit of work.  Nothing done here is
visible to other requests until that unit of work commits, and a
rollback undoes every reservation made so far.
"""

from __future__ import annotations

import logging

from orderledger.domain.exceptions import ConflictError, InventoryIntegrityError
from orderledger.domain.model.value_objects import Quantity
from orderledger.domain.repository.item_repository import ItemRepository

logger = logging.getLogger(__name__)


class InventoryLedger:

    def __init__(self, item_repo: ItemRepository) -> None:
        self._item_repo = item_repo

    def reserve(self, item_id: str, quantity: int) -> None:
        """Debit ``quantity`` units of stock.

        Raises ConflictError (retryable) when the conditional write
        affects no row: the item vanished, or its stock changed since it
        was read, including a concurrent reservation winning the race.
        """
        qty = Quantity(quantity).value
        affected = self._item_repo.decrement_stock_if_available(item_id, qty)
        if affected != 1:
            logger.warning(
                "Reservation of %d x %s lost against concurrent change", qty, item_id
            )
            raise ConflictError(
                "Stock changed, please retry", item_id=item_id, retryable=True
            )
        logger.debug("Reserved %d x %s", qty, item_id)

    def release(self, item_id: str, quantity: int) -> None:
        """Credit back ``quantity`` units previously reserved."""
        qty = Quantity(quantity).value
        affected = self._item_repo.increment_stock(item_id, qty)
        if affected != 1:
            raise InventoryIntegrityError(
                f"Cannot restore stock for item '{item_id}': item no longer exists"
            )
        logger.debug("Released %d x %s", qty, item_id)
