"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each kind carries the status code an HTTP boundary would answer with.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""

    status_code = 400


class ValidationError(DomainException):
    """Input is malformed or a business rule on values was violated."""

    status_code = 400


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    status_code = 404

    def __init__(self, message: str, entity_id: str | int | None = None) -> None:
        super().__init__(message)
        self.entity_id = entity_id


class ConflictError(DomainException):
    """The request clashes with current state.

    ``retryable`` is True when re-reading stock and resubmitting the same
    request may succeed (a concurrent reservation won the race).
    """

    status_code = 409

    def __init__(
        self,
        message: str,
        item_id: str | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.item_id = item_id
        self.retryable = retryable


class InventoryIntegrityError(Exception):
    """Stock could not be restored for an item an order line still references.

    Not a DomainException: this is never part of a normal error path.
    """
