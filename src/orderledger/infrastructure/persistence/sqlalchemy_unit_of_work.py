"""SQLAlchemy-backed unit of work: one Session, one transaction."""

from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from orderledger.domain.repository.unit_of_work import AbstractUnitOfWork
from orderledger.infrastructure.persistence.sqlalchemy_item_repository import (
    SqlAlchemyItemRepository,
)
from orderledger.infrastructure.persistence.sqlalchemy_order_repository import (
    SqlAlchemyOrderRepository,
)


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self._session_factory()
        self.items = SqlAlchemyItemRepository(self._session)
        self.orders = SqlAlchemyOrderRepository(self._session)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            super().__exit__(exc_type, exc, tb)
        finally:
            self._session.close()
            self._session = None

    def commit(self) -> None:
        self._session.commit()

    def rollback(self) -> None:
        self._session.rollback()
