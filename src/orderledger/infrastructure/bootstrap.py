"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import functools
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from orderledger.infrastructure.config import Settings, load_settings
from orderledger.infrastructure.persistence.orm import (
    create_schema,
    enable_sqlite_foreign_keys,
)
from orderledger.infrastructure.persistence.sqlalchemy_unit_of_work import (
    SqlAlchemyUnitOfWork,
)


@functools.lru_cache(maxsize=None)
def engine_for(database_url: str, echo: bool = False, timeout: float = 30.0) -> Engine:
    """Build (once per URL) an engine with the schema in place."""
    url = make_url(database_url)
    connect_args = {}
    if url.get_backend_name() == "sqlite":
        # Concurrent writers wait for the lock instead of failing at once.
        connect_args = {"check_same_thread": False, "timeout": timeout}
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(url, echo=echo, connect_args=connect_args)
    if url.get_backend_name() == "sqlite":
        enable_sqlite_foreign_keys(engine)
    create_schema(engine)
    return engine


def session_factory(settings: Settings | None = None) -> sessionmaker[Session]:
    settings = settings or load_settings()
    engine = engine_for(settings.database_url, settings.sql_echo, settings.db_timeout)
    return sessionmaker(bind=engine)


def unit_of_work(settings: Settings | None = None) -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(session_factory(settings))
