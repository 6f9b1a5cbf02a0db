"""Runtime settings read from the environment.

A ``.env`` file in the working directory is loaded first; variables
already set in the environment win over it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    database_url: str
    log_level: str = "WARNING"
    sql_echo: bool = False
    db_timeout: float = 30.0


def load_settings() -> Settings:
    load_dotenv(find_dotenv(usecwd=True))
    return Settings(
        database_url=os.getenv(
            "ORDERLEDGER_DATABASE_URL",
            f"sqlite:///{_DATA_DIR / 'orderledger.db'}",
        ),
        log_level=os.getenv("ORDERLEDGER_LOG_LEVEL", "WARNING").upper(),
        sql_echo=os.getenv("ORDERLEDGER_SQL_ECHO", "false").lower() in _TRUTHY,
        db_timeout=float(os.getenv("ORDERLEDGER_DB_TIMEOUT", "30")),
    )
