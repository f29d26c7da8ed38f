"""Database infrastructure for the portfolio ledger.

This module exposes concrete helpers to create and reuse the SQLAlchemy
engine connected to the ledger database. It belongs to the infrastructure
layer because it deals with external systems (PostgreSQL or SQLite).
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from portfolio_ledger.application.ports.database import DatabaseEnginePort

LEDGER_DB_URL_VAR = "LEDGER_DB_URL"


def _get_env_var(name: str) -> str:
    """Read an environment variable or raise a descriptive error.

    Values from a local ``.env`` file are loaded first.

    Args:
        name: Name of the environment variable to read.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine for the ledger database.

    Args:
        db_url: Fully qualified database URL (including driver and credentials)

    Returns:
        Engine: A SQLAlchemy engine instance with a small connection pool and
        health checks enabled. SQLite URLs keep the driver's default pool.
    """
    if db_url.startswith("sqlite"):
        return create_engine(db_url, pool_pre_ping=True, future=True)
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_ledger_engine: Optional[Engine] = None


def get_ledger_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the ledger database.

    Returns:
        Engine: Lazily initialized engine connected to the ledger backend.
    """
    global _ledger_engine
    if _ledger_engine is None:
        db_url = _get_env_var(LEDGER_DB_URL_VAR)
        _ledger_engine = _create_engine(db_url)
    return _ledger_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine.

    The adapter hides configuration details (environment variables, pooling)
    behind the port so repositories can depend only on the protocol.
    """

    def get_ledger_engine(self) -> Engine:
        return get_ledger_engine()


class StaticEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort wrapping an engine built elsewhere."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get_ledger_engine(self) -> Engine:
        return self._engine


__all__ = [
    "LEDGER_DB_URL_VAR",
    "get_ledger_engine",
    "SqlAlchemyDatabaseEngineAdapter",
    "StaticEngineAdapter",
]
