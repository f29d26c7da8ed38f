"""Ledger tables and column codecs shared by the SQLAlchemy repositories.

Decimal amounts are stored as TEXT so exact values survive both PostgreSQL
and SQLite, and timestamps as ISO-8601 strings.
"""

from datetime import date, datetime
from decimal import Decimal

from portfolio_ledger.application.ports.database import DatabaseEnginePort
from portfolio_ledger.utils.decimal_utils import coerce_decimal

CREATE_INVESTORS_SQL = """
CREATE TABLE IF NOT EXISTS investors (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    email TEXT NOT NULL UNIQUE
)
"""

CREATE_TRANSACTIONS_SQL = """
CREATE TABLE IF NOT EXISTS transactions (
    id TEXT PRIMARY KEY,
    sequence_no BIGINT NOT NULL,
    portfolio_id TEXT NOT NULL,
    asset_id TEXT NOT NULL,
    transaction_type TEXT NOT NULL,
    quantity TEXT NOT NULL,
    price TEXT,
    fees TEXT NOT NULL,
    income TEXT,
    currency TEXT NOT NULL,
    date_at TEXT NOT NULL,
    notes TEXT NOT NULL DEFAULT '',
    created_at TEXT NOT NULL,
    updated_at TEXT
)
"""

CREATE_TRANSACTIONS_LEDGER_INDEX_SQL = """
CREATE INDEX IF NOT EXISTS ix_transactions_ledger
ON transactions (portfolio_id, asset_id)
"""

CREATE_INVESTMENTS_SQL = """
CREATE TABLE IF NOT EXISTS investments (
    id TEXT PRIMARY KEY,
    portfolio_id TEXT NOT NULL,
    asset_id TEXT NOT NULL,
    quantity TEXT NOT NULL,
    average_price TEXT NOT NULL,
    current_price TEXT NOT NULL,
    income_received TEXT NOT NULL DEFAULT '0',
    currency TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT,
    UNIQUE (portfolio_id, asset_id)
)
"""

CREATE_GOALS_SQL = """
CREATE TABLE IF NOT EXISTS goals (
    id TEXT PRIMARY KEY,
    investor_id TEXT NOT NULL,
    name TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    target_amount TEXT NOT NULL,
    current_amount TEXT NOT NULL,
    currency TEXT NOT NULL,
    target_date TEXT NOT NULL,
    priority TEXT NOT NULL,
    status TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT
)
"""

LEDGER_SCHEMA_SQL = (
    CREATE_INVESTORS_SQL,
    CREATE_TRANSACTIONS_SQL,
    CREATE_TRANSACTIONS_LEDGER_INDEX_SQL,
    CREATE_INVESTMENTS_SQL,
    CREATE_GOALS_SQL,
)


def ensure_ledger_schema(db_port: DatabaseEnginePort) -> None:
    """Create the ledger tables if they do not exist.

    Args:
        db_port: Port providing access to the ledger engine.
    """
    engine = db_port.get_ledger_engine()
    with engine.begin() as conn:
        for statement in LEDGER_SCHEMA_SQL:
            conn.exec_driver_sql(statement)


def encode_decimal(value: Decimal | None) -> str | None:
    return None if value is None else str(value)


def decode_decimal(value) -> Decimal:
    return coerce_decimal(value)


def encode_datetime(value: datetime | date | None) -> str | None:
    return None if value is None else value.isoformat()


def decode_datetime(value) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def decode_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


__all__ = [
    "LEDGER_SCHEMA_SQL",
    "ensure_ledger_schema",
    "encode_decimal",
    "decode_decimal",
    "encode_datetime",
    "decode_datetime",
    "decode_date",
]
