"""SQLAlchemy-backed repository for ledger transactions."""

from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from portfolio_ledger.application.ports.database import DatabaseEnginePort
from portfolio_ledger.application.ports.transaction_repository import (
    TransactionRepositoryPort,
)
from portfolio_ledger.domain.errors import (
    ConflictError,
    DomainError,
    NotFoundError,
)
from portfolio_ledger.domain.models import (
    Money,
    Quantity,
    Transaction,
    TransactionType,
)
from portfolio_ledger.infrastructure.ledger_schema import (
    decode_datetime,
    decode_decimal,
    encode_datetime,
    encode_decimal,
)

TRANSACTION_COLUMNS = """
    id, sequence_no, portfolio_id, asset_id, transaction_type, quantity,
    price, fees, income, currency, date_at, notes, created_at, updated_at
"""

SELECT_LEDGER_SQL = text(
    f"""
    SELECT {TRANSACTION_COLUMNS}
    FROM transactions
    WHERE portfolio_id = :portfolio_id AND asset_id = :asset_id
    ORDER BY date_at, sequence_no
    """
)

SELECT_BY_ID_SQL = text(
    f"""
    SELECT {TRANSACTION_COLUMNS}
    FROM transactions
    WHERE id = :id
    """
)

SELECT_BY_PORTFOLIO_SQL = text(
    f"""
    SELECT {TRANSACTION_COLUMNS}
    FROM transactions
    WHERE portfolio_id = :portfolio_id
    ORDER BY date_at, sequence_no
    """
)

INSERT_TRANSACTION_SQL = text(
    """
    INSERT INTO transactions (
        id, sequence_no, portfolio_id, asset_id, transaction_type, quantity,
        price, fees, income, currency, date_at, notes, created_at, updated_at
    )
    VALUES (
        :id, :sequence_no, :portfolio_id, :asset_id, :transaction_type,
        :quantity, :price, :fees, :income, :currency, :date_at, :notes,
        :created_at, :updated_at
    )
    """
)

UPDATE_TRANSACTION_SQL = text(
    """
    UPDATE transactions
    SET portfolio_id = :portfolio_id,
        asset_id = :asset_id,
        transaction_type = :transaction_type,
        quantity = :quantity,
        price = :price,
        fees = :fees,
        income = :income,
        currency = :currency,
        date_at = :date_at,
        notes = :notes,
        updated_at = :updated_at
    WHERE id = :id
    """
)


def transaction_to_params(transaction: Transaction) -> dict[str, Any]:
    """Flatten a transaction into SQL bind parameters."""
    return {
        "id": transaction.id,
        "sequence_no": transaction.sequence,
        "portfolio_id": transaction.portfolio_id,
        "asset_id": transaction.asset_id,
        "transaction_type": transaction.transaction_type.value,
        "quantity": encode_decimal(transaction.quantity.value),
        "price": encode_decimal(
            transaction.price.amount if transaction.price is not None else None
        ),
        "fees": encode_decimal(transaction.fees.amount),
        "income": encode_decimal(
            transaction.income.amount if transaction.income is not None else None
        ),
        "currency": transaction.currency,
        "date_at": encode_datetime(transaction.date_at),
        "notes": transaction.notes,
        "created_at": encode_datetime(transaction.created_at),
        "updated_at": encode_datetime(transaction.updated_at),
    }


def row_to_transaction(row) -> Transaction:
    """Rebuild a transaction from a stored row; the total is recomputed."""
    currency = row.currency
    return Transaction(
        portfolio_id=row.portfolio_id,
        asset_id=row.asset_id,
        transaction_type=TransactionType(row.transaction_type),
        quantity=Quantity(decode_decimal(row.quantity)),
        price=_optional_money(row.price, currency),
        fees=Money(decode_decimal(row.fees), currency),
        date_at=decode_datetime(row.date_at),
        income=_optional_money(row.income, currency),
        notes=row.notes or "",
        id=row.id,
        sequence=int(row.sequence_no),
        created_at=decode_datetime(row.created_at),
        updated_at=decode_datetime(row.updated_at),
    )


def _optional_money(value, currency: str) -> Money | None:
    if value is None:
        return None
    return Money(decode_decimal(value), currency)


class SqlAlchemyTransactionRepository(TransactionRepositoryPort):
    """Repository backed by SQLAlchemy for the transaction ledger."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
        """
        self._db_port = db_port

    def find_all_by_portfolio_and_asset(
        self,
        portfolio_id: str,
        asset_id: str,
    ) -> list[Transaction]:
        return self._fetch(
            SELECT_LEDGER_SQL,
            {"portfolio_id": portfolio_id, "asset_id": asset_id},
        )

    def find_by_id(self, transaction_id: str) -> Transaction | None:
        rows = self._fetch(SELECT_BY_ID_SQL, {"id": transaction_id})
        return rows[0] if rows else None

    def find_many_by_portfolio(self, portfolio_id: str) -> list[Transaction]:
        return self._fetch(SELECT_BY_PORTFOLIO_SQL, {"portfolio_id": portfolio_id})

    def list_ledger_keys(
        self,
        portfolio_id: str | None = None,
    ) -> list[tuple[str, str]]:
        """Return the distinct (portfolio, asset) pairs, sorted."""
        sql = "SELECT DISTINCT portfolio_id, asset_id FROM transactions"
        params: dict[str, str] = {}
        if portfolio_id is not None:
            sql += " WHERE portfolio_id = :portfolio_id"
            params["portfolio_id"] = portfolio_id
        sql += " ORDER BY portfolio_id, asset_id"
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(text(sql), params).all()
        return [(row.portfolio_id, row.asset_id) for row in rows]

    def create(self, transaction: Transaction) -> DomainError | None:
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.begin() as conn:
                conn.execute(INSERT_TRANSACTION_SQL, transaction_to_params(transaction))
        except IntegrityError:
            return ConflictError(
                "Transaction already exists.",
                details={"transaction_id": transaction.id},
            )
        return None

    def update(self, transaction: Transaction) -> DomainError | None:
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            result = conn.execute(
                UPDATE_TRANSACTION_SQL,
                transaction_to_params(transaction),
            )
            matched = result.rowcount
        if matched == 0:
            return NotFoundError(
                "Transaction not found.",
                details={"transaction_id": transaction.id},
            )
        return None

    def _fetch(self, query, params: dict[str, Any]) -> list[Transaction]:
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, params).all()
        return [row_to_transaction(row) for row in rows]


__all__ = [
    "SqlAlchemyTransactionRepository",
    "transaction_to_params",
    "row_to_transaction",
]
