"""SQLAlchemy-backed repository for materialized positions."""

from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from portfolio_ledger.application.ports.database import DatabaseEnginePort
from portfolio_ledger.application.ports.investment_repository import (
    InvestmentRepositoryPort,
)
from portfolio_ledger.domain.errors import (
    ConflictError,
    DomainError,
    NotFoundError,
)
from portfolio_ledger.domain.models import Money, Position, Quantity
from portfolio_ledger.domain.models.transaction import new_id
from portfolio_ledger.infrastructure.ledger_schema import (
    decode_datetime,
    decode_decimal,
    encode_datetime,
    encode_decimal,
)

SELECT_POSITION_SQL = text(
    """
    SELECT id, portfolio_id, asset_id, quantity, average_price, current_price,
           income_received, currency, created_at, updated_at
    FROM investments
    WHERE portfolio_id = :portfolio_id AND asset_id = :asset_id
    """
)

SELECT_PORTFOLIO_POSITIONS_SQL = text(
    """
    SELECT id, portfolio_id, asset_id, quantity, average_price, current_price,
           income_received, currency, created_at, updated_at
    FROM investments
    WHERE portfolio_id = :portfolio_id
    ORDER BY asset_id
    """
)

INSERT_POSITION_SQL = text(
    """
    INSERT INTO investments (
        id, portfolio_id, asset_id, quantity, average_price, current_price,
        income_received, currency, created_at, updated_at
    )
    VALUES (
        :id, :portfolio_id, :asset_id, :quantity, :average_price,
        :current_price, :income_received, :currency, :created_at, :updated_at
    )
    """
)

UPDATE_POSITION_SQL = text(
    """
    UPDATE investments
    SET quantity = :quantity,
        average_price = :average_price,
        current_price = :current_price,
        income_received = :income_received,
        currency = :currency,
        created_at = :created_at,
        updated_at = :updated_at
    WHERE portfolio_id = :portfolio_id AND asset_id = :asset_id
    """
)

DELETE_POSITION_SQL = text(
    """
    DELETE FROM investments
    WHERE portfolio_id = :portfolio_id AND asset_id = :asset_id
    """
)


def position_to_params(position: Position) -> dict[str, Any]:
    return {
        "id": position.id,
        "portfolio_id": position.portfolio_id,
        "asset_id": position.asset_id,
        "quantity": encode_decimal(position.quantity.value),
        "average_price": encode_decimal(position.average_price.amount),
        "current_price": encode_decimal(position.current_price.amount),
        "income_received": encode_decimal(position.income_received.amount),
        "currency": position.currency,
        "created_at": encode_datetime(position.created_at),
        "updated_at": encode_datetime(position.updated_at),
    }


def row_to_position(row) -> Position:
    currency = row.currency
    return Position(
        portfolio_id=row.portfolio_id,
        asset_id=row.asset_id,
        quantity=Quantity(decode_decimal(row.quantity)),
        average_price=Money(decode_decimal(row.average_price), currency),
        current_price=Money(decode_decimal(row.current_price), currency),
        income_received=Money(decode_decimal(row.income_received), currency),
        created_at=decode_datetime(row.created_at),
        updated_at=decode_datetime(row.updated_at),
        id=row.id,
    )


class SqlAlchemyInvestmentRepository(InvestmentRepositoryPort):
    """Repository backed by SQLAlchemy for positions.

    Positions are keyed by (portfolio, asset); an id is assigned on create
    when the position has none.
    """

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._db_port = db_port

    def find_by_portfolio_id_and_asset_id(
        self,
        portfolio_id: str,
        asset_id: str,
    ) -> Position | None:
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            row = conn.execute(
                SELECT_POSITION_SQL,
                {"portfolio_id": portfolio_id, "asset_id": asset_id},
            ).first()
        return row_to_position(row) if row is not None else None

    def find_many_by_portfolio(self, portfolio_id: str) -> list[Position]:
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(
                SELECT_PORTFOLIO_POSITIONS_SQL,
                {"portfolio_id": portfolio_id},
            ).all()
        return [row_to_position(row) for row in rows]

    def create(self, position: Position) -> DomainError | None:
        if position.id is None:
            position.id = new_id()
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.begin() as conn:
                conn.execute(INSERT_POSITION_SQL, position_to_params(position))
        except IntegrityError:
            return ConflictError(
                "Position already exists for this portfolio and asset.",
                details={"portfolio_id": position.portfolio_id, "asset_id": position.asset_id},
            )
        return None

    def update(self, position: Position) -> DomainError | None:
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            result = conn.execute(UPDATE_POSITION_SQL, position_to_params(position))
            matched = result.rowcount
        if matched == 0:
            return _missing(position.portfolio_id, position.asset_id)
        return None

    def delete(self, portfolio_id: str, asset_id: str) -> DomainError | None:
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            result = conn.execute(
                DELETE_POSITION_SQL,
                {"portfolio_id": portfolio_id, "asset_id": asset_id},
            )
            matched = result.rowcount
        if matched == 0:
            return _missing(portfolio_id, asset_id)
        return None


def _missing(portfolio_id: str, asset_id: str) -> NotFoundError:
    return NotFoundError(
        "Position not found.",
        details={"portfolio_id": portfolio_id, "asset_id": asset_id},
    )


__all__ = [
    "SqlAlchemyInvestmentRepository",
    "position_to_params",
    "row_to_position",
]
