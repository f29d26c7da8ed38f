"""SQLAlchemy-backed repository for savings goals."""

from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError

from portfolio_ledger.application.ports.database import DatabaseEnginePort
from portfolio_ledger.application.ports.goal_repository import GoalRepositoryPort
from portfolio_ledger.domain.errors import (
    ConflictError,
    DomainError,
    NotFoundError,
)
from portfolio_ledger.domain.models import Goal, GoalStatus, Money, Priority
from portfolio_ledger.infrastructure.ledger_schema import (
    decode_date,
    decode_datetime,
    decode_decimal,
    encode_datetime,
    encode_decimal,
)

SELECT_GOAL_SQL = text(
    """
    SELECT id, investor_id, name, description, target_amount, current_amount,
           currency, target_date, priority, status, created_at, updated_at
    FROM goals
    WHERE id = :id
    """
)

INSERT_GOAL_SQL = text(
    """
    INSERT INTO goals (
        id, investor_id, name, description, target_amount, current_amount,
        currency, target_date, priority, status, created_at, updated_at
    )
    VALUES (
        :id, :investor_id, :name, :description, :target_amount,
        :current_amount, :currency, :target_date, :priority, :status,
        :created_at, :updated_at
    )
    """
)

UPDATE_GOAL_SQL = text(
    """
    UPDATE goals
    SET name = :name,
        description = :description,
        target_amount = :target_amount,
        current_amount = :current_amount,
        currency = :currency,
        target_date = :target_date,
        priority = :priority,
        status = :status,
        updated_at = :updated_at
    WHERE id = :id
    """
)


def goal_to_params(goal: Goal) -> dict[str, Any]:
    return {
        "id": goal.id,
        "investor_id": goal.investor_id,
        "name": goal.name,
        "description": goal.description,
        "target_amount": encode_decimal(goal.target_amount.amount),
        "current_amount": encode_decimal(goal.current_amount.amount),
        "currency": goal.currency,
        "target_date": encode_datetime(goal.target_date),
        "priority": goal.priority.value,
        "status": goal.status.value,
        "created_at": encode_datetime(goal.created_at),
        "updated_at": encode_datetime(goal.updated_at),
    }


def row_to_goal(row) -> Goal:
    currency = row.currency
    return Goal(
        investor_id=row.investor_id,
        name=row.name,
        target_amount=Money(decode_decimal(row.target_amount), currency),
        target_date=decode_date(row.target_date),
        priority=Priority(row.priority),
        current_amount=Money(decode_decimal(row.current_amount), currency),
        status=GoalStatus(row.status),
        description=row.description or "",
        id=row.id,
        created_at=decode_datetime(row.created_at),
        updated_at=decode_datetime(row.updated_at),
    )


class SqlAlchemyGoalRepository(GoalRepositoryPort):
    """Repository backed by SQLAlchemy for goals."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._db_port = db_port

    def find_by_id(self, goal_id: str) -> Goal | None:
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            row = conn.execute(SELECT_GOAL_SQL, {"id": goal_id}).first()
        return row_to_goal(row) if row is not None else None

    def create(self, goal: Goal) -> DomainError | None:
        engine = self._db_port.get_ledger_engine()
        try:
            with engine.begin() as conn:
                conn.execute(INSERT_GOAL_SQL, goal_to_params(goal))
        except IntegrityError:
            return ConflictError("Goal already exists.", details={"goal_id": goal.id})
        return None

    def update(self, goal: Goal) -> DomainError | None:
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            result = conn.execute(UPDATE_GOAL_SQL, goal_to_params(goal))
            matched = result.rowcount
        if matched == 0:
            return NotFoundError("Goal not found.", details={"goal_id": goal.id})
        return None


__all__ = ["SqlAlchemyGoalRepository", "goal_to_params", "row_to_goal"]
