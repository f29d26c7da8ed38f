"""Dict-backed repositories for tests and the memory backend.

Entities are deep-copied on the way in and out so callers never share
mutable state with the store, matching the SQL repositories.
"""

from copy import deepcopy

from portfolio_ledger.application.ports.goal_repository import GoalRepositoryPort
from portfolio_ledger.application.ports.investment_repository import (
    InvestmentRepositoryPort,
)
from portfolio_ledger.application.ports.investor_repository import (
    InvestorRecord,
    InvestorRepositoryPort,
)
from portfolio_ledger.application.ports.transaction_repository import (
    TransactionRepositoryPort,
)
from portfolio_ledger.domain.errors import (
    ConflictError,
    DomainError,
    NotFoundError,
)
from portfolio_ledger.domain.models import Goal, Position, Transaction
from portfolio_ledger.domain.models.transaction import new_id


class InMemoryTransactionRepository(TransactionRepositoryPort):
    def __init__(self, transactions: list[Transaction] | None = None) -> None:
        self._rows: dict[str, Transaction] = {}
        for transaction in transactions or []:
            self._rows[transaction.id] = transaction

    def find_all_by_portfolio_and_asset(
        self,
        portfolio_id: str,
        asset_id: str,
    ) -> list[Transaction]:
        return [
            tx
            for tx in self._rows.values()
            if tx.ledger_key() == (portfolio_id, asset_id)
        ]

    def find_by_id(self, transaction_id: str) -> Transaction | None:
        return self._rows.get(transaction_id)

    def find_many_by_portfolio(self, portfolio_id: str) -> list[Transaction]:
        return [tx for tx in self._rows.values() if tx.portfolio_id == portfolio_id]

    def list_ledger_keys(
        self,
        portfolio_id: str | None = None,
    ) -> list[tuple[str, str]]:
        keys = {
            tx.ledger_key()
            for tx in self._rows.values()
            if portfolio_id is None or tx.portfolio_id == portfolio_id
        }
        return sorted(keys)

    def create(self, transaction: Transaction) -> DomainError | None:
        if transaction.id in self._rows:
            return ConflictError(
                "Transaction already exists.",
                details={"transaction_id": transaction.id},
            )
        self._rows[transaction.id] = transaction
        return None

    def update(self, transaction: Transaction) -> DomainError | None:
        if transaction.id not in self._rows:
            return NotFoundError(
                "Transaction not found.",
                details={"transaction_id": transaction.id},
            )
        self._rows[transaction.id] = transaction
        return None


class InMemoryInvestmentRepository(InvestmentRepositoryPort):
    def __init__(self) -> None:
        self._rows: dict[tuple[str, str], Position] = {}

    def find_by_portfolio_id_and_asset_id(
        self,
        portfolio_id: str,
        asset_id: str,
    ) -> Position | None:
        position = self._rows.get((portfolio_id, asset_id))
        return deepcopy(position) if position is not None else None

    def find_many_by_portfolio(self, portfolio_id: str) -> list[Position]:
        return [
            deepcopy(position)
            for key, position in sorted(self._rows.items())
            if key[0] == portfolio_id
        ]

    def create(self, position: Position) -> DomainError | None:
        if position.key in self._rows:
            return ConflictError(
                "Position already exists for this portfolio and asset.",
                details={"portfolio_id": position.portfolio_id, "asset_id": position.asset_id},
            )
        if position.id is None:
            position.id = new_id()
        self._rows[position.key] = deepcopy(position)
        return None

    def update(self, position: Position) -> DomainError | None:
        if position.key not in self._rows:
            return _missing_position(position.portfolio_id, position.asset_id)
        self._rows[position.key] = deepcopy(position)
        return None

    def delete(self, portfolio_id: str, asset_id: str) -> DomainError | None:
        if self._rows.pop((portfolio_id, asset_id), None) is None:
            return _missing_position(portfolio_id, asset_id)
        return None


class InMemoryGoalRepository(GoalRepositoryPort):
    def __init__(self) -> None:
        self._rows: dict[str, Goal] = {}

    def find_by_id(self, goal_id: str) -> Goal | None:
        goal = self._rows.get(goal_id)
        return deepcopy(goal) if goal is not None else None

    def create(self, goal: Goal) -> DomainError | None:
        if goal.id in self._rows:
            return ConflictError("Goal already exists.", details={"goal_id": goal.id})
        self._rows[goal.id] = deepcopy(goal)
        return None

    def update(self, goal: Goal) -> DomainError | None:
        if goal.id not in self._rows:
            return NotFoundError("Goal not found.", details={"goal_id": goal.id})
        self._rows[goal.id] = deepcopy(goal)
        return None


class InMemoryInvestorRepository(InvestorRepositoryPort):
    def __init__(self, investors: list[InvestorRecord] | None = None) -> None:
        self._rows: dict[str, InvestorRecord] = {}
        for investor in investors or []:
            self._rows[investor.id] = investor

    def find_by_id(self, investor_id: str) -> InvestorRecord | None:
        return self._rows.get(investor_id)

    def create(self, investor: InvestorRecord) -> DomainError | None:
        duplicate = investor.id in self._rows or any(
            row.email == investor.email for row in self._rows.values()
        )
        if duplicate:
            return ConflictError(
                "Investor already exists.",
                details={"investor_id": investor.id, "email": investor.email},
            )
        self._rows[investor.id] = investor
        return None


def _missing_position(portfolio_id: str, asset_id: str) -> NotFoundError:
    return NotFoundError(
        "Position not found.",
        details={"portfolio_id": portfolio_id, "asset_id": asset_id},
    )


__all__ = [
    "InMemoryTransactionRepository",
    "InMemoryInvestmentRepository",
    "InMemoryGoalRepository",
    "InMemoryInvestorRepository",
]
