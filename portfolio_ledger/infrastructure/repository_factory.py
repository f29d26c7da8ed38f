"""Factory helpers to select the ledger repository backend."""

from dataclasses import dataclass

from portfolio_ledger.application.ports.database import DatabaseEnginePort
from portfolio_ledger.application.ports.goal_repository import GoalRepositoryPort
from portfolio_ledger.application.ports.investment_repository import (
    InvestmentRepositoryPort,
)
from portfolio_ledger.application.ports.investor_repository import (
    InvestorRepositoryPort,
)
from portfolio_ledger.application.ports.transaction_repository import (
    TransactionRepositoryPort,
)
from portfolio_ledger.infrastructure.goal_repository import SqlAlchemyGoalRepository
from portfolio_ledger.infrastructure.in_memory_repositories import (
    InMemoryGoalRepository,
    InMemoryInvestmentRepository,
    InMemoryInvestorRepository,
    InMemoryTransactionRepository,
)
from portfolio_ledger.infrastructure.investment_repository import (
    SqlAlchemyInvestmentRepository,
)
from portfolio_ledger.infrastructure.investor_repository import (
    SqlAlchemyInvestorRepository,
)
from portfolio_ledger.infrastructure.ledger_schema import ensure_ledger_schema
from portfolio_ledger.infrastructure.logging.logger import get_app_logger
from portfolio_ledger.infrastructure.settings import (
    SUPPORTED_BACKENDS,
    LedgerSettings,
)
from portfolio_ledger.infrastructure.transaction_repository import (
    SqlAlchemyTransactionRepository,
)


@dataclass(frozen=True)
class LedgerRepositories:
    """Bundle of the repositories used by the ledger use cases."""

    transactions: TransactionRepositoryPort
    investments: InvestmentRepositoryPort
    goals: GoalRepositoryPort
    investors: InvestorRepositoryPort


def create_ledger_repositories(
    db_port: DatabaseEnginePort | None,
    settings: LedgerSettings,
    logger=None,
) -> LedgerRepositories:
    """Return repository implementations based on configuration.

    Args:
        db_port: Port providing access to the ledger engine (SQL backend).
        settings: Ledger settings selecting the backend.
        logger: Optional logger compatible with logging.Logger-like API.

    Returns:
        LedgerRepositories: Concrete repository implementations.

    Raises:
        RuntimeError: If the SQL backend is selected without a database port.
        ValueError: If the backend is unknown.
    """
    resolved_logger = logger or get_app_logger()
    backend = settings.backend.strip().lower()

    if backend == "memory":
        resolved_logger.info("Using in-memory ledger repositories")
        return LedgerRepositories(
            transactions=InMemoryTransactionRepository(),
            investments=InMemoryInvestmentRepository(),
            goals=InMemoryGoalRepository(),
            investors=InMemoryInvestorRepository(),
        )

    if backend == "sqlalchemy":
        if db_port is None:
            raise RuntimeError("SQLAlchemy backend requires a database port.")
        ensure_ledger_schema(db_port)
        return LedgerRepositories(
            transactions=SqlAlchemyTransactionRepository(db_port),
            investments=SqlAlchemyInvestmentRepository(db_port),
            goals=SqlAlchemyGoalRepository(db_port),
            investors=SqlAlchemyInvestorRepository(db_port),
        )

    raise ValueError(
        "Unsupported ledger backend: "
        f"{backend}. Expected one of {', '.join(SUPPORTED_BACKENDS)}."
    )


__all__ = ["LedgerRepositories", "create_ledger_repositories"]
