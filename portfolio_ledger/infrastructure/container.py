"""Composition root for wiring infrastructure adapters."""

from portfolio_ledger.application.ports.database import DatabaseEnginePort
from portfolio_ledger.application.use_cases.calculate_goal_projection import (
    CalculateGoalProjectionUseCase,
)
from portfolio_ledger.application.use_cases.rebuild_positions import (
    RebuildPositionsUseCase,
)
from portfolio_ledger.application.use_cases.record_transaction import (
    RecordTransactionUseCase,
)
from portfolio_ledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from portfolio_ledger.infrastructure.logging.logger import get_app_logger
from portfolio_ledger.infrastructure.repository_factory import (
    LedgerRepositories,
    create_ledger_repositories,
)
from portfolio_ledger.infrastructure.settings import LedgerSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_ledger_repositories(
    db_port: DatabaseEnginePort | None = None,
    settings: LedgerSettings | None = None,
) -> LedgerRepositories:
    """Return the configured repositories."""
    resolved_settings = settings or LedgerSettings.from_env()
    resolved_db = None
    if resolved_settings.backend != "memory":
        resolved_db = db_port or build_database_adapter()
    return create_ledger_repositories(
        resolved_db,
        resolved_settings,
        logger=get_app_logger(),
    )


def build_rebuild_positions_use_case(
    repositories: LedgerRepositories | None = None,
) -> RebuildPositionsUseCase:
    """Return the batch position rebuild use case."""
    resolved = repositories or build_ledger_repositories()
    return RebuildPositionsUseCase(
        resolved.transactions,
        resolved.investments,
        logger=get_app_logger(),
    )


def build_record_transaction_use_case(
    repositories: LedgerRepositories | None = None,
    settings: LedgerSettings | None = None,
) -> RecordTransactionUseCase:
    """Return the transaction recording use case."""
    resolved_settings = settings or LedgerSettings.from_env()
    resolved = repositories or build_ledger_repositories(settings=resolved_settings)
    return RecordTransactionUseCase(
        resolved.investors,
        resolved.transactions,
        resolved.investments,
        logger=get_app_logger(),
        default_currency=resolved_settings.default_currency,
    )


def build_goal_projection_use_case(
    repositories: LedgerRepositories | None = None,
    settings: LedgerSettings | None = None,
) -> CalculateGoalProjectionUseCase:
    """Return the goal projection use case."""
    resolved_settings = settings or LedgerSettings.from_env()
    resolved = repositories or build_ledger_repositories(settings=resolved_settings)
    return CalculateGoalProjectionUseCase(
        resolved.investors,
        resolved.goals,
        logger=get_app_logger(),
        safety_buffer=resolved_settings.safety_buffer,
    )


__all__ = [
    "build_database_adapter",
    "build_ledger_repositories",
    "build_rebuild_positions_use_case",
    "build_record_transaction_use_case",
    "build_goal_projection_use_case",
]
