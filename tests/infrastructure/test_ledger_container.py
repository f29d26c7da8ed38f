"""Tests for the composition root."""

from decimal import Decimal
from unittest.mock import MagicMock

from portfolio_ledger.application.use_cases.calculate_goal_projection import (
    CalculateGoalProjectionUseCase,
)
from portfolio_ledger.application.use_cases.rebuild_positions import (
    RebuildPositionsUseCase,
)
from portfolio_ledger.application.use_cases.record_transaction import (
    RecordTransactionUseCase,
)
from portfolio_ledger.infrastructure import container
from portfolio_ledger.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from portfolio_ledger.infrastructure.in_memory_repositories import (
    InMemoryGoalRepository,
)
from portfolio_ledger.infrastructure.settings import LedgerSettings

MEMORY = LedgerSettings(
    backend="memory",
    default_currency="USD",
    safety_buffer=Decimal("1.2"),
)


def _silence_logger(monkeypatch) -> None:
    monkeypatch.setattr(container, "get_app_logger", lambda: MagicMock())


def test_build_database_adapter() -> None:
    """The container returns the SQLAlchemy adapter."""
    adapter = container.build_database_adapter()

    assert isinstance(adapter, SqlAlchemyDatabaseEngineAdapter)


def test_memory_backend_skips_database(monkeypatch) -> None:
    """The memory backend never asks for a database adapter."""
    _silence_logger(monkeypatch)
    database_adapter = MagicMock(side_effect=AssertionError("no database expected"))
    monkeypatch.setattr(container, "build_database_adapter", database_adapter)

    repositories = container.build_ledger_repositories(settings=MEMORY)

    assert isinstance(repositories.goals, InMemoryGoalRepository)
    database_adapter.assert_not_called()


def test_use_case_builders_apply_settings(monkeypatch) -> None:
    """Use case builders pass settings through."""
    _silence_logger(monkeypatch)
    repositories = container.build_ledger_repositories(settings=MEMORY)

    rebuild = container.build_rebuild_positions_use_case(repositories)
    record = container.build_record_transaction_use_case(repositories, MEMORY)
    projection = container.build_goal_projection_use_case(repositories, MEMORY)

    assert isinstance(rebuild, RebuildPositionsUseCase)
    assert isinstance(record, RecordTransactionUseCase)
    assert record._default_currency == "USD"
    assert isinstance(projection, CalculateGoalProjectionUseCase)
    assert projection._safety_buffer == Decimal("1.2")
