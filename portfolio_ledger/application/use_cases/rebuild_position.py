"""Use case rebuilding one stored position from its full ledger.

The ledger is the single source of truth: the stored position is replaced by
the result of replaying every transaction of the (portfolio, asset) pair. A
failed replay never writes.
"""

from dataclasses import dataclass
from enum import Enum

from portfolio_ledger.application.ports.investment_repository import (
    InvestmentRepositoryPort,
)
from portfolio_ledger.application.ports.transaction_repository import (
    TransactionRepositoryPort,
)
from portfolio_ledger.domain.errors import DomainError
from portfolio_ledger.domain.models import Position
from portfolio_ledger.domain.services.ledger_replay import replay_ledger
from portfolio_ledger.domain.services.validation import warn_on_position_drift
from portfolio_ledger.infrastructure.logging.logger import get_app_logger


class PositionChange(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class RebuildPositionResult:
    """Result of a single position rebuild.

    Attributes:
        portfolio_id: Portfolio of the rebuilt ledger.
        asset_id: Asset of the rebuilt ledger.
        position: Position now stored, or None when nothing is held.
        change: What happened to the stored position.
    """

    portfolio_id: str
    asset_id: str
    position: Position | None
    change: PositionChange


class RebuildPositionUseCase:
    """Replay a ledger and persist the canonical position."""

    def __init__(
        self,
        transaction_repository: TransactionRepositoryPort,
        investment_repository: InvestmentRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            transaction_repository: Port reading the transaction ledger.
            investment_repository: Port storing materialized positions.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._transactions = transaction_repository
        self._investments = investment_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        portfolio_id: str,
        asset_id: str,
    ) -> RebuildPositionResult | DomainError:
        """Rebuild the stored position of one ledger.

        Args:
            portfolio_id: Portfolio owning the ledger.
            asset_id: Asset the ledger tracks.

        Returns:
            RebuildPositionResult | DomainError: Outcome, or the replay or
            persistence failure.
        """
        transactions = self._transactions.find_all_by_portfolio_and_asset(
            portfolio_id,
            asset_id,
        )
        replayed = replay_ledger(transactions, logger=self._logger)
        if isinstance(replayed, DomainError):
            self._logger.warning(
                f"Position {portfolio_id}/{asset_id} not rebuilt: {replayed.message}"
            )
            return replayed

        stored = self._investments.find_by_portfolio_id_and_asset_id(
            portfolio_id,
            asset_id,
        )
        warn_on_position_drift(stored, replayed, self._logger)
        change, error = self._persist(portfolio_id, asset_id, stored, replayed)
        if error is not None:
            self._logger.warning(
                f"Position {portfolio_id}/{asset_id} not persisted: {error.message}"
            )
            return error

        if change is not PositionChange.UNCHANGED:
            self._logger.info(
                f"Position {portfolio_id}/{asset_id} {change.value} from "
                f"{len(transactions)} transactions"
            )
        return RebuildPositionResult(
            portfolio_id=portfolio_id,
            asset_id=asset_id,
            position=replayed,
            change=change,
        )

    def _persist(
        self,
        portfolio_id: str,
        asset_id: str,
        stored: Position | None,
        replayed: Position | None,
    ) -> tuple[PositionChange, DomainError | None]:
        if replayed is None:
            if stored is None:
                return PositionChange.UNCHANGED, None
            error = self._investments.delete(portfolio_id, asset_id)
            return PositionChange.DELETED, error

        if stored is None:
            return PositionChange.CREATED, self._investments.create(replayed)

        replayed.id = stored.id
        if replayed == stored:
            return PositionChange.UNCHANGED, None
        return PositionChange.UPDATED, self._investments.update(replayed)


__all__ = ["RebuildPositionUseCase", "RebuildPositionResult", "PositionChange"]
