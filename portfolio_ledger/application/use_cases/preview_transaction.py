"""Use case previewing the effect of a transaction without writing it."""

from portfolio_ledger.application.ports.investment_repository import (
    InvestmentRepositoryPort,
)
from portfolio_ledger.domain.errors import DomainError
from portfolio_ledger.domain.models import PositionDelta, Transaction
from portfolio_ledger.domain.services.position_update import (
    calculate_transaction_impact,
)
from portfolio_ledger.infrastructure.logging.logger import get_app_logger


class PreviewTransactionUseCase:
    """Compute the resulting position state against the stored position."""

    def __init__(self, investment_repository: InvestmentRepositoryPort, logger=None):
        self._investments = investment_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        transaction: Transaction,
    ) -> PositionDelta | None | DomainError:
        """Return the delta, None when a Dividend meets no open position."""
        position = self._investments.find_by_portfolio_id_and_asset_id(
            transaction.portfolio_id,
            transaction.asset_id,
        )
        return calculate_transaction_impact(
            position,
            transaction,
            logger=self._logger,
        )


__all__ = ["PreviewTransactionUseCase"]
