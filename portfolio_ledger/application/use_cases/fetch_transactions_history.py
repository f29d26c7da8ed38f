"""Use case listing a ledger in replay order."""

from portfolio_ledger.application.ports.investor_repository import (
    InvestorRepositoryPort,
)
from portfolio_ledger.application.ports.transaction_repository import (
    TransactionRepositoryPort,
)
from portfolio_ledger.domain.errors import DomainError, NotFoundError
from portfolio_ledger.domain.models import Transaction
from portfolio_ledger.domain.services.ledger_replay import sort_ledger
from portfolio_ledger.infrastructure.logging.logger import get_app_logger


class FetchTransactionsHistoryUseCase:
    """Return the transactions of a portfolio, or of one of its assets."""

    def __init__(
        self,
        investor_repository: InvestorRepositoryPort,
        transaction_repository: TransactionRepositoryPort,
        logger=None,
    ) -> None:
        self._investors = investor_repository
        self._transactions = transaction_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        investor_id: str,
        portfolio_id: str,
        asset_id: str | None = None,
    ) -> list[Transaction] | DomainError:
        """Fetch the history ordered by date, then insertion sequence.

        Args:
            investor_id: Investor requesting the history.
            portfolio_id: Portfolio to list.
            asset_id: Optional asset restricting the history to one ledger.

        Returns:
            list[Transaction] | DomainError: Ordered transactions, or
            NotFoundError when the investor does not exist.
        """
        if self._investors.find_by_id(investor_id) is None:
            self._logger.warning(f"History requested by unknown investor {investor_id}")
            return NotFoundError("Investor not found.")

        if asset_id is None:
            transactions = self._transactions.find_many_by_portfolio(portfolio_id)
        else:
            transactions = self._transactions.find_all_by_portfolio_and_asset(
                portfolio_id,
                asset_id,
            )
        ordered = sort_ledger(transactions)
        self._logger.info(
            f"Fetched {len(ordered)} transactions for portfolio {portfolio_id}"
        )
        return ordered


__all__ = ["FetchTransactionsHistoryUseCase"]
