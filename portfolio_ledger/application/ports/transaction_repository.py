"""Port for reading and writing ledger transactions."""

from typing import Protocol

from portfolio_ledger.domain.errors import DomainError
from portfolio_ledger.domain.models import Transaction


class TransactionRepositoryPort(Protocol):
    """Port exposing the append-only transaction ledger."""

    def find_all_by_portfolio_and_asset(
        self,
        portfolio_id: str,
        asset_id: str,
    ) -> list[Transaction]:
        """Return every transaction of one (portfolio, asset) ledger.

        Args:
            portfolio_id: Portfolio owning the ledger.
            asset_id: Asset the ledger tracks.

        Returns:
            list[Transaction]: Transactions in no guaranteed order.
        """

    def find_by_id(self, transaction_id: str) -> Transaction | None:
        """Return one transaction, or None when it does not exist."""

    def find_many_by_portfolio(self, portfolio_id: str) -> list[Transaction]:
        """Return every transaction recorded for a portfolio."""

    def list_ledger_keys(
        self,
        portfolio_id: str | None = None,
    ) -> list[tuple[str, str]]:
        """Return the distinct (portfolio, asset) pairs with transactions."""

    def create(self, transaction: Transaction) -> DomainError | None:
        """Store a new transaction; ConflictError on a duplicate id."""

    def update(self, transaction: Transaction) -> DomainError | None:
        """Replace a stored transaction; NotFoundError when it is missing."""


__all__ = ["TransactionRepositoryPort"]
