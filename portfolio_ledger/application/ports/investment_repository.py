"""Port for persisted positions."""

from typing import Protocol

from portfolio_ledger.domain.errors import DomainError
from portfolio_ledger.domain.models import Position


class InvestmentRepositoryPort(Protocol):
    """Port exposing the materialized positions derived by replay."""

    def find_by_portfolio_id_and_asset_id(
        self,
        portfolio_id: str,
        asset_id: str,
    ) -> Position | None:
        """Return the stored position of one ledger, if any."""

    def find_many_by_portfolio(self, portfolio_id: str) -> list[Position]:
        """Return every stored position of a portfolio."""

    def create(self, position: Position) -> DomainError | None:
        """Store a position; ConflictError when the ledger already has one."""

    def update(self, position: Position) -> DomainError | None:
        """Replace the stored position of the same ledger."""

    def delete(self, portfolio_id: str, asset_id: str) -> DomainError | None:
        """Remove the stored position; NotFoundError when it is missing."""


__all__ = ["InvestmentRepositoryPort"]
