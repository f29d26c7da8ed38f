"""Port for investor lookups used in ownership checks."""

from dataclasses import dataclass
from typing import Protocol

from portfolio_ledger.domain.errors import DomainError


@dataclass(frozen=True)
class InvestorRecord:
    """Investor identity as seen by the ledger.

    Attributes:
        id: Investor identifier.
        name: Display name.
        email: Contact e-mail, unique per investor.
    """

    id: str
    name: str
    email: str


class InvestorRepositoryPort(Protocol):
    """Port exposing investor identities."""

    def find_by_id(self, investor_id: str) -> InvestorRecord | None:
        """Return the investor, or None when it does not exist."""

    def create(self, investor: InvestorRecord) -> DomainError | None:
        """Store an investor; ConflictError on a duplicate id or e-mail."""


__all__ = ["InvestorRecord", "InvestorRepositoryPort"]
