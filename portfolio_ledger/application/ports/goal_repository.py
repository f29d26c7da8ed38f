"""Port for savings goals."""

from typing import Protocol

from portfolio_ledger.domain.errors import DomainError
from portfolio_ledger.domain.models import Goal


class GoalRepositoryPort(Protocol):
    def find_by_id(self, goal_id: str) -> Goal | None:
        """Return one goal, or None when it does not exist."""

    def create(self, goal: Goal) -> DomainError | None:
        """Store a new goal; ConflictError on a duplicate id."""

    def update(self, goal: Goal) -> DomainError | None:
        """Replace a stored goal; NotFoundError when it is missing."""


__all__ = ["GoalRepositoryPort"]
