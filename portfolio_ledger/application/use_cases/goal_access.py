"""Shared lookups for goal use cases."""

from portfolio_ledger.application.ports.goal_repository import GoalRepositoryPort
from portfolio_ledger.application.ports.investor_repository import (
    InvestorRepositoryPort,
)
from portfolio_ledger.domain.errors import (
    DomainError,
    NotAllowedError,
    NotFoundError,
)
from portfolio_ledger.domain.models import Goal


def load_owned_goal(
    investors: InvestorRepositoryPort,
    goals: GoalRepositoryPort,
    investor_id: str,
    goal_id: str,
) -> Goal | DomainError:
    """Load a goal after checking the investor exists and owns it.

    Args:
        investors: Investor lookup port.
        goals: Goal lookup port.
        investor_id: Investor making the request.
        goal_id: Goal requested.

    Returns:
        Goal | DomainError: The goal, NotFoundError for a missing investor or
        goal, or NotAllowedError when the goal belongs to someone else.
    """
    if investors.find_by_id(investor_id) is None:
        return NotFoundError("Investor not found.")
    goal = goals.find_by_id(goal_id)
    if goal is None:
        return NotFoundError("Goal not found.", details={"goal_id": goal_id})
    if not goal.belongs_to(investor_id):
        return NotAllowedError(
            "You are not allowed to access this goal.",
            details={"goal_id": goal_id},
        )
    return goal


__all__ = ["load_owned_goal"]
