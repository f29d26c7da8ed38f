"""Use case reading and moving the saved amount of a goal."""

from portfolio_ledger.application.ports.goal_repository import GoalRepositoryPort
from portfolio_ledger.application.ports.investor_repository import (
    InvestorRepositoryPort,
)
from portfolio_ledger.application.use_cases.goal_access import load_owned_goal
from portfolio_ledger.domain.errors import DomainError, NotAllowedError
from portfolio_ledger.domain.models import Goal, Money, Percentage
from portfolio_ledger.infrastructure.logging.logger import get_app_logger


class UpdateGoalProgressUseCase:
    """Read progress, contribute to or withdraw from a goal.

    A contribution reaching the target marks an Active goal as Achieved.
    Cancelled goals accept neither contributions nor withdrawals.
    """

    def __init__(
        self,
        investor_repository: InvestorRepositoryPort,
        goal_repository: GoalRepositoryPort,
        logger=None,
    ) -> None:
        self._investors = investor_repository
        self._goals = goal_repository
        self._logger = logger or get_app_logger()

    def execute(self, investor_id: str, goal_id: str) -> Percentage | DomainError:
        """Return the current progress of the goal."""
        goal = load_owned_goal(self._investors, self._goals, investor_id, goal_id)
        if isinstance(goal, DomainError):
            return self._reject(goal)
        return goal.progress

    def contribute(
        self,
        investor_id: str,
        goal_id: str,
        amount,
    ) -> Goal | DomainError:
        """Add ``amount`` (in the goal currency) to the saved amount."""
        return self._move(investor_id, goal_id, amount, withdraw=False)

    def withdraw(
        self,
        investor_id: str,
        goal_id: str,
        amount,
    ) -> Goal | DomainError:
        """Remove ``amount`` from the saved amount; never below zero."""
        return self._move(investor_id, goal_id, amount, withdraw=True)

    def _move(
        self,
        investor_id: str,
        goal_id: str,
        amount,
        *,
        withdraw: bool,
    ) -> Goal | DomainError:
        goal = load_owned_goal(self._investors, self._goals, investor_id, goal_id)
        if isinstance(goal, DomainError):
            return self._reject(goal)
        if goal.is_cancelled():
            return self._reject(
                NotAllowedError(
                    "Goal cannot be modified because it is cancelled.",
                    details={"goal_id": goal.id},
                )
            )

        try:
            money = amount if isinstance(amount, Money) else Money(amount, goal.currency)
            if not money.is_positive():
                raise NotAllowedError("Amount must be greater than zero.")
            if withdraw:
                goal.subtract_from_current_amount(money)
            else:
                goal.add_to_current_amount(money)
        except DomainError as exc:
            return self._reject(exc)

        error = self._goals.update(goal)
        if error is not None:
            return self._reject(error)
        action = "Withdrew" if withdraw else "Contributed"
        self._logger.info(
            f"{action} {money} on goal {goal.id}; progress {goal.progress}"
        )
        return goal

    def _reject(self, error: DomainError) -> DomainError:
        self._logger.warning(f"Goal progress not updated: {error.message}")
        return error


__all__ = ["UpdateGoalProgressUseCase"]
