"""Use case moving a goal along its status transitions."""

from portfolio_ledger.application.ports.goal_repository import GoalRepositoryPort
from portfolio_ledger.application.ports.investor_repository import (
    InvestorRepositoryPort,
)
from portfolio_ledger.application.use_cases.goal_access import load_owned_goal
from portfolio_ledger.domain.errors import DomainError
from portfolio_ledger.domain.models import Goal, GoalStatus
from portfolio_ledger.domain.services.validation import parse_goal_status
from portfolio_ledger.infrastructure.logging.logger import get_app_logger


def transition_goal(goal: Goal, status: GoalStatus) -> None:
    """Apply the explicit operation reaching ``status``.

    Raises:
        NotAllowedError: If the transition is not allowed from the current
            status.
    """
    operations = {
        GoalStatus.ACHIEVED: goal.mark_as_achieved,
        GoalStatus.CANCELLED: goal.cancel,
        GoalStatus.ACTIVE: goal.reactivate,
    }
    operations[status]()


class ChangeGoalStatusUseCase:
    """Achieve, cancel or reactivate a goal."""

    def __init__(
        self,
        investor_repository: InvestorRepositoryPort,
        goal_repository: GoalRepositoryPort,
        logger=None,
    ) -> None:
        self._investors = investor_repository
        self._goals = goal_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        investor_id: str,
        goal_id: str,
        status: str | GoalStatus,
    ) -> Goal | DomainError:
        """Move the goal to ``status``.

        Args:
            investor_id: Investor owning the goal.
            goal_id: Goal to update.
            status: Requested status.

        Returns:
            Goal | DomainError: Updated goal, or the failure.
        """
        goal = load_owned_goal(self._investors, self._goals, investor_id, goal_id)
        if isinstance(goal, DomainError):
            return self._reject(goal)

        try:
            target = parse_goal_status(status)
            previous = goal.status
            transition_goal(goal, target)
        except DomainError as exc:
            return self._reject(exc)

        error = self._goals.update(goal)
        if error is not None:
            return self._reject(error)
        self._logger.info(
            f"Goal {goal.id} moved from {previous.value} to {goal.status.value}"
        )
        return goal

    def achieve(self, investor_id: str, goal_id: str) -> Goal | DomainError:
        return self.execute(investor_id, goal_id, GoalStatus.ACHIEVED)

    def cancel(self, investor_id: str, goal_id: str) -> Goal | DomainError:
        return self.execute(investor_id, goal_id, GoalStatus.CANCELLED)

    def reactivate(self, investor_id: str, goal_id: str) -> Goal | DomainError:
        return self.execute(investor_id, goal_id, GoalStatus.ACTIVE)

    def _reject(self, error: DomainError) -> DomainError:
        self._logger.warning(f"Goal status not changed: {error.message}")
        return error


__all__ = ["ChangeGoalStatusUseCase", "transition_goal"]
