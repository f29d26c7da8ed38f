"""Use case editing the attributes of a goal."""

from datetime import date

from portfolio_ledger.application.ports.goal_repository import GoalRepositoryPort
from portfolio_ledger.application.ports.investor_repository import (
    InvestorRepositoryPort,
)
from portfolio_ledger.application.use_cases.change_goal_status import (
    transition_goal,
)
from portfolio_ledger.application.use_cases.goal_access import load_owned_goal
from portfolio_ledger.domain.errors import DomainError, NotAllowedError
from portfolio_ledger.domain.models import Goal, GoalStatus, Money, Priority
from portfolio_ledger.domain.services.validation import (
    parse_goal_status,
    parse_priority,
)
from portfolio_ledger.infrastructure.logging.logger import get_app_logger


class EditGoalUseCase:
    """Update name, description, target, priority or status of a goal.

    Fields left as None are not touched. Asking for the current priority or
    status is a no-op rather than an error.
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

    def execute(
        self,
        investor_id: str,
        goal_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        target_amount=None,
        target_date: date | None = None,
        priority: str | Priority | None = None,
        status: str | GoalStatus | None = None,
    ) -> Goal | DomainError:
        """Apply the edits and store the goal.

        Args:
            investor_id: Investor owning the goal.
            goal_id: Goal to edit.
            name: New name.
            description: New description.
            target_amount: New target, in the goal currency.
            target_date: New target date.
            priority: New priority.
            status: New status, reached through the allowed transitions.

        Returns:
            Goal | DomainError: Updated goal, or the failure.
        """
        requested = [name, description, target_amount, target_date, priority, status]
        if all(value is None for value in requested):
            return self._reject(
                NotAllowedError("It is necessary to inform some change field.")
            )

        goal = load_owned_goal(self._investors, self._goals, investor_id, goal_id)
        if isinstance(goal, DomainError):
            return self._reject(goal)

        try:
            if name is not None:
                goal.update_name(name)
            if description is not None:
                goal.update_description(description)
            if target_amount is not None:
                goal.update_target_amount(Money(target_amount, goal.currency))
            if target_date is not None:
                goal.update_target_date(target_date)
            if priority is not None:
                new_priority = parse_priority(priority)
                if new_priority is not goal.priority:
                    goal.update_priority(new_priority)
            if status is not None:
                new_status = parse_goal_status(status)
                if new_status is not goal.status:
                    transition_goal(goal, new_status)
        except DomainError as exc:
            return self._reject(exc)

        error = self._goals.update(goal)
        if error is not None:
            return self._reject(error)
        self._logger.info(f"Edited goal {goal.id}")
        return goal

    def _reject(self, error: DomainError) -> DomainError:
        self._logger.warning(f"Goal not edited: {error.message}")
        return error


__all__ = ["EditGoalUseCase"]
