"""Use case registering a savings goal."""

from dataclasses import dataclass
from datetime import date

from portfolio_ledger.application.ports.goal_repository import GoalRepositoryPort
from portfolio_ledger.application.ports.investor_repository import (
    InvestorRepositoryPort,
)
from portfolio_ledger.domain.constants import DEFAULT_CURRENCY
from portfolio_ledger.domain.errors import DomainError, NotFoundError
from portfolio_ledger.domain.models import Goal, Money, Priority
from portfolio_ledger.domain.services.validation import parse_priority
from portfolio_ledger.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class RegisterGoalRequest:
    """Raw input for a new goal.

    Attributes:
        investor_id: Owner of the goal.
        name: Goal name.
        target_amount: Amount to reach.
        target_date: Date the amount should be reached by.
        priority: High, Medium or Low.
        description: Free text.
        current_amount: Amount already saved.
        currency: Currency of both amounts, defaults to the ledger default.
    """

    investor_id: str
    name: str
    target_amount: object
    target_date: date
    priority: str = Priority.MEDIUM.value
    description: str = ""
    current_amount: object = 0
    currency: str | None = None


class RegisterGoalUseCase:
    def __init__(
        self,
        investor_repository: InvestorRepositoryPort,
        goal_repository: GoalRepositoryPort,
        logger=None,
        default_currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self._investors = investor_repository
        self._goals = goal_repository
        self._logger = logger or get_app_logger()
        self._default_currency = default_currency

    def execute(self, request: RegisterGoalRequest) -> Goal | DomainError:
        """Create and store the goal.

        Returns:
            Goal | DomainError: Stored goal, or the failure.
        """
        if self._investors.find_by_id(request.investor_id) is None:
            return self._reject(NotFoundError("Investor not found."))

        currency = request.currency or self._default_currency
        try:
            goal = Goal(
                investor_id=request.investor_id,
                name=request.name,
                target_amount=Money(request.target_amount, currency),
                target_date=request.target_date,
                priority=parse_priority(request.priority),
                current_amount=Money(request.current_amount, currency),
                description=request.description,
            )
        except DomainError as exc:
            return self._reject(exc)

        error = self._goals.create(goal)
        if error is not None:
            return self._reject(error)
        self._logger.info(f"Registered goal {goal.id} for investor {goal.investor_id}")
        return goal

    def _reject(self, error: DomainError) -> DomainError:
        self._logger.warning(f"Goal not registered: {error.message}")
        return error


__all__ = ["RegisterGoalUseCase", "RegisterGoalRequest"]
