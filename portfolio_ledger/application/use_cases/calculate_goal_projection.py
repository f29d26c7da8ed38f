"""Use case projecting a goal under contribution scenarios."""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from portfolio_ledger.application.ports.goal_repository import GoalRepositoryPort
from portfolio_ledger.application.ports.investor_repository import (
    InvestorRepositoryPort,
)
from portfolio_ledger.domain.constants import DEFAULT_SAFETY_BUFFER
from portfolio_ledger.domain.errors import DomainError, NotFoundError
from portfolio_ledger.domain.models import (
    Goal,
    GoalProjectionAnalysis,
    ProjectionScenario,
    build_preset_scenarios,
)
from portfolio_ledger.domain.services.goal_projection import project_goal
from portfolio_ledger.infrastructure.logging.logger import get_app_logger


class CalculateGoalProjectionUseCase:
    """Load a goal and forecast it for each scenario.

    The investor and the goal must exist; the goal must be Active, the
    scenarios valid and the goal owned by the investor.
    """

    def __init__(
        self,
        investor_repository: InvestorRepositoryPort,
        goal_repository: GoalRepositoryPort,
        logger=None,
        safety_buffer: Decimal = DEFAULT_SAFETY_BUFFER,
    ) -> None:
        """Initialize the use case.

        Args:
            investor_repository: Investor lookup port.
            goal_repository: Goal lookup port.
            logger: Optional logger compatible with logging.Logger-like API.
            safety_buffer: Multiplier applied to the minimum contribution.
        """
        self._investors = investor_repository
        self._goals = goal_repository
        self._logger = logger or get_app_logger()
        self._safety_buffer = safety_buffer

    def execute(
        self,
        investor_id: str,
        goal_id: str,
        scenarios: Sequence[ProjectionScenario],
        today: date | None = None,
    ) -> GoalProjectionAnalysis | DomainError:
        """Return the projection analysis.

        Args:
            investor_id: Investor requesting the analysis.
            goal_id: Goal to project.
            scenarios: Contribution scenarios.
            today: Analysis date, defaults to the current date.

        Returns:
            GoalProjectionAnalysis | DomainError: Analysis, or the failure.
        """
        goal = self._load_goal(investor_id, goal_id)
        if isinstance(goal, DomainError):
            return goal
        return self._project(goal, scenarios, investor_id, today)

    def execute_with_presets(
        self,
        investor_id: str,
        goal_id: str,
        conservative,
        moderate,
        aggressive,
        today: date | None = None,
    ) -> GoalProjectionAnalysis | DomainError:
        """Project the goal under the three presets, in the goal currency."""
        goal = self._load_goal(investor_id, goal_id)
        if isinstance(goal, DomainError):
            return goal
        try:
            scenarios = build_preset_scenarios(
                goal.currency,
                conservative,
                moderate,
                aggressive,
            )
        except DomainError as exc:
            self._logger.warning(f"Invalid preset contribution: {exc.message}")
            return exc
        return self._project(goal, scenarios, investor_id, today)

    def _load_goal(self, investor_id: str, goal_id: str) -> Goal | DomainError:
        if self._investors.find_by_id(investor_id) is None:
            self._logger.warning(f"Projection requested by unknown investor {investor_id}")
            return NotFoundError("Investor not found.")
        goal = self._goals.find_by_id(goal_id)
        if goal is None:
            self._logger.warning(f"Projection requested for unknown goal {goal_id}")
            return NotFoundError("Goal not found.", details={"goal_id": goal_id})
        return goal

    def _project(
        self,
        goal: Goal,
        scenarios: Sequence[ProjectionScenario],
        investor_id: str,
        today: date | None,
    ) -> GoalProjectionAnalysis | DomainError:
        analysis = project_goal(
            goal,
            scenarios,
            today=today,
            requested_by=investor_id,
            safety_buffer=self._safety_buffer,
            logger=self._logger,
        )
        if isinstance(analysis, DomainError):
            return analysis
        self._logger.info(
            f"Projected goal {goal.id} over {len(analysis.projections)} scenarios; "
            f"minimum monthly contribution {analysis.minimum_monthly_contribution}"
        )
        return analysis


__all__ = ["CalculateGoalProjectionUseCase"]
