"""Domain service forecasting goal completion under contribution scenarios."""

from collections.abc import Sequence
from datetime import date
from decimal import Decimal
from logging import Logger

from dateutil.relativedelta import relativedelta

from portfolio_ledger.domain.constants import (
    DEFAULT_SAFETY_BUFFER,
    FAR_FUTURE_DATE,
    NEVER_MONTHS,
)
from portfolio_ledger.domain.errors import DomainError, NotAllowedError
from portfolio_ledger.domain.models import (
    Goal,
    GoalProjectionAnalysis,
    Money,
    Percentage,
    ProjectionResult,
    ProjectionScenario,
)
from portfolio_ledger.utils.decimal_utils import ceil_divide


def months_between(start: date, end: date) -> int:
    """Return calendar months from start to end, never negative.

    A partial month counts as a whole one: when the end day-of-month is
    later than the start day-of-month the count is rounded up.
    """
    total = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day > start.day:
        total += 1
    return max(total, 0)


def add_months(start: date, months: int) -> date:
    """Add calendar months, clamping the day to the end of the month.

    Dates past year 9999 collapse to FAR_FUTURE_DATE.
    """
    if start.year + (start.month - 1 + months) // 12 > FAR_FUTURE_DATE.year:
        return FAR_FUTURE_DATE
    return start + relativedelta(months=months)


def minimum_monthly_contribution(goal: Goal, today: date) -> Money:
    """Return the contribution that exactly meets the target on time.

    Args:
        goal: Goal being analysed.
        today: Analysis date.

    Returns:
        Money: Remaining amount spread over the months left, or the whole
        remaining amount when the target date has been reached.
    """
    remaining = goal.remaining_amount
    months = months_between(today, goal.target_date)
    if months <= 0:
        return remaining
    return remaining.divide(months)


def recommended_monthly_contribution(
    goal: Goal,
    today: date,
    safety_buffer: Decimal = DEFAULT_SAFETY_BUFFER,
) -> Money:
    return minimum_monthly_contribution(goal, today).multiply(safety_buffer)


def project_scenario(
    goal: Goal,
    scenario: ProjectionScenario,
    today: date,
) -> ProjectionResult:
    """Forecast one scenario.

    Args:
        goal: Goal being analysed.
        scenario: Monthly contribution to simulate.
        today: Analysis date.

    Returns:
        ProjectionResult: Completion forecast and position on the target date.
    """
    currency = goal.currency
    remaining = goal.remaining_amount
    contribution = scenario.monthly_contribution

    if remaining.is_zero():
        months_to_complete = 0
        completion_date = today
    elif contribution.is_positive():
        months_to_complete = ceil_divide(remaining.amount, contribution.amount)
        completion_date = add_months(today, months_to_complete)
    else:
        months_to_complete = NEVER_MONTHS
        completion_date = FAR_FUTURE_DATE

    months_until_target = months_between(today, goal.target_date)
    projected_amount = goal.current_amount.add(
        contribution.multiply(months_until_target)
    )
    difference = projected_amount.difference(goal.target_amount)
    shortfall = (
        difference.magnitude() if difference.is_negative() else Money.zero(currency)
    )
    surplus = (
        difference.magnitude() if difference.is_positive() else Money.zero(currency)
    )

    if months_to_complete > 0:
        total_needed = contribution.multiply(months_to_complete)
    else:
        total_needed = Money.zero(currency)

    return ProjectionResult(
        scenario=scenario,
        projected_completion_date=completion_date,
        months_to_complete=months_to_complete,
        total_contributions_needed=total_needed,
        will_meet_target_date=completion_date <= goal.target_date,
        projected_amount=projected_amount,
        shortfall=shortfall,
        surplus=surplus,
        progress_at_target_date=Percentage.from_ratio(
            projected_amount.ratio_to(goal.target_amount)
        ),
    )


def validate_projection_request(
    goal: Goal,
    scenarios: Sequence[ProjectionScenario],
    requested_by: str | None = None,
) -> NotAllowedError | None:
    """Return the first reason the goal cannot be projected, if any."""
    if not goal.is_active():
        return NotAllowedError(
            "Goal cannot be projected because it is not active.",
            details={"goal_id": goal.id, "status": goal.status.value},
        )
    if not scenarios:
        return NotAllowedError("No scenarios available to proceed.")
    for index, scenario in enumerate(scenarios):
        contribution = scenario.monthly_contribution
        if not isinstance(contribution, Money):
            return NotAllowedError(
                "Every scenario needs a monthly contribution.",
                details={"scenario": index},
            )
        if contribution.currency != goal.currency:
            return NotAllowedError(
                "Monthly contribution currency must match the target amount "
                "currency.",
                details={
                    "scenario": index,
                    "expected": goal.currency,
                    "received": contribution.currency,
                },
            )
    if requested_by is not None and not goal.belongs_to(requested_by):
        return NotAllowedError(
            "You are not allowed to access this goal.",
            details={"goal_id": goal.id},
        )
    return None


def project_goal(
    goal: Goal,
    scenarios: Sequence[ProjectionScenario],
    *,
    today: date | None = None,
    requested_by: str | None = None,
    safety_buffer: Decimal = DEFAULT_SAFETY_BUFFER,
    logger: Logger | None = None,
) -> GoalProjectionAnalysis | DomainError:
    """Project a goal under every scenario.

    Args:
        goal: Active goal to analyse.
        scenarios: Non-empty list of contribution scenarios.
        today: Analysis date, defaults to the current date.
        requested_by: Investor asking for the analysis; ownership is
            checked when provided.
        safety_buffer: Multiplier applied to the minimum contribution.
        logger: Optional logger used for warnings.

    Returns:
        GoalProjectionAnalysis | DomainError: Analysis or the failure.
    """
    today = today or date.today()
    error = validate_projection_request(goal, scenarios, requested_by)
    if error is not None:
        if logger:
            logger.warning(f"Projection for goal {goal.id} rejected: {error.message}")
        return error

    try:
        projections = [
            project_scenario(goal, scenario, today) for scenario in scenarios
        ]
        minimum = minimum_monthly_contribution(goal, today)
        recommended = minimum.multiply(safety_buffer)
    except DomainError as exc:
        if logger:
            logger.warning(f"Projection for goal {goal.id} failed: {exc.message}")
        return exc

    return GoalProjectionAnalysis(
        goal=goal,
        projections=projections,
        recommended_monthly_contribution=recommended,
        minimum_monthly_contribution=minimum,
        current_monthly_requirement=minimum,
        analysis_date=today,
    )


__all__ = [
    "months_between",
    "add_months",
    "minimum_monthly_contribution",
    "recommended_monthly_contribution",
    "project_scenario",
    "validate_projection_request",
    "project_goal",
]
