"""Tests for the goal projection service."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from portfolio_ledger.domain.constants import FAR_FUTURE_DATE, NEVER_MONTHS
from portfolio_ledger.domain.errors import NotAllowedError
from portfolio_ledger.domain.models import (
    GoalProjectionAnalysis,
    GoalStatus,
    Money,
    ProjectionScenario,
    ScenarioPreset,
    build_preset_scenarios,
)
from portfolio_ledger.domain.services.goal_projection import (
    add_months,
    minimum_monthly_contribution,
    months_between,
    project_goal,
    project_scenario,
    recommended_monthly_contribution,
    validate_projection_request,
)
from tests.factories import INVESTOR_ID, TODAY, brl, goal


def scenario(amount, name="Base") -> ProjectionScenario:
    return ProjectionScenario(monthly_contribution=brl(amount), scenario_name=name)


@pytest.mark.parametrize(
    ("start", "end", "expected"),
    [
        (date(2024, 1, 15), date(2024, 12, 15), 11),
        (date(2024, 1, 15), date(2024, 2, 16), 2),
        (date(2024, 1, 31), date(2024, 2, 29), 1),
        (date(2024, 1, 15), date(2024, 1, 15), 0),
        (date(2024, 3, 1), date(2024, 1, 1), 0),
    ],
)
def test_months_between(start, end, expected):
    """Partial months round up; past dates floor at zero."""
    assert months_between(start, end) == expected


def test_add_months_clamps_day_and_far_future():
    """Month steps clamp to the month end and to the far-future date."""
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2024, 1, 15), 8) == date(2024, 9, 15)
    assert add_months(date(9999, 6, 1), 12) == FAR_FUTURE_DATE


def test_projection_meets_target_date():
    """A sufficient contribution completes before the target date."""
    result = project_scenario(goal(10000, 2000), scenario(1000), TODAY)

    assert result.months_to_complete == 8
    assert result.projected_completion_date == date(2024, 9, 15)
    assert result.will_meet_target_date
    assert result.total_contributions_needed == brl(8000)
    assert result.projected_amount == brl(13000)
    assert result.surplus == brl(3000)
    assert result.shortfall == brl(0)
    assert result.progress_at_target_date.value == Decimal("100")


def test_projection_misses_target_date():
    """A small contribution leaves a shortfall on the target date."""
    result = project_scenario(goal(10000, 2000), scenario(500), TODAY)

    assert result.months_to_complete == 16
    assert not result.will_meet_target_date
    assert result.projected_amount == brl(7500)
    assert result.shortfall == brl(2500)
    assert result.surplus == brl(0)
    assert result.progress_at_target_date.value == Decimal("75")


def test_zero_contribution_never_completes():
    """A zero contribution never completes."""
    saving = goal(10000, 2000)

    result = project_scenario(saving, scenario(0), TODAY)

    assert result.months_to_complete == NEVER_MONTHS
    assert result.projected_completion_date == FAR_FUTURE_DATE
    assert not result.will_meet_target_date
    assert result.total_contributions_needed == brl(0)
    assert result.shortfall == saving.remaining_amount


def test_goal_already_met():
    """A met goal needs no months and reports the surplus."""
    result = project_scenario(goal(10000, 12000), scenario(100), TODAY)

    assert result.months_to_complete == 0
    assert result.projected_completion_date == TODAY
    assert result.will_meet_target_date
    assert result.shortfall == brl(0)
    assert result.surplus.is_positive()


def test_tiny_contribution_collapses_to_far_future():
    """Completion past year 9999 becomes the far-future date."""
    result = project_scenario(goal(10000, 2000), scenario("0.01"), TODAY)

    assert result.months_to_complete == 800000
    assert result.projected_completion_date == FAR_FUTURE_DATE
    assert not result.will_meet_target_date


def test_minimum_and_recommended_contribution():
    """Recommended contribution is the minimum times the buffer."""
    saving = goal(10000, 2000)

    minimum = minimum_monthly_contribution(saving, TODAY)
    recommended = recommended_monthly_contribution(saving, TODAY)

    assert minimum.amount == brl(8000).divide(11).amount
    assert recommended.amount == minimum.multiply(Decimal("1.1")).amount


def test_minimum_contribution_after_target_date_is_remaining():
    """Past the target date the minimum is the whole remaining amount."""
    saving = goal(10000, 2000, target_date=date(2024, 1, 1))

    assert minimum_monthly_contribution(saving, TODAY) == brl(8000)


def test_project_goal_builds_analysis():
    """project_goal returns one result per scenario, in order."""
    saving = goal(10000, 2000)

    analysis = project_goal(
        saving,
        [scenario(500, "Low"), scenario(1000, "High")],
        today=TODAY,
        requested_by=INVESTOR_ID,
    )

    assert isinstance(analysis, GoalProjectionAnalysis)
    assert [p.scenario.scenario_name for p in analysis.projections] == ["Low", "High"]
    assert analysis.analysis_date == TODAY
    assert analysis.current_monthly_requirement == analysis.minimum_monthly_contribution
    assert analysis.recommended_monthly_contribution.is_greater_than(
        analysis.minimum_monthly_contribution
    )


def test_project_goal_with_custom_buffer():
    """The safety buffer scales the recommended contribution."""
    analysis = project_goal(
        goal(10000, 2000, target_date=date(2024, 9, 15)),
        [scenario(1000)],
        today=TODAY,
        safety_buffer=Decimal("1.5"),
    )

    assert analysis.minimum_monthly_contribution == brl(1000)
    assert analysis.recommended_monthly_contribution.amount == Decimal("1500")


def test_project_goal_rejects_inactive_goal_and_logs():
    """Inactive goals are rejected with a warning."""
    logger = MagicMock()

    result = project_goal(
        goal(status=GoalStatus.ACHIEVED),
        [scenario(100)],
        today=TODAY,
        logger=logger,
    )

    assert isinstance(result, NotAllowedError)
    logger.warning.assert_called_once()


@pytest.mark.parametrize(
    ("scenarios", "requested_by", "fragment"),
    [
        ([], None, "No scenarios"),
        (
            [ProjectionScenario(Money(100, "USD"), "Dollar")],
            None,
            "currency must match",
        ),
        ([ProjectionScenario(None, "Empty")], None, "needs a monthly contribution"),
        ([scenario(100)], "someone-else", "not allowed to access"),
    ],
)
def test_validate_projection_request(scenarios, requested_by, fragment):
    """Invalid requests are rejected with a clear message."""
    error = validate_projection_request(goal(), scenarios, requested_by)

    assert isinstance(error, NotAllowedError)
    assert fragment in error.message


def test_validate_projection_request_checks_status_first():
    """Goal status is checked before the scenarios."""
    error = validate_projection_request(goal(status=GoalStatus.CANCELLED), [])

    assert "not active" in error.message


def test_build_preset_scenarios():
    """Presets come back Conservative, Moderate, Aggressive in one currency."""
    scenarios = build_preset_scenarios("brl", 500, "1000.50", Decimal("2000"))

    assert [s.scenario_name for s in scenarios] == [
        "Conservative",
        "Moderate",
        "Aggressive",
    ]
    assert scenarios[1].monthly_contribution == brl("1000.50")
    assert {s.monthly_contribution.currency for s in scenarios} == {"BRL"}


def test_scenario_from_preset_accepts_raw_name():
    """A preset name string resolves to the matching scenario."""
    scenario_ = ProjectionScenario.from_preset("Moderate", 750, "BRL")

    assert scenario_ == ProjectionScenario(brl(750), ScenarioPreset.MODERATE.value)
    with pytest.raises(ValueError):
        ProjectionScenario.from_preset("Reckless", 750, "BRL")
    with pytest.raises(NotAllowedError):
        ProjectionScenario.from_preset(ScenarioPreset.AGGRESSIVE, -1, "BRL")
