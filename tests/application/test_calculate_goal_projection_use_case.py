"""Tests for CalculateGoalProjectionUseCase."""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import MagicMock

from portfolio_ledger.application.use_cases.calculate_goal_projection import (
    CalculateGoalProjectionUseCase,
)
from portfolio_ledger.domain.errors import NotAllowedError, NotFoundError
from portfolio_ledger.domain.models import GoalStatus, ProjectionScenario
from portfolio_ledger.infrastructure.in_memory_repositories import (
    InMemoryGoalRepository,
    InMemoryInvestorRepository,
)
from tests.factories import INVESTOR_ID, TODAY, brl, goal, investor

SCENARIOS = [ProjectionScenario(brl(1000), "Steady")]


def _use_case(goals, **kwargs):
    return CalculateGoalProjectionUseCase(
        InMemoryInvestorRepository([investor(), investor("investor-2")]),
        goals,
        logger=MagicMock(),
        **kwargs,
    )


def test_projection_for_owned_goal() -> None:
    """The owner gets one projection per scenario plus recommendations."""
    goals = InMemoryGoalRepository()
    saving = goal(10000, 2000)
    goals.create(saving)

    analysis = _use_case(goals).execute(INVESTOR_ID, saving.id, SCENARIOS, today=TODAY)

    assert analysis.goal.id == saving.id
    assert analysis.projections[0].months_to_complete == 8
    assert analysis.recommended_monthly_contribution == (
        analysis.minimum_monthly_contribution.multiply(Decimal("1.1"))
    )


def test_projection_uses_configured_buffer() -> None:
    """The safety buffer comes from the constructor."""
    goals = InMemoryGoalRepository()
    saving = goal(10000, 2000)
    goals.create(saving)

    analysis = _use_case(goals, safety_buffer=Decimal("1")).execute(
        INVESTOR_ID, saving.id, SCENARIOS, today=TODAY
    )

    assert analysis.recommended_monthly_contribution == (
        analysis.minimum_monthly_contribution
    )


def test_projection_errors() -> None:
    """Unknown ids, foreign or inactive goals and empty scenarios fail."""
    goals = InMemoryGoalRepository()
    saving = goal(10000, 2000)
    cancelled = goal(status=GoalStatus.CANCELLED)
    goals.create(saving)
    goals.create(cancelled)
    use_case = _use_case(goals)

    assert isinstance(use_case.execute("ghost", saving.id, SCENARIOS), NotFoundError)
    assert isinstance(use_case.execute(INVESTOR_ID, "nope", SCENARIOS), NotFoundError)
    assert isinstance(
        use_case.execute("investor-2", saving.id, SCENARIOS), NotAllowedError
    )
    assert isinstance(
        use_case.execute(INVESTOR_ID, cancelled.id, SCENARIOS), NotAllowedError
    )
    assert isinstance(use_case.execute(INVESTOR_ID, saving.id, []), NotAllowedError)


def test_projection_with_presets_uses_goal_currency() -> None:
    """Presets are built in the goal currency and projected in order."""
    goals = InMemoryGoalRepository()
    saving = goal(10000, 2000)
    goals.create(saving)

    analysis = _use_case(goals).execute_with_presets(
        INVESTOR_ID, saving.id, 500, 1000, "2000", today=TODAY
    )

    assert [p.scenario.scenario_name for p in analysis.projections] == [
        "Conservative",
        "Moderate",
        "Aggressive",
    ]
    assert [p.months_to_complete for p in analysis.projections] == [16, 8, 4]
    assert analysis.projections[2].scenario.monthly_contribution == brl(2000)


def test_projection_with_invalid_preset_amount() -> None:
    """A negative preset amount is returned as an error, not raised."""
    goals = InMemoryGoalRepository()
    saving = goal(10000, 2000)
    goals.create(saving)
    use_case = _use_case(goals)

    result = use_case.execute_with_presets(INVESTOR_ID, saving.id, -1, 1000, 2000)

    assert isinstance(result, NotAllowedError)
    assert isinstance(
        use_case.execute_with_presets("ghost", saving.id, 1, 2, 3), NotFoundError
    )
