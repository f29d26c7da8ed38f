"""Goal projection models."""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from portfolio_ledger.domain.models.goal import Goal
from portfolio_ledger.domain.models.values import Money, Percentage


class ScenarioPreset(str, Enum):
    CONSERVATIVE = "Conservative"
    MODERATE = "Moderate"
    AGGRESSIVE = "Aggressive"


@dataclass(frozen=True)
class ProjectionScenario:
    """Hypothetical fixed monthly contribution."""

    monthly_contribution: Money
    scenario_name: str

    @classmethod
    def from_preset(
        cls,
        preset: ScenarioPreset | str,
        amount,
        currency: str,
    ) -> "ProjectionScenario":
        preset = ScenarioPreset(preset)
        return cls(Money(amount, currency), preset.value)


def build_preset_scenarios(
    currency: str,
    conservative,
    moderate,
    aggressive,
) -> list[ProjectionScenario]:
    """Return the Conservative, Moderate and Aggressive scenarios, in order.

    Args:
        currency: Goal currency the contributions are expressed in.
        conservative: Monthly amount of the Conservative scenario.
        moderate: Monthly amount of the Moderate scenario.
        aggressive: Monthly amount of the Aggressive scenario.

    Returns:
        list[ProjectionScenario]: One scenario per preset.
    """
    amounts = {
        ScenarioPreset.CONSERVATIVE: conservative,
        ScenarioPreset.MODERATE: moderate,
        ScenarioPreset.AGGRESSIVE: aggressive,
    }
    return [
        ProjectionScenario.from_preset(preset, amount, currency)
        for preset, amount in amounts.items()
    ]


@dataclass(frozen=True)
class ProjectionResult:
    """Forecast for a single scenario.

    Attributes:
        scenario: Scenario the forecast was computed for.
        projected_completion_date: Date the goal is met, or the far-future
            sentinel when the contribution is zero.
        months_to_complete: Months needed, or the never sentinel (-1).
        total_contributions_needed: Contribution times months_to_complete.
        will_meet_target_date: Whether completion happens by the target date.
        projected_amount: Amount reached on the target date.
        shortfall: Amount missing on the target date.
        surplus: Amount above target on the target date.
        progress_at_target_date: Clamped progress on the target date.
    """

    scenario: ProjectionScenario
    projected_completion_date: date
    months_to_complete: int
    total_contributions_needed: Money
    will_meet_target_date: bool
    projected_amount: Money
    shortfall: Money
    surplus: Money
    progress_at_target_date: Percentage


@dataclass(frozen=True)
class GoalProjectionAnalysis:
    """Projections for every scenario plus contribution recommendations."""

    goal: Goal
    projections: list[ProjectionResult]
    recommended_monthly_contribution: Money
    minimum_monthly_contribution: Money
    current_monthly_requirement: Money
    analysis_date: date


__all__ = [
    "ScenarioPreset",
    "ProjectionScenario",
    "ProjectionResult",
    "GoalProjectionAnalysis",
    "build_preset_scenarios",
]
