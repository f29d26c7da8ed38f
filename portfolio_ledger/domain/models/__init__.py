"""Domain models package."""

from .goal import Goal, GoalStatus, Priority
from .position import Position, PositionDelta
from .projection import (
    GoalProjectionAnalysis,
    ProjectionResult,
    ProjectionScenario,
    ScenarioPreset,
    build_preset_scenarios,
)
from .transaction import Transaction, TransactionType
from .values import Money, Percentage, Quantity, SignedMoney

__all__ = [
    "Goal",
    "GoalStatus",
    "Priority",
    "Position",
    "PositionDelta",
    "GoalProjectionAnalysis",
    "ProjectionResult",
    "ProjectionScenario",
    "ScenarioPreset",
    "build_preset_scenarios",
    "Transaction",
    "TransactionType",
    "Money",
    "Percentage",
    "Quantity",
    "SignedMoney",
]
