"""Domain package for ledger rules and core models."""

from .constants import (
    DEFAULT_CURRENCY,
    DEFAULT_SAFETY_BUFFER,
    FAR_FUTURE_DATE,
    NEVER_MONTHS,
)
from .errors import (
    ConflictError,
    CurrencyMismatchError,
    DomainError,
    ErrorCode,
    InsufficientQuantityError,
    NotAllowedError,
    NotFoundError,
)
from .models import (
    Goal,
    GoalProjectionAnalysis,
    GoalStatus,
    Money,
    Percentage,
    Position,
    PositionDelta,
    Priority,
    ProjectionResult,
    ProjectionScenario,
    Quantity,
    ScenarioPreset,
    SignedMoney,
    Transaction,
    TransactionType,
    build_preset_scenarios,
)
from .policies import is_goal_transition_allowed
from .services import (
    calculate_buy_impact,
    calculate_dividend_impact,
    calculate_sell_impact,
    calculate_transaction_impact,
    project_goal,
    replay_ledger,
)

__all__ = [
    "DEFAULT_CURRENCY",
    "DEFAULT_SAFETY_BUFFER",
    "FAR_FUTURE_DATE",
    "NEVER_MONTHS",
    "ConflictError",
    "CurrencyMismatchError",
    "DomainError",
    "ErrorCode",
    "InsufficientQuantityError",
    "NotAllowedError",
    "NotFoundError",
    "Goal",
    "GoalProjectionAnalysis",
    "GoalStatus",
    "Money",
    "Percentage",
    "Position",
    "PositionDelta",
    "Priority",
    "ProjectionResult",
    "ProjectionScenario",
    "Quantity",
    "ScenarioPreset",
    "SignedMoney",
    "build_preset_scenarios",
    "Transaction",
    "TransactionType",
    "is_goal_transition_allowed",
    "calculate_buy_impact",
    "calculate_dividend_impact",
    "calculate_sell_impact",
    "calculate_transaction_impact",
    "project_goal",
    "replay_ledger",
]
