"""Domain services package."""

from .goal_projection import (
    add_months,
    minimum_monthly_contribution,
    months_between,
    project_goal,
    project_scenario,
    recommended_monthly_contribution,
    validate_projection_request,
)
from .ledger_replay import apply_transaction, replay_ledger, sort_ledger
from .position_update import (
    calculate_buy_impact,
    calculate_dividend_impact,
    calculate_sell_impact,
    calculate_transaction_impact,
)
from .validation import (
    parse_goal_status,
    parse_priority,
    parse_transaction_type,
    require_identifier,
    warn_on_position_drift,
)

__all__ = [
    "add_months",
    "minimum_monthly_contribution",
    "months_between",
    "project_goal",
    "project_scenario",
    "recommended_monthly_contribution",
    "validate_projection_request",
    "apply_transaction",
    "replay_ledger",
    "sort_ledger",
    "calculate_buy_impact",
    "calculate_dividend_impact",
    "calculate_sell_impact",
    "calculate_transaction_impact",
    "parse_goal_status",
    "parse_priority",
    "parse_transaction_type",
    "require_identifier",
    "warn_on_position_drift",
]
