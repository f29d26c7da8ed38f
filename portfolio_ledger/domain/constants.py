"""Domain constants for the position ledger and goal projections."""

from datetime import date
from decimal import Decimal

DEFAULT_CURRENCY = "BRL"

# Sentinel returned as months_to_complete when a goal can never be met.
NEVER_MONTHS = -1
FAR_FUTURE_DATE = date(9999, 12, 31)

DEFAULT_SAFETY_BUFFER = Decimal("1.1")

# Goals closer than this many days need attention.
ATTENTION_WINDOW_DAYS = 30


__all__ = [
    "DEFAULT_CURRENCY",
    "NEVER_MONTHS",
    "FAR_FUTURE_DATE",
    "DEFAULT_SAFETY_BUFFER",
    "ATTENTION_WINDOW_DAYS",
]
