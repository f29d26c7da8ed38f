"""Savings goal entity."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from portfolio_ledger.domain.constants import ATTENTION_WINDOW_DAYS
from portfolio_ledger.domain.errors import CurrencyMismatchError, NotAllowedError
from portfolio_ledger.domain.models.transaction import new_id, utc_now
from portfolio_ledger.domain.models.values import Money, Percentage
from portfolio_ledger.domain.policies import is_goal_transition_allowed
from portfolio_ledger.utils.text_utils import normalize_name


class Priority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class GoalStatus(str, Enum):
    ACTIVE = "Active"
    ACHIEVED = "Achieved"
    CANCELLED = "Cancelled"


@dataclass
class Goal:
    """Savings target tracked independently from the ledger.

    Progress is recomputed on read as current / target, clamped to
    [0, 100] percent. Status changes follow the goal transition policy.
    """

    investor_id: str
    name: str
    target_amount: Money
    target_date: date
    priority: Priority = Priority.MEDIUM
    current_amount: Money | None = None
    status: GoalStatus = GoalStatus.ACTIVE
    description: str = ""
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        self.name = normalize_name(self.name)
        if not self.name:
            raise NotAllowedError("Goal name cannot be empty.")
        self.description = normalize_name(self.description)
        self.priority = Priority(self.priority)
        self.status = GoalStatus(self.status)
        if not self.target_amount.is_positive():
            raise NotAllowedError("Target amount must be greater than zero.")
        if self.current_amount is None:
            self.current_amount = Money.zero(self.target_amount.currency)
        self._ensure_goal_currency(self.current_amount)

    @property
    def currency(self) -> str:
        return self.target_amount.currency

    @property
    def progress(self) -> Percentage:
        if self.target_amount.is_zero():
            return Percentage.zero()
        return Percentage.from_ratio(self.current_amount.ratio_to(self.target_amount))

    @property
    def remaining_amount(self) -> Money:
        if self.current_amount.is_less_than(self.target_amount):
            return self.target_amount.subtract(self.current_amount)
        return Money.zero(self.currency)

    @property
    def is_achieved(self) -> bool:
        return self.status is GoalStatus.ACHIEVED or not self.remaining_amount.is_positive()

    def days_until_target(self, today: date) -> int:
        return (self.target_date - today).days

    def is_overdue(self, today: date) -> bool:
        return self.days_until_target(today) < 0 and self.is_active()

    def is_active(self) -> bool:
        return self.status is GoalStatus.ACTIVE

    def is_cancelled(self) -> bool:
        return self.status is GoalStatus.CANCELLED

    def is_high_priority(self) -> bool:
        return self.priority is Priority.HIGH

    def is_medium_priority(self) -> bool:
        return self.priority is Priority.MEDIUM

    def is_low_priority(self) -> bool:
        return self.priority is Priority.LOW

    def requires_immediate_attention(self, today: date) -> bool:
        return self.is_active() and (
            self.is_high_priority()
            or self.days_until_target(today) <= ATTENTION_WINDOW_DAYS
            or self.is_overdue(today)
        )

    def belongs_to(self, investor_id: str) -> bool:
        return self.investor_id == investor_id

    def add_to_current_amount(self, amount: Money) -> None:
        """Add a contribution; an Active goal reaching its target is achieved."""
        self._ensure_goal_currency(amount)
        self.current_amount = self.current_amount.add(amount)
        if self.is_active() and not self.remaining_amount.is_positive():
            self.status = GoalStatus.ACHIEVED
        self._touch()

    def subtract_from_current_amount(self, amount: Money) -> None:
        self._ensure_goal_currency(amount)
        self.current_amount = self.current_amount.subtract(amount)
        self._touch()

    def update_name(self, name: str) -> None:
        cleaned = normalize_name(name)
        if not cleaned:
            raise NotAllowedError("Goal name cannot be empty.")
        self.name = cleaned
        self._touch()

    def update_description(self, description: str) -> None:
        self.description = normalize_name(description)
        self._touch()

    def update_target_amount(self, target_amount: Money) -> None:
        if not target_amount.is_positive():
            raise NotAllowedError("Target amount must be greater than zero.")
        self._ensure_goal_currency(target_amount)
        self.target_amount = target_amount
        if self.is_active() and not self.remaining_amount.is_positive():
            self.status = GoalStatus.ACHIEVED
        self._touch()

    def update_target_date(self, target_date: date) -> None:
        self.target_date = target_date
        self._touch()

    def update_priority(self, priority: Priority) -> None:
        self.priority = Priority(priority)
        self._touch()

    def mark_as_achieved(self) -> None:
        self._transition_to(GoalStatus.ACHIEVED)

    def cancel(self) -> None:
        self._transition_to(GoalStatus.CANCELLED)

    def reactivate(self) -> None:
        self._transition_to(GoalStatus.ACTIVE)

    def _transition_to(self, status: GoalStatus) -> None:
        if not is_goal_transition_allowed(self.status.value, status.value):
            raise NotAllowedError(
                f"Goal cannot move from {self.status.value} to {status.value}.",
                details={"goal_id": self.id},
            )
        self.status = status
        self._touch()

    def _ensure_goal_currency(self, amount: Money) -> None:
        if amount.currency != self.target_amount.currency:
            raise CurrencyMismatchError(
                "Cannot operate with different currencies: "
                f"{self.target_amount.currency} and {amount.currency}."
            )

    def _touch(self) -> None:
        self.updated_at = utc_now()


__all__ = ["Goal", "GoalStatus", "Priority"]
