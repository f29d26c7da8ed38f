"""Tests for the Goal entity."""

from datetime import date
from decimal import Decimal

import pytest

from portfolio_ledger.domain.errors import CurrencyMismatchError, NotAllowedError
from portfolio_ledger.domain.models import Goal, GoalStatus, Money, Priority
from tests.factories import INVESTOR_ID, TODAY, brl, goal


def test_goal_defaults_and_normalization():
    """Names are trimmed and the current amount defaults to zero."""
    saving = goal(current=0, name="  Trip   to  Lisbon ")

    assert saving.name == "Trip to Lisbon"
    assert saving.status is GoalStatus.ACTIVE
    assert saving.current_amount == brl(0)
    assert saving.currency == "BRL"


def test_goal_accepts_raw_priority_and_status():
    """Raw priority and status strings are parsed."""
    saving = goal(priority="High", status="Cancelled")

    assert saving.priority is Priority.HIGH
    assert saving.status is GoalStatus.CANCELLED


def test_goal_rejects_empty_name_and_zero_target():
    """A blank name or zero target is rejected."""
    with pytest.raises(NotAllowedError):
        goal(name="   ")
    with pytest.raises(NotAllowedError):
        goal(target=0, current=0)


def test_goal_rejects_mixed_currency():
    """Target, current amount and contributions share a currency."""
    with pytest.raises(CurrencyMismatchError):
        Goal(
            investor_id=INVESTOR_ID,
            name="Trip",
            target_amount=brl(100),
            current_amount=Money(1, "USD"),
            target_date=TODAY,
        )
    with pytest.raises(CurrencyMismatchError):
        goal().add_to_current_amount(Money(1, "USD"))


def test_progress_and_remaining_amount():
    """Progress and remaining amount follow the current amount."""
    saving = goal(target=10000, current=2500)

    assert saving.progress.value == Decimal("25")
    assert saving.remaining_amount == brl(7500)
    assert not saving.is_achieved


def test_progress_is_clamped_when_over_target():
    """Progress stops at 100 once the target is passed."""
    saving = goal(target=100, current=150)

    assert saving.progress.value == Decimal("100")
    assert saving.remaining_amount == brl(0)
    assert saving.is_achieved


def test_contribution_reaching_target_marks_goal_achieved():
    """Reaching the target marks an Active goal achieved."""
    saving = goal(target=1000, current=900)

    saving.add_to_current_amount(brl(100))

    assert saving.status is GoalStatus.ACHIEVED
    assert saving.updated_at is not None


def test_withdrawal_cannot_go_negative():
    """Withdrawals cannot take the current amount below zero."""
    saving = goal(target=1000, current=100)

    with pytest.raises(NotAllowedError):
        saving.subtract_from_current_amount(brl(150))

    saving.subtract_from_current_amount(brl(40))
    assert saving.current_amount == brl(60)


@pytest.mark.parametrize(
    ("target_date", "expected_days", "overdue"),
    [
        (date(2024, 2, 14), 30, False),
        (TODAY, 0, False),
        (date(2024, 1, 1), -14, True),
    ],
)
def test_days_until_target_and_overdue(target_date, expected_days, overdue):
    """Days until target are signed and past dates are overdue."""
    saving = goal(target_date=target_date)

    assert saving.days_until_target(TODAY) == expected_days
    assert saving.is_overdue(TODAY) is overdue


def test_requires_immediate_attention():
    """High priority or a target within 30 days needs attention."""
    assert goal(priority=Priority.HIGH).requires_immediate_attention(TODAY)
    assert goal(target_date=date(2024, 2, 10)).requires_immediate_attention(TODAY)
    assert not goal(target_date=date(2024, 6, 1)).requires_immediate_attention(TODAY)
    cancelled = goal(priority=Priority.HIGH, status=GoalStatus.CANCELLED)
    assert not cancelled.requires_immediate_attention(TODAY)


def test_status_transitions_follow_policy():
    """Status operations follow the transition table."""
    saving = goal()

    saving.cancel()
    assert saving.is_cancelled()

    with pytest.raises(NotAllowedError):
        saving.mark_as_achieved()

    saving.reactivate()
    saving.mark_as_achieved()
    assert saving.status is GoalStatus.ACHIEVED


def test_reactivate_active_goal_is_rejected():
    """An Active goal cannot be reactivated."""
    with pytest.raises(NotAllowedError):
        goal().reactivate()


def test_update_target_amount_below_current_achieves_goal():
    """Lowering the target below the current amount achieves the goal."""
    saving = goal(target=1000, current=600)

    saving.update_target_amount(brl(500))

    assert saving.status is GoalStatus.ACHIEVED


def test_update_name_rejects_blank():
    """Renaming normalizes the name and rejects blanks."""
    saving = goal()

    with pytest.raises(NotAllowedError):
        saving.update_name("  ")
    saving.update_name(" Retirement ")
    assert saving.name == "Retirement"
