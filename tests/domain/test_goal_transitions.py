"""Tests for the goal status transition policy."""

import pytest

from portfolio_ledger.domain.policies import (
    ALLOWED_GOAL_TRANSITIONS,
    is_goal_transition_allowed,
)


@pytest.mark.parametrize(
    ("current", "target"),
    [
        ("Active", "Achieved"),
        ("Active", "Cancelled"),
        ("Cancelled", "Active"),
        ("Achieved", "Active"),
    ],
)
def test_allowed_transitions(current, target):
    """Allowed goal status transitions."""
    assert is_goal_transition_allowed(current, target)


@pytest.mark.parametrize(
    ("current", "target"),
    [
        ("Active", "Active"),
        ("Cancelled", "Achieved"),
        ("Achieved", "Cancelled"),
        ("Unknown", "Active"),
    ],
)
def test_rejected_transitions(current, target):
    """Transitions outside the table are refused."""
    assert not is_goal_transition_allowed(current, target)


def test_every_status_has_an_exit():
    """No status is terminal; each one can return to or leave Active."""
    assert set(ALLOWED_GOAL_TRANSITIONS) == {"Active", "Achieved", "Cancelled"}
    assert all(ALLOWED_GOAL_TRANSITIONS.values())
