"""Domain policies package."""

from .goal_transitions import (
    ALLOWED_GOAL_TRANSITIONS,
    is_goal_transition_allowed,
)

__all__ = ["ALLOWED_GOAL_TRANSITIONS", "is_goal_transition_allowed"]
