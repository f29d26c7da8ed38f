"""Goal status transition policy."""

# Keyed by raw GoalStatus values.
ALLOWED_GOAL_TRANSITIONS: dict[str, frozenset[str]] = {
    "Active": frozenset({"Achieved", "Cancelled"}),
    "Cancelled": frozenset({"Active"}),
    "Achieved": frozenset({"Active"}),
}


def is_goal_transition_allowed(current: str, target: str) -> bool:
    """Return True when a goal may move from current to target status.

    Args:
        current: Current goal status.
        target: Requested goal status.

    Returns:
        bool: Whether the edge exists in the transition table.
    """
    return target in ALLOWED_GOAL_TRANSITIONS.get(current, frozenset())


__all__ = ["ALLOWED_GOAL_TRANSITIONS", "is_goal_transition_allowed"]
