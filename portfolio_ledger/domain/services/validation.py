"""Domain validation helpers."""

from logging import Logger

from portfolio_ledger.domain.errors import NotAllowedError
from portfolio_ledger.domain.models import (
    GoalStatus,
    Position,
    Priority,
    TransactionType,
)


def require_identifier(value: str | None, field_name: str) -> str:
    """Return a stripped identifier or raise when it is blank.

    Args:
        value: Raw identifier from the caller.
        field_name: Name used in the error message.

    Returns:
        str: Identifier without surrounding whitespace.

    Raises:
        NotAllowedError: If the identifier is missing or blank.
    """
    cleaned = (value or "").strip()
    if not cleaned:
        raise NotAllowedError(f"{field_name} is required.")
    return cleaned


def parse_transaction_type(value: str | TransactionType) -> TransactionType:
    try:
        return TransactionType(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in TransactionType)
        raise NotAllowedError(
            f"Unknown transaction type {value!r}; expected one of {allowed}."
        ) from exc


def parse_priority(value: str | Priority) -> Priority:
    try:
        return Priority(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in Priority)
        raise NotAllowedError(
            f"Unknown priority {value!r}; expected one of {allowed}."
        ) from exc


def parse_goal_status(value: str | GoalStatus) -> GoalStatus:
    try:
        return GoalStatus(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in GoalStatus)
        raise NotAllowedError(
            f"Unknown goal status {value!r}; expected one of {allowed}."
        ) from exc


def warn_on_position_drift(
    stored: Position | None,
    replayed: Position | None,
    logger: Logger,
) -> None:
    """Warn when a stored position disagrees with the replayed ledger.

    Args:
        stored: Position currently persisted.
        replayed: Position rebuilt from the ledger.
        logger: Logger used for warnings.
    """
    if stored is None or replayed is None:
        return
    if not stored.quantity.equals(replayed.quantity):
        logger.warning(
            f"Stored quantity drifted for {stored.key}: "
            f"{stored.quantity} != {replayed.quantity}"
        )
    if not stored.average_price.equals(replayed.average_price):
        logger.warning(
            f"Stored average price drifted for {stored.key}: "
            f"{stored.average_price} != {replayed.average_price}"
        )


__all__ = [
    "require_identifier",
    "parse_transaction_type",
    "parse_priority",
    "parse_goal_status",
    "warn_on_position_drift",
]
