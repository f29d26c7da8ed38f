"""Recoverable domain errors returned to the orchestration layer.

Entities and value types raise these exceptions internally. Exposed
operations catch them at their boundary and return the instance as the
error variant of a ``Value | DomainError`` union.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    NOT_ALLOWED = "NOT_ALLOWED"
    CONFLICT = "CONFLICT"
    CURRENCY_MISMATCH = "CURRENCY_MISMATCH"
    INSUFFICIENT_QUANTITY = "INSUFFICIENT_QUANTITY"


class DomainError(Exception):
    """Base typed error for ledger and goal operations."""

    code: ErrorCode = ErrorCode.NOT_ALLOWED

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_payload(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DomainError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.message == other.message
            and self.details == other.details
        )

    def __hash__(self) -> int:
        return hash((type(self), self.message))


class NotFoundError(DomainError):
    """Referenced investor, goal, transaction or position does not exist."""

    code = ErrorCode.NOT_FOUND


class NotAllowedError(DomainError):
    """Invariant violation or forbidden operation."""

    code = ErrorCode.NOT_ALLOWED


class ConflictError(DomainError):
    """An entity with the same identity already exists."""

    code = ErrorCode.CONFLICT


class CurrencyMismatchError(NotAllowedError):
    code = ErrorCode.CURRENCY_MISMATCH


class InsufficientQuantityError(NotAllowedError):
    code = ErrorCode.INSUFFICIENT_QUANTITY


__all__ = [
    "ErrorCode",
    "DomainError",
    "NotFoundError",
    "NotAllowedError",
    "ConflictError",
    "CurrencyMismatchError",
    "InsufficientQuantityError",
]
