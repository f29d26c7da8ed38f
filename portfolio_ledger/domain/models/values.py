"""Immutable decimal value types for the ledger.

Money and Quantity are never negative. Operations that would produce a
negative magnitude fail instead; signed results (a transaction's net total,
a position's profit or loss) are expressed with SignedMoney, which is only
produced by Money.difference or by the transaction factory.
"""

from dataclasses import dataclass
from decimal import Decimal

from portfolio_ledger.domain.constants import DEFAULT_CURRENCY
from portfolio_ledger.domain.errors import (
    CurrencyMismatchError,
    InsufficientQuantityError,
    NotAllowedError,
)
from portfolio_ledger.utils import decimal_utils as dec
from portfolio_ledger.utils.text_utils import normalize_currency

_ZERO = Decimal("0")
_ONE = Decimal("1")
_HUNDRED = Decimal("100")


def _validated_currency(currency: str | None) -> str:
    normalized = normalize_currency(currency)
    if normalized is None or len(normalized) != 3 or not normalized.isalpha():
        raise NotAllowedError(
            "Currency must be a 3-letter code.",
            details={"currency": currency},
        )
    return normalized


def _factor(value) -> Decimal:
    if isinstance(value, Quantity):
        return value.value
    return dec.to_decimal(value)


@dataclass(frozen=True)
class Money:
    """Non-negative amount in a single currency.

    Attributes:
        amount: Decimal amount, never negative.
        currency: Upper-case 3-letter currency code.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        amount = dec.to_decimal(self.amount)
        if amount < _ZERO:
            raise NotAllowedError(
                "Money amount cannot be negative.",
                details={"amount": str(amount)},
            )
        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "currency", _validated_currency(self.currency))

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> "Money":
        return cls(_ZERO, currency)

    def add(self, other: "Money") -> "Money":
        self._ensure_same_currency(other)
        return Money(dec.add(self.amount, other.amount), self.currency)

    def subtract(self, other: "Money") -> "Money":
        """Return self - other.

        Raises:
            CurrencyMismatchError: If currencies differ.
            NotAllowedError: If the result would be negative.
        """
        self._ensure_same_currency(other)
        if other.amount > self.amount:
            raise NotAllowedError(
                "Cannot subtract a larger amount; money cannot be negative.",
                details={"left": str(self.amount), "right": str(other.amount)},
            )
        return Money(dec.subtract(self.amount, other.amount), self.currency)

    def multiply(self, factor) -> "Money":
        value = _factor(factor)
        if value < _ZERO:
            raise NotAllowedError("Multiplication factor cannot be negative.")
        return Money(dec.multiply(self.amount, value), self.currency)

    def divide(self, divisor) -> "Money":
        value = _factor(divisor)
        if value <= _ZERO:
            raise NotAllowedError("Division by zero or negative number.")
        return Money(dec.divide(self.amount, value), self.currency)

    def ratio_to(self, other: "Money") -> Decimal:
        """Return self / other as a plain decimal ratio."""
        self._ensure_same_currency(other)
        if other.amount.is_zero():
            raise NotAllowedError("Cannot compute a ratio against zero.")
        return dec.divide(self.amount, other.amount)

    def difference(self, other: "Money") -> "SignedMoney":
        """Return the signed result of self - other."""
        self._ensure_same_currency(other)
        return SignedMoney(dec.subtract(self.amount, other.amount), self.currency)

    def equals(self, other: "Money") -> bool:
        return self.currency == other.currency and self.amount == other.amount

    def is_greater_than(self, other: "Money") -> bool:
        self._ensure_same_currency(other)
        return self.amount > other.amount

    def is_less_than(self, other: "Money") -> bool:
        self._ensure_same_currency(other)
        return self.amount < other.amount

    def is_zero(self) -> bool:
        return self.amount.is_zero()

    def is_positive(self) -> bool:
        return self.amount > _ZERO

    def max(self, other: "Money") -> "Money":
        return other if self.is_less_than(other) else self

    def _ensure_same_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(
                "Cannot operate with different currencies: "
                f"{self.currency} and {other.currency}.",
                details={"left": self.currency, "right": other.currency},
            )

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"


@dataclass(frozen=True)
class SignedMoney:
    """Signed amount in a single currency, for derived results only."""

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", dec.to_decimal(self.amount))
        object.__setattr__(self, "currency", _validated_currency(self.currency))

    def magnitude(self) -> Money:
        return Money(self.amount.copy_abs(), self.currency)

    def is_positive(self) -> bool:
        return self.amount > _ZERO

    def is_negative(self) -> bool:
        return self.amount < _ZERO

    def is_zero(self) -> bool:
        return self.amount.is_zero()

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"


@dataclass(frozen=True)
class Quantity:
    """Non-negative number of units; zero is a valid value."""

    value: Decimal

    def __post_init__(self) -> None:
        value = dec.to_decimal(self.value)
        if value < _ZERO:
            raise NotAllowedError(
                "Quantity cannot be negative.",
                details={"value": str(value)},
            )
        object.__setattr__(self, "value", value)

    @classmethod
    def zero(cls) -> "Quantity":
        return cls(_ZERO)

    def add(self, other: "Quantity") -> "Quantity":
        return Quantity(dec.add(self.value, other.value))

    def subtract(self, other: "Quantity") -> "Quantity":
        if other.value > self.value:
            raise InsufficientQuantityError(
                "Insufficient quantity for subtraction.",
                details={"available": str(self.value), "requested": str(other.value)},
            )
        return Quantity(dec.subtract(self.value, other.value))

    def multiply(self, factor) -> "Quantity":
        value = dec.to_decimal(factor)
        if value < _ZERO:
            raise NotAllowedError("Multiplication factor cannot be negative.")
        return Quantity(dec.multiply(self.value, value))

    def divide(self, divisor) -> "Quantity":
        value = dec.to_decimal(divisor)
        if value <= _ZERO:
            raise NotAllowedError("Division by zero or negative number.")
        return Quantity(dec.divide(self.value, value))

    def equals(self, other: "Quantity") -> bool:
        return self.value == other.value

    def is_zero(self) -> bool:
        return self.value.is_zero()

    def is_greater_than(self, other: "Quantity") -> bool:
        return self.value > other.value

    def is_less_than(self, other: "Quantity") -> bool:
        return self.value < other.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Percentage:
    """Percentage value, recomputed from a ratio and never persisted.

    Ratios built with from_ratio are clamped to [0, 100]. Profit and loss
    percentages use from_signed_ratio, which keeps the sign.
    """

    value: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", dec.to_decimal(self.value))

    @classmethod
    def zero(cls) -> "Percentage":
        return cls(_ZERO)

    @classmethod
    def from_ratio(cls, ratio) -> "Percentage":
        clamped = min(max(dec.to_decimal(ratio), _ZERO), _ONE)
        return cls(dec.multiply(clamped, _HUNDRED))

    @classmethod
    def from_signed_ratio(cls, ratio) -> "Percentage":
        return cls(dec.multiply(dec.to_decimal(ratio), _HUNDRED))

    @property
    def decimal(self) -> Decimal:
        return dec.divide(self.value, _HUNDRED)

    def is_positive(self) -> bool:
        return self.value > _ZERO

    def is_negative(self) -> bool:
        return self.value < _ZERO

    def __str__(self) -> str:
        return f"{self.value:.2f}%"


__all__ = ["Money", "SignedMoney", "Quantity", "Percentage"]
