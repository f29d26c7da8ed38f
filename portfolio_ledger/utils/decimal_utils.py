"""Helpers for Decimal normalization and ledger arithmetic."""

from decimal import (
    ROUND_HALF_EVEN,
    Context,
    Decimal,
    InvalidOperation,
)


# decimal128 parameters; every ledger operation goes through this context.
LEDGER_CONTEXT = Context(prec=34, rounding=ROUND_HALF_EVEN)


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values read from storage to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value, zero for missing values.
    """
    if value is None:
        return Decimal("0")
    return to_decimal(value)


def to_decimal(value) -> Decimal:
    """Convert a caller-provided number to Decimal.

    Args:
        value: Decimal, int, float or numeric string.

    Returns:
        Decimal: Exact decimal value, with negative zero folded to zero.

    Raises:
        TypeError: If the value is not a number or numeric string.
        ValueError: If the value is not a finite number.
    """
    if isinstance(value, bool) or value is None:
        raise TypeError(f"Expected a numeric value, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, (float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"Not a numeric value: {value!r}") from exc
    else:
        raise TypeError(f"Expected a numeric value, got {type(value).__name__}")
    if not result.is_finite():
        raise ValueError(f"Not a finite numeric value: {value!r}")
    if result.is_zero():
        return result.copy_abs()
    return result


def add(left: Decimal, right: Decimal) -> Decimal:
    return LEDGER_CONTEXT.add(left, right)


def subtract(left: Decimal, right: Decimal) -> Decimal:
    return LEDGER_CONTEXT.subtract(left, right)


def multiply(left: Decimal, right: Decimal) -> Decimal:
    return LEDGER_CONTEXT.multiply(left, right)


def divide(dividend: Decimal, divisor: Decimal) -> Decimal:
    """Divide two decimals in the ledger context.

    Raises:
        ZeroDivisionError: If the divisor is zero.
    """
    if divisor.is_zero():
        raise ZeroDivisionError("Ledger division by zero")
    return LEDGER_CONTEXT.divide(dividend, divisor)


def ceil_divide(dividend: Decimal, divisor: Decimal) -> int:
    """Return the exact ceiling of dividend / divisor as an int.

    Both operands are taken as integer ratios, so no digits are rounded
    away before the ceiling regardless of their length.

    Raises:
        ZeroDivisionError: If the divisor is zero.
    """
    if divisor.is_zero():
        raise ZeroDivisionError("Ledger division by zero")
    dividend_num, dividend_den = dividend.as_integer_ratio()
    divisor_num, divisor_den = divisor.as_integer_ratio()
    numerator = dividend_num * divisor_den
    denominator = dividend_den * divisor_num
    return -(-numerator // denominator)


__all__ = [
    "LEDGER_CONTEXT",
    "coerce_decimal",
    "to_decimal",
    "add",
    "subtract",
    "multiply",
    "divide",
    "ceil_divide",
]
