"""Helpers for text normalization."""


def normalize_currency(currency: str | None) -> str | None:
    """Normalize currency codes.

    Args:
        currency: Raw currency code from a caller or repository.

    Returns:
        str | None: Upper-cased, stripped code, or None when empty.
    """
    if not currency:
        return None
    cleaned = currency.strip()
    return cleaned.upper() if cleaned else None


def normalize_name(name: str | None) -> str:
    """Normalize free-text names and descriptions."""
    if not name:
        return ""
    return " ".join(name.split())


__all__ = ["normalize_currency", "normalize_name"]
