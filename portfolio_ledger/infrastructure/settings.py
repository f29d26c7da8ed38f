"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import os

from portfolio_ledger.domain.constants import (
    DEFAULT_CURRENCY,
    DEFAULT_SAFETY_BUFFER,
)
from portfolio_ledger.infrastructure.logging.logger import get_app_logger
from portfolio_ledger.utils.text_utils import normalize_currency

SUPPORTED_BACKENDS = ("sqlalchemy", "memory")


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for the ledger backend and computations.

    Attributes:
        backend: Repository backend identifier (sqlalchemy or memory).
        default_currency: Currency applied when a request names none.
        safety_buffer: Multiplier turning the minimum goal contribution into
            the recommended one.
    """

    backend: str = "sqlalchemy"
    default_currency: str = DEFAULT_CURRENCY
    safety_buffer: Decimal = DEFAULT_SAFETY_BUFFER

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        backend = os.getenv("LEDGER_BACKEND", "sqlalchemy").strip().lower()
        return cls(
            backend=backend,
            default_currency=cls._parse_currency(
                os.getenv("LEDGER_DEFAULT_CURRENCY"),
                logger=logger,
            ),
            safety_buffer=cls._parse_safety_buffer(
                os.getenv("GOAL_SAFETY_BUFFER"),
                logger=logger,
            ),
        )

    @staticmethod
    def _parse_currency(raw_currency: str | None, logger) -> str:
        """Normalize the default currency, falling back on invalid codes.

        Args:
            raw_currency: Raw environment value.
            logger: Logger used for warnings.

        Returns:
            str: Upper-case 3-letter currency code.
        """
        if raw_currency is None:
            return DEFAULT_CURRENCY
        currency = normalize_currency(raw_currency)
        if currency is None or len(currency) != 3 or not currency.isalpha():
            logger.warning(
                f"Invalid LEDGER_DEFAULT_CURRENCY {raw_currency!r}; "
                f"using {DEFAULT_CURRENCY}"
            )
            return DEFAULT_CURRENCY
        return currency

    @staticmethod
    def _parse_safety_buffer(raw_buffer: str | None, logger) -> Decimal:
        if raw_buffer is None or not raw_buffer.strip():
            return DEFAULT_SAFETY_BUFFER
        try:
            buffer = Decimal(raw_buffer.strip())
        except InvalidOperation:
            buffer = None
        if buffer is None or not buffer.is_finite() or buffer < 1:
            logger.warning(
                f"Invalid GOAL_SAFETY_BUFFER {raw_buffer!r}; "
                f"using {DEFAULT_SAFETY_BUFFER}"
            )
            return DEFAULT_SAFETY_BUFFER
        return buffer


__all__ = ["LedgerSettings", "SUPPORTED_BACKENDS"]
