"""Immutable ledger transaction records."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from threading import Lock
from time import time_ns
from uuid import uuid4

from portfolio_ledger.domain.errors import NotAllowedError
from portfolio_ledger.domain.models.values import Money, Quantity, SignedMoney

_sequence_lock = Lock()
_last_sequence = 0


def next_sequence() -> int:
    """Return a strictly increasing insertion sequence.

    Sequences are nanosecond timestamps bumped past the previous value, so
    they keep increasing across processes sharing one ledger.
    """
    global _last_sequence
    with _sequence_lock:
        _last_sequence = max(time_ns(), _last_sequence + 1)
        return _last_sequence


def new_id() -> str:
    return uuid4().hex


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Return value as an aware UTC datetime; naive values are read as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class TransactionType(str, Enum):
    BUY = "Buy"
    SELL = "Sell"
    DIVIDEND = "Dividend"


@dataclass(frozen=True)
class Transaction:
    """One ledger event for a (portfolio, asset) pair.

    ``total_amount`` is derived once at construction from the other fields
    and cannot be passed in: ``price * quantity - fees`` for Buy, the same
    value negated for Sell, and ``income - fees`` for Dividend.

    Attributes:
        portfolio_id: Portfolio owning the ledger.
        asset_id: Asset the ledger tracks.
        transaction_type: Buy, Sell or Dividend.
        quantity: Units traded; always zero for Dividend.
        price: Unit price; required for Buy/Sell, optional for Dividend.
        fees: Fees charged, in the transaction currency.
        date_at: Ledger date of the event, held in UTC. Naive values are
            read as UTC.
        income: Dividend income; required for Dividend only.
        sequence: Insertion sequence used to break date ties.
    """

    portfolio_id: str
    asset_id: str
    transaction_type: TransactionType
    quantity: Quantity
    price: Money | None
    fees: Money
    date_at: datetime
    income: Money | None = None
    notes: str = ""
    id: str = field(default_factory=new_id)
    sequence: int = field(default_factory=next_sequence)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime | None = None
    total_amount: SignedMoney = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "transaction_type",
            TransactionType(self.transaction_type),
        )
        object.__setattr__(self, "date_at", as_utc(self.date_at))
        if self.transaction_type is TransactionType.DIVIDEND:
            self._validate_dividend()
        else:
            self._validate_trade()
        object.__setattr__(self, "total_amount", self._compute_total_amount())

    @classmethod
    def buy(cls, portfolio_id, asset_id, quantity, price, fees, date_at, **extra):
        return cls(
            portfolio_id=portfolio_id,
            asset_id=asset_id,
            transaction_type=TransactionType.BUY,
            quantity=quantity,
            price=price,
            fees=fees,
            date_at=date_at,
            **extra,
        )

    @classmethod
    def sell(cls, portfolio_id, asset_id, quantity, price, fees, date_at, **extra):
        return cls(
            portfolio_id=portfolio_id,
            asset_id=asset_id,
            transaction_type=TransactionType.SELL,
            quantity=quantity,
            price=price,
            fees=fees,
            date_at=date_at,
            **extra,
        )

    @classmethod
    def dividend(
        cls,
        portfolio_id,
        asset_id,
        income,
        date_at,
        price=None,
        fees=None,
        **extra,
    ):
        return cls(
            portfolio_id=portfolio_id,
            asset_id=asset_id,
            transaction_type=TransactionType.DIVIDEND,
            quantity=Quantity.zero(),
            price=price,
            fees=fees if fees is not None else Money.zero(income.currency),
            date_at=date_at,
            income=income,
            **extra,
        )

    @property
    def currency(self) -> str:
        if self.transaction_type is TransactionType.DIVIDEND:
            return self.income.currency
        return self.price.currency

    def is_buy(self) -> bool:
        return self.transaction_type is TransactionType.BUY

    def is_sell(self) -> bool:
        return self.transaction_type is TransactionType.SELL

    def is_dividend(self) -> bool:
        return self.transaction_type is TransactionType.DIVIDEND

    def gross_amount(self) -> Money:
        if self.is_dividend():
            return self.income
        return self.price.multiply(self.quantity)

    def ledger_key(self) -> tuple[str, str]:
        return (self.portfolio_id, self.asset_id)

    def sort_key(self) -> tuple[datetime, int]:
        return (self.date_at, self.sequence)

    def corrected(self, at: datetime | None = None, **changes) -> "Transaction":
        """Return a corrected copy keeping the same id and sequence.

        Args:
            at: Correction timestamp, defaults to now.
            **changes: Field overrides (type, quantity, price, fees, ...).

        Returns:
            Transaction: New record with a recomputed total amount.
        """
        forbidden = {"id", "sequence", "created_at", "total_amount"} & set(changes)
        if forbidden:
            raise NotAllowedError(
                f"Cannot correct identity fields: {sorted(forbidden)}"
            )
        transaction_type = TransactionType(
            changes.get("transaction_type", self.transaction_type)
        )
        if transaction_type is TransactionType.DIVIDEND:
            changes.setdefault("quantity", Quantity.zero())
        elif self.is_dividend():
            changes.setdefault("income", None)
        changes["updated_at"] = at or utc_now()
        return replace(self, **changes)

    def _validate_trade(self) -> None:
        if self.price is None or not self.price.is_positive():
            raise NotAllowedError("Price must be greater than zero.")
        if self.quantity.is_zero():
            raise NotAllowedError("Quantity must be greater than zero.")
        if self.income is not None and not self.income.is_zero():
            raise NotAllowedError(
                f"{self.transaction_type.value} transactions carry no income."
            )
        self._validate_fees_currency(self.price.currency)

    def _validate_dividend(self) -> None:
        if self.income is None or not self.income.is_positive():
            raise NotAllowedError("Income must be greater than zero.")
        if not self.quantity.is_zero():
            raise NotAllowedError("Dividend transactions must have zero quantity.")
        if self.price is not None:
            if not self.price.is_positive():
                raise NotAllowedError("Price must be greater than zero.")
            if self.price.currency != self.income.currency:
                raise NotAllowedError(
                    "Dividend price and income must share a currency."
                )
        self._validate_fees_currency(self.income.currency)

    def _validate_fees_currency(self, currency: str) -> None:
        if self.fees.currency != currency:
            raise NotAllowedError(
                f"Fees currency {self.fees.currency} must match {currency}."
            )

    def _compute_total_amount(self) -> SignedMoney:
        net = self.gross_amount().difference(self.fees)
        if self.is_sell():
            return SignedMoney(net.amount.copy_negate(), net.currency)
        return net


__all__ = [
    "Transaction",
    "TransactionType",
    "next_sequence",
    "new_id",
    "utc_now",
    "as_utc",
]
