"""Position aggregate: current holding of one asset in one portfolio."""

from dataclasses import dataclass, field
from datetime import datetime

from portfolio_ledger.domain.errors import (
    CurrencyMismatchError,
    InsufficientQuantityError,
    NotAllowedError,
)
from portfolio_ledger.domain.models.transaction import utc_now
from portfolio_ledger.domain.models.values import (
    Money,
    Percentage,
    Quantity,
    SignedMoney,
)


@dataclass
class Position:
    """Mutable holding state, derived from the ledger by replay.

    Invariants: ``current_price`` is positive, ``average_price`` is positive
    whenever ``quantity`` is, and both prices share a currency. Totals and
    profit/loss are derived on read and never stored.

    Attributes:
        portfolio_id: Portfolio holding the asset.
        asset_id: Asset held.
        quantity: Units currently held.
        average_price: Weighted-average acquisition price.
        current_price: Last known market price.
        created_at: Date of the opening Buy.
        updated_at: Date of the last applied change.
        id: Storage identifier, assigned by the repository.
        income_received: Dividend income collected since the position was
            opened, defaulting to zero in the position currency.
    """

    portfolio_id: str
    asset_id: str
    quantity: Quantity
    average_price: Money
    current_price: Money
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime | None = None
    id: str | None = None
    income_received: Money | None = None

    def __post_init__(self) -> None:
        if self.income_received is None:
            self.income_received = Money.zero(self.current_price.currency)
        if not self.current_price.is_positive():
            raise NotAllowedError("Current price must be greater than zero.")
        if self.average_price.currency != self.current_price.currency:
            raise CurrencyMismatchError(
                "Average and current price must share a currency: "
                f"{self.average_price.currency} and {self.current_price.currency}."
            )
        if not self.quantity.is_zero() and not self.average_price.is_positive():
            raise NotAllowedError(
                "Average price must be greater than zero while holding units."
            )
        if self.income_received.currency != self.current_price.currency:
            raise CurrencyMismatchError(
                "Income received must share the position currency: "
                f"{self.income_received.currency} and {self.current_price.currency}."
            )

    @classmethod
    def open(
        cls,
        portfolio_id: str,
        asset_id: str,
        quantity: Quantity,
        price: Money,
        opened_at: datetime | None = None,
    ) -> "Position":
        """Open a position from its first Buy."""
        if quantity.is_zero():
            raise NotAllowedError("Quantity must be greater than zero.")
        if not price.is_positive():
            raise NotAllowedError("Price must be greater than zero.")
        opened_at = opened_at or utc_now()
        return cls(
            portfolio_id=portfolio_id,
            asset_id=asset_id,
            quantity=quantity,
            average_price=price,
            current_price=price,
            created_at=opened_at,
            updated_at=opened_at,
        )

    @property
    def key(self) -> tuple[str, str]:
        return (self.portfolio_id, self.asset_id)

    @property
    def currency(self) -> str:
        return self.current_price.currency

    def add_quantity(
        self,
        quantity: Quantity,
        price: Money,
        at: datetime | None = None,
    ) -> None:
        """Add units and recompute the weighted-average price.

        new_average = (average * quantity + price * added) / (quantity + added)

        Raises:
            NotAllowedError: If quantity is zero or price is not positive.
            CurrencyMismatchError: If price is in another currency.
        """
        if quantity.is_zero():
            raise NotAllowedError("Quantity must be greater than zero.")
        if not price.is_positive():
            raise NotAllowedError("Price must be greater than zero.")
        invested = self.average_price.multiply(self.quantity)
        added = price.multiply(quantity)
        new_quantity = self.quantity.add(quantity)
        self.average_price = invested.add(added).divide(new_quantity)
        self.quantity = new_quantity
        self._touch(at)

    def reduce_quantity(self, quantity: Quantity, at: datetime | None = None) -> None:
        """Remove units; the average price is unchanged.

        Raises:
            NotAllowedError: If quantity is zero.
            InsufficientQuantityError: If quantity exceeds the holding.
        """
        if quantity.is_zero():
            raise NotAllowedError("Quantity must be greater than zero.")
        if quantity.is_greater_than(self.quantity):
            raise InsufficientQuantityError(
                f"Cannot sell {quantity} units; only {self.quantity} held.",
                details={
                    "portfolio_id": self.portfolio_id,
                    "asset_id": self.asset_id,
                    "held": str(self.quantity),
                    "requested": str(quantity),
                },
            )
        self.quantity = self.quantity.subtract(quantity)
        self._touch(at)

    def update_current_price(self, price: Money, at: datetime | None = None) -> None:
        if not price.is_positive():
            raise NotAllowedError("Current price must be greater than zero.")
        if price.currency != self.average_price.currency:
            raise CurrencyMismatchError(
                "Cannot operate with different currencies: "
                f"{self.average_price.currency} and {price.currency}."
            )
        self.current_price = price
        self._touch(at)

    def include_income(self, income: Money, at: datetime | None = None) -> None:
        """Accumulate dividend income; holdings and prices are unchanged.

        Raises:
            NotAllowedError: If income is not positive.
            CurrencyMismatchError: If income is in another currency.
        """
        if not income.is_positive():
            raise NotAllowedError("Income must be greater than zero.")
        self.income_received = self.income_received.add(income)
        self._touch(at)

    def get_total_invested(self) -> Money:
        return self.average_price.multiply(self.quantity)

    def get_current_value(self) -> Money:
        return self.current_price.multiply(self.quantity)

    def get_profit_loss(self) -> SignedMoney:
        return self.get_current_value().difference(self.get_total_invested())

    def get_profit_loss_percentage(self) -> Percentage:
        total_invested = self.get_total_invested()
        if total_invested.is_zero():
            return Percentage.zero()
        profit_loss = self.get_profit_loss()
        magnitude = profit_loss.magnitude().ratio_to(total_invested)
        if profit_loss.is_negative():
            magnitude = magnitude.copy_negate()
        return Percentage.from_signed_ratio(magnitude)

    def has_quantity(self) -> bool:
        return not self.quantity.is_zero()

    def is_in_profit(self) -> bool:
        return self.get_profit_loss().is_positive()

    def is_in_loss(self) -> bool:
        return self.get_profit_loss().is_negative()

    def belongs_to_portfolio(self, portfolio_id: str) -> bool:
        return self.portfolio_id == portfolio_id

    def _touch(self, at: datetime | None) -> None:
        self.updated_at = at or utc_now()


@dataclass(frozen=True)
class PositionDelta:
    """Resulting state of a position after one transaction."""

    new_quantity: Quantity
    new_average_price: Money
    new_total_invested: Money
    new_current_value: Money
    new_profit_loss: SignedMoney
    new_current_price: Money
    new_income_received: Money

    @classmethod
    def from_position(cls, position: Position) -> "PositionDelta":
        return cls(
            new_quantity=position.quantity,
            new_average_price=position.average_price,
            new_total_invested=position.get_total_invested(),
            new_current_value=position.get_current_value(),
            new_profit_loss=position.get_profit_loss(),
            new_current_price=position.current_price,
            new_income_received=position.income_received,
        )

    @property
    def closes_position(self) -> bool:
        return self.new_quantity.is_zero()


__all__ = ["Position", "PositionDelta"]
