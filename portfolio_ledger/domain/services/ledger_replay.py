"""Domain service folding a transaction ledger into a position."""

from collections.abc import Iterable
from logging import Logger

from portfolio_ledger.domain.errors import (
    CurrencyMismatchError,
    DomainError,
    InsufficientQuantityError,
    NotAllowedError,
)
from portfolio_ledger.domain.models import Position, Transaction


def sort_ledger(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Return transactions ordered by date, ties broken by insertion sequence."""
    return sorted(transactions, key=lambda tx: tx.sort_key())


def apply_transaction(
    position: Position | None,
    transaction: Transaction,
) -> Position | None:
    """Apply one transaction to a position in place.

    A Buy opens the position when none exists. Buy and Sell mark the position
    to the trade price; a Dividend only refreshes the price when it carries
    one and is ignored while no position is open. Dividend income accrues on
    the open position. The returned position may hold zero units after a
    Sell; callers decide whether that closes it.

    Args:
        position: Current position, or None when nothing is held.
        transaction: Transaction to apply.

    Returns:
        Position | None: The mutated (or newly opened) position.

    Raises:
        InsufficientQuantityError: If a Sell exceeds the held quantity.
        CurrencyMismatchError: If the transaction currency differs.
        NotAllowedError: If the transaction violates a position invariant.
    """
    at = transaction.date_at
    if transaction.is_buy():
        if position is None:
            return Position.open(
                transaction.portfolio_id,
                transaction.asset_id,
                transaction.quantity,
                transaction.price,
                opened_at=at,
            )
        _ensure_position_currency(position, transaction)
        position.add_quantity(transaction.quantity, transaction.price, at=at)
        position.update_current_price(transaction.price, at=at)
        return position

    if transaction.is_sell():
        if position is None or not position.has_quantity():
            raise InsufficientQuantityError(
                "Cannot sell an asset that is not held.",
                details={
                    "portfolio_id": transaction.portfolio_id,
                    "asset_id": transaction.asset_id,
                    "requested": str(transaction.quantity),
                },
            )
        _ensure_position_currency(position, transaction)
        position.reduce_quantity(transaction.quantity, at=at)
        position.update_current_price(transaction.price, at=at)
        return position

    if position is None:
        return None
    _ensure_position_currency(position, transaction)
    position.include_income(transaction.income, at=at)
    if transaction.price is not None:
        position.update_current_price(transaction.price, at=at)
    return position


def replay_ledger(
    transactions: Iterable[Transaction],
    logger: Logger | None = None,
) -> Position | None | DomainError:
    """Rebuild the canonical position from a full ledger.

    Args:
        transactions: Every transaction of one (portfolio, asset) pair, in
            any order.
        logger: Optional logger used for warnings.

    Returns:
        Position | None | DomainError: The held position, None when nothing
        is held at the end of the ledger, or the first failure met.
    """
    ordered = sort_ledger(transactions)
    keys = {tx.ledger_key() for tx in ordered}
    if len(keys) > 1:
        error = NotAllowedError(
            "Ledger must contain a single (portfolio, asset) pair.",
            details={"keys": sorted(keys)},
        )
        if logger:
            logger.warning(error.message)
        return error

    position: Position | None = None
    for transaction in ordered:
        try:
            position = apply_transaction(position, transaction)
        except DomainError as exc:
            if logger:
                logger.warning(
                    f"Replay stopped at transaction {transaction.id}: {exc.message}"
                )
            return exc
        if position is not None and not position.has_quantity():
            position = None
    return position


def _ensure_position_currency(position: Position, transaction: Transaction) -> None:
    if transaction.currency != position.currency:
        raise CurrencyMismatchError(
            "Cannot operate with different currencies: "
            f"{position.currency} and {transaction.currency}.",
            details={"transaction_id": transaction.id},
        )


__all__ = ["sort_ledger", "apply_transaction", "replay_ledger"]
