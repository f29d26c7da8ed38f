"""Domain service computing the effect of one transaction on a position."""

from dataclasses import replace
from logging import Logger

from portfolio_ledger.domain.errors import (
    DomainError,
    InsufficientQuantityError,
    NotAllowedError,
)
from portfolio_ledger.domain.models import (
    Position,
    PositionDelta,
    Transaction,
    TransactionType,
)
from portfolio_ledger.domain.services.ledger_replay import apply_transaction


def calculate_buy_impact(
    position: Position | None,
    transaction: Transaction,
    logger: Logger | None = None,
) -> PositionDelta | DomainError:
    """Preview a Buy against the current position.

    Args:
        position: Materialized position, or None when nothing is held.
        transaction: Buy transaction to preview.
        logger: Optional logger used for warnings.

    Returns:
        PositionDelta | DomainError: Resulting state, or the failure.
    """
    error = _ensure_type(transaction, TransactionType.BUY)
    if error is not None:
        return error
    return _apply_to_copy(position, transaction, logger)


def calculate_sell_impact(
    position: Position | None,
    transaction: Transaction,
    logger: Logger | None = None,
) -> PositionDelta | DomainError:
    """Preview a Sell; fails when nothing is held."""
    error = _ensure_type(transaction, TransactionType.SELL)
    if error is not None:
        return error
    if position is None or not position.has_quantity():
        return InsufficientQuantityError(
            "Cannot sell an asset that is not held.",
            details={
                "portfolio_id": transaction.portfolio_id,
                "asset_id": transaction.asset_id,
                "requested": str(transaction.quantity),
            },
        )
    return _apply_to_copy(position, transaction, logger)


def calculate_dividend_impact(
    position: Position | None,
    transaction: Transaction,
    logger: Logger | None = None,
) -> PositionDelta | None | DomainError:
    """Preview a Dividend; income accrues and the price may be refreshed.

    Returns:
        PositionDelta | None | DomainError: Resulting state, None when no
        position is open (the dividend is ignored, as replay does), or the
        failure.
    """
    error = _ensure_type(transaction, TransactionType.DIVIDEND)
    if error is not None:
        return error
    if position is None or not position.has_quantity():
        if logger:
            logger.info(
                f"Dividend {transaction.id} ignored: no open position for "
                f"{transaction.portfolio_id}/{transaction.asset_id}"
            )
        return None
    return _apply_to_copy(position, transaction, logger)


def calculate_transaction_impact(
    position: Position | None,
    transaction: Transaction,
    logger: Logger | None = None,
) -> PositionDelta | None | DomainError:
    """Dispatch to the impact calculation matching the transaction type.

    The result mirrors ``replay_ledger(history + [transaction])``: a delta
    with ``closes_position`` set when the last units are sold, None when a
    Dividend meets no open position, and the same error replay would stop on.
    """
    calculators = {
        TransactionType.BUY: calculate_buy_impact,
        TransactionType.SELL: calculate_sell_impact,
        TransactionType.DIVIDEND: calculate_dividend_impact,
    }
    return calculators[transaction.transaction_type](position, transaction, logger)


def _ensure_type(
    transaction: Transaction,
    expected: TransactionType,
) -> NotAllowedError | None:
    if transaction.transaction_type is not expected:
        return NotAllowedError(
            f"Expected a {expected.value} transaction, "
            f"got {transaction.transaction_type.value}.",
            details={"transaction_id": transaction.id},
        )
    return None


def _apply_to_copy(
    position: Position | None,
    transaction: Transaction,
    logger: Logger | None,
) -> PositionDelta | DomainError:
    if position is not None and position.key != transaction.ledger_key():
        return NotAllowedError(
            "Transaction does not belong to the position ledger.",
            details={
                "position": list(position.key),
                "transaction": list(transaction.ledger_key()),
            },
        )
    working = replace(position) if position is not None else None
    try:
        result = apply_transaction(working, transaction)
    except DomainError as exc:
        if logger:
            logger.warning(
                f"Impact of transaction {transaction.id} rejected: {exc.message}"
            )
        return exc
    return PositionDelta.from_position(result)


__all__ = [
    "calculate_buy_impact",
    "calculate_sell_impact",
    "calculate_dividend_impact",
    "calculate_transaction_impact",
]
