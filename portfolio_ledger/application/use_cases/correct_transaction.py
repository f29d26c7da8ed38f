"""Use case correcting a recorded transaction.

Transactions are never patched in place: the correction produces a new
immutable record with the same id and sequence, the corrected ledger is
replayed from scratch, and only then are the transaction and the position
written.
"""

from dataclasses import dataclass
from typing import Any

from portfolio_ledger.application.ports.investment_repository import (
    InvestmentRepositoryPort,
)
from portfolio_ledger.application.ports.investor_repository import (
    InvestorRepositoryPort,
)
from portfolio_ledger.application.ports.transaction_repository import (
    TransactionRepositoryPort,
)
from portfolio_ledger.application.use_cases.rebuild_position import (
    RebuildPositionUseCase,
)
from portfolio_ledger.domain.errors import (
    DomainError,
    NotAllowedError,
    NotFoundError,
)
from portfolio_ledger.domain.models import Money, Position, Quantity, Transaction
from portfolio_ledger.domain.services.ledger_replay import replay_ledger
from portfolio_ledger.domain.services.validation import parse_transaction_type
from portfolio_ledger.infrastructure.logging.logger import get_app_logger

CORRECTABLE_FIELDS = frozenset(
    {
        "transaction_type",
        "quantity",
        "price",
        "fees",
        "income",
        "currency",
        "date_at",
        "notes",
    }
)
MONEY_FIELDS = ("price", "fees", "income")


@dataclass(frozen=True)
class CorrectTransactionResult:
    transaction: Transaction
    position: Position | None


def apply_corrections(original: Transaction, changes: dict[str, Any]) -> Transaction:
    """Return the corrected transaction for raw field changes.

    A currency change relabels every amount that is not itself corrected.

    Raises:
        NotAllowedError: If a field cannot be corrected or a value violates
            a transaction invariant.
    """
    unknown = set(changes) - CORRECTABLE_FIELDS
    if unknown:
        raise NotAllowedError(
            f"Fields cannot be corrected: {sorted(unknown)}",
            details={"transaction_id": original.id},
        )
    currency = changes.get("currency") or original.currency
    fields: dict[str, Any] = {}
    if "transaction_type" in changes:
        fields["transaction_type"] = parse_transaction_type(
            changes["transaction_type"]
        )
    if "quantity" in changes:
        fields["quantity"] = Quantity(changes["quantity"])
    for name in MONEY_FIELDS:
        if name in changes:
            value = changes[name]
            fields[name] = Money(value, currency) if value is not None else None
        elif "currency" in changes and getattr(original, name) is not None:
            fields[name] = Money(getattr(original, name).amount, currency)
    for name in ("date_at", "notes"):
        if name in changes:
            fields[name] = changes[name]
    return original.corrected(**fields)


class CorrectTransactionUseCase:
    """Correct a transaction and rebuild its position by full replay."""

    def __init__(
        self,
        investor_repository: InvestorRepositoryPort,
        transaction_repository: TransactionRepositoryPort,
        investment_repository: InvestmentRepositoryPort,
        logger=None,
    ) -> None:
        self._investors = investor_repository
        self._transactions = transaction_repository
        self._logger = logger or get_app_logger()
        self._rebuild = RebuildPositionUseCase(
            transaction_repository,
            investment_repository,
            logger=self._logger,
        )

    def execute(
        self,
        investor_id: str,
        transaction_id: str,
        **changes,
    ) -> CorrectTransactionResult | DomainError:
        """Apply the corrections.

        Args:
            investor_id: Investor requesting the correction.
            transaction_id: Transaction to correct.
            **changes: Raw field values, see CORRECTABLE_FIELDS.

        Returns:
            CorrectTransactionResult | DomainError: Corrected transaction and
            rebuilt position, or the failure.
        """
        if not changes:
            return self._reject(
                NotAllowedError("It is necessary to inform some change field.")
            )
        if self._investors.find_by_id(investor_id) is None:
            return self._reject(NotFoundError("Investor not found."))

        original = self._transactions.find_by_id(transaction_id)
        if original is None:
            return self._reject(
                NotFoundError(
                    "Transaction not found.",
                    details={"transaction_id": transaction_id},
                )
            )

        try:
            corrected = apply_corrections(original, changes)
        except DomainError as exc:
            return self._reject(exc)

        history = self._transactions.find_all_by_portfolio_and_asset(
            original.portfolio_id,
            original.asset_id,
        )
        ledger = [corrected if tx.id == corrected.id else tx for tx in history]
        replayed = replay_ledger(ledger, logger=self._logger)
        if isinstance(replayed, DomainError):
            return self._reject(replayed)

        error = self._transactions.update(corrected)
        if error is not None:
            return self._reject(error)
        self._logger.info(
            f"Corrected transaction {corrected.id}: {sorted(changes)}"
        )

        rebuilt = self._rebuild.execute(corrected.portfolio_id, corrected.asset_id)
        if isinstance(rebuilt, DomainError):
            return rebuilt
        return CorrectTransactionResult(
            transaction=corrected,
            position=rebuilt.position,
        )

    def _reject(self, error: DomainError) -> DomainError:
        self._logger.warning(f"Transaction not corrected: {error.message}")
        return error


__all__ = [
    "CorrectTransactionUseCase",
    "CorrectTransactionResult",
    "CORRECTABLE_FIELDS",
    "apply_corrections",
]
