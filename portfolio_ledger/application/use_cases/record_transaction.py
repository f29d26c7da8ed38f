"""Use case recording a new ledger transaction."""

from dataclasses import dataclass
from datetime import datetime

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
from portfolio_ledger.domain.constants import DEFAULT_CURRENCY
from portfolio_ledger.domain.errors import DomainError, NotFoundError
from portfolio_ledger.domain.models import (
    Money,
    Position,
    Quantity,
    Transaction,
    TransactionType,
)
from portfolio_ledger.domain.models.transaction import utc_now
from portfolio_ledger.domain.services.ledger_replay import replay_ledger
from portfolio_ledger.domain.services.validation import (
    parse_transaction_type,
    require_identifier,
)
from portfolio_ledger.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class RecordTransactionRequest:
    """Raw input for a new transaction.

    Attributes:
        investor_id: Investor recording the transaction.
        portfolio_id: Portfolio owning the ledger.
        asset_id: Asset the ledger tracks.
        transaction_type: Buy, Sell or Dividend.
        quantity: Units traded; ignored for Dividend.
        price: Unit price; optional for Dividend.
        fees: Fees charged.
        income: Dividend income.
        currency: Currency of every amount, defaults to the ledger default.
        date_at: Ledger date, defaults to now.
        notes: Free text.
    """

    investor_id: str
    portfolio_id: str
    asset_id: str
    transaction_type: str
    quantity: object = 0
    price: object | None = None
    fees: object = 0
    income: object | None = None
    currency: str | None = None
    date_at: datetime | None = None
    notes: str = ""


@dataclass(frozen=True)
class RecordTransactionResult:
    transaction: Transaction
    position: Position | None


def build_transaction(
    request: RecordTransactionRequest,
    default_currency: str = DEFAULT_CURRENCY,
) -> Transaction:
    """Build a domain transaction from raw request values.

    Raises:
        NotAllowedError: If any value violates a transaction invariant.
    """
    currency = request.currency or default_currency
    transaction_type = parse_transaction_type(request.transaction_type)
    common = {
        "portfolio_id": require_identifier(request.portfolio_id, "Portfolio id"),
        "asset_id": require_identifier(request.asset_id, "Asset id"),
        "fees": Money(request.fees, currency),
        "date_at": request.date_at or utc_now(),
        "notes": request.notes,
    }
    price = Money(request.price, currency) if request.price is not None else None
    if transaction_type is TransactionType.DIVIDEND:
        income = request.income if request.income is not None else 0
        return Transaction.dividend(
            income=Money(income, currency),
            price=price,
            **common,
        )
    return Transaction(
        transaction_type=transaction_type,
        quantity=Quantity(request.quantity),
        price=price,
        income=Money(request.income, currency) if request.income is not None else None,
        **common,
    )


class RecordTransactionUseCase:
    """Append a transaction to its ledger and rebuild the position.

    The extended ledger is replayed before anything is written, so a Sell
    exceeding the held quantity is rejected without side effects.
    """

    def __init__(
        self,
        investor_repository: InvestorRepositoryPort,
        transaction_repository: TransactionRepositoryPort,
        investment_repository: InvestmentRepositoryPort,
        logger=None,
        default_currency: str = DEFAULT_CURRENCY,
    ) -> None:
        """Initialize the use case.

        Args:
            investor_repository: Port used to check the investor exists.
            transaction_repository: Port storing the ledger.
            investment_repository: Port storing materialized positions.
            logger: Optional logger compatible with logging.Logger-like API.
            default_currency: Currency used when the request names none.
        """
        self._investors = investor_repository
        self._transactions = transaction_repository
        self._logger = logger or get_app_logger()
        self._default_currency = default_currency
        self._rebuild = RebuildPositionUseCase(
            transaction_repository,
            investment_repository,
            logger=self._logger,
        )

    def execute(
        self,
        request: RecordTransactionRequest,
    ) -> RecordTransactionResult | DomainError:
        """Record the transaction.

        Args:
            request: Raw transaction values.

        Returns:
            RecordTransactionResult | DomainError: Stored transaction and the
            rebuilt position, or the failure.
        """
        if self._investors.find_by_id(request.investor_id) is None:
            return self._reject(NotFoundError("Investor not found."))

        try:
            transaction = build_transaction(request, self._default_currency)
        except DomainError as exc:
            return self._reject(exc)

        history = self._transactions.find_all_by_portfolio_and_asset(
            transaction.portfolio_id,
            transaction.asset_id,
        )
        replayed = replay_ledger([*history, transaction], logger=self._logger)
        if isinstance(replayed, DomainError):
            return self._reject(replayed)

        error = self._transactions.create(transaction)
        if error is not None:
            return self._reject(error)
        self._logger.info(
            f"Recorded {transaction.transaction_type.value} {transaction.id} "
            f"for {transaction.portfolio_id}/{transaction.asset_id}"
        )

        rebuilt = self._rebuild.execute(transaction.portfolio_id, transaction.asset_id)
        if isinstance(rebuilt, DomainError):
            return rebuilt
        return RecordTransactionResult(
            transaction=transaction,
            position=rebuilt.position,
        )

    def _reject(self, error: DomainError) -> DomainError:
        self._logger.warning(f"Transaction not recorded: {error.message}")
        return error


__all__ = [
    "RecordTransactionUseCase",
    "RecordTransactionRequest",
    "RecordTransactionResult",
    "build_transaction",
]
