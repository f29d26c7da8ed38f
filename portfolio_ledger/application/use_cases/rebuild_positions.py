"""Use case rebuilding every stored position, tolerating partial failures."""

from dataclasses import dataclass, field

from portfolio_ledger.application.ports.investment_repository import (
    InvestmentRepositoryPort,
)
from portfolio_ledger.application.ports.transaction_repository import (
    TransactionRepositoryPort,
)
from portfolio_ledger.application.use_cases.rebuild_position import (
    PositionChange,
    RebuildPositionUseCase,
)
from portfolio_ledger.domain.errors import DomainError
from portfolio_ledger.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class RebuildFailure:
    """Ledger skipped by a batch rebuild.

    ``error`` is the DomainError replay stopped on, or the unexpected
    exception raised while reading, replaying or writing the ledger.
    """

    portfolio_id: str
    asset_id: str
    error: Exception

    @property
    def code(self) -> str:
        if isinstance(self.error, DomainError):
            return self.error.code.value
        return type(self.error).__name__

    @property
    def message(self) -> str:
        if isinstance(self.error, DomainError):
            return self.error.message
        return str(self.error)


@dataclass(frozen=True)
class RebuildPositionsResult:
    """Summary of a batch rebuild.

    Attributes:
        processed: Number of ledgers replayed.
        created: Positions created.
        updated: Positions updated.
        deleted: Positions removed because nothing is held anymore.
        failures: Ledgers skipped, with the reason.
    """

    processed: int
    created: int
    updated: int
    deleted: int
    failures: list[RebuildFailure] = field(default_factory=list)

    @property
    def unchanged(self) -> int:
        return (
            self.processed
            - self.created
            - self.updated
            - self.deleted
            - len(self.failures)
        )


class RebuildPositionsUseCase:
    """Replay every ledger of one or all portfolios.

    A ledger that fails to replay, or whose read or write raises, is reported
    in the result and skipped; the other ledgers are still rebuilt.
    """

    def __init__(
        self,
        transaction_repository: TransactionRepositoryPort,
        investment_repository: InvestmentRepositoryPort,
        logger=None,
    ) -> None:
        self._transactions = transaction_repository
        self._logger = logger or get_app_logger()
        self._rebuild = RebuildPositionUseCase(
            transaction_repository,
            investment_repository,
            logger=self._logger,
        )

    def execute(self, portfolio_id: str | None = None) -> RebuildPositionsResult:
        """Rebuild the positions of every known ledger.

        Args:
            portfolio_id: Optional portfolio restricting the batch.

        Returns:
            RebuildPositionsResult: Counts per outcome and the failures.
        """
        keys = self._transactions.list_ledger_keys(portfolio_id)
        counts = {change: 0 for change in PositionChange}
        failures: list[RebuildFailure] = []

        for key_portfolio_id, asset_id in keys:
            try:
                result = self._rebuild.execute(key_portfolio_id, asset_id)
            except Exception as exc:
                self._logger.error(
                    f"Rebuild of {key_portfolio_id}/{asset_id} failed: "
                    f"{type(exc).__name__}: {exc}"
                )
                result = exc
            if isinstance(result, Exception):
                failures.append(
                    RebuildFailure(
                        portfolio_id=key_portfolio_id,
                        asset_id=asset_id,
                        error=result,
                    )
                )
                continue
            counts[result.change] += 1

        summary = RebuildPositionsResult(
            processed=len(keys),
            created=counts[PositionChange.CREATED],
            updated=counts[PositionChange.UPDATED],
            deleted=counts[PositionChange.DELETED],
            failures=failures,
        )
        self._logger.info(
            f"Rebuilt {summary.processed} ledgers: created={summary.created}, "
            f"updated={summary.updated}, deleted={summary.deleted}, "
            f"failed={len(failures)}"
        )
        if failures:
            self._logger.warning(
                f"Skipped {len(failures)} ledgers that could not be replayed"
            )
        return summary


__all__ = ["RebuildPositionsUseCase", "RebuildPositionsResult", "RebuildFailure"]
