"""CLI adapter rebuilding stored positions from their ledgers.

This module builds the RebuildPositionsUseCase from the container and
provides a simple command-line entry point for running the batch job.
Set LEDGER_PORTFOLIO_ID to restrict the run to one portfolio.
"""

import os

from portfolio_ledger.infrastructure.container import (
    build_rebuild_positions_use_case,
)
from portfolio_ledger.infrastructure.logging.logger import get_usage_logger


def main() -> None:
    """Run the batch position rebuild."""
    use_case = build_rebuild_positions_use_case()
    portfolio_id = os.getenv("LEDGER_PORTFOLIO_ID") or None
    get_usage_logger().info(
        f"rebuild-positions invoked for portfolio={portfolio_id or '*'}"
    )

    result = use_case.execute(portfolio_id)

    print(
        f"Rebuilt {result.processed} ledgers: "
        f"{result.created} created, {result.updated} updated, "
        f"{result.deleted} deleted, {len(result.failures)} failed."
    )
    for failure in result.failures:
        print(
            f"  {failure.portfolio_id}/{failure.asset_id}: "
            f"{failure.code} {failure.message}"
        )


if __name__ == "__main__":  # pragma: no cover
    main()
