"""Tests for the rebuild_positions_cli adapter."""

from types import SimpleNamespace
from unittest.mock import MagicMock

from portfolio_ledger.adapters import rebuild_positions_cli
from portfolio_ledger.application.use_cases.rebuild_positions import RebuildFailure
from portfolio_ledger.domain.errors import InsufficientQuantityError


def _summary(failures):
    return SimpleNamespace(
        processed=3,
        created=1,
        updated=1,
        deleted=0,
        failures=failures,
    )


def test_main_runs_use_case_and_prints_summary(monkeypatch, capsys):
    """The CLI should build the use case and print counts and failures."""
    fake_use_case = MagicMock()
    fake_use_case.execute.return_value = _summary(
        [
            RebuildFailure(
                portfolio_id="portfolio-1",
                asset_id="VALE3",
                error=InsufficientQuantityError("Cannot sell an asset that is not held."),
            ),
            RebuildFailure(
                portfolio_id="portfolio-1",
                asset_id="ITUB4",
                error=ValueError("Not a numeric value: 'x'"),
            ),
        ]
    )
    usage_logger = MagicMock()
    monkeypatch.setattr(rebuild_positions_cli, "get_usage_logger", lambda: usage_logger)
    monkeypatch.setattr(
        rebuild_positions_cli,
        "build_rebuild_positions_use_case",
        lambda: fake_use_case,
    )
    monkeypatch.setenv("LEDGER_PORTFOLIO_ID", "portfolio-1")

    rebuild_positions_cli.main()

    fake_use_case.execute.assert_called_once_with("portfolio-1")
    usage_logger.info.assert_called_once_with(
        "rebuild-positions invoked for portfolio=portfolio-1"
    )
    captured = capsys.readouterr()
    assert "Rebuilt 3 ledgers: 1 created, 1 updated, 0 deleted, 2 failed." in captured.out
    assert "portfolio-1/VALE3: INSUFFICIENT_QUANTITY Cannot sell" in captured.out
    assert "portfolio-1/ITUB4: ValueError Not a numeric value" in captured.out


def test_main_without_portfolio_filter(monkeypatch, capsys):
    """Without LEDGER_PORTFOLIO_ID every portfolio is rebuilt."""
    fake_use_case = MagicMock()
    fake_use_case.execute.return_value = SimpleNamespace(
        processed=0, created=0, updated=0, deleted=0, failures=[]
    )
    monkeypatch.setattr(rebuild_positions_cli, "get_usage_logger", lambda: MagicMock())
    monkeypatch.setattr(
        rebuild_positions_cli,
        "build_rebuild_positions_use_case",
        lambda: fake_use_case,
    )
    monkeypatch.delenv("LEDGER_PORTFOLIO_ID", raising=False)

    rebuild_positions_cli.main()

    fake_use_case.execute.assert_called_once_with(None)
    assert "0 failed" in capsys.readouterr().out
