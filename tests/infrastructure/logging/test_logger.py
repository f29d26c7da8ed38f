"""Tests for the logging helpers."""

import logging
from unittest.mock import MagicMock

from portfolio_ledger.infrastructure.logging import logger as logger_module


def test_logger_builder_writes_under_project_logs(tmp_path, monkeypatch):
    """LoggerBuilder should place log files in logs/<subdir>/."""
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)
    monkeypatch.setattr(
        logger_module.LoggerBuilder,
        "_today_stamp",
        staticmethod(lambda: "20240102"),
    )

    builder = logger_module.LoggerBuilder()
    ledger_logger = (
        builder.name("ledger_builder_test")
        .subdir("rebuild")
        .prefix("positions")
        .console(True)
        .level(logging.WARNING)
        .build()
    )

    assert ledger_logger.name == "ledger_builder_test"
    assert ledger_logger.level == logging.WARNING
    assert ledger_logger.propagate is False
    file_handlers = [
        h for h in ledger_logger.handlers if isinstance(h, logging.FileHandler)
    ]
    assert len(file_handlers) == 1
    expected_path = tmp_path / "logs" / "rebuild" / "20240102_positions.log"
    assert file_handlers[0].baseFilename == str(expected_path)
    assert len(ledger_logger.handlers) == 2
    assert builder.build() is ledger_logger


def test_builder_does_not_duplicate_handlers(tmp_path, monkeypatch):
    """A second builder for the same name keeps the existing handlers."""
    monkeypatch.setattr(logger_module, "get_project_root", lambda: tmp_path)

    first = logger_module.LoggerBuilder().name("ledger_dup_test").build()
    second = logger_module.LoggerBuilder().name("ledger_dup_test").build()

    assert first is second
    assert len(second.handlers) == 1


def test_default_handlers_use_formatter(tmp_path):
    """Default handlers share the default formatter."""
    fmt = logger_module.LoggerBuilder._default_formatter()
    file_handler = logger_module.LoggerBuilder._default_file_handler(
        tmp_path / "ledger.log",
        fmt,
    )
    console_handler = logger_module.LoggerBuilder._default_console_handler(fmt)

    assert file_handler.level == logging.INFO
    assert file_handler.formatter is fmt
    assert isinstance(console_handler, logging.StreamHandler)
    assert console_handler.formatter is fmt
    assert fmt._fmt == logger_module.DEFAULT_FORMAT
    file_handler.close()


def test_logger_singleton_delegates_to_underlying_logger(monkeypatch):
    """Logger methods should call the wrapped logging.Logger."""
    fake_logger = MagicMock()
    monkeypatch.setattr(logger_module.LoggerBuilder, "build", lambda self: fake_logger)
    monkeypatch.setattr(logger_module.Logger, "_instance", None)

    ledger_logger = logger_module.Logger("ledger")
    ledger_logger.info("replayed")
    ledger_logger.warning("drift")
    ledger_logger.error("failed")
    ledger_logger.debug("step")
    ledger_logger.critical("down")

    fake_logger.info.assert_called_with("replayed")
    fake_logger.warning.assert_called_with("drift")
    fake_logger.error.assert_called_with("failed")
    fake_logger.debug.assert_called_with("step")
    fake_logger.critical.assert_called_with("down")
    assert logger_module.Logger("other") is ledger_logger


def test_app_and_usage_loggers_are_distinct_singletons(monkeypatch):
    """App and usage loggers are separate singletons."""
    fake_logger = MagicMock()
    monkeypatch.setattr(logger_module.LoggerBuilder, "build", lambda self: fake_logger)
    monkeypatch.setattr(logger_module.AppLogger, "_instance", None)
    monkeypatch.setattr(logger_module.UsageLogger, "_instance", None)

    app_logger = logger_module.get_app_logger()
    usage_logger = logger_module.get_usage_logger()

    assert logger_module.get_app_logger() is app_logger
    assert logger_module.get_usage_logger() is usage_logger
    assert app_logger is not usage_logger
    assert isinstance(app_logger.logger, MagicMock)
