"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys

import pytest

from fintro.config import BaseConfig
from fintro.logging_config import ROOT_LOGGER_NAME, JSONFormatter, get_logger, setup_logging


@pytest.fixture
def config(tmp_path, monkeypatch):
    monkeypatch.setenv("FINTRO_DATA_DIR", str(tmp_path))
    cfg = BaseConfig()
    yield cfg
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)


def _record(**kwargs) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test.logger",
        level=kwargs.pop("level", logging.INFO),
        pathname="test.py",
        lineno=42,
        msg=kwargs.pop("msg", "Test message"),
        args=(),
        exc_info=kwargs.pop("exc_info", None),
    )
    record.module = "test_module"
    record.funcName = "test_function"
    for key, value in kwargs.items():
        setattr(record, key, value)
    return record


def test_json_formatter():
    """JSONFormatter emits the standard fields as one JSON object."""
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test.logger"
    assert log_data["message"] == "Test message"
    assert log_data["module"] == "test_module"
    assert log_data["function"] == "test_function"
    assert log_data["line"] == 42
    assert "timestamp" in log_data
    assert "extra" not in log_data


def test_json_formatter_with_exception_and_extra():
    try:
        raise ValueError("Test error")
    except ValueError:
        exc_info = sys.exc_info()

    record = _record(level=logging.ERROR, msg="Error occurred", exc_info=exc_info, collection="expenses")
    log_data = json.loads(JSONFormatter().format(record))

    assert log_data["exception"]["type"] == "ValueError"
    assert "Test error" in log_data["exception"]["message"]
    assert log_data["exception"]["traceback"]
    assert log_data["extra"] == {"collection": "expenses"}


def test_setup_logging(config, tmp_path):
    """Logging setup creates the rotating JSON log file."""
    config.DEV_MODE = True
    logger = setup_logging(config)

    assert logger.name == "fintro"
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2

    log_file = tmp_path / "logs" / "fintro.log"
    assert log_file.exists()

    get_logger("fintro.services.test").warning("Test warning message", extra={"record_id": "abc"})
    for handler in logger.handlers:
        handler.flush()

    lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines() if line.strip()]
    assert lines[0]["message"] == "Logging initialized"
    assert lines[-1]["message"] == "Test warning message"
    assert lines[-1]["extra"]["record_id"] == "abc"


def test_get_logger():
    assert get_logger("module1").name == "fintro.module1"
    assert get_logger("fintro.services.auth").name == "fintro.services.auth"
    assert get_logger("fintro").name == "fintro"


@pytest.mark.parametrize("dev_mode", [True, False])
def test_logging_levels_by_mode(config, dev_mode):
    """Console logging level adjusts based on dev mode."""
    config.DEV_MODE = dev_mode
    logger = setup_logging(config)

    console_handler = next(
        handler
        for handler in logger.handlers
        if isinstance(handler, logging.StreamHandler)
        and not isinstance(handler, logging.handlers.RotatingFileHandler)
    )
    assert console_handler.level == (logging.INFO if dev_mode else logging.WARNING)
    assert logger.level == (logging.DEBUG if dev_mode else logging.INFO)
