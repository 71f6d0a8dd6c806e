# tests/utils/test_logging_config.py
"""Unit tests for logging configuration utility.
=================================================

Tests for the logging setup utility in `pykilo.utils.logging_config`.

The tests run in a temporary working directory to avoid touching real files.
"""

import logging
import logging.handlers

import pytest

from pykilo.utils import logging_config


@pytest.fixture(autouse=True)
def restore_root_handlers():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    for handler in root.handlers + logging_config.KEY_LOGGER.handlers:
        handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)
    logging_config.KEY_LOGGER.handlers = []


def test_setup_logging_creates_handlers(tmp_path, monkeypatch) -> None:
    """`setup_logging` should add rotating file handlers with proper levels."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(logging_config.KEYTRACE_ENV, raising=False)

    logging_config.setup_logging(
        {
            "logging": {
                "file_level": "INFO",
                "console_level": "ERROR",
                "log_to_console": False,
                "separate_error_log": True,
            }
        }
    )

    root = logging.getLogger()
    assert len(root.handlers) == 2
    assert all(isinstance(h, logging.handlers.RotatingFileHandler) for h in root.handlers)
    assert root.handlers[0].level == logging.INFO
    assert root.handlers[1].level == logging.ERROR
    assert (tmp_path / "pykilo.log").exists()
    assert logging_config.KEY_LOGGER.disabled


def test_console_is_off_by_default(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    logging_config.setup_logging()
    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.level == logging.DEBUG


def test_console_handler_when_enabled(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    logging_config.setup_logging({"logging": {"log_to_console": True, "console_level": "ERROR"}})
    stream_handlers = [
        h for h in logging.getLogger().handlers if type(h) is logging.StreamHandler
    ]
    assert len(stream_handlers) == 1
    assert stream_handlers[0].level == logging.ERROR


def test_repeated_setup_does_not_duplicate(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    logging_config.setup_logging()
    logging_config.setup_logging()
    assert len(logging.getLogger().handlers) == 1


def test_key_trace_enabled_by_environment(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(logging_config.KEYTRACE_ENV, "yes")
    logging_config.setup_logging()
    key_logger = logging_config.KEY_LOGGER
    assert not key_logger.disabled
    assert not key_logger.propagate
    key_logger.debug("key 'a' -> CHAR")
    for handler in key_logger.handlers:
        handler.flush()
    assert "key 'a'" in (tmp_path / "keytrace.log").read_text(encoding="utf-8")
