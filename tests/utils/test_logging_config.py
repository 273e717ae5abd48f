# tests/utils/test_logging_config.py
"""Unit tests for logging configuration utility.
=================================================

Tests for the logging setup utility in `lined.utils.logging_config`.

This module verifies that `setup_logging`:
- Creates rotating file handlers for the main log and a separate error log
  when `separate_error_log` is enabled.
- Honors the configured levels for each handler.
- Leaves the console alone unless `log_to_console` is set.
- Switches the key trace logger on only through `LINED_KEYTRACE`.

Every test runs in a temporary working directory to avoid touching real files.
"""

import logging
import logging.handlers

import pytest

from lined.utils import logging_config


@pytest.fixture(autouse=True)
def restore_root_handlers():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


def test_setup_logging_creates_handlers(tmp_path, monkeypatch) -> None:
    """Main file handler + separate error file handler, no console."""
    monkeypatch.chdir(tmp_path)

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
    levels = sorted(h.level for h in root.handlers)
    assert levels == [logging.INFO, logging.ERROR]
    assert (tmp_path / "editor.log").exists()
    assert (tmp_path / "error.log").exists()


def test_console_handler_is_opt_in(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    logging_config.setup_logging({})
    root = logging.getLogger()
    assert not any(type(h) is logging.StreamHandler for h in root.handlers)

    logging_config.setup_logging({"logging": {"log_to_console": True, "console_level": "ERROR"}})
    consoles = [h for h in root.handlers if type(h) is logging.StreamHandler]
    assert len(consoles) == 1
    assert consoles[0].level == logging.ERROR


def test_custom_log_file_in_new_directory(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    logging_config.setup_logging({"logging": {"log_file": "logs/lined.log"}})
    assert (tmp_path / "logs" / "lined.log").exists()


def test_key_trace_disabled_by_default(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LINED_KEYTRACE", raising=False)
    logging_config.setup_logging({})
    assert logging_config.KEY_LOGGER.disabled is True
    assert logging_config.KEY_LOGGER.propagate is False


def test_key_trace_enabled_by_env(tmp_path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LINED_KEYTRACE", "1")
    logging_config.setup_logging({})
    key_logger = logging_config.KEY_LOGGER
    assert key_logger.disabled is False
    assert any(isinstance(h, logging.handlers.RotatingFileHandler) for h in key_logger.handlers)

    key_logger.debug("key op=CHAR")
    for handler in key_logger.handlers:
        handler.close()
    assert "key op=CHAR" in (tmp_path / "keytrace.log").read_text(encoding="utf-8")
    key_logger.handlers = []
