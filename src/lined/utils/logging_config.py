# lined/utils/logging_config.py
"""lined.utils.logging_config
============================

Logging configuration for the lined editor. It defines the global logger
objects and a single setup function, `setup_logging`, which attaches the
application-wide handlers according to the ``[logging]`` config section.

Features:
    - Rotating file logging for general application events (editor.log).
    - Optional console logging to stderr (off by default, since the editor
      owns the terminal while it runs).
    - Optional separate error log file (error.log) for ERROR and CRITICAL events.
    - Optional key event tracing (keytrace.log) enabled via the LINED_KEYTRACE
      environment variable.
    - Log directories are created on demand, with a fallback to the system
      temp directory.
    - Safe reconfiguration: existing handlers are replaced, never duplicated.

Usage:
    >>> from lined.utils import logging_config
    >>> logging_config.setup_logging({"logging": {"file_level": "INFO"}})

Globals:
    logger: Main application logger ("lined").
    KEY_LOGGER: Logger for decoded key trace events ("lined.keyevents").
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional


# ======================== Global loggers ========================
# Unconfigured until ``setup_logging()`` attaches handlers.
logger = logging.getLogger("lined")  # main application logger
KEY_LOGGER = logging.getLogger("lined.keyevents")  # decoded key trace

KEYTRACE_ENV_VAR = "LINED_KEYTRACE"
FILE_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"


def _ensure_log_path(filename: str, fallback_name: str) -> str:
    """Creates the directory of *filename*, or returns a temp-dir path on failure."""
    log_dir = os.path.dirname(filename)
    if log_dir and not os.path.exists(log_dir):
        try:
            os.makedirs(log_dir)
        except OSError as e_mkdir:
            print(f"Error creating log directory '{log_dir}': {e_mkdir}", file=sys.stderr)
            filename = os.path.join(tempfile.gettempdir(), fallback_name)
            print(f"Logging to temporary file: '{filename}'", file=sys.stderr)
    return filename


def _rotating_handler(
    filename: str, max_bytes: int, backup_count: int, level: int, formatter: logging.Formatter
) -> Optional[logging.Handler]:
    try:
        handler = logging.handlers.RotatingFileHandler(
            filename, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    except OSError as e:
        print(f"Error setting up log file '{filename}': {e}.", file=sys.stderr)
        return None
    handler.setFormatter(formatter)
    handler.setLevel(level)
    return handler


# --- Logging Setup Function ---
def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configures application-wide logging handlers and log levels.

    Up to four independent handlers are set up:

    1. File handler: rotating ``log_file`` (default editor.log) capturing
       everything from ``file_level`` (default DEBUG) upward.
    2. Console handler: optional stderr output at ``console_level``
       (default WARNING), only when ``log_to_console`` is true.
    3. Error-file handler: optional rotating error.log that stores only
       ERROR and CRITICAL events.
    4. Key-event handler: rotating keytrace.log attached to
       ``lined.keyevents`` when ``LINED_KEYTRACE`` is ``1/true/yes``.

    Args:
        config (dict | None): Application configuration. Only the
            ``["logging"]`` sub-section is consulted.

    Notes:
        The function never raises; I/O or permission errors are reported to
        stderr and logging continues with whatever handlers could be built.
    """
    logging_config = (config or {}).get("logging", {})

    log_file_level = getattr(logging, str(logging_config.get("file_level", "DEBUG")).upper(), logging.DEBUG)
    log_filename = _ensure_log_path(str(logging_config.get("log_file", "editor.log")), "lined.log")
    file_formatter = logging.Formatter(FILE_FORMAT)
    file_handler = _rotating_handler(log_filename, 2 * 1024 * 1024, 5, log_file_level, file_formatter)

    console_handler = None
    if logging_config.get("log_to_console", False):
        console_level = getattr(
            logging, str(logging_config.get("console_level", "WARNING")).upper(), logging.WARNING
        )
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(levelname)-8s - %(name)-12s - %(message)s"))
        console_handler.setLevel(console_level)

    error_file_handler = None
    if logging_config.get("separate_error_log", False):
        error_log_filename = _ensure_log_path("error.log", "lined-error.log")
        error_file_handler = _rotating_handler(
            error_log_filename, 1024 * 1024, 3, logging.ERROR, file_formatter
        )

    # Configure the root logger
    root_logger = logging.getLogger()
    root_logger.handlers = []  # Clear existing root handlers to avoid duplicates
    for handler in (file_handler, console_handler, error_file_handler):
        if handler is not None:
            root_logger.addHandler(handler)
    root_logger.setLevel(log_file_level)

    # Key Event Logger
    KEY_LOGGER.propagate = False
    KEY_LOGGER.setLevel(logging.DEBUG)
    KEY_LOGGER.handlers = []
    KEY_LOGGER.disabled = False

    if os.environ.get(KEYTRACE_ENV_VAR, "").lower() in {"1", "true", "yes"}:
        key_trace_handler = _rotating_handler(
            _ensure_log_path("keytrace.log", "lined-keytrace.log"),
            1024 * 1024,
            3,
            logging.DEBUG,
            logging.Formatter("%(asctime)s - %(message)s"),
        )
        if key_trace_handler is not None:
            KEY_LOGGER.addHandler(key_trace_handler)
            logging.info("Key event tracing enabled, logging to 'keytrace.log'.")
        else:
            KEY_LOGGER.disabled = True
    else:
        KEY_LOGGER.addHandler(logging.NullHandler())
        KEY_LOGGER.disabled = True
        logging.debug("Key event tracing is disabled.")

    logging.info(
        "Logging setup complete. Root logger level: %s.",
        logging.getLevelName(root_logger.level),
    )
    if file_handler:
        logging.info("File logging to '%s' at level: %s.", log_filename, logging.getLevelName(file_handler.level))
    if console_handler:
        logging.info("Console logging to stderr at level: %s.", logging.getLevelName(console_handler.level))
    if error_file_handler:
        logging.info("Error logging to 'error.log' at level: ERROR.")
