# pykilo/utils/logging_config.py
"""pykilo.utils.logging_config
=============================

Logging configuration for the pykilo editor. Curses owns the terminal while the
editor runs, so everything goes to files by default.

Features:
    - Rotating file logging for general application events (pykilo.log by default).
    - Optional console logging to stderr (off by default).
    - Optional separate error log file (error.log) for ERROR and CRITICAL events.
    - Optional key event tracing (keytrace.log) enabled via the PYKILO_KEYTRACE environment variable.
    - Falls back to the system temp directory when the log directory cannot be created.
    - Safe reconfiguration: existing root handlers are replaced, never duplicated.
    - Never raises; problems are reported to stderr and logging continues best-effort.

Globals:
    logger: Main application logger ("pykilo").
    KEY_LOGGER: Logger for raw key-press trace events ("pykilo.keyevents").
"""

import logging
import logging.handlers
import os
import sys
import tempfile
from typing import Any, Optional


logger = logging.getLogger("pykilo")
KEY_LOGGER = logging.getLogger("pykilo.keyevents")

KEYTRACE_ENV = "PYKILO_KEYTRACE"
FILE_FORMAT = "%(asctime)s - %(levelname)-8s - %(name)-15s - %(message)s (%(filename)s:%(lineno)d)"


def _rotating_handler(
    filename: str, max_bytes: int, backup_count: int, level: int, formatter: logging.Formatter
) -> Optional[logging.Handler]:
    """Builds a RotatingFileHandler, creating the parent directory if needed."""
    try:
        log_dir = os.path.dirname(filename)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        handler = logging.handlers.RotatingFileHandler(
            filename, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8"
        )
    except OSError as e:
        print(f"Error setting up log file '{filename}': {e}", file=sys.stderr)
        return None
    handler.setFormatter(formatter)
    handler.setLevel(level)
    return handler


def setup_logging(config: Optional[dict[str, Any]] = None) -> None:
    """Configures application-wide logging handlers and log levels.

    Up to four independent handlers are installed:

    1. File handler: rotating log file capturing everything from
       ``file_level`` (default DEBUG) upward.
    2. Console handler: optional stderr output at ``console_level``
       (default WARNING). Disabled unless ``log_to_console`` is true.
    3. Error-file handler: optional rotating error.log with ERROR and
       CRITICAL records only.
    4. Key-event handler: rotating keytrace.log attached to
       ``pykilo.keyevents`` when ``PYKILO_KEYTRACE`` is ``1/true/yes``.

    Args:
        config (dict | None): Application configuration. Only the
            ``["logging"]`` section is consulted (``file_level``,
            ``console_level``, ``log_to_console``, ``separate_error_log``,
            ``log_file``).
    """
    logging_config = (config or {}).get("logging", {})
    file_level = getattr(logging, str(logging_config.get("file_level", "DEBUG")).upper(), logging.DEBUG)
    file_formatter = logging.Formatter(FILE_FORMAT)

    log_filename = logging_config.get("log_file", "pykilo.log")
    file_handler = _rotating_handler(log_filename, 2 * 1024 * 1024, 5, file_level, file_formatter)
    if file_handler is None:
        log_filename = os.path.join(tempfile.gettempdir(), "pykilo.log")
        print(f"Logging to temporary file: '{log_filename}'", file=sys.stderr)
        file_handler = _rotating_handler(log_filename, 2 * 1024 * 1024, 5, file_level, file_formatter)

    console_handler = None
    if logging_config.get("log_to_console", False):
        console_level_str = str(logging_config.get("console_level", "WARNING")).upper()
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(levelname)-8s - %(name)-12s - %(message)s"))
        console_handler.setLevel(getattr(logging, console_level_str, logging.WARNING))

    error_file_handler = None
    if logging_config.get("separate_error_log", False):
        error_file_handler = _rotating_handler("error.log", 1024 * 1024, 3, logging.ERROR, file_formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = []  # Clear existing root handlers to avoid duplicates
    for handler in (file_handler, console_handler, error_file_handler):
        if handler is not None:
            root_logger.addHandler(handler)
    root_logger.setLevel(file_level)

    KEY_LOGGER.propagate = False
    KEY_LOGGER.setLevel(logging.DEBUG)
    KEY_LOGGER.handlers = []
    KEY_LOGGER.disabled = False

    if os.environ.get(KEYTRACE_ENV, "").lower() in {"1", "true", "yes"}:
        key_trace_handler = _rotating_handler(
            "keytrace.log", 1024 * 1024, 3, logging.DEBUG, logging.Formatter("%(asctime)s - %(message)s")
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
        "Logging setup complete. Root logger level: %s.", logging.getLevelName(root_logger.level)
    )
    if file_handler:
        logging.info(f"File logging to '{log_filename}' at level: {logging.getLevelName(file_handler.level)}.")
