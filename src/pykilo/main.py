# pykilo/main.py
"""
pykilo Main Entry Point
=======================

1) Configuration & Logging: loads config and initializes logging first.
2) Curses Wrapper: safely initializes/tears down curses.
3) Terminal Mode: raw mode is held by `TerminalAppMode` for the whole session.
4) Application Run: builds the session around the KeyBinder/DrawScreen pair
   and runs it until a quit is confirmed.

Exit status is 1 when the terminal cannot be prepared (`StartupError`) or an
unhandled error escapes the session.
"""

import curses
import locale
import logging
import signal
import sys
from typing import Any, Optional

from pykilo.core.EditorSession import EditorSession
from pykilo.core.Errors import StartupError
from pykilo.ui.DrawScreen import DrawScreen
from pykilo.ui.KeyBinder import KeyBinder
from pykilo.ui.TerminalAppMode import TerminalAppMode
from pykilo.utils.logging_config import setup_logging
from pykilo.utils.utils import load_config


logger = logging.getLogger("pykilo")

# Text area, status bar and message bar need at least one row each.
MIN_ROWS = 3
MIN_COLUMNS = 1


def read_geometry(stdscr: "curses.window") -> tuple[int, int]:
    """Returns (rows, columns) of the window or raises `StartupError`."""
    try:
        rows, columns = stdscr.getmaxyx()
    except curses.error as e:
        raise StartupError(f"Window geometry unavailable: {e}") from e
    if rows < MIN_ROWS or columns < MIN_COLUMNS:
        raise StartupError(f"Window too small: {rows}x{columns}")
    return rows, columns


def main_app_runner(stdscr: "curses.window", config: dict[str, Any], file_to_open: Optional[str]) -> None:
    """Target for `curses.wrapper`."""
    rows, columns = read_geometry(stdscr)

    # Ignore terminal suspension (Ctrl+Z), typical for full-screen TUIs.
    if hasattr(signal, "SIGTSTP"):
        signal.signal(signal.SIGTSTP, signal.SIG_IGN)

    with TerminalAppMode(stdscr):
        keys = KeyBinder(stdscr)
        screen = DrawScreen(stdscr, config)
        session = EditorSession(
            rows,
            columns,
            key_source=keys.read_event,
            renderer=screen.draw,
            config=config,
            geometry=stdscr.getmaxyx,
        )
        if file_to_open:
            session.open(file_to_open)
        session.run()


def start(argv: Optional[list[str]] = None) -> None:
    """Console-script entry point: ``pykilo [FILE]``."""
    argv = sys.argv if argv is None else argv
    try:
        config = load_config()
        setup_logging(config)
    except Exception as e:
        # Logging is not ready; print to stderr and exit.
        print(f"FATAL: Could not initialize configuration or logging system: {e}", file=sys.stderr)
        sys.exit(1)

    logger.info("pykilo starting up...")
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("Could not set system locale. Character rendering may be affected.")

    file_to_open = argv[1] if len(argv) > 1 else None
    try:
        curses.wrapper(main_app_runner, config, file_to_open)
    except StartupError as e:
        logger.critical(f"Startup failed: {e}")
        print(f"pykilo: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception:
        logger.critical("Unhandled exception at the top level.", exc_info=True)
        sys.exit(1)
    logger.info("pykilo shut down gracefully.")


if __name__ == "__main__":
    start()
