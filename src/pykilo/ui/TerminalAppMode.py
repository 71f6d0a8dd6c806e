# src/pykilo/ui/TerminalAppMode.py
from __future__ import annotations

import curses
import logging
from types import TracebackType
from typing import Optional


class TerminalAppMode:
    """
    Put the terminal into the raw editing state for the lifetime of a session:

    - raw + noecho, so control keys (Ctrl-Q, Ctrl-S, Ctrl-X ...) reach the editor.
    - keypad(True), so curses decodes arrows and function keys.
    - Application cursor keys (smkx/rmkx) where terminfo provides them.
    - Short ESC delay, so a lone ESC cancels prompts promptly.

    Use as a context manager; the previous modes are restored on every exit
    path, including exceptions raised by the session.
    """

    ESC_DELAY_MS = 25

    def __init__(self, stdscr: "curses.window") -> None:
        self._stdscr = stdscr
        self._entered: bool = False

    def __enter__(self) -> "TerminalAppMode":
        self.enter()
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.exit()

    def enter(self) -> None:
        curses.raw()
        curses.noecho()
        self._stdscr.keypad(True)
        try:
            curses.set_escdelay(self.ESC_DELAY_MS)
        except curses.error as e:
            logging.debug("set_escdelay() unavailable: %r", e)
        self._tputs("smkx")

        self._stdscr.scrollok(False)
        self._stdscr.erase()
        self._stdscr.refresh()

        self._entered = True
        logging.debug("TerminalAppMode: entered raw mode.")

    def exit(self) -> None:
        if not self._entered:
            return
        self._entered = False

        self._tputs("rmkx")
        try:
            self._stdscr.keypad(False)
            curses.noraw()
            curses.echo()
        except curses.error as e:
            logging.warning("TerminalAppMode: restoring terminal modes failed: %r", e)
        logging.debug("TerminalAppMode: exited (restored terminal modes).")

    # ── helpers ───────────────────────────────────────────────────────────────

    def _tputs(self, capname: str) -> None:
        try:
            s = curses.tigetstr(capname)
            if s:
                curses.putp(s)
        except curses.error as e:
            # Non-fatal where the capability is missing.
            logging.debug("tputs(%s) skipped: %r", capname, e)
