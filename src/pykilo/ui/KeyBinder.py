# pykilo/ui/KeyBinder.py
"""KeyBinder.py
==================
Description:
-----------------------
Translates raw curses input into the abstract `KeyEvent`s consumed by
`EditorSession`. The binding table is fixed (emacs-flavoured, as in kilo):

- Ctrl-P / Ctrl-N / Ctrl-F / Ctrl-B: cursor up / down / right / left
- Ctrl-A / Ctrl-E: start / end of line
- Ctrl-H, Backspace: delete backwards
- Ctrl-S / Ctrl-R: incremental search forward / backward
- Ctrl-X Ctrl-S: save, Ctrl-X Ctrl-W: save as
- Ctrl-Q: quit

Arrow keys, Home/End, PageUp/PageDown and Delete arrive either as curses key
codes (keypad mode) or as raw escape sequences; both are decoded.
"""

import curses
import logging
import re
from typing import Optional, Union

from wcwidth import wcswidth

from pykilo.core.KeyEvent import NO_EVENT, KeyEvent, KeyKind


KEY_LOGGER = logging.getLogger("pykilo.keyevents")

RawKey = Union[int, str]


def ctrl(ch: str) -> int:
    return ord(ch) & 0x1F


ESC = 27
BACKSPACE = 127
CTRL_X = ctrl("x")


# ==================== KeyBinder Class ====================
class KeyBinder:
    """Class KeyBinder
    ====================
    Reads keys from a curses window and decodes them into `KeyEvent`s.

    Attributes:
        window (curses.window): Input source.
        pending_prefix (bool): True after Ctrl-X while waiting for the second key.

    Methods:
        read_event(): Block for the next key and return its `KeyEvent`.
        decode(key): Map a single raw key (curses code or character) to an event.
        get_key_input(): Read one key, resolving ESC sequences.
    """

    # Keys do NOT include the leading ESC; get_key_input() reads it first.
    ESCAPE_SEQUENCE_MAP: dict[str, KeyKind] = {
        # Arrows (CSI and SS3)
        "[A": KeyKind.ARROW_UP, "[B": KeyKind.ARROW_DOWN,
        "[C": KeyKind.ARROW_RIGHT, "[D": KeyKind.ARROW_LEFT,
        "OA": KeyKind.ARROW_UP, "OB": KeyKind.ARROW_DOWN,
        "OC": KeyKind.ARROW_RIGHT, "OD": KeyKind.ARROW_LEFT,

        # Home/End (CSI/SS3 and tilde variants)
        "[H": KeyKind.HOME, "[F": KeyKind.END, "OH": KeyKind.HOME, "OF": KeyKind.END,
        "[1~": KeyKind.HOME, "[7~": KeyKind.HOME, "[4~": KeyKind.END, "[8~": KeyKind.END,

        # Delete/PageUp/PageDown (~ style)
        "[3~": KeyKind.DELETE, "[5~": KeyKind.PAGE_UP, "[6~": KeyKind.PAGE_DOWN,
    }

    CONTROL_MAP: dict[int, KeyKind] = {
        ctrl("q"): KeyKind.QUIT,
        ctrl("s"): KeyKind.SEARCH,
        ctrl("r"): KeyKind.SEARCH_REVERSE,
        ctrl("p"): KeyKind.ARROW_UP,
        ctrl("n"): KeyKind.ARROW_DOWN,
        ctrl("f"): KeyKind.ARROW_RIGHT,
        ctrl("b"): KeyKind.ARROW_LEFT,
        ctrl("a"): KeyKind.HOME,
        ctrl("e"): KeyKind.END,
        ctrl("h"): KeyKind.BACKSPACE,
        BACKSPACE: KeyKind.BACKSPACE,
        ord("\r"): KeyKind.ENTER,
        ord("\n"): KeyKind.ENTER,
        ESC: KeyKind.ESCAPE,
    }

    PREFIX_MAP: dict[int, KeyKind] = {
        ctrl("s"): KeyKind.SAVE,
        ctrl("w"): KeyKind.SAVE_AS,
    }

    def __init__(self, window: "curses.window") -> None:
        self.window = window
        self.pending_prefix = False
        self.curses_key_map: dict[int, KeyKind] = {
            curses.KEY_UP: KeyKind.ARROW_UP,
            curses.KEY_DOWN: KeyKind.ARROW_DOWN,
            curses.KEY_LEFT: KeyKind.ARROW_LEFT,
            curses.KEY_RIGHT: KeyKind.ARROW_RIGHT,
            curses.KEY_HOME: KeyKind.HOME,
            curses.KEY_END: KeyKind.END,
            curses.KEY_PPAGE: KeyKind.PAGE_UP,
            curses.KEY_NPAGE: KeyKind.PAGE_DOWN,
            curses.KEY_DC: KeyKind.DELETE,
            curses.KEY_BACKSPACE: KeyKind.BACKSPACE,
            curses.KEY_ENTER: KeyKind.ENTER,
            curses.KEY_RESIZE: KeyKind.RESIZE,
        }
        logging.debug("KeyBinder initialized.")

    def read_event(self) -> KeyEvent:
        """Blocks until a complete key (or Ctrl-X chord) has been read."""
        while True:
            key = self.get_key_input()
            if key is None:
                continue
            event = self._resolve(key)
            KEY_LOGGER.debug(f"key {key!r} -> {event.kind.name} {event.char!r}")
            if event is not NO_EVENT or not self.pending_prefix:
                return event

    def _resolve(self, key: Union[RawKey, KeyEvent]) -> KeyEvent:
        if self.pending_prefix:
            self.pending_prefix = False
            code = self._code(key)
            kind = self.PREFIX_MAP.get(code) if code is not None else None
            if kind is None:
                logging.debug(f"KeyBinder: unbound chord Ctrl-X {key!r}")
                return NO_EVENT
            return KeyEvent.of(kind)
        if isinstance(key, KeyEvent):
            return key
        if self._code(key) == CTRL_X:
            self.pending_prefix = True
            return NO_EVENT
        return self.decode(key)

    @staticmethod
    def _code(key: Union[RawKey, KeyEvent]) -> Optional[int]:
        if isinstance(key, int):
            return key
        if isinstance(key, str) and len(key) == 1:
            return ord(key)
        return None

    def decode(self, key: RawKey) -> KeyEvent:
        """Maps one raw key to an event; unknown keys become `NO_EVENT`."""
        if isinstance(key, int) and key in self.curses_key_map:
            return KeyEvent.of(self.curses_key_map[key])

        code = self._code(key)
        if code is None:
            return NO_EVENT
        if code == ord("\t"):
            return KeyEvent.text("\t")
        if code in self.CONTROL_MAP:
            return KeyEvent.of(self.CONTROL_MAP[code])
        if code < 32 or code == BACKSPACE:
            return NO_EVENT

        try:
            char = chr(code)
        except (ValueError, OverflowError):
            logging.warning(f"Invalid ordinal for chr(): {code}. Ignoring key.")
            return NO_EVENT
        # wcswidth > 0 is a good indicator that this is a visible character.
        if wcswidth(char) > 0:
            return KeyEvent.text(char)
        return NO_EVENT

    def get_key_input(self) -> Optional[Union[RawKey, KeyEvent]]:
        """Reads one key. Returns a curses code, a character, a decoded
        `KeyEvent` for a recognised escape sequence, or None on a read error.
        """
        try:
            key = self.window.get_wch()
        except curses.error:
            return None

        if key not in ("\x1b", ESC):
            return key

        # ESC received: lone ESC or an escape sequence
        seq = ""
        self.window.nodelay(True)
        try:
            while True:
                try:
                    nxt = self.window.get_wch()
                except curses.error:
                    break
                seq += nxt if isinstance(nxt, str) else f"<{nxt}>"
        finally:
            self.window.nodelay(False)

        if not seq:
            return KeyEvent.of(KeyKind.ESCAPE)

        kind = self.ESCAPE_SEQUENCE_MAP.get(seq)
        if kind is None:
            # Tolerant cleanup: keep only tokens relevant to term sequences.
            cleaned = "".join(re.findall(r"[\[O0-9;~A-Za-z]", seq))
            kind = self.ESCAPE_SEQUENCE_MAP.get(cleaned)
        if kind is not None:
            return KeyEvent.of(kind)

        logging.debug("get_key_input: unknown escape sequence: ESC + %r", seq)
        return KeyEvent.of(KeyKind.ESCAPE)
