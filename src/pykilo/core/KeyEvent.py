# pykilo/core/KeyEvent.py
"""Abstract input events delivered to the editor session.

Decoding raw terminal bytes into these events is the job of
`pykilo.ui.KeyBinder`; the core never sees key codes.
"""

from dataclasses import dataclass
from enum import Enum, auto


class KeyKind(Enum):
    CHAR = auto()
    ENTER = auto()
    BACKSPACE = auto()
    DELETE = auto()
    ESCAPE = auto()
    ARROW_LEFT = auto()
    ARROW_RIGHT = auto()
    ARROW_UP = auto()
    ARROW_DOWN = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    SAVE = auto()
    SAVE_AS = auto()
    SEARCH = auto()
    SEARCH_REVERSE = auto()
    QUIT = auto()
    RESIZE = auto()
    NONE = auto()


@dataclass(frozen=True)
class KeyEvent:
    kind: KeyKind
    char: str = ""

    @classmethod
    def of(cls, kind: KeyKind) -> "KeyEvent":
        return cls(kind)

    @classmethod
    def text(cls, ch: str) -> "KeyEvent":
        return cls(KeyKind.CHAR, ch)


NO_EVENT = KeyEvent(KeyKind.NONE)
