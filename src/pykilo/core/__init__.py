# src/pykilo/core/__init__.py
"""Public facade for pykilo.core: re-export main classes from CamelCase modules."""

# Re-export classes/symbols from CamelCase modules
from .Errors import (  # noqa: F401
    DocumentNotFoundError,
    DocumentReadError,
    DocumentWriteError,
    EditorError,
    InvalidCursorError,
    StartupError,
)
from .SyntaxTable import LanguageProfile, SyntaxTable  # noqa: F401
from .Highlighter import ColorClass, Highlighter  # noqa: F401
from .LineStore import Line, LineStore  # noqa: F401
from .Viewport import Viewport  # noqa: F401
from .KeyEvent import KeyEvent, KeyKind  # noqa: F401
from .SearchEngine import Direction, SearchEngine  # noqa: F401
from .EditorSession import EditorSession, Frame, PromptKind  # noqa: F401


__all__ = [
    "EditorSession",
    "Frame",
    "PromptKind",
    "LineStore",
    "Line",
    "Highlighter",
    "ColorClass",
    "SyntaxTable",
    "LanguageProfile",
    "Viewport",
    "SearchEngine",
    "Direction",
    "KeyEvent",
    "KeyKind",
    "EditorError",
    "StartupError",
    "DocumentNotFoundError",
    "DocumentReadError",
    "DocumentWriteError",
    "InvalidCursorError",
]
