# pykilo/core/Errors.py
"""Exception taxonomy for the pykilo editor.

Startup failures are fatal and abort before the input loop. Document read and
write failures are surfaced once as a status message and never retried.
`InvalidCursorError` marks an internal-consistency failure and is allowed to
propagate.
"""


class EditorError(Exception):
    """Base class for all pykilo errors."""


class StartupError(EditorError):
    """The terminal could not be prepared (e.g. window geometry unavailable)."""


class DocumentNotFoundError(EditorError):
    """The requested file does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File not found: {path}")
        self.path = path


class DocumentReadError(EditorError):
    """The file exists but could not be read or decoded."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class DocumentWriteError(EditorError):
    """Writing the buffer back to disk failed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot write {path}: {reason}")
        self.path = path
        self.reason = reason


class InvalidCursorError(EditorError):
    """A line index or column fell outside the document during an internal operation."""

    def __init__(self, cy: int, line_count: int) -> None:
        super().__init__(f"Line index {cy} out of range for document of {line_count} lines")
        self.cy = cy
        self.line_count = line_count
