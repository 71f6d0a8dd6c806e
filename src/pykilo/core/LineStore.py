# pykilo/core/LineStore.py
"""LineStore.py
========================
Owns the document: the ordered list of logical lines and their rendered,
tab-expanded counterparts together with per-character highlight classes.

Every mutation keeps the three views of a line consistent
(`len(rendered) == len(highlight)`, `len(content) <= len(rendered)`) and asks
the attached `Highlighter` to rescan the affected lines, including the
block-comment continuation cascade.

The module also provides the tab-expansion helpers shared by the viewport and
search code:

- `expand_tabs(content)`: content -> rendered text.
- `content_to_rendered(content, cx)`: logical column -> rendered column.
- `rendered_to_content(content, rx)`: rendered column -> logical column, by
  replaying the expansion forward. Rendered positions inside a tab's padding
  resolve to the tab itself.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from pykilo.core.Errors import InvalidCursorError
from pykilo.core.Highlighter import ColorClass, Highlighter


TAB_STOP = 8


def expand_tabs(content: str, tab_stop: int = TAB_STOP) -> str:
    out: list[str] = []
    width = 0
    for ch in content:
        if ch == "\t":
            out.append(" ")
            width += 1
            while width % tab_stop != 0:
                out.append(" ")
                width += 1
        else:
            out.append(ch)
            width += 1
    return "".join(out)


def content_to_rendered(content: str, cx: int, tab_stop: int = TAB_STOP) -> int:
    rx = 0
    for ch in content[:cx]:
        if ch == "\t":
            rx += (tab_stop - 1) - (rx % tab_stop)
        rx += 1
    return rx


def rendered_to_content(content: str, rx: int, tab_stop: int = TAB_STOP) -> int:
    current_rx = 0
    for cx, ch in enumerate(content):
        if ch == "\t":
            current_rx += (tab_stop - 1) - (current_rx % tab_stop)
        current_rx += 1
        if current_rx > rx:
            return cx
    return len(content)


@dataclass
class Line:
    """One logical line and its derived views."""

    content: str = ""
    rendered: str = ""
    highlight: list[ColorClass] = field(default_factory=list)
    continuation: bool = False


## ==================== LineStore Class ====================
class LineStore:
    """Class LineStore
    ====================
    Ordered sequence of `Line` objects with edit operations.

    Positions are `(cy, cx)`: `cy` is the 0-based line index and `cx` the
    0-based index into that line's content. `cy == line_count()` denotes the
    virtual line past the end of the document.

    Attributes:
        lines (list[Line]): The document.
        highlighter (Highlighter): Classifier used after every mutation.
        tab_stop (int): Tab width used for rendering.
        dirty (bool): True once the document differs from what was loaded/saved.

    Methods:
        open(lines): Replace the document with the given strings.
        insert_char(cy, cx, ch): Insert one character.
        delete_char(cy, cx): Backspace semantics.
        split_line(cy, cx): Break a line in two (Enter).
        join_with_previous(cy): Append line `cy` to line `cy - 1`.
        line(i), line_count(): Accessors.
    """

    def __init__(self, highlighter: Optional[Highlighter] = None, tab_stop: int = TAB_STOP) -> None:
        self.lines: list[Line] = []
        self.highlighter = highlighter or Highlighter()
        self.tab_stop = tab_stop
        self.dirty = False

    # --- accessors ---
    def line_count(self) -> int:
        return len(self.lines)

    def line(self, index: int) -> Line:
        if not 0 <= index < len(self.lines):
            raise InvalidCursorError(index, len(self.lines))
        return self.lines[index]

    def contents(self) -> list[str]:
        return [line.content for line in self.lines]

    def mark_clean(self) -> None:
        self.dirty = False

    # --- whole-document operations ---
    def open(self, lines: Iterable[str], highlighter: Optional[Highlighter] = None) -> None:
        """Replaces the document; `highlighter`, if given, becomes the active one first."""
        if highlighter is not None:
            self.highlighter = highlighter
        self.lines = []
        for text in lines:
            line = Line(content=text)
            self._render(line)
            self.lines.append(line)
        self.highlighter.refresh_all(self.lines)
        self.dirty = False
        logging.debug(f"LineStore: opened document with {len(self.lines)} lines.")

    def set_highlighter(self, highlighter: Highlighter) -> None:
        self.highlighter = highlighter
        self.highlighter.refresh_all(self.lines)

    def snapshot_highlights(self) -> list[list[ColorClass]]:
        return [list(line.highlight) for line in self.lines]

    def restore_highlights(self, snapshot: list[list[ColorClass]]) -> None:
        if len(snapshot) != len(self.lines):
            raise InvalidCursorError(len(snapshot), len(self.lines))
        for line, colors in zip(self.lines, snapshot):
            line.highlight = list(colors)

    # --- line-level operations ---
    def insert_line(self, index: int, content: str = "") -> Line:
        """Inserts a new line before `index` (`index == line_count()` appends)."""
        if not 0 <= index <= len(self.lines):
            raise InvalidCursorError(index, len(self.lines))
        line = Line(content=content)
        self._render(line)
        # The line that used to follow `index - 1` was seeded with its continuation.
        line.continuation = self.lines[index - 1].continuation if index > 0 else False
        self.lines.insert(index, line)
        self.highlighter.refresh(self.lines, index)
        self.dirty = True
        return line

    def delete_line(self, index: int) -> Line:
        removed = self.line(index)
        del self.lines[index]
        if index < len(self.lines):
            self.highlighter.refresh(self.lines, index)
        self.dirty = True
        return removed

    # --- character-level operations ---
    def insert_char(self, cy: int, cx: int, ch: str) -> int:
        """Inserts `ch` at `(cy, cx)` and returns the new cursor column."""
        if len(ch) != 1 or ch in "\r\n":
            raise ValueError(f"insert_char expects a single non-newline character, got {ch!r}")
        if cy == len(self.lines):
            self.insert_line(cy, "")
        line = self.line(cy)
        cx = max(0, min(cx, len(line.content)))
        line.content = line.content[:cx] + ch + line.content[cx:]
        self._update(cy)
        return cx + 1

    def delete_char(self, cy: int, cx: int) -> tuple[int, int]:
        """Deletes the character before `(cy, cx)`; joins lines at column 0.

        Returns:
            tuple[int, int]: The new `(cy, cx)` cursor position.
        """
        if cy == len(self.lines):
            return cy, 0
        line = self.line(cy)
        if cx == 0 and cy == 0:
            return cy, cx
        cx = min(cx, len(line.content))
        if cx > 0:
            line.content = line.content[: cx - 1] + line.content[cx:]
            self._update(cy)
            return cy, cx - 1
        return self.join_with_previous(cy)

    def split_line(self, cy: int, cx: int) -> tuple[int, int]:
        """Breaks line `cy` at `cx`; the tail becomes a new line below it."""
        if cy == len(self.lines):
            self.insert_line(cy, "")
            return cy + 1, 0
        line = self.line(cy)
        cx = max(0, min(cx, len(line.content)))
        head, tail = line.content[:cx], line.content[cx:]
        # The following line was carried in from the unsplit line's continuation.
        new_line = Line(content=tail, continuation=line.continuation)
        self._render(new_line)
        self.lines.insert(cy + 1, new_line)

        line.content = head
        self._render(line)
        self.highlighter.refresh(self.lines, cy)
        self.highlighter.refresh(self.lines, cy + 1)
        self.dirty = True
        return cy + 1, 0

    def join_with_previous(self, cy: int) -> tuple[int, int]:
        """Appends line `cy` to line `cy - 1` and removes it."""
        if cy <= 0:
            self.line(cy)
            return cy, 0
        current = self.line(cy)
        previous = self.line(cy - 1)
        join_at = len(previous.content)
        previous.content += current.content
        del self.lines[cy]
        # Lines after the removed one were carried in from its continuation.
        previous.continuation = current.continuation
        self._render(previous)
        self.highlighter.refresh(self.lines, cy - 1)
        self.dirty = True
        return cy - 1, join_at

    # --- internals ---
    def _render(self, line: Line) -> None:
        line.rendered = expand_tabs(line.content, self.tab_stop)
        line.highlight = [ColorClass.NORMAL] * len(line.rendered)

    def _update(self, cy: int) -> None:
        self._render(self.lines[cy])
        self.highlighter.refresh(self.lines, cy)
        self.dirty = True
