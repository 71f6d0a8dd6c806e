# pykilo/core/Viewport.py
"""Viewport.py
========================
Scroll state of the text area.

`recompute` is called before every frame; it derives the cursor's rendered
column and moves the offsets just enough to keep that cell inside
`[offset, offset + extent)` on both axes. Offsets never go below zero.
"""

import logging

from pykilo.core.LineStore import LineStore, content_to_rendered


class Viewport:
    """Visible window over the document, measured in lines and rendered columns."""

    def __init__(self, rows: int, columns: int) -> None:
        self.rows = max(1, rows)
        self.columns = max(1, columns)
        self.row_offset = 0
        self.col_offset = 0
        self.rx = 0

    def resize(self, rows: int, columns: int) -> None:
        self.rows = max(1, rows)
        self.columns = max(1, columns)
        logging.debug(f"Viewport resized to {self.rows}x{self.columns}.")

    def recompute(self, cx: int, cy: int, store: LineStore) -> None:
        """Adjusts `row_offset` / `col_offset` so the cursor cell is visible."""
        self.rx = 0
        if cy < store.line_count():
            self.rx = content_to_rendered(store.line(cy).content, cx, store.tab_stop)

        if cy < self.row_offset:
            self.row_offset = cy
        if cy >= self.row_offset + self.rows:
            self.row_offset = cy - self.rows + 1
        if self.rx < self.col_offset:
            self.col_offset = self.rx
        if self.rx >= self.col_offset + self.columns:
            self.col_offset = self.rx - self.columns + 1

        self.row_offset = max(0, self.row_offset)
        self.col_offset = max(0, self.col_offset)

    def visible_line_range(self, line_count: int) -> range:
        return range(self.row_offset, min(line_count, self.row_offset + self.rows))

    def screen_cursor(self, cy: int) -> tuple[int, int]:
        """(row, column) of the cursor relative to the top-left of the text area."""
        return cy - self.row_offset, self.rx - self.col_offset

    def page_up_target(self) -> int:
        """Line the cursor jumps to before moving one screen up."""
        return self.row_offset

    def page_down_target(self, line_count: int) -> int:
        """Line the cursor jumps to before moving one screen down."""
        return min(self.row_offset + self.rows - 1, line_count)
