# pykilo/core/SearchEngine.py
"""SearchEngine.py
========================
Incremental, cancelable text search over the rendered lines of a `LineStore`.

Lifecycle of one search session:

1. `begin()` captures a `SearchSnapshot` by value (cursor, scroll offsets and
   a copy of every line's highlight list) and creates a fresh `SearchState`.
2. Every keystroke of the prompt goes through `on_key()`. Arrow keys commit a
   direction and step to the next/previous match; editing the query restarts
   the scan from line 0. Each step is one match-and-jump (`find()`).
3. `confirm()` keeps the cursor where the last match put it; `cancel()` puts
   back everything captured in step 1. Both revert the transient
   SEARCH_MATCH overlay and end the session.

A single `find()` probes each line at most once, so wrap-around never loops.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pykilo.core.Highlighter import ColorClass
from pykilo.core.KeyEvent import KeyEvent, KeyKind
from pykilo.core.LineStore import LineStore, rendered_to_content
from pykilo.core.Viewport import Viewport


class Direction(Enum):
    FORWARD = 1
    BACKWARD = -1


@dataclass
class SearchState:
    direction: Direction = Direction.FORWARD
    last_match_line: Optional[int] = None


@dataclass(frozen=True)
class SearchSnapshot:
    """Pre-prompt editor state, copied by value."""

    cx: int
    cy: int
    row_offset: int
    col_offset: int
    highlights: tuple[tuple[ColorClass, ...], ...]

    @classmethod
    def capture(cls, store: LineStore, viewport: Viewport, cx: int, cy: int) -> "SearchSnapshot":
        return cls(
            cx=cx,
            cy=cy,
            row_offset=viewport.row_offset,
            col_offset=viewport.col_offset,
            highlights=tuple(tuple(colors) for colors in store.snapshot_highlights()),
        )

    def restore(self, store: LineStore, viewport: Viewport) -> tuple[int, int]:
        """Writes the captured offsets and highlights back; returns the captured (cx, cy)."""
        store.restore_highlights([list(colors) for colors in self.highlights])
        viewport.row_offset = self.row_offset
        viewport.col_offset = self.col_offset
        return self.cx, self.cy


FORWARD_KEYS = frozenset({KeyKind.ARROW_RIGHT, KeyKind.ARROW_DOWN})
BACKWARD_KEYS = frozenset({KeyKind.ARROW_LEFT, KeyKind.ARROW_UP})


## ==================== SearchEngine Class ====================
class SearchEngine:
    """Class SearchEngine
    ====================
    Drives match-and-jump for the search prompt.

    Attributes:
        store (LineStore): Document being searched.
        viewport (Viewport): Scroll state repositioned on a match.
        state (Optional[SearchState]): Present only while a search is active.

    Methods:
        begin(cx, cy, direction): Start a session and snapshot the editor state.
        on_key(query, event): React to one prompt keystroke.
        find(query): One match-and-jump step.
        confirm(): End the session, keeping the cursor.
        cancel(): End the session, restoring the snapshot.
    """

    def __init__(self, store: LineStore, viewport: Viewport) -> None:
        self.store = store
        self.viewport = viewport
        self.state: Optional[SearchState] = None
        self._snapshot: Optional[SearchSnapshot] = None
        self._overlay: Optional[tuple[int, list[ColorClass]]] = None

    @property
    def active(self) -> bool:
        return self.state is not None

    def begin(self, cx: int, cy: int, direction: Direction = Direction.FORWARD) -> None:
        self._snapshot = SearchSnapshot.capture(self.store, self.viewport, cx, cy)
        self.state = SearchState(direction=direction)
        self._overlay = None
        logging.debug(f"Search started at ({cy}, {cx}) going {direction.name.lower()}.")

    def on_key(self, query: str, event: KeyEvent) -> Optional[tuple[int, int]]:
        """Handles one keystroke of the prompt; returns the new (cx, cy) on a match."""
        state = self._require_state()
        if event.kind in FORWARD_KEYS:
            state.direction = Direction.FORWARD
        elif event.kind in BACKWARD_KEYS:
            state.direction = Direction.BACKWARD
        else:
            state.last_match_line = None
        return self.find(query)

    def find(self, query: str) -> Optional[tuple[int, int]]:
        """Finds the next line containing `query` in the committed direction.

        The first probe of a session (no previous match) checks line 0 without
        moving; later probes step once before checking. At most one probe per
        line is made, wrapping at either end of the document.

        Returns:
            Optional[tuple[int, int]]: `(cx, cy)` of the match, or None.
        """
        state = self._require_state()
        self._clear_overlay()
        line_count = self.store.line_count()
        if not query or line_count == 0:
            return None

        step = state.direction.value
        if state.last_match_line is None:
            current = 0
            move_first = False
        else:
            current = state.last_match_line % line_count
            move_first = True

        for _ in range(line_count):
            if move_first:
                current = (current + step) % line_count
            move_first = True
            line = self.store.line(current)
            rx = line.rendered.find(query)
            if rx == -1:
                continue
            state.last_match_line = current
            cx = rendered_to_content(line.content, rx, self.store.tab_stop)
            self.viewport.row_offset = current
            self._paint(current, rx, len(query))
            logging.debug(f"Search: '{query}' matched line {current} at rendered column {rx}.")
            return cx, current

        logging.debug(f"Search: '{query}' not found.")
        return None

    def confirm(self) -> None:
        self._clear_overlay()
        self._end()

    def cancel(self) -> tuple[int, int]:
        self._clear_overlay()
        snapshot = self._snapshot
        self._end()
        if snapshot is None:
            raise RuntimeError("cancel() called without an active search")
        return snapshot.restore(self.store, self.viewport)

    # --- internals ---
    def _require_state(self) -> SearchState:
        if self.state is None:
            raise RuntimeError("No active search; call begin() first")
        return self.state

    def _paint(self, line_index: int, start: int, length: int) -> None:
        line = self.store.line(line_index)
        self._overlay = (line_index, list(line.highlight))
        end = min(start + length, len(line.highlight))
        line.highlight[start:end] = [ColorClass.SEARCH_MATCH] * (end - start)

    def _clear_overlay(self) -> None:
        if self._overlay is None:
            return
        line_index, saved = self._overlay
        self._overlay = None
        if line_index < self.store.line_count():
            self.store.line(line_index).highlight = saved

    def _end(self) -> None:
        self.state = None
        self._snapshot = None
