# pykilo/core/EditorSession.py
"""EditorSession.py
========================
Description:
-----------------------
The EditorSession class is the orchestrator of the pykilo editor. It receives
abstract `KeyEvent`s, mutates the `LineStore`, keeps the `Viewport` in step with
the cursor and hands a fully composed `Frame` to the renderer.

Key Features:
- Cursor movement with line wrap on Left/Right and clamping on Up/Down.
- Character, newline, backspace and delete editing.
- Save / save-as with a minibuffer prompt; I/O failures become status messages.
- Incremental forward and reverse search driven by `SearchEngine`.
- Guarded quit: a dirty buffer needs repeated quit requests.
- Status messages that expire after a configurable timeout.

Intended Usage:
---------------
The session never talks to the terminal. The caller injects a key source
(a zero-argument callable returning the next `KeyEvent`) and a renderer
(a callable accepting a `Frame`). `run()` loops until a quit is confirmed.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Optional

from pykilo import __version__
from pykilo.core.Errors import DocumentNotFoundError, DocumentReadError, DocumentWriteError
from pykilo.core.Highlighter import ColorClass, Highlighter
from pykilo.core.KeyEvent import KeyEvent, KeyKind
from pykilo.core.LineStore import TAB_STOP, LineStore
from pykilo.core.SearchEngine import Direction, SearchEngine, SearchSnapshot
from pykilo.core.SyntaxTable import SyntaxTable
from pykilo.core.Viewport import Viewport
from pykilo.utils.utils import read_document, write_document


HELP_MESSAGE = "HELP: Ctrl-X Ctrl-S = save | Ctrl-Q = quit | Ctrl-S = search"
NO_NAME = "[No Name]"
STATUS_BAR_ROWS = 2

Run = tuple[str, ColorClass]


@dataclass
class Frame:
    """Everything the renderer needs for one screen update."""

    rows: list[list[Run]]
    status_bar: str
    message: str
    cursor: tuple[int, int]


class PromptKind(Enum):
    SAVE_AS = auto()
    SEARCH = auto()


def _to_runs(text: str, colors: list[ColorClass]) -> list[Run]:
    """Groups consecutive characters of the same colour."""
    runs: list[Run] = []
    start = 0
    for i in range(1, len(text) + 1):
        if i == len(text) or colors[i] is not colors[start]:
            runs.append((text[start:i], colors[start]))
            start = i
    return runs


## ==================== EditorSession Class ====================
class EditorSession:
    """Class EditorSession
    ====================
    Owns the document, cursor, scroll state and status line of one editing session.

    Attributes:
        store (LineStore): The document.
        viewport (Viewport): Visible text area (window rows minus status and message bars).
        search (SearchEngine): Incremental search driver.
        syntax_table (SyntaxTable): Extension -> language profile registry.
        cx, cy (int): Cursor in content coordinates.
        filename (Optional[str]): None for an untitled buffer.
        encoding (str): Encoding used when the buffer is written back.
        status_message (str): Current message bar text.
        quit_times (int): Extra quit requests required while the buffer is dirty.

    Methods:
        handle(event): Apply one command; False means the session should end.
        run(): Render/read/handle loop.
        open(filename), save(), save_as(), find(direction): File and search commands.
        prompt(kind, template): Minibuffer input with per-keystroke dispatch.
        frame(): Compose the current screen.
    """

    def __init__(
        self,
        rows: int,
        columns: int,
        key_source: Callable[[], KeyEvent],
        renderer: Callable[[Frame], None],
        config: Optional[dict[str, Any]] = None,
        syntax_table: Optional[SyntaxTable] = None,
        geometry: Optional[Callable[[], tuple[int, int]]] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or {}
        editor_config = self.config.get("editor", {})
        self.message_timeout = float(editor_config.get("message_timeout", 5))
        self.quit_times = int(editor_config.get("quit_times", 1))
        self.encoding = editor_config.get("encoding", "utf-8")

        self.key_source = key_source
        self.renderer = renderer
        self.geometry = geometry
        self.clock = clock

        self.syntax_table = syntax_table or SyntaxTable.default()
        self.store = LineStore(tab_stop=int(editor_config.get("tab_stop", TAB_STOP)))
        self.viewport = Viewport(rows - STATUS_BAR_ROWS, columns)
        self.search = SearchEngine(self.store, self.viewport)

        self.cx = 0
        self.cy = 0
        self.filename: Optional[str] = None
        self.status_message = ""
        self.status_time = 0.0
        self._quit_left = self.quit_times
        self._set_status_message(HELP_MESSAGE)
        logging.info(f"EditorSession created for a {rows}x{columns} window.")

    # --- main loop ---
    def run(self) -> None:
        while True:
            self.refresh_screen()
            if not self.handle(self.key_source()):
                logging.info("EditorSession: quit confirmed.")
                return

    def refresh_screen(self) -> None:
        self.viewport.recompute(self.cx, self.cy, self.store)
        self.renderer(self.frame())

    def handle(self, event: KeyEvent) -> bool:
        """Applies one command. Returns False when the session should terminate."""
        kind = event.kind
        if kind is KeyKind.QUIT:
            if self.store.dirty and self._quit_left > 0:
                self._set_status_message(
                    "WARNING!!! File has unsaved changes. "
                    f"Press Ctrl-Q {self._quit_left} more times to quit."
                )
                self._quit_left -= 1
                logging.debug(f"Quit intercepted, {self._quit_left} confirmations left.")
                return True
            return False

        if kind is KeyKind.CHAR:
            self.insert_char(event.char)
        elif kind is KeyKind.ENTER:
            self.cy, self.cx = self.store.split_line(self.cy, self.cx)
        elif kind is KeyKind.BACKSPACE:
            self.cy, self.cx = self.store.delete_char(self.cy, self.cx)
        elif kind is KeyKind.DELETE:
            self.move_cursor(KeyKind.ARROW_RIGHT)
            self.cy, self.cx = self.store.delete_char(self.cy, self.cx)
        elif kind in (KeyKind.ARROW_LEFT, KeyKind.ARROW_RIGHT, KeyKind.ARROW_UP, KeyKind.ARROW_DOWN):
            self.move_cursor(kind)
        elif kind is KeyKind.HOME:
            self.cx = 0
        elif kind is KeyKind.END:
            if self.cy < self.store.line_count():
                self.cx = len(self.store.line(self.cy).content)
        elif kind is KeyKind.PAGE_UP:
            self.cy = self.viewport.page_up_target()
            for _ in range(self.viewport.rows):
                self.move_cursor(KeyKind.ARROW_UP)
        elif kind is KeyKind.PAGE_DOWN:
            self.cy = self.viewport.page_down_target(self.store.line_count())
            for _ in range(self.viewport.rows):
                self.move_cursor(KeyKind.ARROW_DOWN)
        elif kind is KeyKind.SAVE:
            self.save()
        elif kind is KeyKind.SAVE_AS:
            self.save_as()
        elif kind is KeyKind.SEARCH:
            self.find(Direction.FORWARD)
        elif kind is KeyKind.SEARCH_REVERSE:
            self.find(Direction.BACKWARD)
        elif kind is KeyKind.RESIZE:
            self.resize()

        self._quit_left = self.quit_times
        return True

    # --- editing ---
    def insert_char(self, ch: str) -> None:
        self.cx = self.store.insert_char(self.cy, self.cx, ch)

    def move_cursor(self, kind: KeyKind) -> None:
        line_count = self.store.line_count()
        row_length = len(self.store.line(self.cy).content) if self.cy < line_count else None

        if kind is KeyKind.ARROW_LEFT:
            if self.cx > 0:
                self.cx -= 1
            elif self.cy > 0:
                self.cy -= 1
                self.cx = len(self.store.line(self.cy).content)
        elif kind is KeyKind.ARROW_RIGHT:
            if row_length is not None:
                if self.cx < row_length:
                    self.cx += 1
                else:
                    self.cy += 1
                    self.cx = 0
        elif kind is KeyKind.ARROW_UP:
            if self.cy > 0:
                self.cy -= 1
        elif kind is KeyKind.ARROW_DOWN:
            if self.cy < line_count:
                self.cy += 1

        row_length = len(self.store.line(self.cy).content) if self.cy < line_count else 0
        self.cx = min(self.cx, row_length)

    def resize(self) -> None:
        if self.geometry is None:
            return
        rows, columns = self.geometry()
        self.viewport.resize(rows - STATUS_BAR_ROWS, columns)

    # --- files ---
    def open(self, filename: str) -> None:
        """Loads `filename`; on failure the session continues with an empty untitled buffer."""
        try:
            lines, encoding = read_document(filename, self.encoding)
        except (DocumentNotFoundError, DocumentReadError) as e:
            logging.warning(f"Open failed: {e}")
            self.filename = None
            self.store.open([], self._syntax_highlighter())
            self._set_status_message(str(e))
        else:
            self.filename = filename
            self.encoding = encoding
            self.store.open(lines, self._syntax_highlighter())
            logging.info(f"Opened '{filename}' ({len(lines)} lines, {encoding}).")
        self.cx = self.cy = 0
        self.viewport.row_offset = self.viewport.col_offset = 0

    def select_syntax(self) -> None:
        self.store.set_highlighter(self._syntax_highlighter())

    def _syntax_highlighter(self) -> Highlighter:
        profile = self.syntax_table.for_filename(self.filename)
        logging.debug(f"Syntax for '{self.filename}': {profile.name if profile else 'none'}.")
        return Highlighter(profile)

    def save(self) -> None:
        if self.filename is None:
            self.save_as()
            return
        self._write()

    def save_as(self) -> None:
        snapshot = SearchSnapshot.capture(self.store, self.viewport, self.cx, self.cy)
        filename = self.prompt(PromptKind.SAVE_AS, "Save as: {} (ESC to cancel)")
        if filename is None:
            self.cx, self.cy = snapshot.restore(self.store, self.viewport)
            self._set_status_message("Save aborted")
            return
        self.filename = filename
        self.select_syntax()
        self._write()

    def _write(self) -> None:
        assert self.filename is not None
        try:
            written = write_document(self.filename, self.store.contents(), self.encoding)
        except DocumentWriteError as e:
            logging.error(f"Save failed: {e}")
            self._set_status_message(f"Can't save! I/O error: {e.reason}")
            return
        self.store.mark_clean()
        self._set_status_message(f"{written} bytes written to disk")

    # --- search ---
    def find(self, direction: Direction = Direction.FORWARD) -> None:
        self.search.begin(self.cx, self.cy, direction)
        self.prompt(PromptKind.SEARCH, "Search: {} (Use ESC/Arrows/Enter)")

    def _on_search_key(self, query: str, event: KeyEvent) -> None:
        if event.kind is KeyKind.ENTER:
            self.search.confirm()
            return
        if event.kind is KeyKind.ESCAPE:
            self.cx, self.cy = self.search.cancel()
            return
        match = self.search.on_key(query, event)
        if match is not None:
            self.cx, self.cy = match

    # --- prompt ---
    def prompt(self, kind: PromptKind, template: str) -> Optional[str]:
        """Reads a line of input in the message bar.

        `template` must contain one ``{}`` placeholder for the typed text.
        Every keystroke that changes the buffer or navigates is forwarded to
        the handler for `kind`.

        Returns:
            Optional[str]: The entered text, or None if the prompt was cancelled.
        """
        buffer = ""
        while True:
            self._set_status_message(template.format(buffer))
            self.refresh_screen()
            event = self.key_source()

            if event.kind in (KeyKind.NONE, KeyKind.QUIT):
                continue
            if event.kind is KeyKind.RESIZE:
                self.resize()
                continue

            if event.kind in (KeyKind.BACKSPACE, KeyKind.DELETE):
                buffer = buffer[:-1]
            elif event.kind is KeyKind.ESCAPE:
                self._set_status_message("")
                self._dispatch_prompt_key(kind, buffer, event)
                return None
            elif event.kind is KeyKind.ENTER:
                if buffer:
                    self._set_status_message("")
                    self._dispatch_prompt_key(kind, buffer, event)
                    return buffer
                continue
            elif event.kind is KeyKind.CHAR:
                buffer += event.char
            self._dispatch_prompt_key(kind, buffer, event)

    def _dispatch_prompt_key(self, kind: PromptKind, buffer: str, event: KeyEvent) -> None:
        # SAVE_AS only needs the final buffer.
        if kind is PromptKind.SEARCH:
            self._on_search_key(buffer, event)

    # --- status ---
    def _set_status_message(self, message: str) -> None:
        self.status_message = message
        self.status_time = self.clock()

    def current_message(self) -> str:
        if self.status_message and self.clock() - self.status_time < self.message_timeout:
            return self.status_message
        return ""

    # --- rendering ---
    def frame(self) -> Frame:
        viewport = self.viewport
        line_count = self.store.line_count()
        visible = viewport.visible_line_range(line_count)
        rows: list[list[Run]] = []
        for y in range(viewport.rows):
            file_row = y + viewport.row_offset
            if file_row in visible:
                line = self.store.line(file_row)
                start = viewport.col_offset
                end = start + viewport.columns
                rows.append(_to_runs(line.rendered[start:end], line.highlight[start:end]))
            elif line_count == 0 and y == viewport.rows // 3:
                rows.append([(self._welcome_row(), ColorClass.NORMAL)])
            else:
                rows.append([("~", ColorClass.NORMAL)])

        return Frame(
            rows=rows,
            status_bar=self._status_bar(),
            message=self.current_message()[: viewport.columns],
            cursor=viewport.screen_cursor(self.cy),
        )

    def _welcome_row(self) -> str:
        columns = self.viewport.columns
        welcome = f"Pykilo editor -- version {__version__}"[:columns]
        padding = (columns - len(welcome)) // 2
        if padding == 0:
            return welcome
        return "~" + " " * (padding - 1) + welcome

    def _status_bar(self) -> str:
        columns = self.viewport.columns
        name = (self.filename or NO_NAME)[:20]
        modified = " (modified)" if self.store.dirty else ""
        left = f"{name} - {self.store.line_count()} lines{modified}"[:columns]
        filetype = self.syntax_table.display_name(self.filename)
        right = f"{filetype} | {self.cy + 1}/{self.store.line_count()}"
        if len(left) + len(right) <= columns:
            return left + " " * (columns - len(left) - len(right)) + right
        return left.ljust(columns)
