# pykilo/ui/DrawScreen.py
"""DrawScreen.py
========================
DrawScreen: paints a `Frame` produced by `EditorSession` onto a curses window.

It is responsible for:
- mapping each `ColorClass` to a curses colour pair (palette from the `[colors]` config section),
- drawing the text rows run by run,
- the reverse-video status bar and the message bar below it,
- placing the hardware cursor.

All layout decisions (scrolling, clipping, tildes, the welcome banner) are
already made by the session; this class only emits.
"""

import curses
import logging
from typing import TYPE_CHECKING, Any, Optional

from pykilo.core.Highlighter import ColorClass
from pykilo.utils.utils import DEFAULT_CONFIG


if TYPE_CHECKING:
    from pykilo.core.EditorSession import Frame


DEFAULT_PALETTE: dict[str, str] = DEFAULT_CONFIG["colors"]


## ================= class DrawScreen ==============================
class DrawScreen:
    """DrawScreen Class
    =========================
    Renders frames with curses.

    Attributes:
        stdscr (curses.window): Target window.
        colors (dict[ColorClass, int]): Curses attribute per colour class.

    Methods:
        draw(frame): Paint one frame and refresh the terminal.
    """

    def __init__(self, stdscr: "curses.window", config: Optional[dict[str, Any]] = None) -> None:
        self.stdscr = stdscr
        self.colors: dict[ColorClass, int] = {}
        palette = dict(DEFAULT_PALETTE)
        palette.update((config or {}).get("colors", {}))
        self._init_colors(palette)

    def _init_colors(self, palette: dict[str, str]) -> None:
        """Creates one colour pair per `ColorClass`; falls back to plain text without colour support."""
        try:
            curses.start_color()
            curses.use_default_colors()  # allow -1 as the "default background"
        except curses.error as exc:
            logging.warning("Colour initialisation failed (%s); drawing without colours", exc)
            self.colors = {color: curses.A_NORMAL for color in ColorClass}
            return

        for pair_index, color in enumerate(ColorClass, start=1):
            name = str(palette.get(color.value, "default")).lower()
            foreground = getattr(curses, f"COLOR_{name.upper()}", -1) if name != "default" else -1
            try:
                curses.init_pair(pair_index, foreground, -1)
                self.colors[color] = curses.color_pair(pair_index)
            except curses.error as exc:
                logging.warning("init_pair(%d) for %s failed: %s", pair_index, color.value, exc)
                self.colors[color] = curses.A_NORMAL

    def draw(self, frame: "Frame") -> None:
        """The main screen drawing method."""
        try:
            height, width = self.stdscr.getmaxyx()
            self.stdscr.erase()

            for y, runs in enumerate(frame.rows):
                if y >= height:
                    break
                x = 0
                for text, color in runs:
                    if x >= width:
                        break
                    self._put(y, x, text[: width - x], self.colors.get(color, curses.A_NORMAL))
                    x += len(text)

            status_y = len(frame.rows)
            if status_y < height:
                self._put(status_y, 0, frame.status_bar[:width], curses.A_REVERSE)
            if status_y + 1 < height:
                self._put(status_y + 1, 0, frame.message[:width], curses.A_NORMAL)

            cursor_y, cursor_x = frame.cursor
            self.stdscr.move(min(cursor_y, height - 1), min(cursor_x, width - 1))
            self.stdscr.refresh()
        except curses.error as e:
            logging.error(f"Curses error in DrawScreen.draw(): {e}", exc_info=True)

    def _put(self, y: int, x: int, text: str, attr: int) -> None:
        if not text:
            return
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            # Writing the bottom-right cell moves the cursor off-screen.
            logging.debug("addstr(%d, %d) clipped at window edge", y, x)
