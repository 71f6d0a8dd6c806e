# tests/ui/test_draw_screen.py
"""Unit tests for the `DrawScreen` renderer.
===========================================

`curses` is patched inside `pykilo.ui.DrawScreen` so the tests run without a
terminal. `color_pair()` returns a distinct value per pair index so the
attribute chosen for each colour class can be asserted.
"""

from typing import Generator
from unittest.mock import MagicMock, call, patch

import pytest

from pykilo.core.EditorSession import Frame
from pykilo.core.Highlighter import ColorClass
from pykilo.ui.DrawScreen import DrawScreen


@pytest.fixture
def curses_mock() -> Generator[MagicMock, None, None]:
    """Mock of `curses` as imported by `pykilo.ui.DrawScreen`."""
    mock = MagicMock()

    class CursesError(Exception):
        """Minimal replacement for `curses.error` used in tests."""

    mock.error = CursesError
    mock.A_NORMAL = 0
    mock.A_REVERSE = 1
    mock.color_pair.side_effect = lambda n: n * 256
    for index, name in enumerate(["BLACK", "RED", "GREEN", "YELLOW", "BLUE", "MAGENTA", "CYAN", "WHITE"]):
        setattr(mock, f"COLOR_{name}", index)
    with patch("pykilo.ui.DrawScreen.curses", mock):
        yield mock


@pytest.fixture
def stdscr() -> MagicMock:
    window = MagicMock()
    window.getmaxyx.return_value = (4, 20)
    return window


def test_palette_maps_colour_classes(curses_mock: MagicMock, stdscr: MagicMock) -> None:
    screen = DrawScreen(stdscr, {})
    assert screen.colors[ColorClass.NORMAL] == 1 * 256
    curses_mock.init_pair.assert_any_call(1, -1, -1)
    curses_mock.init_pair.assert_any_call(2, curses_mock.COLOR_RED, -1)
    curses_mock.init_pair.assert_any_call(8, curses_mock.COLOR_BLUE, -1)
    assert len(screen.colors) == len(ColorClass)


def test_palette_honours_config(curses_mock: MagicMock, stdscr: MagicMock) -> None:
    DrawScreen(stdscr, {"colors": {"number": "green"}})
    curses_mock.init_pair.assert_any_call(2, curses_mock.COLOR_GREEN, -1)


def test_no_colour_support_falls_back_to_plain(curses_mock: MagicMock, stdscr: MagicMock) -> None:
    curses_mock.start_color.side_effect = curses_mock.error("no colours")
    screen = DrawScreen(stdscr)
    assert set(screen.colors.values()) == {0}


def test_draw_paints_rows_bars_and_cursor(curses_mock: MagicMock, stdscr: MagicMock) -> None:
    screen = DrawScreen(stdscr)
    frame = Frame(
        rows=[[("int", ColorClass.KEYWORD_ALT), (" x", ColorClass.NORMAL)], [("~", ColorClass.NORMAL)]],
        status_bar="status",
        message="msg",
        cursor=(0, 3),
    )
    screen.draw(frame)

    assert stdscr.addstr.call_args_list == [
        call(0, 0, "int", screen.colors[ColorClass.KEYWORD_ALT]),
        call(0, 3, " x", screen.colors[ColorClass.NORMAL]),
        call(1, 0, "~", screen.colors[ColorClass.NORMAL]),
        call(2, 0, "status", curses_mock.A_REVERSE),
        call(3, 0, "msg", curses_mock.A_NORMAL),
    ]
    stdscr.move.assert_called_once_with(0, 3)
    stdscr.refresh.assert_called_once()


def test_draw_clips_to_window_width(curses_mock: MagicMock, stdscr: MagicMock) -> None:
    stdscr.getmaxyx.return_value = (3, 5)
    screen = DrawScreen(stdscr)
    frame = Frame(rows=[[("abcdefgh", ColorClass.NORMAL)]], status_bar="x" * 10, message="", cursor=(0, 0))
    screen.draw(frame)
    assert stdscr.addstr.call_args_list[0] == call(0, 0, "abcde", screen.colors[ColorClass.NORMAL])
    assert stdscr.addstr.call_args_list[1] == call(1, 0, "xxxxx", curses_mock.A_REVERSE)


def test_edge_write_error_is_not_fatal(curses_mock: MagicMock, stdscr: MagicMock) -> None:
    stdscr.addstr.side_effect = curses_mock.error("bottom-right")
    screen = DrawScreen(stdscr)
    screen.draw(Frame(rows=[[("~", ColorClass.NORMAL)]], status_bar="s", message="m", cursor=(0, 0)))
    stdscr.refresh.assert_called_once()
