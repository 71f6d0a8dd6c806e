# tests/test_main.py
"""Tests for the start-up path in `pykilo.main`."""

import curses
from unittest.mock import MagicMock, patch

import pytest

from pykilo import main
from pykilo.core.Errors import StartupError


def test_read_geometry_accepts_usable_window() -> None:
    stdscr = MagicMock()
    stdscr.getmaxyx.return_value = (24, 80)
    assert main.read_geometry(stdscr) == (24, 80)


@pytest.mark.parametrize("size", [(2, 80), (24, 0)])
def test_read_geometry_rejects_tiny_window(size) -> None:
    stdscr = MagicMock()
    stdscr.getmaxyx.return_value = size
    with pytest.raises(StartupError):
        main.read_geometry(stdscr)


def test_read_geometry_wraps_curses_error() -> None:
    stdscr = MagicMock()
    stdscr.getmaxyx.side_effect = curses.error("no tty")
    with pytest.raises(StartupError, match="geometry unavailable"):
        main.read_geometry(stdscr)


@patch("pykilo.main.setup_logging")
@patch("pykilo.main.load_config", return_value={})
def test_start_exits_on_startup_error(mock_load, mock_setup, capsys) -> None:
    with patch("pykilo.main.curses.wrapper", side_effect=StartupError("Window too small: 2x80")):
        with pytest.raises(SystemExit) as excinfo:
            main.start(["pykilo", "file.c"])
    assert excinfo.value.code == 1
    assert "Window too small" in capsys.readouterr().err


@patch("pykilo.main.setup_logging")
@patch("pykilo.main.load_config", return_value={})
def test_start_passes_file_argument(mock_load, mock_setup) -> None:
    with patch("pykilo.main.curses.wrapper") as wrapper:
        main.start(["pykilo", "file.c"])
    wrapper.assert_called_once_with(main.main_app_runner, {}, "file.c")


@patch("pykilo.main.load_config", side_effect=RuntimeError("boom"))
def test_start_exits_when_config_fails(mock_load) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main.start(["pykilo"])
    assert excinfo.value.code == 1
