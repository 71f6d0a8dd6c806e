# tests/conftest.py
"""Pytest configuration with shared fixtures for the pykilo editor tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from pykilo.core.EditorSession import EditorSession
from pykilo.core.Highlighter import Highlighter
from pykilo.core.LineStore import LineStore
from pykilo.core.SyntaxTable import LanguageProfile, SyntaxTable
from tests.stubs import FakeClock, RecordingRenderer, ScriptedKeySource


# --- Syntax fixtures ---
@pytest.fixture
def syntax_table() -> SyntaxTable:
    """The built-in C / Rust / Ruby table."""
    return SyntaxTable.default()


@pytest.fixture
def c_profile(syntax_table: SyntaxTable) -> LanguageProfile:
    """The C language profile (``//`` and ``/* */`` comments)."""
    profile = syntax_table.lookup("c")
    assert profile is not None
    return profile


@pytest.fixture
def c_highlighter(c_profile: LanguageProfile) -> Highlighter:
    return Highlighter(c_profile)


@pytest.fixture
def store(c_highlighter: Highlighter) -> LineStore:
    """An empty document highlighted as C."""
    return LineStore(highlighter=c_highlighter)


# --- Session fixtures ---
@pytest.fixture
def config() -> dict[str, Any]:
    """Baseline configuration; mirrors the shipped defaults."""
    return {
        "editor": {"tab_stop": 8, "message_timeout": 5, "quit_times": 1, "encoding": "utf-8"},
    }


@pytest.fixture
def keys() -> ScriptedKeySource:
    return ScriptedKeySource()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session(
    keys: ScriptedKeySource,
    renderer: RecordingRenderer,
    clock: FakeClock,
    config: dict[str, Any],
) -> EditorSession:
    """A 12x40 session (10 text rows) driven by scripted keys.

    Returns:
        EditorSession: Session with an empty untitled buffer.
    """
    return EditorSession(
        rows=12,
        columns=40,
        key_source=keys,
        renderer=renderer,
        config=config,
        clock=clock,
    )


# --- Filesystem fixtures ---
@pytest.fixture
def c_file(tmp_path: Path) -> Path:
    """A small C source file on disk."""
    path = tmp_path / "hello.c"
    path.write_text('int main() {\n\treturn 0; /* done */\n}\n', encoding="utf-8")
    return path
