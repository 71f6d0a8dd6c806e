# tests/stubs.py
"""Test stubs for pykilo editor tests.

Stand-ins for the terminal collaborators of `EditorSession`: a key source that
replays a fixed script, a renderer that records frames, and a manual clock.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable, Union

from pykilo.core.EditorSession import Frame
from pykilo.core.KeyEvent import KeyEvent, KeyKind


Key = Union[KeyEvent, KeyKind, str]


class ScriptedKeySource:
    """Replays queued events; running out of events is a test bug."""

    def __init__(self) -> None:
        self.pending: deque[KeyEvent] = deque()

    def push(self, *keys: Key) -> None:
        """Queue events. A `KeyKind` becomes a bare event; a string is typed character by character."""
        for key in keys:
            if isinstance(key, KeyEvent):
                self.pending.append(key)
            elif isinstance(key, KeyKind):
                self.pending.append(KeyEvent.of(key))
            else:
                self.pending.extend(KeyEvent.text(ch) for ch in key)

    def extend(self, keys: Iterable[Key]) -> None:
        self.push(*keys)

    def __call__(self) -> KeyEvent:
        if not self.pending:
            raise AssertionError("ScriptedKeySource ran out of events")
        return self.pending.popleft()


class RecordingRenderer:
    """Keeps every frame handed to it."""

    def __init__(self) -> None:
        self.frames: list[Frame] = []

    def __call__(self, frame: Frame) -> None:
        self.frames.append(frame)

    @property
    def last(self) -> Frame:
        return self.frames[-1]


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now
