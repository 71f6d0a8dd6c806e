# pykilo/core/Highlighter.py
"""Highlighter.py
========================
Per-line syntax classification for the pykilo editor.

The scanner walks one rendered line left to right and assigns a `ColorClass`
to every character. The only state that crosses a line boundary is whether the
line ends inside an unterminated block comment (its *continuation*). Scanning
is modelled as a fold over the document: each call takes the previous line's
continuation and returns the line's colours plus its own continuation.
`Highlighter.refresh` drives the fold and keeps going to the next line for as
long as a line's continuation differs from the value stored before the scan.

Precedence per character (first match wins):

1. line comment marker (outside strings and block comments) -> rest of line
2. block comment close marker while inside a block comment
3. any other character inside a block comment
4. block comment open marker (outside strings)
5. string literals, with backslash escapes
6. numbers (digits at a separator boundary, or continuing a number)
7. keywords (at a separator boundary, followed by a separator)
8. normal text
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Sequence

from pykilo.core.SyntaxTable import LanguageProfile


if TYPE_CHECKING:
    from pykilo.core.LineStore import Line


SEPARATORS = frozenset(",.()+-/*=~%<>[];")


class ColorClass(Enum):
    NORMAL = "normal"
    NUMBER = "number"
    STRING = "string"
    COMMENT = "comment"
    BLOCK_COMMENT = "block_comment"
    KEYWORD = "keyword"
    KEYWORD_ALT = "keyword_alt"
    SEARCH_MATCH = "search_match"


@dataclass(frozen=True)
class ScanResult:
    colors: list[ColorClass]
    continuation: bool


def is_separator(ch: str) -> bool:
    return ch.isspace() or ch == "\0" or ch in SEPARATORS


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


## ==================== Highlighter Class ====================
class Highlighter:
    """Class Highlighter
    ====================
    Classifies rendered lines according to a `LanguageProfile`.

    A highlighter without a profile classifies everything as NORMAL and never
    carries state between lines.

    Attributes:
        profile (Optional[LanguageProfile]): Active language rules.

    Methods:
        scan(text, carried_in): Pure single-line scan.
        refresh(lines, start): Rescan `start` and cascade while continuation changes.
        refresh_all(lines): Rescan the whole document in order.
    """

    def __init__(self, profile: Optional[LanguageProfile] = None) -> None:
        self.profile = profile
        self._keywords: tuple[tuple[str, ColorClass], ...] = ()
        if profile is not None:
            self._keywords = tuple(
                [(kw, ColorClass.KEYWORD) for kw in profile.keywords]
                + [(kw, ColorClass.KEYWORD_ALT) for kw in profile.alt_keywords]
            )

    @property
    def language_name(self) -> Optional[str]:
        return self.profile.name if self.profile else None

    def scan(self, text: str, carried_in: bool = False) -> ScanResult:
        """Classifies one rendered line.

        Args:
            text: The rendered (tab-expanded) line.
            carried_in: Continuation of the previous line.

        Returns:
            ScanResult: One colour per character of `text` and whether the
            line ends inside a block comment.
        """
        length = len(text)
        colors = [ColorClass.NORMAL] * length
        profile = self.profile
        if profile is None:
            return ScanResult(colors, False)

        line_comment = profile.line_comment
        block_start = profile.block_comment_start
        block_end = profile.block_comment_end
        block_enabled = profile.has_block_comments

        previous_was_separator = True
        open_quote: Optional[str] = None
        in_block_comment = carried_in and block_enabled

        i = 0
        while i < length:
            ch = text[i]
            prev_color = colors[i - 1] if i > 0 else ColorClass.NORMAL

            # 1. line comment
            if (
                line_comment
                and open_quote is None
                and not in_block_comment
                and text.startswith(line_comment, i)
            ):
                colors[i:] = [ColorClass.COMMENT] * (length - i)
                break

            if block_enabled and open_quote is None:
                if in_block_comment:
                    # 2. block comment close
                    if text.startswith(block_end, i):
                        span = len(block_end)
                        colors[i:i + span] = [ColorClass.BLOCK_COMMENT] * span
                        i += span
                        in_block_comment = False
                        previous_was_separator = True
                        continue
                    # 3. block comment body
                    colors[i] = ColorClass.BLOCK_COMMENT
                    i += 1
                    continue
                # 4. block comment open
                if text.startswith(block_start, i):
                    span = len(block_start)
                    colors[i:i + span] = [ColorClass.BLOCK_COMMENT] * span
                    i += span
                    in_block_comment = True
                    continue

            # 5. strings
            if profile.highlight_strings:
                if open_quote is not None:
                    colors[i] = ColorClass.STRING
                    if ch == "\\" and i + 1 < length:
                        colors[i + 1] = ColorClass.STRING
                        i += 2
                        continue
                    if ch == open_quote:
                        open_quote = None
                    i += 1
                    previous_was_separator = True
                    continue
                if ch in ('"', "'"):
                    open_quote = ch
                    colors[i] = ColorClass.STRING
                    i += 1
                    continue

            # 6. numbers
            if profile.highlight_numbers:
                if (_is_digit(ch) and (previous_was_separator or prev_color is ColorClass.NUMBER)) or (
                    ch == "." and prev_color is ColorClass.NUMBER
                ):
                    colors[i] = ColorClass.NUMBER
                    i += 1
                    previous_was_separator = False
                    continue

            # 7. keywords
            if previous_was_separator:
                matched = self._match_keyword(text, i)
                if matched is not None:
                    span, color = matched
                    colors[i:i + span] = [color] * span
                    i += span
                    previous_was_separator = False
                    continue

            # 8. default
            previous_was_separator = is_separator(ch)
            i += 1

        return ScanResult(colors, in_block_comment)

    def _match_keyword(self, text: str, start: int) -> Optional[tuple[int, ColorClass]]:
        for keyword, color in self._keywords:
            if not text.startswith(keyword, start):
                continue
            end = start + len(keyword)
            following = text[end] if end < len(text) else "\0"
            if is_separator(following):
                return len(keyword), color
        return None

    def refresh(self, lines: Sequence["Line"], start: int) -> int:
        """Rescans `lines[start]` and every following line whose carried-in state changed.

        The line at `start` is always rescanned. The cascade moves on to the
        next line only while the freshly computed continuation differs from the
        value the line held before the scan, and stops at the end of the
        document.

        Returns:
            int: Number of lines rescanned.
        """
        index = start
        rescanned = 0
        while 0 <= index < len(lines):
            line = lines[index]
            carried_in = lines[index - 1].continuation if index > 0 else False
            result = self.scan(line.rendered, carried_in)
            changed = result.continuation != line.continuation
            line.highlight = result.colors
            line.continuation = result.continuation
            rescanned += 1
            if not changed:
                break
            index += 1
        if rescanned > 1:
            logging.debug(
                "Highlighter: continuation cascade from line %d covered %d lines.", start, rescanned
            )
        return rescanned

    def refresh_all(self, lines: Sequence["Line"]) -> None:
        carried_in = False
        for line in lines:
            result = self.scan(line.rendered, carried_in)
            line.highlight = result.colors
            line.continuation = result.continuation
            carried_in = result.continuation
