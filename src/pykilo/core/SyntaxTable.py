# pykilo/core/SyntaxTable.py
"""SyntaxTable.py
========================
Static registry of language profiles used by the highlighter.

A `LanguageProfile` describes everything the line scanner needs to know about a
language: comment delimiters, the two keyword classes and which literal kinds
are coloured. Profiles are immutable and keyed by file extension. The table is
built once at startup (`SyntaxTable.default()`) and handed to the editor
session explicitly; nothing here is global mutable state.

Keyword lists may use the compact notation ``"int|"``: a trailing ``|`` puts
the keyword in the alternate class (types, constants, literals).
"""

import logging
import os
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound


ALT_KEYWORD_MARKER = "|"


@dataclass(frozen=True)
class LanguageProfile:
    """Immutable description of one language's highlighting rules."""

    name: str
    extensions: tuple[str, ...]
    line_comment: str = ""
    block_comment_start: str = ""
    block_comment_end: str = ""
    keywords: tuple[str, ...] = ()
    alt_keywords: tuple[str, ...] = ()
    highlight_numbers: bool = True
    highlight_strings: bool = True

    @property
    def has_block_comments(self) -> bool:
        return bool(self.block_comment_start and self.block_comment_end)


def split_keywords(words: Iterable[str]) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """Splits a ``"word|"``-annotated list into (primary, alternate) tuples."""
    primary: list[str] = []
    alternate: list[str] = []
    for word in words:
        word = word.strip()
        if not word:
            continue
        if word.endswith(ALT_KEYWORD_MARKER):
            alternate.append(word[: -len(ALT_KEYWORD_MARKER)])
        else:
            primary.append(word)
    return tuple(primary), tuple(alternate)


def make_profile(
    name: str,
    extensions: Iterable[str],
    keywords: Iterable[str],
    line_comment: str = "",
    block_comment: tuple[str, str] = ("", ""),
    highlight_numbers: bool = True,
    highlight_strings: bool = True,
) -> LanguageProfile:
    primary, alternate = split_keywords(keywords)
    return LanguageProfile(
        name=name,
        extensions=tuple(ext.lower().lstrip(".") for ext in extensions),
        line_comment=line_comment,
        block_comment_start=block_comment[0],
        block_comment_end=block_comment[1],
        keywords=primary,
        alt_keywords=alternate,
        highlight_numbers=highlight_numbers,
        highlight_strings=highlight_strings,
    )


C_KEYWORDS = (
    "switch", "if", "while", "for", "break", "continue", "return", "else",
    "struct", "union", "typedef", "static", "enum", "class", "case",
    "int|", "long|", "double|", "float|", "char|", "unsigned|", "signed|", "void|",
)

RUST_KEYWORDS = (
    "as", "break", "const", "continue", "crate", "else", "enum", "extern", "false|", "fn",
    "for", "if", "impl", "in", "let", "loop", "match", "mod", "move", "mut", "pub", "ref|",
    "return", "self|", "Self|", "static", "struct", "super", "trait", "true|", "type",
    "unsafe", "use", "where", "while", "async", "await",
)

RUBY_KEYWORDS = (
    "__ENCODING__|", "__LINE__|", "__FILE__|", "BEGIN|", "END|", "alias", "and", "begin",
    "break", "case", "class", "def", "defined?", "do", "else", "elsif", "end", "ensure",
    "false|", "for", "if", "in", "module", "next", "nil|", "not", "or", "redo", "rescue",
    "retry", "return", "self|", "super", "then", "true|", "undef", "unless", "until",
    "when", "while", "yield",
)

BUILTIN_PROFILES: tuple[LanguageProfile, ...] = (
    make_profile("C", ("c", "cpp", "h"), C_KEYWORDS, "//", ("/*", "*/")),
    make_profile("Rust", ("rs",), RUST_KEYWORDS, "//", ("/*", "*/")),
    make_profile("Ruby", ("rb",), RUBY_KEYWORDS, "#", ("=begin", "=end")),
)


## ==================== SyntaxTable Class ====================
class SyntaxTable:
    """Class SyntaxTable
    ====================
    Read-only mapping from file extension to `LanguageProfile`.

    Attributes:
        _by_extension (Mapping[str, LanguageProfile]): Frozen extension index.
        _profiles (tuple[LanguageProfile, ...]): Profiles in registration order.

    Methods:
        default(): Table holding the built-in C, Rust and Ruby profiles.
        lookup(extension): Profile for a bare extension ("c", ".rs"), or None.
        for_filename(filename): Profile for a path, or None.
        display_name(filename): Filetype label for the status bar.
    """

    UNKNOWN_FILETYPE = "--"

    def __init__(self, profiles: Iterable[LanguageProfile]) -> None:
        self._profiles = tuple(profiles)
        index: dict[str, LanguageProfile] = {}
        for profile in self._profiles:
            for ext in profile.extensions:
                if ext in index:
                    logging.warning(
                        "SyntaxTable: extension '%s' claimed by both %s and %s; keeping %s",
                        ext, index[ext].name, profile.name, index[ext].name,
                    )
                    continue
                index[ext] = profile
        self._by_extension: Mapping[str, LanguageProfile] = MappingProxyType(index)
        logging.debug(
            "SyntaxTable: %d profiles, %d extensions registered.",
            len(self._profiles), len(self._by_extension),
        )

    @classmethod
    def default(cls) -> "SyntaxTable":
        return cls(BUILTIN_PROFILES)

    def lookup(self, extension: str) -> Optional[LanguageProfile]:
        return self._by_extension.get(extension.lower().lstrip("."))

    def for_filename(self, filename: Optional[str]) -> Optional[LanguageProfile]:
        if not filename:
            return None
        _, ext = os.path.splitext(os.path.basename(filename))
        if not ext:
            return None
        return self.lookup(ext)

    def display_name(self, filename: Optional[str]) -> str:
        """Returns the filetype label shown in the status bar.

        A registered profile wins. Otherwise the Pygments lexer name for the
        filename is shown (no highlighting is applied for it), and finally
        `UNKNOWN_FILETYPE`.
        """
        profile = self.for_filename(filename)
        if profile is not None:
            return profile.name
        if not filename:
            return self.UNKNOWN_FILETYPE
        try:
            return get_lexer_for_filename(filename).name
        except ClassNotFound:
            logging.debug("SyntaxTable: no Pygments lexer for '%s'.", filename)
            return self.UNKNOWN_FILETYPE
