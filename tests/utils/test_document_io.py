# tests/utils/test_document_io.py
"""Tests for line-oriented document reading and writing."""

from pathlib import Path

import pytest

from pykilo.core.Errors import DocumentNotFoundError, DocumentReadError, DocumentWriteError
from pykilo.utils.utils import read_document, write_document


def test_read_strips_line_terminators(tmp_path: Path) -> None:
    path = tmp_path / "a.txt"
    path.write_bytes(b"one\ntwo\n\nfour\n")
    lines, _ = read_document(str(path))
    assert lines == ["one", "two", "", "four"]


def test_read_without_trailing_newline(tmp_path: Path) -> None:
    path = tmp_path / "a.txt"
    path.write_bytes(b"one\ntwo")
    assert read_document(str(path))[0] == ["one", "two"]


def test_read_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")
    assert read_document(str(path)) == ([], "utf-8")


def test_read_utf8_text(tmp_path: Path) -> None:
    path = tmp_path / "u.txt"
    text = "naïve café, déjà vu, Straße, привет мир\n" * 20
    path.write_text(text, encoding="utf-8")
    lines, encoding = read_document(str(path))
    assert lines[0] == "naïve café, déjà vu, Straße, привет мир"
    assert encoding.lower().replace("_", "-") in {"utf-8", "utf8"}


def test_read_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DocumentNotFoundError) as excinfo:
        read_document(str(tmp_path / "nope.c"))
    assert "nope.c" in str(excinfo.value)


def test_read_directory_is_a_read_error(tmp_path: Path) -> None:
    with pytest.raises(DocumentReadError):
        read_document(str(tmp_path))


def test_write_returns_byte_count(tmp_path: Path) -> None:
    path = tmp_path / "out.txt"
    assert write_document(str(path), ["ab", "", "é"]) == len("ab\n\né\n".encode("utf-8"))
    assert path.read_bytes() == "ab\n\né\n".encode("utf-8")


def test_write_into_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(DocumentWriteError) as excinfo:
        write_document(str(tmp_path / "missing" / "out.txt"), ["x"])
    assert excinfo.value.reason


def test_ascii_file_reads_as_utf8(tmp_path: Path) -> None:
    path = tmp_path / "plain.txt"
    path.write_bytes(b"hello world\nplain ascii text here\n")
    assert read_document(str(path))[1] == "utf-8"


def test_unencodable_text_is_a_write_error(tmp_path: Path) -> None:
    path = tmp_path / "legacy.txt"
    path.write_bytes(b"caf\xe9\n")
    with pytest.raises(DocumentWriteError) as excinfo:
        write_document(str(path), ["price: €5"], "latin-1")
    assert "latin-1" in excinfo.value.reason
    assert path.read_bytes() == b"caf\xe9\n"
