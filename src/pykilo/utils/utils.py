# pykilo/utils/utils.py
"""
pykilo.utils.utils
==================

Core utility functions for the pykilo editor.

Key functionalities include:
- Configuration Loading: an embedded default configuration, recursively merged
  with user settings from `~/.config/pykilo/config.toml` (parsed with `toml`).
  A missing or corrupt user file never prevents start-up.
- Document I/O: line-oriented reading with encoding detection (`chardet`) and
  line-oriented writing, translating OS errors into the editor's own
  `DocumentNotFoundError` / `DocumentReadError` / `DocumentWriteError`.
- Helper Utilities: deep-merging dictionaries.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import chardet
import toml

from pykilo.core.Errors import DocumentNotFoundError, DocumentReadError, DocumentWriteError

logger = logging.getLogger("pykilo")

CONFIG_DIR = Path.home() / ".config" / "pykilo"
CHARDET_SAMPLE_SIZE = 1024 * 20
CHARDET_MIN_CONFIDENCE = 0.75

# Direct representation of the default config.toml; the ultimate fallback.
DEFAULT_CONFIG: Dict[str, Any] = {
    "editor": {
        "tab_stop": 8,
        "message_timeout": 5,
        "quit_times": 1,
        "encoding": "utf-8",
    },
    "logging": {
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": False,
        "separate_error_log": False,
        "log_file": "pykilo.log",
    },
    "colors": {
        "normal": "default",
        "number": "red",
        "string": "magenta",
        "comment": "cyan",
        "block_comment": "cyan",
        "keyword": "yellow",
        "keyword_alt": "green",
        "search_match": "blue",
    },
}


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Loads the embedded defaults and merges the user's config.toml over them.
    """
    final_config = deep_merge({}, DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    user_config_path = config_path or CONFIG_DIR / "config.toml"
    if user_config_path.is_file():
        try:
            user_config = toml.load(user_config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Successfully loaded and merged user config from {user_config_path}")
        except (toml.TomlDecodeError, OSError) as e:
            logger.error(f"Could not parse user config '{user_config_path}': {e}. Using defaults.")

    return final_config


def _detect_encoding(raw: bytes, default: str) -> list[tuple[str, str]]:
    """Ordered (encoding, errors) pairs to try when decoding `raw`."""
    candidates: list[tuple[str, str]] = []
    guess = chardet.detect(raw)
    encoding_guess = guess.get("encoding")
    confidence = guess.get("confidence") or 0.0
    logger.debug(f"Chardet detected encoding '{encoding_guess}' with confidence {confidence:.2f}.")
    if encoding_guess and confidence >= CHARDET_MIN_CONFIDENCE:
        # ASCII is a subset of UTF-8; keep the buffer able to hold anything typed later.
        if encoding_guess.lower() == "ascii":
            encoding_guess = "utf-8"
        candidates.append((encoding_guess, "strict"))
    for fallback in ((default, "strict"), ("utf-8", "strict"), ("latin-1", "strict")):
        if fallback not in candidates:
            candidates.append(fallback)
    return candidates


def read_document(path: str, default_encoding: str = "utf-8") -> tuple[list[str], str]:
    """Reads `path` into a list of lines with the trailing newline stripped.

    Returns:
        tuple[list[str], str]: The lines and the encoding used to decode them.

    Raises:
        DocumentNotFoundError: `path` does not exist.
        DocumentReadError: permission problems, directories, undecodable data.
    """
    try:
        with open(path, "rb") as f_binary:
            raw = f_binary.read()
    except FileNotFoundError:
        raise DocumentNotFoundError(path) from None
    except IsADirectoryError:
        raise DocumentReadError(path, "is a directory") from None
    except PermissionError:
        raise DocumentReadError(path, "permission denied") from None
    except OSError as e:
        raise DocumentReadError(path, e.strerror or str(e)) from e

    if not raw:
        return [], default_encoding

    sample = raw[:CHARDET_SAMPLE_SIZE]
    for encoding, errors in _detect_encoding(sample, default_encoding):
        try:
            text = raw.decode(encoding, errors=errors)
        except (UnicodeDecodeError, LookupError) as e:
            logger.warning(f"Failed to decode '{path}' as {encoding}: {e}")
            continue
        logger.info(f"Read '{path}' using encoding '{encoding}'.")
        return text.split("\n")[:-1] if text.endswith("\n") else text.split("\n"), encoding

    raise DocumentReadError(path, "could not decode file contents")


def write_document(path: str, lines: list[str], encoding: str = "utf-8") -> int:
    """Writes one newline-terminated record per line.

    Returns:
        int: Number of bytes written.

    Raises:
        DocumentWriteError: the text cannot be represented in `encoding`, or
            the file could not be opened or written. An existing file is left
            untouched when encoding fails.
    """
    try:
        payload = "".join(f"{line}\n" for line in lines).encode(encoding)
    except UnicodeEncodeError as e:
        raise DocumentWriteError(path, f"cannot encode {e.object[e.start:e.end]!r} as {encoding}") from e
    except LookupError as e:
        raise DocumentWriteError(path, f"unknown encoding {encoding}") from e
    try:
        with open(path, "wb") as f_binary:
            f_binary.write(payload)
    except PermissionError:
        raise DocumentWriteError(path, "permission denied") from None
    except OSError as e:
        raise DocumentWriteError(path, e.strerror or str(e)) from e
    logger.debug(f"Wrote {len(payload)} bytes to '{os.path.abspath(path)}'.")
    return len(payload)
