# tests/test_utils.py
"""Unit tests for configuration helpers in `pykilo.utils.utils`."""

from pathlib import Path

from pykilo.utils import utils


def test_deep_merge() -> None:
    """Verify that `deep_merge` correctly merges nested dictionaries.

    This test ensures:
    - Existing values are preserved if not overridden.
    - Nested dictionaries are merged recursively.
    - Conflicting keys are overridden by values from the second dictionary.
    """
    base = {"a": 1, "b": {"x": 10, "y": 20}}
    override = {"b": {"y": 99, "z": 100}, "c": 3}
    result = utils.deep_merge(base, override)
    expected = {"a": 1, "b": {"x": 10, "y": 99, "z": 100}, "c": 3}
    assert result == expected
    assert base == {"a": 1, "b": {"x": 10, "y": 20}}


def test_load_config_without_user_file(tmp_path: Path) -> None:
    config = utils.load_config(tmp_path / "absent.toml")
    assert config == utils.DEFAULT_CONFIG
    assert config is not utils.DEFAULT_CONFIG


def test_load_config_merges_user_file(tmp_path: Path) -> None:
    user_file = tmp_path / "config.toml"
    user_file.write_text('[editor]\nquit_times = 3\n\n[colors]\nkeyword = "white"\n', encoding="utf-8")
    config = utils.load_config(user_file)
    assert config["editor"]["quit_times"] == 3
    assert config["editor"]["tab_stop"] == 8
    assert config["colors"]["keyword"] == "white"
    assert config["colors"]["number"] == "red"


def test_load_config_ignores_corrupt_file(tmp_path: Path) -> None:
    user_file = tmp_path / "config.toml"
    user_file.write_text("[editor\nquit_times = ", encoding="utf-8")
    assert utils.load_config(user_file) == utils.DEFAULT_CONFIG
