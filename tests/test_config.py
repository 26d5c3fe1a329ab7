import logging

import pytest

from gpro.config import ENV_VAR, Config, Theme
from gpro.exceptions import ConfigError
from gpro.models import Style


def _write(tmp_path, text: str):
    path = tmp_path / "conf.yml"
    path.write_text(text, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


def test_defaults():
    config = Config()
    assert config.column_width is None
    assert config.extra_column_size == 0
    assert config.theme == Theme()


def test_theme_style_for_every_style():
    theme = Theme(chord="red", comment="dim", title="bold", plain="")
    assert [theme.style_for(style) for style in Style] == ["", "red", "dim", "bold"]


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def test_load_overrides(tmp_path):
    path = _write(tmp_path, "theme:\n  chord: bold red\ncolumn_width: 40\n")
    config = Config.load(path)
    assert config.theme.chord == "bold red"
    assert config.theme.comment == Theme().comment
    assert config.column_width == 40


def test_load_empty_file_gives_defaults(tmp_path):
    assert Config.load(_write(tmp_path, "")) == Config()


def test_unknown_keys_are_warned_about(tmp_path, caplog):
    path = _write(tmp_path, "keybinds:\n  quit: q\ntheme:\n  border: blue\n")
    with caplog.at_level(logging.WARNING, logger="gpro.config"):
        config = Config.load(path)
    assert config == Config()
    assert "keybinds" in caplog.text
    assert "border" in caplog.text


@pytest.mark.parametrize(
    "text, reason",
    [
        ("column_width: wide\n", "column_width"),
        ("column_width: 0\n", "positive"),
        ("extra_column_size: lots\n", "extra_column_size"),
        ("extra_column_size: -1\n", "negative"),
        ("theme: red\n", "mapping"),
        ("theme:\n  chord: 3\n", "theme.chord"),
        ("theme:\n  chord: not_a_colour_at_all\n", "theme.chord"),
        ("- just\n- a list\n", "top level"),
        ("theme: [unclosed\n", "invalid YAML"),
    ],
)
def test_bad_config(tmp_path, text, reason):
    with pytest.raises(ConfigError, match=reason):
        Config.load(_write(tmp_path, text))


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError) as excinfo:
        Config.load(tmp_path / "nope.yml")
    assert excinfo.value.path == tmp_path / "nope.yml"


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def test_discover_uses_environment(tmp_path, monkeypatch):
    path = _write(tmp_path, "column_width: 30\n")
    monkeypatch.setenv(ENV_VAR, str(path))
    assert Config.discover().column_width == 30


def test_discover_explicit_path_wins(tmp_path, monkeypatch):
    monkeypatch.setenv(ENV_VAR, str(_write(tmp_path, "column_width: 30\n")))
    other = tmp_path / "other.yml"
    other.write_text("column_width: 50\n", encoding="utf-8")
    assert Config.discover(other).column_width == 50


def test_discover_missing_environment_file_falls_back(tmp_path, monkeypatch):
    monkeypatch.setenv(ENV_VAR, str(tmp_path / "gone.yml"))
    assert Config.discover() == Config()


def test_discover_without_anything(monkeypatch):
    monkeypatch.delenv(ENV_VAR, raising=False)
    assert Config.discover() == Config()


def test_default_config_round_trips(tmp_path):
    path = tmp_path / "default.yml"
    Config.write_default(path)
    assert "chord: bold cyan" in path.read_text(encoding="utf-8")
    assert Config.load(path) == Config()


# ---------------------------------------------------------------------------
# Column size
# ---------------------------------------------------------------------------


def test_load_extra_column_size(tmp_path):
    config = Config.load(_write(tmp_path, "column_width: 30\nextra_column_size: 4\n"))
    assert config.extra_column_size == 4
    assert config.effective_column_width() == 34


def test_extra_column_size_widens_command_line_width():
    assert Config(column_width=30, extra_column_size=2).effective_column_width(10) == 12


def test_extra_column_size_without_column_width_is_full_width():
    assert Config(extra_column_size=5).effective_column_width() is None
