"""Tests for discargs cfg (programmatic config editor)."""

from pathlib import Path
from typing import Any

import pytest
import tomlkit
from click.exceptions import Exit as ClickExit
from typer.testing import CliRunner

from discargs.cfg import _coerce, _load_toml, _save_toml, app
from discargs.config import CONFIG_NAME, load_config

runner = CliRunner()

SAMPLE_TOML = """\
# Dump station settings
[engine]
dialect = "creator"
speed = 8

# Tools live next to the dumps
[dialects.creator]
executable = "tools/DiscImageCreator.exe"
"""


def _make_project(tmp_path: Path, toml_content: str = SAMPLE_TOML) -> Path:
    (tmp_path / CONFIG_NAME).write_text(toml_content, encoding="utf-8")
    return tmp_path


# ---------------------------------------------------------------------------
# _load_toml / _save_toml
# ---------------------------------------------------------------------------


class TestLoadSave:
    def test_round_trip_preserves_comments(self, tmp_path: Path) -> None:
        root = _make_project(tmp_path)
        doc, path = _load_toml(root)
        _save_toml(doc, path)
        result = path.read_text(encoding="utf-8")
        assert "# Dump station settings" in result
        assert "# Tools live next to the dumps" in result

    def test_missing_file_exits(self, tmp_path: Path, monkeypatch: Any) -> None:
        monkeypatch.chdir(tmp_path)
        with pytest.raises(ClickExit):
            _load_toml()


class TestCoerce:
    def test_scalars(self) -> None:
        assert _coerce("true") is True
        assert _coerce("False") is False
        assert _coerce("20") == 20
        assert _coerce("0x10") == 16
        assert _coerce("1.5") == 1.5
        assert _coerce("redumper") == "redumper"


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


class TestInit:
    def test_creates_file(self, tmp_path: Path, monkeypatch: Any) -> None:
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 0
        assert (tmp_path / CONFIG_NAME).exists()
        assert load_config(tmp_path).dialect == "creator"

    def test_refuses_to_overwrite(self, tmp_path: Path, monkeypatch: Any) -> None:
        _make_project(tmp_path)
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 1
        assert "speed = 8" in (tmp_path / CONFIG_NAME).read_text(encoding="utf-8")

    def test_force(self, tmp_path: Path, monkeypatch: Any) -> None:
        _make_project(tmp_path)
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["init", "--force"])
        assert result.exit_code == 0
        assert "speed = 8" not in (tmp_path / CONFIG_NAME).read_text(encoding="utf-8")


class TestShowAndPath:
    def test_path(self, tmp_path: Path, monkeypatch: Any) -> None:
        _make_project(tmp_path)
        sub = tmp_path / "dumps"
        sub.mkdir()
        monkeypatch.chdir(sub)
        result = runner.invoke(app, ["path"])
        assert result.exit_code == 0
        assert result.stdout.strip() == str(tmp_path.resolve() / CONFIG_NAME)

    def test_show_key(self, tmp_path: Path, monkeypatch: Any) -> None:
        _make_project(tmp_path)
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["show", "engine.speed"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "8"

    def test_show_table(self, tmp_path: Path, monkeypatch: Any) -> None:
        _make_project(tmp_path)
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["show", "dialects.creator"])
        assert result.exit_code == 0
        assert "tools/DiscImageCreator.exe" in result.stdout

    def test_show_missing_key(self, tmp_path: Path, monkeypatch: Any) -> None:
        _make_project(tmp_path)
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["show", "engine.nope"])
        assert result.exit_code == 1


class TestSet:
    def test_set_scalar(self, tmp_path: Path, monkeypatch: Any) -> None:
        _make_project(tmp_path)
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["set", "engine.speed", "24"])
        assert result.exit_code == 0
        doc = tomlkit.parse((tmp_path / CONFIG_NAME).read_text(encoding="utf-8"))
        assert doc["engine"]["speed"] == 24
        assert "# Dump station settings" in tomlkit.dumps(doc)

    def test_creates_table(self, tmp_path: Path, monkeypatch: Any) -> None:
        _make_project(tmp_path)
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["set", "dialects.redumper.verbose", "false"])
        assert result.exit_code == 0
        assert load_config(tmp_path).options("redumper") == {"verbose": False}

    def test_unknown_dialect(self, tmp_path: Path, monkeypatch: Any) -> None:
        _make_project(tmp_path)
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["set", "dialects.mpf.executable", "x.exe"])
        assert result.exit_code == 1
        assert "mpf" not in (tmp_path / CONFIG_NAME).read_text(encoding="utf-8")
