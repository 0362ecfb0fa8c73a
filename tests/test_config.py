"""Task file location tests."""

import json
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from mumbot.cli import app
from mumbot.config import (
    config_file_path,
    read_config,
    resolve_data_file,
    save_data_file,
)

runner = CliRunner()


@pytest.fixture
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated config directory, no MUMBOT_FILE, cwd in tmp_path."""
    home = tmp_path / "config"
    env_name = "APPDATA" if sys.platform == "win32" else "XDG_CONFIG_HOME"
    monkeypatch.setenv(env_name, str(home))
    monkeypatch.delenv("MUMBOT_FILE", raising=False)
    monkeypatch.chdir(tmp_path)
    return home


class TestResolveDataFile:
    """Tests for task file precedence."""

    def test_cli_beats_env(
        self, config_home: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("MUMBOT_FILE", str(tmp_path / "env.jsonl"))

        location = resolve_data_file(str(tmp_path / "cli.jsonl"))

        assert location.source == "cli"
        assert location.path == (tmp_path / "cli.jsonl").resolve()

    def test_env_beats_config(
        self, config_home: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        save_data_file(tmp_path / "saved.jsonl")
        monkeypatch.setenv("MUMBOT_FILE", str(tmp_path / "env.jsonl"))

        location = resolve_data_file()

        assert location.source == "env"
        assert location.path.name == "env.jsonl"

    def test_config_beats_default(self, config_home: Path, tmp_path: Path) -> None:
        (tmp_path / "tasks.jsonl").write_text("", encoding="utf-8")
        save_data_file(tmp_path / "saved.jsonl")

        location = resolve_data_file()

        assert location.source == "config"
        assert location.path == (tmp_path / "saved.jsonl").resolve()

    def test_default_prefers_local_file(
        self, config_home: Path, tmp_path: Path
    ) -> None:
        (tmp_path / "tasks.jsonl").write_text("", encoding="utf-8")

        location = resolve_data_file()

        assert location.source == "default"
        assert location.path == (tmp_path / "tasks.jsonl").resolve()

    def test_default_falls_back_to_home(self, config_home: Path) -> None:
        location = resolve_data_file()

        assert location.source == "default"
        assert location.path == Path.home() / ".mumbot" / "tasks.jsonl"

    def test_malformed_config_ignored(self, config_home: Path) -> None:
        config_file_path().parent.mkdir(parents=True)
        config_file_path().write_text("data_file = [oops\n", encoding="utf-8")

        assert read_config() == {}
        assert resolve_data_file().source == "default"

    def test_describe_names_origin(self, config_home: Path) -> None:
        assert "--file" in resolve_data_file("x.jsonl").describe()
        assert resolve_data_file().describe() == "Default"


class TestSaveDataFile:
    """Tests for writing config.toml."""

    def test_writes_under_config_home(self, config_home: Path, tmp_path: Path) -> None:
        written = save_data_file(tmp_path / "mine.jsonl")

        assert written == config_home / "mumbot" / "config.toml"
        assert read_config() == {"data_file": str(tmp_path / "mine.jsonl")}

    def test_backslashes_survive(self, config_home: Path) -> None:
        save_data_file(Path("C:\\tasks\\mine.jsonl"))

        assert read_config()["data_file"] == "C:\\tasks\\mine.jsonl"


class TestConfigCommands:
    """Tests for mumbot config path / set-path."""

    def test_path_shows_cli_source(self, config_home: Path, tmp_path: Path) -> None:
        data_file = tmp_path / "cli.jsonl"

        result = runner.invoke(app, ["--file", str(data_file), "config", "path"])

        assert result.exit_code == 0
        assert str(data_file.resolve()) in result.stdout
        assert "CLI option" in result.stdout
        assert "Exists: No" in result.stdout

    def test_path_json(self, config_home: Path, tmp_path: Path) -> None:
        data_file = tmp_path / "cli.jsonl"
        data_file.write_text("", encoding="utf-8")

        result = runner.invoke(
            app, ["--file", str(data_file), "--json", "config", "path"]
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout) == {
            "path": str(data_file.resolve()),
            "source": "cli",
            "exists": True,
        }

    def test_set_path_then_path(self, config_home: Path, tmp_path: Path) -> None:
        data_file = tmp_path / "saved.jsonl"

        saved = runner.invoke(app, ["config", "set-path", str(data_file)])
        shown = runner.invoke(app, ["config", "path"])

        assert saved.exit_code == 0
        assert "Configuration saved" in saved.stdout
        assert str(data_file.resolve()) in shown.stdout
        assert "Config file" in shown.stdout
