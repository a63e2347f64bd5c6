"""Tests for gitbatch.core.config module."""

from __future__ import annotations

from pathlib import Path

from gitbatch.core.config import (
    DEFAULT_COMMANDS,
    CommandsConfig,
    Config,
    load_config,
    load_config_or_default,
)
from gitbatch.core.result import Err, Ok


class TestDefaults:
    def test_default_config(self) -> None:
        config = Config()
        assert config.git.path is None
        assert config.workspace.folders == ()
        assert config.commands.template("stage") == ("add", "--")

    def test_default_commands_not_shared(self) -> None:
        a = CommandsConfig()
        a.templates["stage"] = ("add", "-p")
        assert CommandsConfig().templates["stage"] == DEFAULT_COMMANDS["stage"]


class TestFromDict:
    def test_full(self) -> None:
        config = Config.from_dict(
            {
                "git": {"path": " /opt/git/bin/git "},
                "workspace": {"folders": ["~/src/a", "sftp://host/b"]},
                "commands": {"stage": ["add", "-f", "--"], "rm": ["rm", "--cached", "--"]},
            }
        )
        assert config.git.path == "/opt/git/bin/git"
        assert config.workspace.folders == ("~/src/a", "sftp://host/b")
        assert config.commands.template("stage") == ("add", "-f", "--")
        assert config.commands.template("rm") == ("rm", "--cached", "--")
        # Built-ins not overridden are kept.
        assert config.commands.template("unstage") == DEFAULT_COMMANDS["unstage"]

    def test_empty(self) -> None:
        assert Config.from_dict({}) == Config()


class TestLoadConfig:
    def test_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "gitbatch.toml"
        path.write_text('[git]\npath = "/usr/bin/git"\n', encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Ok)
        assert result.value.git.path == "/usr/bin/git"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_config(tmp_path / "missing.toml")
        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "gitbatch.toml"
        path.write_text("[git\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message
        assert result.error.path == path

    def test_folders_must_be_strings(self, tmp_path: Path) -> None:
        path = tmp_path / "gitbatch.toml"
        path.write_text("[workspace]\nfolders = [1, 2]\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "workspace.folders" in result.error.message

    def test_empty_command_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "gitbatch.toml"
        path.write_text("[commands]\nstage = []\n", encoding="utf-8")

        result = load_config(path)

        assert isinstance(result, Err)
        assert "commands.stage" in result.error.message


class TestLoadConfigOrDefault:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_config_or_default(tmp_path / "gitbatch.toml") == Ok(Config())

    def test_broken_file_is_still_an_error(self, tmp_path: Path) -> None:
        path = tmp_path / "gitbatch.toml"
        path.write_text("not = [valid", encoding="utf-8")
        assert isinstance(load_config_or_default(path), Err)
