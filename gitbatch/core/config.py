"""Typed configuration loading and access.

This module provides dataclasses for the gitbatch.toml structure:

    [git]
    path = "/usr/bin/git"

    [workspace]
    folders = ["~/src/app", "sftp://build-host/home/me/app"]

    [commands]
    stage = ["add", "--"]
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_COMMANDS",
    "CommandsConfig",
    "Config",
    "ConfigError",
    "GitConfig",
    "WorkspaceConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "gitbatch.toml"

# Command templates (verb plus flags); paths are appended after them.
DEFAULT_COMMANDS: dict[str, tuple[str, ...]] = {
    "stage": ("add", "--"),
    "unstage": ("reset", "-q", "HEAD", "--"),
    "discard": ("checkout", "--"),
}


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class GitConfig:
    """Git executable configuration. None means: look it up on PATH."""

    path: str | None = None


@dataclass(frozen=True, slots=True)
class WorkspaceConfig:
    """Workspace folders (paths or URIs) used to scope batching."""

    folders: tuple[str, ...] = ()


def _default_commands() -> dict[str, tuple[str, ...]]:
    return dict(DEFAULT_COMMANDS)


@dataclass(frozen=True, slots=True)
class CommandsConfig:
    """Named command templates, overriding the built-in ones."""

    templates: dict[str, tuple[str, ...]] = field(default_factory=_default_commands)

    def template(self, name: str) -> tuple[str, ...]:
        return self.templates[name]


@dataclass(frozen=True, slots=True)
class Config:
    """Main configuration container."""

    git: GitConfig = field(default_factory=GitConfig)
    workspace: WorkspaceConfig = field(default_factory=WorkspaceConfig)
    commands: CommandsConfig = field(default_factory=CommandsConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML)."""
        git: StrDict = get_table(data, "git") or {}
        workspace: StrDict = get_table(data, "workspace") or {}
        commands: StrDict = get_table(data, "commands") or {}

        folders = get_str_list(workspace, "folders")
        if folders is None and "folders" in workspace:
            raise TypeError("workspace.folders must be a list of strings")

        templates = _default_commands()
        for name in commands:
            args = get_str_list(commands, name)
            if not args:
                raise TypeError(f"commands.{name} must be a non-empty list of strings")
            templates[name] = tuple(args)

        return cls(
            git=GitConfig(path=get_str(git, "path")),
            workspace=WorkspaceConfig(folders=tuple(folders or ())),
            commands=CommandsConfig(templates=templates),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to gitbatch.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[Config, ConfigError]:
    """Load config, falling back to defaults when the file does not exist.

    A file that exists but does not parse is still an error.
    """
    if not path.exists():
        return Ok(Config())
    return load_config(path)
