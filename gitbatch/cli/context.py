from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from gitbatch.core.config import CONFIG_FILENAME, Config, load_config_or_default
from gitbatch.core.errors import ErrorCode
from gitbatch.core.result import Err
from gitbatch.git.locator import GitExecutable, find_git, open_repositories
from gitbatch.git.lookup import RepositoryLookup, WorkspaceFolders
from gitbatch.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Options given before the command name."""

    config_path: Path | None = None
    workspaces: tuple[str, ...] = ()
    verbose: bool = False


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    git: GitExecutable | None
    repos: RepositoryLookup | None
    workspaces: WorkspaceFolders
    console: ConsoleProtocol
    verbose: bool = False


_options = GlobalOptions()


def set_global_options(options: GlobalOptions) -> None:
    global _options
    _options = options


def get_global_options() -> GlobalOptions:
    return _options


def build_context() -> CLIContext:
    options = get_global_options()
    console = RichConsole()

    config_path = options.config_path or (Path.cwd() / CONFIG_FILENAME)
    config_result = load_config_or_default(config_path)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))
    config = config_result.value

    # --workspace beats config; with neither, the current directory is the workspace.
    folders = options.workspaces or config.workspace.folders or (str(Path.cwd()),)

    git = find_git(config)
    return CLIContext(
        config=config,
        git=git,
        repos=open_repositories(git),
        workspaces=WorkspaceFolders.from_strings(folders),
        console=console,
        verbose=options.verbose,
    )
