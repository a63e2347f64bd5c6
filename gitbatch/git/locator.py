"""Locate the git executable.

The configured `git.path` wins; otherwise git is looked up on PATH.
A missing git means no repository lookup can be offered at all.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from gitbatch.core.config import Config
from gitbatch.core.result import Err, Ok, Result
from gitbatch.git.lookup import GitRepositoryLookup
from gitbatch.platform.process import ProcessError
from gitbatch.platform.process import run as run_process

_VERSION_TIMEOUT_SECONDS = 10.0

__all__ = ["GitExecutable", "find_git", "open_repositories"]


@dataclass(frozen=True, slots=True)
class GitExecutable:
    """Absolute path to a git binary."""

    path: Path

    def command(self, *args: str) -> list[str]:
        """Command template: the executable followed by args."""
        return [str(self.path), *args]

    def version(self) -> Result[str, ProcessError]:
        """Run `git --version` and return its output, stripped."""
        result = run_process(
            self.command("--version"),
            cwd=Path.cwd(),
            timeout=_VERSION_TIMEOUT_SECONDS,
        )
        if isinstance(result, Err):
            return result
        return Ok(result.value.strip())


def find_git(config: Config | None = None) -> GitExecutable | None:
    """Return the git executable to use, or None if there is none."""
    configured = config.git.path if config is not None else None
    if configured:
        path = Path(configured).expanduser()
        if path.is_file():
            return GitExecutable(path=path.resolve())
        found = shutil.which(configured)
        return GitExecutable(path=Path(found)) if found else None

    found = shutil.which("git")
    return GitExecutable(path=Path(found)) if found else None


def open_repositories(git: GitExecutable | None) -> GitRepositoryLookup | None:
    """Repository lookup backed by git, None when git is unavailable."""
    if git is None:
        return None
    return GitRepositoryLookup()
