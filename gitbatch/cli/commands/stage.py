"""Stage, unstage and discard changes, batched per repository."""

from __future__ import annotations

import typer

from gitbatch.cli.commands._helpers import run_git
from gitbatch.cli.context import build_context

_PATHS = typer.Argument(..., help="Files or folders (paths or URIs).")


def stage(paths: list[str] = _PATHS) -> None:
    """Stage files (git add)."""
    ctx = build_context()
    run_git(ctx, ctx.config.commands.template("stage"), paths)


def unstage(paths: list[str] = _PATHS) -> None:
    """Unstage files (git reset HEAD)."""
    ctx = build_context()
    run_git(ctx, ctx.config.commands.template("unstage"), paths)


def discard(paths: list[str] = _PATHS) -> None:
    """Discard unstaged changes (git checkout)."""
    ctx = build_context()
    run_git(ctx, ctx.config.commands.template("discard"), paths)
