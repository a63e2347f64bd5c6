from __future__ import annotations

import typer

from gitbatch.cli.commands._helpers import run_git
from gitbatch.cli.context import build_context
from gitbatch.core.errors import ErrorCode


def commit(
    paths: list[str] = typer.Argument(..., help="Files to commit (paths or URIs)."),
    message: str = typer.Option(..., "--message", "-m", help="Commit message."),
    amend: bool = typer.Option(False, "--amend", help="Amend the previous commit."),
    no_verify: bool = typer.Option(False, "--no-verify", help="Skip commit hooks."),
) -> None:
    """Commit the given files, one commit per repository."""
    ctx = build_context()
    if not message.strip() and not amend:
        ctx.console.error("empty commit message")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    args = ["commit", "-m", message]
    if amend:
        args.append("--amend")
    if no_verify:
        args.append("--no-verify")
    args.append("--")
    run_git(ctx, args, paths)
