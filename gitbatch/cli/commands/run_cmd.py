from __future__ import annotations

import typer

from gitbatch.cli.commands._helpers import run_git
from gitbatch.cli.context import build_context
from gitbatch.core.errors import ErrorCode


def run(
    paths: list[str] = typer.Argument(..., help="Files or folders (paths or URIs)."),
    git_args: list[str] = typer.Option(
        [],
        "--arg",
        "-a",
        help="Argument passed to git before the paths (repeatable).",
    ),
    command: str | None = typer.Option(
        None,
        "--command",
        "-c",
        help="Named command template from gitbatch.toml.",
    ),
) -> None:
    """Run an arbitrary git command once per repository."""
    ctx = build_context()

    if command is not None:
        templates = ctx.config.commands.templates
        if command not in templates:
            ctx.console.error(f"unknown command: {command}")
            ctx.console.print(f"Available: {', '.join(sorted(templates))}")
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        args = [*templates[command], *git_args]
    else:
        args = list(git_args)

    if not args:
        ctx.console.error("no git arguments given (use --arg or --command)")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    run_git(ctx, args, paths)
