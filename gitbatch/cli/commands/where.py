"""Show which repository each path would be batched under."""

from __future__ import annotations

import typer

from gitbatch.cli.commands._helpers import parse_paths
from gitbatch.cli.context import build_context
from gitbatch.core.errors import ErrorCode
from gitbatch.git.classify import Accepted, Rejected, classify
from gitbatch.output.console import Style


def where(
    paths: list[str] = typer.Argument(..., help="Files or folders (paths or URIs)."),
) -> None:
    """Classify paths without running git."""
    ctx = build_context()
    if ctx.repos is None:
        ctx.console.error("git not found")
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    rejected = 0
    for resource in parse_paths(paths):
        match classify(resource, ctx.repos, ctx.workspaces):
            case Accepted(repo_root=root):
                ctx.console.print(f"{resource}  ->  {root}")
            case Rejected(reason=reason):
                rejected += 1
                ctx.console.print(f"{resource}  ({reason})", Style.DIM)

    if rejected:
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
