from __future__ import annotations

from collections.abc import Sequence

import typer

from gitbatch.cli.context import CLIContext
from gitbatch.core.errors import CollaboratorUnavailable
from gitbatch.core.resource import Resource, parse_resource
from gitbatch.core.result import Err, Ok
from gitbatch.git.multi import RunReport, run_batched_sync
from gitbatch.output.report import (
    fill_affected,
    print_report,
    print_run_error,
    report_exit_code,
    run_error_exit_code,
)


def parse_paths(paths: Sequence[str]) -> list[Resource]:
    return [parse_resource(p) for p in paths]


def run_git(ctx: CLIContext, args: Sequence[str], paths: Sequence[str]) -> RunReport:
    """Run `git <args> <paths>` per repository and print the report.

    Raises typer.Exit with a non-zero code if git is unavailable or any
    repository's command failed.
    """
    if ctx.git is None:
        error = CollaboratorUnavailable()
        print_run_error(error, ctx.console)
        raise typer.Exit(code=run_error_exit_code(error))

    if ctx.verbose:
        match ctx.git.version():
            case Ok(text):
                ctx.console.info(text)
            case Err(version_error):
                ctx.console.warning(f"could not query git version: {version_error}")

    result = run_batched_sync(
        ctx.git.command(*args),
        parse_paths(paths),
        repos=ctx.repos,
        workspaces=ctx.workspaces,
    )
    if isinstance(result, Err):
        print_run_error(result.error, ctx.console)
        raise typer.Exit(code=run_error_exit_code(result.error))

    report = result.value
    fill_affected(report)
    print_report(report, ctx.console, verbose=ctx.verbose)

    code = report_exit_code(report)
    if code:
        raise typer.Exit(code=code)
    return report
