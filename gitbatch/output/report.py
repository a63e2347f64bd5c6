"""Run report presentation.

Centralized formatting and exit code mapping for batched git runs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gitbatch.core.errors import CollaboratorUnavailable, ErrorCode, RunError, SpawnFailure
from gitbatch.output.console import Style

if TYPE_CHECKING:
    from gitbatch.core.resource import Resource
    from gitbatch.git.multi import RunReport
    from gitbatch.output.console import ConsoleProtocol
    from gitbatch.platform.process import ProcessOutcome

__all__ = [
    "fill_affected",
    "print_report",
    "print_run_error",
    "report_exit_code",
    "run_error_exit_code",
]


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def fill_affected(report: RunReport) -> None:
    """Record the resources passed to succeeded processes as affected."""
    for outcome in report.succeeded:
        report.affected.extend(outcome.paths)


def _print_paths(console: ConsoleProtocol, paths: list[Resource]) -> None:
    for path in paths:
        console.print(f"  {path}", Style.DIM)


def _print_failed(console: ConsoleProtocol, outcome: ProcessOutcome) -> None:
    if outcome.pid is None:
        console.error(f"could not start git in {outcome.cwd}")
    else:
        console.error(f"git failed in {outcome.cwd} (exit {outcome.returncode})")
    detail = outcome.stderr.strip() or outcome.stdout.strip()
    if detail:
        for line in detail.splitlines():
            console.print(f"  {line}", Style.DIM)


def print_report(report: RunReport, console: ConsoleProtocol, *, verbose: bool = False) -> None:
    """Print a run report.

    Failures and rejected resources are always listed; commands and their
    output for succeeded processes only with verbose.
    """
    for outcome in report.succeeded:
        if verbose:
            console.print(outcome.command_line, Style.DIM)
            if outcome.stdout.strip():
                console.print(outcome.stdout.rstrip())

    for outcome in report.failed:
        if verbose:
            console.print(outcome.command_line, Style.DIM)
        _print_failed(console, outcome)

    if report.missing_repo:
        console.warning(f"{_plural(len(report.missing_repo), 'file')} outside any repository")
        _print_paths(console, report.missing_repo)
    if report.out_of_workspace:
        console.warning(
            f"{_plural(len(report.out_of_workspace), 'file')} outside the workspace folders"
        )
        _print_paths(console, report.out_of_workspace)
    if report.non_local:
        console.warning(f"{_plural(len(report.non_local), 'file')} not on the local filesystem")
        _print_paths(console, report.non_local)

    if report.succeeded:
        n_files = sum(len(o.paths) for o in report.succeeded)
        n_repos = len(report.succeeded)
        repos = "1 repository" if n_repos == 1 else f"{n_repos} repositories"
        console.success(f"{_plural(n_files, 'file')} in {repos}")
    elif not report.failed:
        console.info("nothing to do")


def report_exit_code(report: RunReport) -> int:
    """Exit code for a finished run."""
    if report.failed:
        return int(ErrorCode.GIT_ERROR)
    if not report.succeeded and report.rejected:
        return int(ErrorCode.USER_ERROR)
    return int(ErrorCode.OK)


def print_run_error(error: RunError, console: ConsoleProtocol) -> None:
    match error:
        case CollaboratorUnavailable(reason=reason):
            console.error(reason)
            console.print("hint: install git or set [git] path in gitbatch.toml", Style.DIM)
        case SpawnFailure():
            console.error(str(error))


def run_error_exit_code(error: RunError) -> int:
    match error:
        case CollaboratorUnavailable():
            return int(ErrorCode.ENV_ERROR)
        case SpawnFailure():
            return int(ErrorCode.GIT_ERROR)
