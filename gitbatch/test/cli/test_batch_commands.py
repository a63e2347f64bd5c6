from __future__ import annotations

import sys
from pathlib import Path

import pytest
import typer

from gitbatch.cli.context import CLIContext
from gitbatch.core.config import CommandsConfig, Config
from gitbatch.core.errors import ErrorCode
from gitbatch.core.result import Err
from gitbatch.git.locator import GitExecutable
from gitbatch.git.lookup import GitRepositoryLookup, WorkspaceFolders
from gitbatch.output.console import MockConsole
from gitbatch.platform.process import ProcessError

# The "git" used here is the Python interpreter: templates are `-c <script>`
# and the path arguments land in sys.argv.
_PASS = ("-c", "pass")
_FAIL = ("-c", "import sys; sys.exit(1)")


def _ctx(
    tmp_path: Path,
    *,
    templates: dict[str, tuple[str, ...]] | None = None,
    git: bool = True,
    verbose: bool = False,
) -> CLIContext:
    executable = GitExecutable(path=Path(sys.executable)) if git else None
    return CLIContext(
        config=Config(commands=CommandsConfig(templates=templates or {"stage": _PASS})),
        git=executable,
        repos=GitRepositoryLookup() if git else None,
        workspaces=WorkspaceFolders.from_strings([str(tmp_path)]),
        console=MockConsole(),
        verbose=verbose,
    )


def _repo(tmp_path: Path, name: str) -> Path:
    root = tmp_path / name
    (root / ".git").mkdir(parents=True)
    return root


def _console(ctx: CLIContext) -> MockConsole:
    assert isinstance(ctx.console, MockConsole)
    return ctx.console


def test_stage_runs_once_per_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import gitbatch.cli.commands.stage as stage_cmd

    x, y = _repo(tmp_path, "x"), _repo(tmp_path, "y")
    ctx = _ctx(tmp_path)
    monkeypatch.setattr(stage_cmd, "build_context", lambda: ctx)

    stage_cmd.stage(paths=[str(x / "a.txt"), str(y / "b.txt"), str(x / "c.txt")])

    assert _console(ctx).messages == ["OK 3 files in 2 repositories"]


def test_stage_failure_exits_with_git_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import gitbatch.cli.commands.stage as stage_cmd

    x = _repo(tmp_path, "x")
    ctx = _ctx(tmp_path, templates={"stage": _FAIL})
    monkeypatch.setattr(stage_cmd, "build_context", lambda: ctx)

    with pytest.raises(typer.Exit) as exc:
        stage_cmd.stage(paths=[str(x / "a.txt")])

    assert exc.value.exit_code == int(ErrorCode.GIT_ERROR)
    assert _console(ctx).has_error()


def test_unstage_without_git(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import gitbatch.cli.commands.stage as stage_cmd

    ctx = _ctx(tmp_path, templates={"unstage": _PASS}, git=False)
    monkeypatch.setattr(stage_cmd, "build_context", lambda: ctx)

    with pytest.raises(typer.Exit) as exc:
        stage_cmd.unstage(paths=[str(tmp_path / "a.txt")])

    assert exc.value.exit_code == int(ErrorCode.ENV_ERROR)


def test_outside_workspace_is_reported(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import gitbatch.cli.commands.stage as stage_cmd

    inside = _repo(tmp_path, "ws/x")
    outside = _repo(tmp_path, "elsewhere")
    ctx = _ctx(tmp_path / "ws")
    monkeypatch.setattr(stage_cmd, "build_context", lambda: ctx)

    stage_cmd.stage(paths=[str(inside / "a.txt"), str(outside / "b.txt")])

    console = _console(ctx)
    assert console.find("1 file outside any repository")
    assert console.find("OK 1 file in 1 repository")


def test_run_requires_arguments(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import gitbatch.cli.commands.run_cmd as run_cmd

    ctx = _ctx(tmp_path)
    monkeypatch.setattr(run_cmd, "build_context", lambda: ctx)

    with pytest.raises(typer.Exit) as exc:
        run_cmd.run(paths=[str(tmp_path / "a")], git_args=[], command=None)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)


def test_run_unknown_named_command(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import gitbatch.cli.commands.run_cmd as run_cmd

    ctx = _ctx(tmp_path)
    monkeypatch.setattr(run_cmd, "build_context", lambda: ctx)

    with pytest.raises(typer.Exit) as exc:
        run_cmd.run(paths=[str(tmp_path / "a")], git_args=[], command="nope")

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)
    assert _console(ctx).find("unknown command: nope")


def test_run_with_args(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import gitbatch.cli.commands.run_cmd as run_cmd

    x = _repo(tmp_path, "x")
    ctx = _ctx(tmp_path)
    monkeypatch.setattr(run_cmd, "build_context", lambda: ctx)

    run_cmd.run(paths=[str(x / "a.txt")], git_args=list(_PASS), command=None)

    assert _console(ctx).messages == ["OK 1 file in 1 repository"]


def test_commit_rejects_empty_message(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import gitbatch.cli.commands.commit as commit_cmd

    ctx = _ctx(tmp_path)
    monkeypatch.setattr(commit_cmd, "build_context", lambda: ctx)

    with pytest.raises(typer.Exit) as exc:
        commit_cmd.commit(paths=[str(tmp_path / "a")], message="  ", amend=False, no_verify=False)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)


def test_commit_builds_git_arguments(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import gitbatch.cli.commands.commit as commit_cmd

    seen: list[list[str]] = []
    ctx = _ctx(tmp_path)
    monkeypatch.setattr(commit_cmd, "build_context", lambda: ctx)
    monkeypatch.setattr(commit_cmd, "run_git", lambda _ctx, args, _paths: seen.append(list(args)))

    commit_cmd.commit(paths=["a"], message="Fix typo", amend=True, no_verify=True)

    assert seen == [["commit", "-m", "Fix typo", "--amend", "--no-verify", "--"]]


def test_where_prints_repo_roots(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import gitbatch.cli.commands.where as where_cmd

    x = _repo(tmp_path, "x")
    ctx = _ctx(tmp_path)
    monkeypatch.setattr(where_cmd, "build_context", lambda: ctx)

    where_cmd.where(paths=[str(x / "a.txt")])

    assert _console(ctx).messages[0].endswith(str(x.resolve()))


def test_where_non_local(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import gitbatch.cli.commands.where as where_cmd

    ctx = _ctx(tmp_path)
    ctx = CLIContext(
        config=ctx.config,
        git=ctx.git,
        repos=ctx.repos,
        workspaces=WorkspaceFolders.from_strings([f"sftp://host{tmp_path.as_posix()}"]),
        console=ctx.console,
    )
    _repo(tmp_path, "x")
    monkeypatch.setattr(where_cmd, "build_context", lambda: ctx)

    with pytest.raises(typer.Exit):
        where_cmd.where(paths=[f"sftp://host{(tmp_path / 'x' / 'a.txt').as_posix()}"])

    assert _console(ctx).find("non-local-scheme")


def test_verbose_shows_git_version(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import gitbatch.cli.commands.stage as stage_cmd

    x = _repo(tmp_path, "x")
    ctx = _ctx(tmp_path, verbose=True)
    monkeypatch.setattr(stage_cmd, "build_context", lambda: ctx)

    stage_cmd.stage(paths=[str(x / "a.txt")])

    # The stand-in "git" is the Python interpreter, which answers --version.
    console = _console(ctx)
    assert console.messages[0].startswith("info: Python ")
    assert console.find("OK 1 file in 1 repository")


def test_verbose_version_failure_is_a_warning(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import gitbatch.cli.commands.stage as stage_cmd

    x = _repo(tmp_path, "x")
    ctx = _ctx(tmp_path, verbose=True)
    monkeypatch.setattr(stage_cmd, "build_context", lambda: ctx)
    failure = ProcessError(command=("git", "--version"), returncode=1, stdout="", stderr="")
    monkeypatch.setattr(GitExecutable, "version", lambda _self: Err(failure))

    stage_cmd.stage(paths=[str(x / "a.txt")])

    console = _console(ctx)
    assert console.has_warning()
    assert console.find("could not query git version")
