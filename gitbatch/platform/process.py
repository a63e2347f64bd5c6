"""Subprocess execution with Result-based error handling.

Two flavours:
- `run_async` spawns one process on the running event loop and settles
  exactly once, whichever of its completion signals arrives first. It is
  what the batch runner fans out, one call per repository.
- `run` is a blocking wrapper around subprocess.run for one-off probes
  such as `git --version`.

Neither raises for a non-zero exit: the exit status travels in the result.

Usage:
    result = await run_async(["git", "add", "--", "a.txt"], cwd=repo_root)
    match result:
        case Ok(outcome) if outcome.succeeded:
            print(outcome.stdout)
        case Ok(outcome):
            print(f"git exited {outcome.returncode}")
        case Err(failure):
            print(f"could not start git: {failure}")
"""

from __future__ import annotations

import asyncio
import os
import subprocess
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, TypeVar

from gitbatch.core.errors import SpawnFailure
from gitbatch.core.resource import Resource
from gitbatch.core.result import Err, Ok, Result

__all__ = [
    "ProcessError",
    "ProcessOutcome",
    "SettleOnce",
    "build_command",
    "quote_arg",
    "run",
    "run_async",
]

T = TypeVar("T")


def quote_arg(arg: str) -> str:
    """Wrap a command-line token in double quotes (display form)."""
    return f'"{arg}"'


def build_command(template: Sequence[str], paths: Sequence[Resource]) -> list[str]:
    """Append each resource's filesystem location to a command template.

    The result is an argv list, so locations containing spaces need no
    escaping when spawned. Path order is preserved, duplicates included.
    """
    return [*template, *(str(p.fs_path) for p in paths)]


@dataclass(frozen=True, slots=True)
class ProcessOutcome:
    """Outcome of one process invocation.

    Attributes:
        command: Full argv that was (or would have been) executed
        cwd: Working directory of the process
        paths: Resources whose locations were passed on the command line
        pid: Process id, None if the process never started
        returncode: Exit status, -1 if the process never started
        stdout: Captured standard output
        stderr: Captured standard error, or the OS error on spawn failure
    """

    command: tuple[str, ...]
    cwd: Path
    paths: tuple[Resource, ...] = ()
    pid: int | None = None
    returncode: int = -1
    stdout: str = ""
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        """Command as a single line: executable and path arguments quoted."""
        if not self.command:
            return ""
        head = quote_arg(self.command[0])
        n_paths = len(self.paths)
        middle = self.command[1 : len(self.command) - n_paths]
        tail = [quote_arg(a) for a in self.command[len(self.command) - n_paths :]]
        return " ".join([head, *middle, *tail])


class SettleOnce(Generic[T]):
    """Single-assignment value shared by several completion signals.

    The first call to `settle` wins; later calls are ignored and return
    False. Must be created inside a running event loop.
    """

    def __init__(self) -> None:
        self._future: asyncio.Future[T] = asyncio.get_running_loop().create_future()

    @property
    def settled(self) -> bool:
        return self._future.done()

    def settle(self, value: T) -> bool:
        if self._future.done():
            return False
        self._future.set_result(value)
        return True

    async def wait(self) -> T:
        return await self._future


def _hidden_window_kwargs() -> dict[str, Any]:
    if sys.platform == "win32":
        return {"creationflags": subprocess.CREATE_NO_WINDOW}
    return {}


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", errors="replace")


async def run_async(
    cmd: Sequence[str],
    cwd: Path,
    env: Mapping[str, str] | None = None,
    *,
    paths: Sequence[Resource] = (),
) -> Result[ProcessOutcome, SpawnFailure]:
    """Spawn a command and wait for it to settle.

    The exit signal (`wait`) and the close signal (pipes drained by
    `communicate`) both fire for the same process; they race into a
    `SettleOnce`, so the status is decided once. Captured output is
    collected after the close signal either way.

    Args:
        cmd: Command and arguments.
        cwd: Working directory for the process.
        env: Environment for the process (the current environment if None).
            Copied for each spawn.
        paths: Resources carried by the command, recorded on the outcome.

    Returns:
        Ok(ProcessOutcome) once the process has exited, whatever its status.
        Err(SpawnFailure) if the process could not be started.
    """
    command = tuple(cmd)
    proc_env = dict(os.environ if env is None else env)

    try:
        proc = await asyncio.create_subprocess_exec(
            *command,
            cwd=str(cwd),
            env=proc_env,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            **_hidden_window_kwargs(),
        )
    except OSError as e:
        return Err(
            SpawnFailure(
                ProcessOutcome(
                    command=command,
                    cwd=cwd,
                    paths=tuple(paths),
                    stderr=str(e),
                )
            )
        )

    status: SettleOnce[int] = SettleOnce()

    async def on_exit() -> None:
        status.settle(await proc.wait())

    async def on_close() -> tuple[str, str]:
        try:
            out, err = await proc.communicate()
        except OSError as e:
            status.settle(-1)
            return "", str(e)
        status.settle(proc.returncode if proc.returncode is not None else -1)
        return _decode(out), _decode(err)

    exit_task = asyncio.ensure_future(on_exit())
    try:
        stdout, stderr = await on_close()
        returncode = await status.wait()
        await exit_task
    finally:
        exit_task.cancel()

    return Ok(
        ProcessOutcome(
            command=command,
            cwd=cwd,
            paths=tuple(paths),
            pid=proc.pid,
            returncode=returncode,
            stdout=stdout,
            stderr=stderr,
        )
    )


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed blocking subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process (-1 if it never ran).
        stdout: Standard output (may be empty).
        stderr: Standard error (contains error details).
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return stdout or error.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
            **_hidden_window_kwargs(),
        )
    except subprocess.TimeoutExpired:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)
