"""Exit codes and the closed set of run errors.

`ErrorCode` maps to shell exit status for the CLI. `SpawnFailure` and
`CollaboratorUnavailable` are the only failures the batch runner produces
as values; any other exception reaching the caller is unexpected.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gitbatch.platform.process import ProcessOutcome

__all__ = [
    "CollaboratorUnavailable",
    "ErrorCode",
    "RunError",
    "SpawnFailure",
]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (bad input, invalid arguments)
    - 2: Environment error (no git, bad config)
    - 3: Git error (at least one git process failed)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    GIT_ERROR = 3


@dataclass(frozen=True, slots=True)
class SpawnFailure:
    """A git process that could not be started at all.

    Attributes:
        outcome: Outcome describing the attempted process (pid is None).
    """

    outcome: ProcessOutcome

    def __str__(self) -> str:
        return f"could not start {self.outcome.command[0]}: {self.outcome.stderr}"


@dataclass(frozen=True, slots=True)
class CollaboratorUnavailable:
    """No repository lookup is available (git missing or not configured)."""

    reason: str = "could not get the git api"

    def __str__(self) -> str:
        return self.reason


RunError = SpawnFailure | CollaboratorUnavailable
