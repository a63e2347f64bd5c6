"""Result type for explicit error handling.

Expected failures (a config file that does not parse, a git binary that
cannot be spawned, a lookup collaborator that is missing) are returned as
values instead of raised, so callers decide where they become fatal.

Usage:
    match load_config(path):
        case Ok(config):
            print(config.git.path)
        case Err(error):
            print(f"Error: {error.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result.

    Attributes:
        error: The error value.
    """

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Union[Ok[T], Err[E]]
