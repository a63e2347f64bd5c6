"""Platform abstraction layer."""

from .process import (
    ProcessError,
    ProcessOutcome,
    SettleOnce,
    build_command,
    quote_arg,
    run,
    run_async,
)

__all__ = [
    "ProcessError",
    "ProcessOutcome",
    "SettleOnce",
    "build_command",
    "quote_arg",
    "run",
    "run_async",
]
