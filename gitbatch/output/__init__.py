"""Output abstraction layer."""

from .console import (
    ConsoleProtocol,
    MockConsole,
    RichConsole,
    Style,
)
from .report import (
    fill_affected,
    print_report,
    print_run_error,
    report_exit_code,
    run_error_exit_code,
)

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "RichConsole",
    "Style",
    "fill_affected",
    "print_report",
    "print_run_error",
    "report_exit_code",
    "run_error_exit_code",
]
