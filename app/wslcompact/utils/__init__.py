"""Utility modules for wslcompact.

This module exports commonly used utility functions.
"""

from wslcompact.utils.formatting import (
    console,
    err_console,
    format_gb,
    format_mb,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from wslcompact.utils.shell import CommandResult, run_command

__all__ = [
    "CommandResult",
    "console",
    "err_console",
    "format_gb",
    "format_mb",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "run_command",
]
