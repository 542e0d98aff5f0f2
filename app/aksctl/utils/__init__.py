"""Utility modules for aksctl.

This module exports commonly used utility functions.
"""

from aksctl.utils.formatting import (
    console,
    err_console,
    print_command,
    print_error,
    print_heading,
    print_info,
    print_output,
    print_success,
    print_warning,
)
from aksctl.utils.shell import (
    CommandFailedError,
    CommandResult,
    command_exists,
    format_command,
    run_command,
)

__all__ = [
    "CommandFailedError",
    "CommandResult",
    "command_exists",
    "console",
    "err_console",
    "format_command",
    "print_command",
    "print_error",
    "print_heading",
    "print_info",
    "print_output",
    "print_success",
    "print_warning",
    "run_command",
]
