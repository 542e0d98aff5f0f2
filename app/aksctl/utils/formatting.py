"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console
from rich.markup import escape

from aksctl.core.theme import get_theme
from aksctl.utils.shell import format_command


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{escape(message)}[/]")


def print_heading(title: str) -> None:
    """Print a phase heading followed by a rule."""
    console.print()
    console.rule(f"[bold_header]{escape(title)}[/]", align="left", style="border")


def print_command(args: list[str], dry_run: bool = False) -> None:
    """Echo an external command before (or instead of) running it.

    Args:
        args: Argument vector of the command.
        dry_run: If True, mark the command as not executed.
    """
    rendered = escape(format_command(args))
    if dry_run:
        console.print(f"  [dry_run]{escape('[DRY RUN]')}[/] {rendered}", soft_wrap=True)
    else:
        console.print(f"  [command]▶[/] {rendered}", soft_wrap=True)


def print_output(text: str, limit: int | None = None) -> None:
    """Print captured command output, optionally truncated to the first lines."""
    lines = text.strip().splitlines()
    if limit is not None:
        lines = lines[:limit]
    for line in lines:
        console.print(f"    [muted]{escape(line)}[/]", soft_wrap=True)
