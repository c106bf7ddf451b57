"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys

from rich.console import Console

from wslcompact.core.theme import get_theme

BYTES_PER_MB = 1024**2
BYTES_PER_GB = 1024**3


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


def is_interactive_console() -> bool:
    """Check whether both stdin and stdout are attached to a terminal."""
    return sys.stdin.isatty() and sys.stdout.isatty()


def format_gb(size_bytes: int) -> str:
    """Format a byte count as gigabytes with two decimals (e.g. "15.40 GB")."""
    return f"{size_bytes / BYTES_PER_GB:,.2f} GB"


def format_mb(size_bytes: int) -> str:
    """Format a byte count as megabytes with two decimals (e.g. "7,372.80 MB")."""
    return f"{size_bytes / BYTES_PER_MB:,.2f} MB"


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
