"""Shared helpers for CLI commands.

This module provides helpers used by the root command and the
subcommands to avoid code duplication.
"""

from pathlib import Path

import typer

from wslcompact.core.config import CompactConfig, ConfigError, load_config
from wslcompact.utils.formatting import print_error


def get_config_path(ctx: typer.Context) -> Path | None:
    """Return the path given with the global --config option, if any."""
    root = ctx.find_root()
    if not root.obj:
        return None
    path: Path | None = root.obj.get("config_path")
    return path


def get_config(ctx: typer.Context) -> CompactConfig:
    """Load the configuration selected by the global --config option.

    Args:
        ctx: Current Typer context.

    Returns:
        Validated configuration (defaults if no file exists).

    Raises:
        typer.Exit: With code 1 if the configuration is invalid.
    """
    try:
        return load_config(get_config_path(ctx))
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
