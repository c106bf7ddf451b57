"""CLI package for wslcompact.

This package contains the Typer application and all subcommands.
"""

from wslcompact.cli.main import app

__all__ = ["app"]
