"""CLI commands for wslcompact.

This package contains all subcommand implementations.
"""

from wslcompact.cli.commands import config, distros

__all__ = ["config", "distros"]
