"""Main CLI application entry point.

Defines the Typer application and global options. Invoked without a
subcommand, it runs the full compaction.
"""

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from wslcompact import __version__
from wslcompact.cli.commands import config, distros
from wslcompact.cli.display import ConsoleReporter
from wslcompact.cli.types import get_config
from wslcompact.core.orchestrator import Orchestrator
from wslcompact.core.paths import get_script_path
from wslcompact.operators.compactor import DiskCompactor
from wslcompact.operators.subsystem import SubsystemController
from wslcompact.scanners.registry import DistroRegistry
from wslcompact.utils.formatting import is_interactive_console, print_info

app = typer.Typer(
    name="wslcompact",
    help="Compact the virtual disks of all WSL 2 distributions.",
    invoke_without_command=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"wslcompact version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr; debug level when verbose, errors only otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.ERROR,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to a config.toml (default: %APPDATA%\\wslcompact\\config.toml).",
        ),
    ] = None,
    distro: Annotated[
        list[str] | None,
        typer.Option(
            "--distro",
            "-d",
            help="Only compact this distribution. Repeat for several.",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Show what would be done without stopping WSL or running DiskPart.",
        ),
    ] = False,
    no_pause: Annotated[
        bool,
        typer.Option(
            "--no-pause",
            help="Do not wait for a keypress before exiting.",
        ),
    ] = False,
) -> None:
    """wslcompact - Reclaim disk space from WSL 2 virtual disks.

    Shuts down WSL, compacts every distribution's ext4.vhdx with DiskPart,
    reports the space reclaimed and starts WSL again. Must be run from an
    elevated terminal.
    """
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path

    if ctx.invoked_subcommand is not None:
        return

    settings = get_config(ctx)
    if dry_run:
        print_info("Dry run: WSL keeps running and DiskPart is not invoked.")

    orchestrator = Orchestrator(
        SubsystemController(
            wsl_executable=settings.wsl_executable,
            timeout=settings.command_timeout_seconds,
            dry_run=dry_run,
        ),
        DistroRegistry(vhd_filename=settings.vhd_filename),
        DiskCompactor(
            diskpart_executable=settings.diskpart_executable,
            script_path=get_script_path(),
            dry_run=dry_run,
        ),
        ConsoleReporter(),
        settle_seconds=settings.settle_seconds,
        distro_filter=distro,
        pause_on_exit=settings.pause_on_exit and not no_pause,
        is_interactive=is_interactive_console,
    )
    outcome = orchestrator.run()
    raise typer.Exit(code=outcome.exit_code)


# Register commands
app.add_typer(distros.app, name="list")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
