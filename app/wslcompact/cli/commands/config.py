"""Config command implementation.

Shows the effective configuration and writes a default config file.
"""

from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from wslcompact.cli.types import get_config, get_config_path
from wslcompact.core.config import ConfigError, get_default_config, save_config
from wslcompact.core.paths import get_config_path as get_default_config_path
from wslcompact.utils.formatting import console, print_error, print_success, print_warning

app = typer.Typer(
    help="Show or create the wslcompact configuration.",
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration."""
    settings = get_config(ctx)
    path = get_config_path(ctx) or get_default_config_path()

    table = Table(
        title="Configuration",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", no_wrap=True)
    table.add_column("Value", style="info")

    for key, value in settings.model_dump().items():
        table.add_row(key, str(value))

    console.print(table)
    source = str(path) if path.exists() else "built-in defaults"
    console.print(f"\n[dim]Source: {escape(source)}[/]")


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing config file.",
        ),
    ] = False,
) -> None:
    """Write a config file with the default settings."""
    path = get_config_path(ctx) or get_default_config_path()

    if path.exists() and not force:
        print_warning(f"Config already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_config(get_default_config(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
