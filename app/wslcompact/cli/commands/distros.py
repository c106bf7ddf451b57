"""List command implementation.

Shows the distributions that a compaction run would process. Read-only:
WSL keeps running and no elevation is needed.
"""

import json
from enum import Enum
from typing import Annotated

import typer
from rich.markup import escape

from wslcompact.cli.display import create_distros_table
from wslcompact.cli.types import get_config
from wslcompact.models.distro import DistroEntry
from wslcompact.models.run import EXIT_DISCOVERY_ERROR
from wslcompact.scanners.registry import DistroRegistry, RegistryAccessError
from wslcompact.utils.formatting import console, format_gb, print_error, print_warning

app = typer.Typer(
    help="List WSL 2 distributions and their disk images.",
    invoke_without_command=True,
)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def _read_size(entry: DistroEntry) -> int | None:
    """Stat a disk image; None if it cannot be read."""
    try:
        return entry.vhd_path.stat().st_size
    except OSError:
        return None


@app.callback(invoke_without_command=True)
def list_distros(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List discovered distributions with their current disk sizes.

    Examples:
        wslcompact list                 # Show table
        wslcompact list --format json   # Output as JSON
    """
    settings = get_config(ctx)
    registry = DistroRegistry(vhd_filename=settings.vhd_filename)

    try:
        entries = registry.list_distros()
    except RegistryAccessError as e:
        print_error(f"Distribution discovery failed: {e}")
        raise typer.Exit(code=EXIT_DISCOVERY_ERROR) from e

    sizes = [_read_size(entry) for entry in entries]

    if output_format == OutputFormat.JSON:
        data = [
            {"name": e.name, "vhd_path": str(e.vhd_path), "size_bytes": size}
            for e, size in zip(entries, sizes, strict=True)
        ]
        console.print_json(json.dumps(data))
        return

    if not entries:
        print_warning(f"No WSL 2 distributions with {escape(registry.vhd_filename)} found.")
        return

    console.print(create_distros_table(entries, sizes))

    total = sum(size for size in sizes if size is not None)
    console.print(f"\n[dim]{len(entries)} distribution(s), {format_gb(total)} total[/]")
