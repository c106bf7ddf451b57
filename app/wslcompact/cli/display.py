"""Rich display of compaction progress and results.

Provides the console reporter used by the compaction run and the table
builders shared by the CLI commands.
"""

import typer
from rich.markup import escape
from rich.table import Table

from wslcompact.models.compaction import CompactionResult, RunSummary
from wslcompact.models.distro import DistroEntry
from wslcompact.utils.formatting import (
    console,
    format_gb,
    format_mb,
    print_error,
    print_success,
    print_warning,
)


def create_distros_table(entries: list[DistroEntry], sizes: list[int | None]) -> Table:
    """Create a Rich table listing discovered distributions.

    Args:
        entries: Discovered distributions.
        sizes: Current disk image size per entry, in the same order (None if unreadable).

    Returns:
        Rich Table configured for distribution display.
    """
    table = Table(
        title="WSL Distributions",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Distribution", no_wrap=True)
    table.add_column("Size", style="info", justify="right")
    table.add_column("Disk Image", style="muted", overflow="fold")

    for entry, size in zip(entries, sizes, strict=True):
        size_text = format_gb(size) if size is not None else "[warning]unreadable[/warning]"
        table.add_row(
            f"[distro]{escape(entry.name)}[/distro]",
            size_text,
            escape(str(entry.vhd_path)),
        )

    return table


def create_results_table(results: list[CompactionResult]) -> Table:
    """Create a Rich table displaying compaction results.

    Failed rows show FAIL and leave the size columns empty.

    Args:
        results: Compaction results in processing order.

    Returns:
        Rich Table configured for results display.
    """
    table = Table(
        title="Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=6, justify="center")
    table.add_column("Distribution", no_wrap=True)
    table.add_column("Before", justify="right")
    table.add_column("After", justify="right")
    table.add_column("Reclaimed", justify="right")

    for result in results:
        if result.success:
            table.add_row(
                "[success]OK[/success]",
                escape(result.name),
                format_gb(result.size_before_bytes),
                format_gb(result.size_after_bytes),
                f"[reclaimed]{format_mb(result.saved_bytes)}[/reclaimed]",
            )
        else:
            table.add_row("[error]FAIL[/error]", escape(result.name), "", "", "")

    return table


class ConsoleReporter:
    """Prints run progress to the shared Rich consoles."""

    def phase(self, number: int, total: int, title: str) -> None:
        """Print a numbered phase header."""
        console.print(f"\n[phase][{number}/{total}] {title}...[/phase]")

    def distro_started(self, index: int, total: int, entry: DistroEntry) -> None:
        """Print the distribution about to be compacted."""
        console.print(f"\n  ({index}/{total}) [distro]{escape(entry.name)}[/distro]")
        console.print(f"  [muted]{escape(str(entry.vhd_path))}[/muted]")

    def distro_finished(self, result: CompactionResult) -> None:
        """Print the metrics of one compaction, or its diagnostic on failure."""
        if result.failed:
            print_error(f"Compaction of {escape(result.name)} failed.")
            console.print(result.diagnostic_output, style="muted", markup=False, highlight=False)
            return

        console.print(f"  Initial size: {format_gb(result.size_before_bytes)}")
        console.print(f"  Final size:   {format_gb(result.size_after_bytes)}")
        console.print(f"  Reclaimed:    [reclaimed]{format_mb(result.saved_bytes)}[/reclaimed]")

    def warning(self, message: str) -> None:
        """Print a warning."""
        print_warning(escape(message))

    def error(self, message: str) -> None:
        """Print an error."""
        print_error(escape(message))

    def summary(self, summary: RunSummary, results: list[CompactionResult]) -> None:
        """Print the results table and the aggregate over the run."""
        console.print(create_results_table(results))

        total = summary.total_saved_bytes
        console.print(
            f"\nTotal reclaimed: [reclaimed]{format_gb(total)}[/reclaimed] "
            f"[muted]({format_mb(total)})[/muted]"
        )
        if summary.failed_count == 0:
            print_success(f"All {summary.processed_count} disk image(s) compacted successfully.")
        else:
            console.print(
                f"[success]{summary.succeeded_count} succeeded[/success], "
                f"[error]{summary.failed_count} failed[/error]"
            )

    def pause(self) -> None:
        """Wait for a single keypress."""
        typer.pause("\nPress any key to exit...")
