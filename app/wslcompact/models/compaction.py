"""Compaction models.

This module defines the per-disk compaction result and the run-wide
summary that is folded over those results.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CompactionResult:
    """Outcome of compacting a single distribution's disk image.

    Attributes:
        name: Distribution name.
        size_before_bytes: File size before compaction (0 if unreadable).
        size_after_bytes: File size after compaction (0 unless successful).
        saved_bytes: Reclaimed bytes; may be zero or negative.
        success: Whether DiskPart completed without error.
        diagnostic_output: Captured DiskPart output or a failure description.
    """

    name: str
    size_before_bytes: int
    size_after_bytes: int
    saved_bytes: int
    success: bool
    diagnostic_output: str = ""

    @property
    def failed(self) -> bool:
        """Check if the compaction failed."""
        return not self.success


def create_success_result(
    name: str,
    size_before_bytes: int,
    size_after_bytes: int,
    output: str = "",
) -> CompactionResult:
    """Create a successful result, deriving saved bytes from the two sizes.

    Args:
        name: Distribution name.
        size_before_bytes: Size measured before compaction.
        size_after_bytes: Size measured after compaction.
        output: Captured DiskPart output.

    Returns:
        CompactionResult with saved_bytes = before - after.
    """
    return CompactionResult(
        name=name,
        size_before_bytes=size_before_bytes,
        size_after_bytes=size_after_bytes,
        saved_bytes=size_before_bytes - size_after_bytes,
        success=True,
        diagnostic_output=output,
    )


def create_failure_result(
    name: str,
    diagnostic: str,
    size_before_bytes: int = 0,
) -> CompactionResult:
    """Create a failed result.

    Args:
        name: Distribution name.
        diagnostic: Description of the failure; never empty.
        size_before_bytes: Size measured before the failure, if any.

    Returns:
        CompactionResult with success=False and saved_bytes=0.
    """
    return CompactionResult(
        name=name,
        size_before_bytes=size_before_bytes,
        size_after_bytes=0,
        saved_bytes=0,
        success=False,
        diagnostic_output=diagnostic or "Compaction failed without diagnostic output",
    )


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Aggregate over all compaction results of a run.

    Attributes:
        total_saved_bytes: Sum of saved_bytes over successful results.
        processed_count: Number of results folded in.
        failed_count: Number of failed results folded in.
    """

    total_saved_bytes: int = 0
    processed_count: int = 0
    failed_count: int = 0

    @property
    def succeeded_count(self) -> int:
        """Number of successful compactions."""
        return self.processed_count - self.failed_count

    def add(self, result: CompactionResult) -> RunSummary:
        """Return a new summary that includes ``result``.

        Failed results count as processed but contribute no bytes.
        """
        if result.success:
            return RunSummary(
                total_saved_bytes=self.total_saved_bytes + result.saved_bytes,
                processed_count=self.processed_count + 1,
                failed_count=self.failed_count,
            )
        return RunSummary(
            total_saved_bytes=self.total_saved_bytes,
            processed_count=self.processed_count + 1,
            failed_count=self.failed_count + 1,
        )
