"""Unit tests for compaction models.

Tests for CompactionResult, its factory functions, and RunSummary.
"""

from functools import reduce

import pytest
from wslcompact.models.compaction import (
    CompactionResult,
    RunSummary,
    create_failure_result,
    create_success_result,
)

GB = 1024**3


def _fold(results: list[CompactionResult]) -> RunSummary:
    return reduce(RunSummary.add, results, RunSummary())


class TestCompactionResult:
    """Tests for CompactionResult and its factories."""

    def test_success_derives_saved_bytes(self) -> None:
        """saved_bytes is exactly before - after."""
        result = create_success_result("Ubuntu", 5000, 1200, output="ok")

        assert result.success is True
        assert result.failed is False
        assert result.saved_bytes == 3800
        assert result.diagnostic_output == "ok"

    def test_success_allows_negative_savings(self) -> None:
        result = create_success_result("Ubuntu", 1000, 1500)

        assert result.saved_bytes == -500

    def test_failure_defaults(self) -> None:
        """Failures save nothing and keep the diagnostic."""
        result = create_failure_result("Ubuntu", "file in use", size_before_bytes=4096)

        assert result.success is False
        assert result.failed is True
        assert result.size_before_bytes == 4096
        assert result.size_after_bytes == 0
        assert result.saved_bytes == 0
        assert result.diagnostic_output == "file in use"

    def test_failure_diagnostic_never_empty(self) -> None:
        result = create_failure_result("Ubuntu", "")

        assert result.diagnostic_output

    def test_is_immutable(self) -> None:
        """CompactionResult is frozen."""
        result = create_success_result("Ubuntu", 2, 1)

        with pytest.raises(AttributeError):
            result.saved_bytes = 5  # type: ignore[misc]


class TestRunSummary:
    """Tests for folding results into a RunSummary."""

    def test_empty(self) -> None:
        summary = RunSummary()

        assert summary.total_saved_bytes == 0
        assert summary.processed_count == 0
        assert summary.failed_count == 0
        assert summary.succeeded_count == 0

    def test_add_returns_new_summary(self) -> None:
        """add() leaves the original summary untouched."""
        start = RunSummary()

        after = start.add(create_success_result("Ubuntu", 10, 4))

        assert start == RunSummary()
        assert after == RunSummary(total_saved_bytes=6, processed_count=1, failed_count=0)

    def test_failed_results_contribute_nothing(self) -> None:
        """Only successful results add bytes; failures are counted."""
        results = [
            create_success_result("Ubuntu", 10 * GB, 7 * GB),
            create_failure_result("Debian", "locked", size_before_bytes=20 * GB),
            create_success_result("Alpine", GB, GB),
        ]

        summary = _fold(results)

        assert summary.total_saved_bytes == 3 * GB
        assert summary.processed_count == 3
        assert summary.failed_count == 1
        assert summary.succeeded_count == 2

    def test_failure_with_bogus_saved_bytes_ignored(self) -> None:
        """A hand-built failure with saved_bytes set still adds nothing."""
        result = CompactionResult(
            name="Odd",
            size_before_bytes=10,
            size_after_bytes=5,
            saved_bytes=5,
            success=False,
            diagnostic_output="marker",
        )

        assert RunSummary().add(result).total_saved_bytes == 0

    def test_total_is_sum_of_successful_savings(self) -> None:
        results = [
            create_success_result("Ubuntu", int(15.40 * GB), int(8.20 * GB)),
            create_success_result("Kali-Linux", int(32.10 * GB), int(30.05 * GB)),
        ]

        summary = _fold(results)

        assert summary.total_saved_bytes == sum(r.saved_bytes for r in results)
        assert summary.total_saved_bytes / GB == pytest.approx(9.25, abs=1e-3)
