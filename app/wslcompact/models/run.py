"""Run state models.

This module defines the states a compaction run passes through and the
outcome handed back to the CLI.
"""

from dataclasses import dataclass, field
from enum import Enum

from wslcompact.models.compaction import CompactionResult, RunSummary

EXIT_OK = 0
EXIT_NOT_ELEVATED = 1
EXIT_DISCOVERY_ERROR = 3


class RunState(Enum):
    """State of a compaction run.

    Attributes:
        INIT: Nothing has happened yet.
        GUARDED: Elevation check passed.
        SHUT_DOWN: Shutdown issued and settle delay elapsed.
        DISCOVERED: Registry scan completed with at least one disk.
        COMPACTING: Disks are being compacted one by one.
        SUMMARIZED: Script removed and totals reported.
        WARMED_UP: Warm start issued.
        DONE: Terminal success state.
        ABORTED: Terminal state after a fatal condition.
    """

    INIT = "init"
    GUARDED = "guarded"
    SHUT_DOWN = "shut_down"
    DISCOVERED = "discovered"
    COMPACTING = "compacting"
    SUMMARIZED = "summarized"
    WARMED_UP = "warmed_up"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(frozen=True, slots=True)
class RunOutcome:
    """Final outcome of a run.

    Attributes:
        state: Terminal state (DONE or ABORTED).
        exit_code: Process exit code to report.
        summary: Aggregate over all results.
        results: Per-distribution results in processing order.
    """

    state: RunState
    exit_code: int
    summary: RunSummary = field(default_factory=RunSummary)
    results: tuple[CompactionResult, ...] = ()

    @property
    def aborted(self) -> bool:
        """Check if the run ended on a fatal condition."""
        return self.state == RunState.ABORTED
