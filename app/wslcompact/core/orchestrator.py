"""Compaction run orchestration.

Sequences one maintenance run:

    elevation check -> shutdown -> settle -> discovery ->
    compact each disk -> summary -> warm start -> optional pause

Only a missing elevation or an unreadable registry aborts the run. Every
other failure is reported and the run carries on.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Protocol

from wslcompact.core.privilege import require_elevated
from wslcompact.models.compaction import CompactionResult, RunSummary
from wslcompact.models.distro import DistroEntry
from wslcompact.models.run import (
    EXIT_DISCOVERY_ERROR,
    EXIT_NOT_ELEVATED,
    EXIT_OK,
    RunOutcome,
    RunState,
)
from wslcompact.operators.compactor import DiskCompactor
from wslcompact.operators.subsystem import SubsystemController
from wslcompact.scanners.registry import DistroRegistry, RegistryAccessError

logger = logging.getLogger(__name__)

TOTAL_PHASES = 5


class Reporter(Protocol):
    """Receives progress events from a run."""

    def phase(self, number: int, total: int, title: str) -> None: ...

    def distro_started(self, index: int, total: int, entry: DistroEntry) -> None: ...

    def distro_finished(self, result: CompactionResult) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def summary(self, summary: RunSummary, results: list[CompactionResult]) -> None: ...

    def pause(self) -> None: ...


class Orchestrator:
    """Runs the full shutdown/compact/restart sequence.

    Example:
        >>> orchestrator = Orchestrator(
        ...     SubsystemController(), DistroRegistry(), DiskCompactor(), ConsoleReporter()
        ... )
        >>> outcome = orchestrator.run()
        >>> outcome.exit_code
        0
    """

    def __init__(
        self,
        controller: SubsystemController,
        registry: DistroRegistry,
        compactor: DiskCompactor,
        reporter: Reporter,
        *,
        settle_seconds: float = 5.0,
        distro_filter: Iterable[str] | None = None,
        pause_on_exit: bool = False,
        guard: Callable[[], None] | None = None,
        is_interactive: Callable[[], bool] = lambda: False,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            controller: Shuts down and warm-starts WSL.
            registry: Discovers distributions.
            compactor: Compacts one disk image at a time.
            reporter: Receives progress events.
            settle_seconds: Delay between shutdown and the first disk access.
            distro_filter: Only compact distributions with these names
                (case-insensitive). None compacts all of them.
            pause_on_exit: Wait for a keypress at the end of interactive runs.
            guard: Elevation check; raises PermissionError when not elevated.
                Defaults to require_elevated.
            is_interactive: Reports whether a console is attached.
        """
        self._controller = controller
        self._registry = registry
        self._compactor = compactor
        self._reporter = reporter
        self._settle_seconds = settle_seconds
        self._distro_filter = list(distro_filter) if distro_filter else None
        self._pause_on_exit = pause_on_exit
        self._guard = guard or require_elevated
        self._is_interactive = is_interactive
        self.state = RunState.INIT

    def run(self) -> RunOutcome:
        """Execute one run.

        Returns:
            RunOutcome with the terminal state, exit code and results.
        """
        try:
            self._guard()
        except PermissionError as e:
            self._reporter.error(str(e))
            return self._abort(EXIT_NOT_ELEVATED)
        self._transition(RunState.GUARDED)

        self._reporter.phase(1, TOTAL_PHASES, "Shutting down WSL")
        if not self._controller.shutdown():
            self._reporter.warning(
                f"WSL shutdown failed ({self._controller.last_error}); continuing anyway."
            )
        self._controller.settle(self._settle_seconds)
        self._transition(RunState.SHUT_DOWN)

        self._reporter.phase(2, TOTAL_PHASES, "Discovering distributions")
        try:
            entries = self._select(self._registry.list_distros())
        except RegistryAccessError as e:
            self._reporter.error(f"Distribution discovery failed: {e}")
            return self._abort(EXIT_DISCOVERY_ERROR)

        results: list[CompactionResult] = []
        summary = RunSummary()

        if not entries:
            self._reporter.warning("No WSL 2 distributions found; nothing to compact.")
        else:
            self._transition(RunState.DISCOVERED)
            results, summary = self._compact_all(entries)

            self._reporter.phase(4, TOTAL_PHASES, "Summary")
            if not self._compactor.cleanup():
                self._reporter.warning(f"Could not remove {self._compactor.script_path}")
            self._reporter.summary(summary, results)
            self._transition(RunState.SUMMARIZED)

        self._reporter.phase(5, TOTAL_PHASES, "Starting WSL")
        if not self._controller.warm_start():
            self._reporter.warning(f"WSL warm start failed ({self._controller.last_error}).")
        self._transition(RunState.WARMED_UP)

        self._transition(RunState.DONE)
        if self._pause_on_exit and self._is_interactive():
            self._reporter.pause()

        return RunOutcome(
            state=self.state,
            exit_code=EXIT_OK,
            summary=summary,
            results=tuple(results),
        )

    def _compact_all(
        self, entries: list[DistroEntry]
    ) -> tuple[list[CompactionResult], RunSummary]:
        """Compact every entry in order, folding results into a summary."""
        self._reporter.phase(3, TOTAL_PHASES, f"Compacting {len(entries)} disk image(s)")
        self._transition(RunState.COMPACTING)

        results: list[CompactionResult] = []
        summary = RunSummary()
        for index, entry in enumerate(entries, start=1):
            self._reporter.distro_started(index, len(entries), entry)
            result = self._compactor.compact(entry)
            self._reporter.distro_finished(result)
            results.append(result)
            summary = summary.add(result)
        return results, summary

    def _select(self, entries: list[DistroEntry]) -> list[DistroEntry]:
        """Apply the distribution name filter, warning about unknown names."""
        if self._distro_filter is None:
            return entries

        wanted = {name.casefold() for name in self._distro_filter}
        selected = [e for e in entries if e.name.casefold() in wanted]
        found = {e.name.casefold() for e in selected}
        for name in self._distro_filter:
            if name.casefold() not in found:
                self._reporter.warning(f"Distribution '{name}' not found.")
        return selected

    def _abort(self, exit_code: int) -> RunOutcome:
        """Move to ABORTED and build the outcome."""
        self._transition(RunState.ABORTED)
        return RunOutcome(state=self.state, exit_code=exit_code)

    def _transition(self, state: RunState) -> None:
        logger.debug("Run state: %s -> %s", self.state.value, state.value)
        self.state = state
