"""Data models for wslcompact.

This module exports the core data structures used throughout the application.
"""

from wslcompact.models.compaction import (
    CompactionResult,
    RunSummary,
    create_failure_result,
    create_success_result,
)
from wslcompact.models.distro import DistroEntry
from wslcompact.models.run import (
    EXIT_DISCOVERY_ERROR,
    EXIT_NOT_ELEVATED,
    EXIT_OK,
    RunOutcome,
    RunState,
)

__all__ = [
    "EXIT_DISCOVERY_ERROR",
    "EXIT_NOT_ELEVATED",
    "EXIT_OK",
    "CompactionResult",
    "DistroEntry",
    "RunOutcome",
    "RunState",
    "RunSummary",
    "create_failure_result",
    "create_success_result",
]
