"""DiskPart-based disk image compactor.

Compacts one ext4.vhdx at a time by writing a DiskPart script and running
``diskpart /s``. Expected failures (locked file, DiskPart errors) are
returned as failed results, never raised.
"""

import logging
import subprocess
from pathlib import Path

from wslcompact.core.paths import get_script_path
from wslcompact.models.compaction import (
    CompactionResult,
    create_failure_result,
    create_success_result,
)
from wslcompact.models.distro import DistroEntry
from wslcompact.utils.shell import run_command

logger = logging.getLogger(__name__)

# DiskPart prints this and may still exit 0, so the exit code alone is not
# enough to detect failure.
DISKPART_ERROR_MARKER = "DiskPart has encountered an error"


def build_script(vhd_path: Path) -> str:
    """Build the DiskPart script that compacts ``vhd_path``.

    The disk is attached read-only so its filesystem is never mounted on
    the host, and detached before the file is measured again.

    Args:
        vhd_path: Disk image to compact.

    Returns:
        Script text, one command per line.
    """
    lines = [
        f'select vdisk file="{vhd_path}"',
        "attach vdisk readonly",
        "compact vdisk",
        "detach vdisk",
    ]
    return "\n".join(lines) + "\n"


def is_diskpart_success(returncode: int, output: str) -> bool:
    """Check DiskPart success: zero exit code and no error marker in the output."""
    return returncode == 0 and DISKPART_ERROR_MARKER not in output


class DiskCompactor:
    """Compacts distribution disk images with DiskPart.

    All calls share one script path, so compactions must run one at a time.

    Attributes:
        dry_run: If True, write and log the script but do not run DiskPart.
    """

    def __init__(
        self,
        diskpart_executable: str = "diskpart.exe",
        script_path: Path | None = None,
        dry_run: bool = False,
    ) -> None:
        """Initialize the compactor.

        Args:
            diskpart_executable: DiskPart command to invoke.
            script_path: Transient script location. Defaults to the temp dir.
            dry_run: If True, write and log the script but do not run DiskPart.
        """
        self._diskpart = diskpart_executable
        self._script_path = script_path or get_script_path()
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if compactor is in dry-run mode."""
        return self._dry_run

    @property
    def script_path(self) -> Path:
        """Location of the transient DiskPart script."""
        return self._script_path

    def compact(self, entry: DistroEntry) -> CompactionResult:
        """Compact a single distribution's disk image.

        Args:
            entry: Distribution to compact.

        Returns:
            CompactionResult; success=False with a diagnostic on any failure.
        """
        try:
            size_before = entry.vhd_path.stat().st_size
        except OSError as e:
            logger.warning("Cannot read size of %s: %s", entry.vhd_path, e)
            return create_failure_result(
                entry.name,
                f"Could not read size of {entry.vhd_path}: {e}",
            )

        script = build_script(entry.vhd_path)
        try:
            self._script_path.write_text(script, encoding="ascii")
        except (OSError, UnicodeEncodeError) as e:
            logger.warning("Cannot write DiskPart script %s: %s", self._script_path, e)
            return create_failure_result(
                entry.name,
                f"Could not write DiskPart script {self._script_path}: {e}",
                size_before_bytes=size_before,
            )

        if self._dry_run:
            logger.info("Dry-run: Would run %s /s %s:\n%s", self._diskpart, self._script_path, script)
            return create_success_result(
                entry.name, size_before, size_before, output=f"Dry-run: would run\n{script}"
            )

        logger.info("Compacting %s (%s)", entry.name, entry.vhd_path)
        args = [self._diskpart, "/s", str(self._script_path)]
        try:
            result = run_command(args, timeout=None, hide_window=True)
        except FileNotFoundError:
            return create_failure_result(
                entry.name,
                f"{self._diskpart} not found",
                size_before_bytes=size_before,
            )
        except (OSError, subprocess.SubprocessError) as e:
            return create_failure_result(
                entry.name,
                f"{self._diskpart} could not be run: {e}",
                size_before_bytes=size_before,
            )

        output = result.output
        if not is_diskpart_success(result.returncode, output):
            logger.warning("DiskPart failed for %s (exit code %d)", entry.name, result.returncode)
            return create_failure_result(
                entry.name,
                output or f"{self._diskpart} exited with code {result.returncode}",
                size_before_bytes=size_before,
            )

        try:
            size_after = entry.vhd_path.stat().st_size
        except OSError as e:
            return create_failure_result(
                entry.name,
                f"Compacted, but could not read size of {entry.vhd_path}: {e}\n{output}",
                size_before_bytes=size_before,
            )

        logger.debug("%s: %d -> %d bytes", entry.name, size_before, size_after)
        return create_success_result(entry.name, size_before, size_after, output=output)

    def cleanup(self) -> bool:
        """Remove the transient script.

        Returns:
            True if the script is gone afterwards, False if removal failed.
        """
        try:
            self._script_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove %s: %s", self._script_path, e)
            return False
        return True
