"""WSL subsystem control.

Stops WSL so disk images are unlocked, and starts it again afterwards.
Both commands are best-effort: a failure is logged and reported but
never stops the run.
"""

import logging
import subprocess
import time

from wslcompact.utils.shell import CommandResult, run_command

logger = logging.getLogger(__name__)


class SubsystemController:
    """Shuts down and warm-starts the WSL subsystem.

    Attributes:
        dry_run: If True, only log the commands without executing them.
        last_error: Description of the most recent failure, if any.
    """

    def __init__(
        self,
        wsl_executable: str = "wsl.exe",
        timeout: float = 60.0,
        dry_run: bool = False,
    ) -> None:
        """Initialize the controller.

        Args:
            wsl_executable: WSL command to invoke.
            timeout: Timeout in seconds for each WSL command.
            dry_run: If True, only log the commands without executing them.
        """
        self._wsl = wsl_executable
        self._timeout = timeout
        self._dry_run = dry_run
        self.last_error: str | None = None

    @property
    def dry_run(self) -> bool:
        """Check if controller is in dry-run mode."""
        return self._dry_run

    def shutdown(self) -> bool:
        """Shut down all running distributions and the WSL VM.

        Returns:
            True if the command succeeded, False otherwise.
        """
        return self._run("shutdown", [self._wsl, "--shutdown"])

    def warm_start(self) -> bool:
        """Start WSL by running a no-op in the default distribution.

        The command returns as soon as ``true`` exits instead of opening
        an interactive shell.

        Returns:
            True if the command succeeded, False otherwise.
        """
        return self._run("warm start", [self._wsl, "--exec", "true"])

    def settle(self, seconds: float) -> None:
        """Wait for file handles on the disk images to be released."""
        if seconds <= 0 or self._dry_run:
            return
        logger.debug("Waiting %.1fs for WSL to release disk images", seconds)
        time.sleep(seconds)

    def _run(self, label: str, args: list[str]) -> bool:
        """Run a WSL command, recording rather than raising failures."""
        self.last_error = None

        if self._dry_run:
            logger.info("Dry-run: Would run %s", " ".join(args))
            return True

        logger.info("WSL %s: %s", label, " ".join(args))
        try:
            result = run_command(args, timeout=self._timeout, hide_window=True)
        except FileNotFoundError:
            self.last_error = f"{self._wsl} not found"
        except subprocess.TimeoutExpired:
            self.last_error = f"{self._wsl} {label} timed out after {self._timeout:.0f}s"
        except OSError as e:
            self.last_error = f"{self._wsl} {label} could not be started: {e}"
        else:
            if result.success:
                return True
            self.last_error = _describe_failure(label, result)

        logger.warning("WSL %s failed: %s", label, self.last_error)
        return False


def _describe_failure(label: str, result: CommandResult) -> str:
    """Build a one-line failure description from a command result."""
    # wsl.exe writes UTF-16 to pipes; stray NULs remain after text decoding.
    detail = result.output.replace("\x00", "").strip()
    if detail:
        return f"{label} exited with code {result.returncode}: {detail}"
    return f"{label} exited with code {result.returncode}"
