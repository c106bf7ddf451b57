"""Subprocess helpers.

wsl.exe and diskpart.exe are console programs; both are run with captured
output and no stdin so they can never wait on the user.
"""

import subprocess
from dataclasses import dataclass

# Suppresses the console window of child processes on Windows; 0 elsewhere.
NO_WINDOW: int = getattr(subprocess, "CREATE_NO_WINDOW", 0)


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of a finished process."""

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """True if the process exited with code 0."""
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Non-blank stdout and stderr joined by a newline, stdout first."""
        parts = [part.strip() for part in (self.stdout, self.stderr) if part and part.strip()]
        return "\n".join(parts)


def run_command(
    args: list[str],
    *,
    check: bool = False,
    timeout: float | None = 60.0,
    cwd: str | None = None,
    hide_window: bool = False,
) -> CommandResult:
    """Run a process to completion and capture its output.

    Output is decoded with errors="replace" because diskpart.exe writes in
    the OEM code page.

    Args:
        args: Executable followed by its arguments.
        check: Raise CalledProcessError on a non-zero exit code.
        timeout: Seconds to wait; None waits indefinitely.
        cwd: Working directory, or None for the current one.
        hide_window: Start the child without a console window (Windows).

    Raises:
        FileNotFoundError: If the executable does not exist.
        subprocess.TimeoutExpired: If the timeout elapses.
        subprocess.CalledProcessError: If check is set and the exit code is non-zero.
    """
    completed = subprocess.run(
        args,
        capture_output=True,
        stdin=subprocess.DEVNULL,
        text=True,
        errors="replace",
        check=check,
        timeout=timeout,
        cwd=cwd,
        creationflags=NO_WINDOW if hide_window else 0,
    )
    return CommandResult(
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
        returncode=completed.returncode,
    )
