"""Elevation check.

DiskPart refuses to attach virtual disks without administrator rights, so
a run must verify elevation before it shuts anything down.
"""

import logging
import os

logger = logging.getLogger(__name__)


def is_elevated() -> bool:
    """Check whether the current process runs with administrative rights.

    On Windows this asks shell32.IsUserAnAdmin(); elsewhere the effective
    uid must be 0. Any failure to answer counts as not elevated.

    Returns:
        True if the process is elevated, False otherwise.
    """
    if os.name == "nt":
        try:
            import ctypes

            return bool(ctypes.windll.shell32.IsUserAnAdmin())  # type: ignore[attr-defined]
        except (AttributeError, OSError) as e:
            logger.debug("IsUserAnAdmin failed: %s", e)
            return False

    geteuid = getattr(os, "geteuid", None)
    if geteuid is None:
        return False
    return geteuid() == 0


def require_elevated() -> None:
    """Ensure the current process is elevated.

    Raises:
        PermissionError: If the process lacks administrative rights.
    """
    if not is_elevated():
        msg = "Administrator privileges are required. Re-run from an elevated terminal."
        raise PermissionError(msg)
    logger.debug("Running elevated")
