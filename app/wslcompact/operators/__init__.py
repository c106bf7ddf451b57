"""Operators acting on WSL and its disk images.

This module exports the subsystem controller and the disk compactor.
"""

from wslcompact.operators.compactor import DISKPART_ERROR_MARKER, DiskCompactor
from wslcompact.operators.subsystem import SubsystemController

__all__ = ["DISKPART_ERROR_MARKER", "DiskCompactor", "SubsystemController"]
