"""Distribution model.

This module defines the data structure describing one installed WSL
distribution and the virtual disk file that backs it.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class DistroEntry:
    """An installed distribution resolved to its disk image.

    Entries carry no identity beyond name and path; two registry keys
    pointing at the same disk produce two independent entries.

    Attributes:
        name: Display name of the distribution (e.g. "Ubuntu").
        vhd_path: Absolute path to the distribution's ext4.vhdx file.
    """

    name: str
    vhd_path: Path

    def __post_init__(self) -> None:
        """Validate entry data after initialization."""
        if not self.name:
            msg = "Distribution name cannot be empty"
            raise ValueError(msg)
