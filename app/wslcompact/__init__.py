"""wslcompact - Reclaim disk space from WSL 2 virtual disks."""

__version__ = "0.1.0"
