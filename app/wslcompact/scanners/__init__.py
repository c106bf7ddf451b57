"""Discovery of installed WSL distributions.

This module exports the registry scanner.
"""

from wslcompact.scanners.registry import DistroRegistry, RegistryAccessError

__all__ = ["DistroRegistry", "RegistryAccessError"]
