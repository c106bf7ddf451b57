"""WSL distribution discovery.

Reads the per-user Lxss registry key to find every registered
distribution and resolves it to the ext4.vhdx file that backs it.
"""

import logging
import ntpath
from pathlib import Path
from typing import Any

from wslcompact.core.config import DEFAULT_VHD_FILENAME
from wslcompact.models.distro import DistroEntry

logger = logging.getLogger(__name__)

# Registry key (under HKEY_CURRENT_USER) holding one child key per distribution
LXSS_KEY = r"Software\Microsoft\Windows\CurrentVersion\Lxss"

BASE_PATH_VALUE = "BasePath"
NAME_VALUE = "DistributionName"

# (child key name, BasePath, DistributionName) as read from the store
RawRecord = tuple[str, str | None, str | None]


class RegistryAccessError(RuntimeError):
    """Raised when the registry exists but cannot be read."""


class DistroRegistry:
    """Discovers installed distributions and their disk images.

    Every call to list_distros() re-reads the live registry.

    Example:
        >>> registry = DistroRegistry()
        >>> for entry in registry.list_distros():
        ...     print(entry.name, entry.vhd_path)
    """

    def __init__(
        self,
        vhd_filename: str = DEFAULT_VHD_FILENAME,
        key_path: str = LXSS_KEY,
    ) -> None:
        """Initialize the registry scanner.

        Args:
            vhd_filename: Disk image filename inside each base path.
            key_path: Registry key under HKEY_CURRENT_USER to enumerate.
        """
        self._vhd_filename = vhd_filename
        self._key_path = key_path

    @property
    def vhd_filename(self) -> str:
        """Disk image filename looked up in each base path."""
        return self._vhd_filename

    def list_distros(self) -> list[DistroEntry]:
        """List distributions whose disk image exists right now.

        Returns:
            DistroEntry per registered distribution, in registry order.
            Empty if the Lxss key does not exist.

        Raises:
            RegistryAccessError: If the registry cannot be read.
        """
        entries: list[DistroEntry] = []
        for key_name, base_path, name in self._read_store():
            entry = self._resolve(key_name, base_path, name)
            if entry is not None:
                entries.append(entry)
        logger.debug("Discovered %d distribution(s)", len(entries))
        return entries

    def _resolve(self, key_name: str, base_path: str | None, name: str | None) -> DistroEntry | None:
        """Turn one raw registry record into an entry, or None to skip it."""
        if base_path is None or not base_path.strip():
            logger.debug("Skipping %s: no %s", key_name, BASE_PATH_VALUE)
            return None

        expanded = ntpath.expandvars(base_path.strip())
        vhd_path = Path(expanded) / self._vhd_filename

        if not vhd_path.exists():
            logger.info("Skipping %s: %s does not exist", name or key_name, vhd_path)
            return None

        return DistroEntry(name=(name or "").strip() or key_name, vhd_path=vhd_path)

    def _read_store(self) -> list[RawRecord]:
        """Read every child key of the Lxss key.

        Returns:
            Raw records; empty if the Lxss key is absent.

        Raises:
            RegistryAccessError: If the registry is unavailable or unreadable.
        """
        try:
            import winreg
        except ImportError as e:
            msg = "The Windows registry is not available on this platform"
            raise RegistryAccessError(msg) from e

        try:
            root = winreg.OpenKey(winreg.HKEY_CURRENT_USER, self._key_path)
        except FileNotFoundError:
            logger.info("Registry key %s not found", self._key_path)
            return []
        except OSError as e:
            msg = f"Cannot open registry key {self._key_path}: {e}"
            raise RegistryAccessError(msg) from e

        records: list[RawRecord] = []
        try:
            with root:
                subkey_count, _, _ = winreg.QueryInfoKey(root)
                for index in range(subkey_count):
                    key_name = winreg.EnumKey(root, index)
                    with winreg.OpenKey(root, key_name) as distro_key:
                        records.append(
                            (
                                key_name,
                                _query_string(winreg, distro_key, BASE_PATH_VALUE),
                                _query_string(winreg, distro_key, NAME_VALUE),
                            )
                        )
        except OSError as e:
            msg = f"Cannot read registry key {self._key_path}: {e}"
            raise RegistryAccessError(msg) from e

        return records


def _query_string(winreg: Any, key: Any, value_name: str) -> str | None:
    """Read a string value, returning None if it is missing or not a string."""
    try:
        value, _ = winreg.QueryValueEx(key, value_name)
    except FileNotFoundError:
        return None
    return value if isinstance(value, str) else None
