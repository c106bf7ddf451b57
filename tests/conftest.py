"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from wslcompact.models.distro import DistroEntry


class FakeKey:
    """In-memory registry key usable as a context manager."""

    def __init__(
        self,
        values: dict[str, Any] | None = None,
        subkeys: dict[str, "FakeKey"] | None = None,
    ) -> None:
        self.values = values or {}
        self.subkeys = subkeys or {}
        self.closed = False

    def __enter__(self) -> "FakeKey":
        return self

    def __exit__(self, *exc: object) -> None:
        self.closed = True


class FakeWinreg:
    """Stand-in for the winreg module backed by FakeKey objects."""

    HKEY_CURRENT_USER = object()

    def __init__(
        self,
        root: FakeKey | None,
        open_error: OSError | None = None,
        enum_error: OSError | None = None,
    ) -> None:
        self.root = root
        self.open_error = open_error
        self.enum_error = enum_error
        self.opened: list[str] = []

    def OpenKey(self, key: Any, sub_key: str) -> FakeKey:  # noqa: N802
        self.opened.append(sub_key)
        if key is self.HKEY_CURRENT_USER:
            if self.open_error is not None:
                raise self.open_error
            if self.root is None:
                raise FileNotFoundError(2, "The system cannot find the file specified")
            return self.root
        return key.subkeys[sub_key]

    def QueryInfoKey(self, key: FakeKey) -> tuple[int, int, int]:  # noqa: N802
        return len(key.subkeys), len(key.values), 0

    def EnumKey(self, key: FakeKey, index: int) -> str:  # noqa: N802
        if self.enum_error is not None:
            raise self.enum_error
        return list(key.subkeys)[index]

    def QueryValueEx(self, key: FakeKey, name: str) -> tuple[Any, int]:  # noqa: N802
        if name not in key.values:
            raise FileNotFoundError(2, "The system cannot find the file specified")
        return key.values[name], 1


def _lxss_key(*distros: tuple[str, str | None, str | None]) -> FakeKey:
    """Build an Lxss key from (guid, BasePath, DistributionName) tuples."""
    subkeys: dict[str, FakeKey] = {}
    for guid, base_path, name in distros:
        values: dict[str, Any] = {}
        if base_path is not None:
            values["BasePath"] = base_path
        if name is not None:
            values["DistributionName"] = name
        subkeys[guid] = FakeKey(values=values)
    return FakeKey(subkeys=subkeys)


@pytest.fixture
def install_winreg(monkeypatch: pytest.MonkeyPatch) -> Callable[..., FakeWinreg]:
    """Install a FakeWinreg as the winreg module for the test."""

    def _install(
        root: FakeKey | None,
        open_error: OSError | None = None,
        enum_error: OSError | None = None,
    ) -> FakeWinreg:
        fake = FakeWinreg(root, open_error=open_error, enum_error=enum_error)
        monkeypatch.setitem(sys.modules, "winreg", fake)
        return fake

    return _install


def _make_vhd(directory: Path, size: int, filename: str = "ext4.vhdx") -> Path:
    """Create a sparse disk image file of ``size`` bytes."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    with open(path, "wb") as f:
        f.truncate(size)
    return path


@pytest.fixture
def ubuntu_entry(tmp_path: Path) -> DistroEntry:
    """A distribution entry backed by a 4 KiB disk image."""
    return DistroEntry(name="Ubuntu", vhd_path=_make_vhd(tmp_path / "Ubuntu", 4096))


@pytest.fixture
def script_path(tmp_path: Path) -> Path:
    """Location for the transient DiskPart script."""
    return tmp_path / "wslcompact-diskpart.txt"


@pytest.fixture
def lxss_key() -> Callable[..., FakeKey]:
    """Factory building an Lxss key from (guid, BasePath, DistributionName) tuples."""
    return _lxss_key


@pytest.fixture
def make_vhd() -> Callable[..., Path]:
    """Factory creating sparse disk image files."""
    return _make_vhd


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config directory at a temporary APPDATA and return config.toml."""
    appdata = tmp_path / "AppData"
    monkeypatch.setenv("APPDATA", str(appdata))
    return appdata / "wslcompact" / "config.toml"
