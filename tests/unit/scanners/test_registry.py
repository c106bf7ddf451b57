"""Unit tests for DistroRegistry.

Tests for registry-based distribution discovery using an in-memory winreg.
"""

import sys
from pathlib import Path

import pytest
from wslcompact.scanners.registry import LXSS_KEY, DistroRegistry, RegistryAccessError


class TestListDistros:
    """Tests for DistroRegistry.list_distros."""

    def test_missing_root_key_returns_empty(self, install_winreg) -> None:
        """An absent Lxss key means no distributions, not an error."""
        install_winreg(None)

        assert DistroRegistry().list_distros() == []

    def test_reads_lxss_key(self, install_winreg, lxss_key) -> None:
        """The per-user Lxss key is opened."""
        fake = install_winreg(lxss_key())

        DistroRegistry().list_distros()

        assert fake.opened[0] == LXSS_KEY

    def test_resolves_existing_disks_in_order(
        self, install_winreg, lxss_key, make_vhd, tmp_path: Path
    ) -> None:
        """Entries are returned in registry order with ext4.vhdx appended."""
        ubuntu = make_vhd(tmp_path / "ubuntu", 10)
        kali = make_vhd(tmp_path / "kali", 10)
        install_winreg(
            lxss_key(
                ("{a}", str(ubuntu.parent), "Ubuntu"),
                ("{b}", str(kali.parent), "Kali-Linux"),
            )
        )

        entries = DistroRegistry().list_distros()

        assert [e.name for e in entries] == ["Ubuntu", "Kali-Linux"]
        assert entries[0].vhd_path == ubuntu
        assert entries[1].vhd_path == kali

    def test_skips_missing_disk(self, install_winreg, lxss_key, tmp_path: Path) -> None:
        """Entries whose disk image does not exist are skipped (e.g. WSL 1)."""
        install_winreg(lxss_key(("{a}", str(tmp_path / "wsl1"), "Legacy")))

        assert DistroRegistry().list_distros() == []

    @pytest.mark.parametrize("base_path", [None, "", "   "])
    def test_skips_blank_base_path(self, install_winreg, lxss_key, base_path) -> None:
        """Entries without a usable BasePath are skipped."""
        install_winreg(lxss_key(("{a}", base_path, "Broken")))

        assert DistroRegistry().list_distros() == []

    def test_expands_percent_placeholders(
        self,
        install_winreg,
        lxss_key,
        make_vhd,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """%VAR% placeholders are expanded from the process environment."""
        vhd = make_vhd(tmp_path / "Packages" / "Ubuntu" / "LocalState", 10)
        monkeypatch.setenv("WSLCOMPACT_TEST_ROOT", str(tmp_path))
        install_winreg(
            lxss_key(("{a}", "%WSLCOMPACT_TEST_ROOT%/Packages/Ubuntu/LocalState", "Ubuntu"))
        )

        entries = DistroRegistry().list_distros()

        assert len(entries) == 1
        assert entries[0].vhd_path == vhd

    def test_missing_name_falls_back_to_key(
        self, install_winreg, lxss_key, make_vhd, tmp_path: Path
    ) -> None:
        """A distribution without DistributionName is named after its key."""
        vhd = make_vhd(tmp_path / "noname", 10)
        install_winreg(lxss_key(("{guid-1}", str(vhd.parent), None)))

        entries = DistroRegistry().list_distros()

        assert entries[0].name == "{guid-1}"

    def test_duplicates_are_kept(self, install_winreg, lxss_key, make_vhd, tmp_path: Path) -> None:
        """Two keys pointing at the same disk yield two entries."""
        vhd = make_vhd(tmp_path / "shared", 10)
        install_winreg(
            lxss_key(
                ("{a}", str(vhd.parent), "Ubuntu"),
                ("{b}", str(vhd.parent), "Ubuntu"),
            )
        )

        assert len(DistroRegistry().list_distros()) == 2

    def test_custom_vhd_filename(self, install_winreg, lxss_key, make_vhd, tmp_path: Path) -> None:
        """The disk image filename is configurable."""
        vhd = make_vhd(tmp_path / "custom", 10, filename="disk.vhdx")
        install_winreg(lxss_key(("{a}", str(vhd.parent), "Custom")))

        assert DistroRegistry().list_distros() == []
        assert DistroRegistry(vhd_filename="disk.vhdx").list_distros()[0].vhd_path == vhd

    def test_requery_sees_new_distributions(
        self, install_winreg, lxss_key, make_vhd, tmp_path: Path
    ) -> None:
        """Each call re-reads the registry."""
        fake = install_winreg(lxss_key())
        registry = DistroRegistry()
        assert registry.list_distros() == []

        vhd = make_vhd(tmp_path / "new", 10)
        fake.root = lxss_key(("{a}", str(vhd.parent), "New"))

        assert [e.name for e in registry.list_distros()] == ["New"]

    def test_access_denied_raises(self, install_winreg) -> None:
        """A permission error opening the key is fatal."""
        install_winreg(None, open_error=PermissionError(5, "Access is denied"))

        with pytest.raises(RegistryAccessError, match="Cannot open registry key"):
            DistroRegistry().list_distros()

    def test_enumeration_error_raises(self, install_winreg, lxss_key, tmp_path: Path) -> None:
        """An error while enumerating child keys is fatal."""
        install_winreg(
            lxss_key(("{a}", str(tmp_path), "Ubuntu")),
            enum_error=OSError(5, "Access is denied"),
        )

        with pytest.raises(RegistryAccessError, match="Cannot read registry key"):
            DistroRegistry().list_distros()

    def test_no_winreg_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without a Windows registry discovery is impossible."""
        monkeypatch.setitem(sys.modules, "winreg", None)

        with pytest.raises(RegistryAccessError, match="not available"):
            DistroRegistry().list_distros()
