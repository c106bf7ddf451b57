"""Compaction settings.

This module provides the configuration model and I/O functions for
wslcompact. Every setting has a default, so the tool runs without any
configuration file.

Configuration is stored in %APPDATA%\\wslcompact\\config.toml
"""

import tomllib
from pathlib import Path
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from wslcompact.core.paths import get_config_path

DEFAULT_SETTLE_SECONDS = 5.0
DEFAULT_VHD_FILENAME = "ext4.vhdx"


class CompactConfig(BaseModel):
    """Configuration for a compaction run.

    Attributes:
        settle_seconds: Delay after shutdown before touching any disk file.
        vhd_filename: Disk image filename inside a distribution's base path.
        wsl_executable: Command used to shut down and warm-start WSL.
        diskpart_executable: Command used to compact disk images.
        command_timeout_seconds: Timeout for WSL commands (DiskPart has none).
        pause_on_exit: Wait for a keypress at the end of interactive runs.
    """

    model_config = ConfigDict(extra="forbid")

    settle_seconds: Annotated[
        float,
        Field(ge=0, le=120, description="Settle delay after shutdown (0-120s)"),
    ] = DEFAULT_SETTLE_SECONDS
    vhd_filename: Annotated[
        str,
        Field(min_length=1, description="Disk image filename"),
    ] = DEFAULT_VHD_FILENAME
    wsl_executable: Annotated[
        str,
        Field(min_length=1, description="WSL command"),
    ] = "wsl.exe"
    diskpart_executable: Annotated[
        str,
        Field(min_length=1, description="DiskPart command"),
    ] = "diskpart.exe"
    command_timeout_seconds: Annotated[
        int,
        Field(ge=5, le=600, description="Timeout for WSL commands (5-600s)"),
    ] = 60
    pause_on_exit: Annotated[
        bool,
        Field(description="Wait for a keypress at the end of interactive runs"),
    ] = True

    @field_validator("vhd_filename")
    @classmethod
    def validate_filename(cls, v: str) -> str:
        """Reject filenames that contain a directory component."""
        if "/" in v or "\\" in v:
            msg = "vhd_filename must be a bare filename"
            raise ValueError(msg)
        return v


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when an explicitly requested config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when a config file cannot be parsed."""


def load_config(path: Path | None = None) -> CompactConfig:
    """Load configuration from a TOML file.

    A missing file at the default location yields the default configuration;
    a missing file at an explicit path is an error.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated CompactConfig object.

    Raises:
        ConfigNotFoundError: If an explicit config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        if path is None:
            return get_default_config()
        raise ConfigNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return CompactConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def save_config(config: CompactConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The CompactConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    import os
    from tempfile import NamedTemporaryFile

    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def get_default_config() -> CompactConfig:
    """Create a default CompactConfig.

    Returns:
        CompactConfig with default settings.
    """
    return CompactConfig()
