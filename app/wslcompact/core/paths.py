"""Path management for wslcompact.

The configuration directory follows the platform convention:

- Windows: %APPDATA%\\wslcompact\\
- Elsewhere: $XDG_CONFIG_HOME/wslcompact/ or ~/.config/wslcompact/

The DiskPart script lives in the process temp directory under a fixed
name, so one run always reuses (and finally removes) the same file.
"""

import os
import tempfile
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "wslcompact"

# Name of the transient DiskPart script
SCRIPT_FILENAME = "wslcompact-diskpart.txt"


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to %APPDATA%/wslcompact, XDG_CONFIG_HOME/wslcompact,
        or ~/.config/wslcompact, in that order of preference.
    """
    appdata = os.environ.get("APPDATA")
    if appdata:
        return Path(appdata) / APP_NAME
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to <config dir>/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Get the user theme configuration path.

    Returns:
        Path to <config dir>/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_script_path() -> Path:
    """Get the transient DiskPart script path.

    Returns:
        Path to <temp dir>/wslcompact-diskpart.txt.
    """
    return Path(tempfile.gettempdir()) / SCRIPT_FILENAME

