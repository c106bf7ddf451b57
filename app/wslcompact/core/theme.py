"""Console color theme.

Report colors can be overridden in <config dir>/theme.toml:

    [colors]
    phase = "#0e8ac8"
    reclaimed = "#c1ff62"

Each override is validated on its own; a bad value falls back to the
default for that key only.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from wslcompact.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)


def parse_hex_color(value: object) -> str:
    """Normalize a #RGB or #RRGGBB color string.

    Raises:
        ValueError: If the value is not a hex color.
    """
    if not isinstance(value, str):
        raise ValueError("color must be a string")
    color = value.strip()
    if not color.startswith("#"):
        raise ValueError("color must start with '#'")
    digits = color[1:]
    if len(digits) not in (3, 6):
        raise ValueError("color must be #RGB or #RRGGBB format")
    try:
        int(digits, 16)
    except ValueError:
        raise ValueError(f"invalid hex color '{color}'") from None
    return color


class ThemeColors(BaseModel):
    """Colors used by the console report."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"
    phase: str = "#0e8ac8"
    distro: str = "#69B9A1"
    reclaimed: str = "#c1ff62"

    @field_validator("*", mode="before")
    @classmethod
    def check_color(cls, v: object, info: Any) -> str:
        try:
            return parse_hex_color(v)
        except ValueError as e:
            raise ValueError(f"{info.field_name}: {e}") from None


def _load_toml_colors(path: Path) -> dict[str, object] | None:
    """Read the [colors] table of a theme file.

    Returns:
        The raw table, or None if the file is missing or unreadable.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return None
    return colors


def load_theme() -> ThemeColors:
    """Build ThemeColors from the defaults and the user's valid overrides."""
    path = get_user_theme_path()
    raw = _load_toml_colors(path)
    if not raw:
        return ThemeColors()

    overrides: dict[str, str] = {}
    for key, value in raw.items():
        if key not in ThemeColors.model_fields:
            logger.warning("Unknown theme color '%s' in %s", key, path)
            continue
        try:
            overrides[key] = parse_hex_color(value)
        except ValueError as e:
            logger.warning("Theme color '%s' in %s: %s", key, path, e)

    try:
        return ThemeColors(**overrides)
    except ValidationError as e:
        logger.warning("Theme validation failed, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Map ThemeColors to the Rich style names used in markup."""
    if colors is None:
        colors = load_theme()
    return Theme(
        {
            "text": colors.text,
            "muted": colors.muted,
            "dim": colors.muted,
            "header": colors.header,
            "bold_header": f"bold {colors.header}",
            "border": colors.border,
            "success": colors.success,
            "warning": colors.warning,
            "error": f"bold {colors.error}",
            "info": colors.info,
            "phase": f"bold {colors.phase}",
            "distro": f"bold {colors.distro}",
            "reclaimed": f"bold {colors.reclaimed}",
        }
    )


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Return the Rich theme, loading it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme


def reload_theme() -> Theme:
    """Discard the cached theme and load it again."""
    global _cached_theme
    _cached_theme = get_rich_theme()
    return _cached_theme
