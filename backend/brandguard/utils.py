"""
Utility functions for BrandGuard: color parsing, distances and geometry helpers.
"""
import math
import re
from typing import Any, NamedTuple, Optional

HEX_PATTERN = re.compile(r"^#?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$", re.IGNORECASE)

# Largest possible distance inside the 0-255 RGB cube
MAX_COLOR_DISTANCE = math.sqrt(3 * 255 ** 2)


class RGB(NamedTuple):
    """An sRGB triple with 0-255 components."""
    r: int
    g: int
    b: int


def hex_to_rgb(hex_color: Optional[str]) -> Optional[RGB]:
    """
    Parse '#RRGGBB' or 'RRGGBB' (case-insensitive).
    Returns None for anything malformed, which callers treat as an unknown color.
    """
    if not isinstance(hex_color, str):
        return None
    match = HEX_PATTERN.match(hex_color.strip())
    if not match:
        return None
    return RGB(*(int(part, 16) for part in match.groups()))


def rgb_to_hex(rgb: RGB) -> str:
    """Convert an RGB triple to an uppercase '#RRGGBB' string."""
    parts = [max(0, min(255, round(c))) for c in rgb]
    return "#{:02X}{:02X}{:02X}".format(*parts)


def coerce_color(value: Any) -> Optional[str]:
    """
    Normalize a color as delivered by a host application.

    Hosts send either a hex string or a mapping with r/g/b (or red/green/blue)
    keys. Hex strings are upper-cased. Anything else is kept as a
    "type(repr)" string so it surfaces as a violation without a suggestion.
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        value = value.strip()
        if hex_to_rgb(value) is not None and not value.startswith("#"):
            value = "#" + value
        return value.upper()
    try:
        if isinstance(value, (tuple, list)) and len(value) == 3:
            return rgb_to_hex(RGB(*value))
        if isinstance(value, dict):
            r = value.get("r", value.get("red", 0)) or 0
            g = value.get("g", value.get("green", 0)) or 0
            b = value.get("b", value.get("blue", 0)) or 0
            return rgb_to_hex(RGB(r, g, b))
    except (TypeError, ValueError, OverflowError):
        pass
    return f"{type(value).__name__}({value!r})"


def color_distance(rgb1: RGB, rgb2: RGB) -> float:
    """Euclidean distance between two colors in RGB space."""
    dr = rgb1[0] - rgb2[0]
    dg = rgb1[1] - rgb2[1]
    db = rgb1[2] - rgb2[2]
    return math.sqrt(dr * dr + dg * dg + db * db)


def normalize_font_name(font_name: Optional[str]) -> str:
    """Lowercase, trim and collapse internal whitespace of a font name."""
    if not font_name:
        return ""
    return re.sub(r"\s+", " ", font_name.strip().lower())


def aspect_ratio(width: float, height: float) -> float:
    """Width over height; 0 for a zero-height box."""
    if not height:
        return 0
    return width / height
