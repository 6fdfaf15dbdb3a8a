"""
Color Conversion Utilities

RGB, HSL and hex conversions used throughout palette generation. HSL values
use degrees for hue (0-360, wrapping) and percent for saturation and
lightness (0-100). Conversions go through Python's colorsys.
"""

import colorsys
from dataclasses import dataclass
from typing import Tuple


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def _to_channel(x: float) -> int:
    # Half-up rounding to an 8-bit channel
    return int(clamp(x * 255.0 + 0.5, 0, 255))


@dataclass(frozen=True)
class RGBColor:
    """8-bit RGB color."""
    r: int
    g: int
    b: int

    @property
    def hex(self) -> str:
        return rgb_to_hex(self.r, self.g, self.b)

    def to_hsl(self) -> "HSLColor":
        return rgb_to_hsl(self.r, self.g, self.b)

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    @classmethod
    def from_hex(cls, hex_color: str) -> "RGBColor":
        return cls(*hex_to_rgb(hex_color))


@dataclass(frozen=True)
class HSLColor:
    """Color in hue (degrees), saturation and lightness (percent)."""
    h: float
    s: float
    l: float

    def to_rgb(self) -> RGBColor:
        return hsl_to_rgb(self.h, self.s, self.l)

    @property
    def hex(self) -> str:
        return hsl_to_hex(self.h, self.s, self.l)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert RGB channels to an uppercase #RRGGBB string."""
    return f"#{int(r):02X}{int(g):02X}{int(b):02X}"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """
    Convert a hex color string to an RGB tuple.

    Args:
        hex_color: Color in format #RRGGBB (the # is optional)

    Returns:
        Tuple of (r, g, b) in 0-255

    Raises:
        ValueError: If the string is not a 6-digit hex color
    """
    hex_clean = hex_color.lstrip('#')
    if len(hex_clean) != 6:
        raise ValueError(f"Invalid hex color format: {hex_color}")

    try:
        return tuple(int(hex_clean[i:i+2], 16) for i in (0, 2, 4))
    except ValueError:
        raise ValueError(f"Invalid hex color format: {hex_color}")


def rgb_to_hsl(r: int, g: int, b: int) -> HSLColor:
    """
    Convert 8-bit RGB to HSL.

    Returns:
        HSLColor with h in [0, 360), s and l in [0, 100]
    """
    h, l, s = colorsys.rgb_to_hls(r / 255.0, g / 255.0, b / 255.0)
    return HSLColor(h * 360.0, s * 100.0, l * 100.0)


def hsl_to_rgb(h: float, s: float, l: float) -> RGBColor:
    """
    Convert HSL to 8-bit RGB.

    Hue wraps around the circle; saturation and lightness are clamped to
    [0, 100] before conversion.
    """
    hue = (h % 360.0) / 360.0
    sat = clamp(s, 0.0, 100.0) / 100.0
    light = clamp(l, 0.0, 100.0) / 100.0
    r, g, b = colorsys.hls_to_rgb(hue, light, sat)
    return RGBColor(_to_channel(r), _to_channel(g), _to_channel(b))


def hsl_to_hex(h: float, s: float, l: float) -> str:
    """Convert HSL to an uppercase #RRGGBB string."""
    return hsl_to_rgb(h, s, l).hex


def hex_to_hsl(hex_color: str) -> HSLColor:
    """Convert a hex color string to HSL."""
    return rgb_to_hsl(*hex_to_rgb(hex_color))


def hue_distance(hue1: float, hue2: float) -> float:
    """
    Circular distance between two hues in degrees.

    Returns:
        Minimum angular separation in [0, 180]
    """
    diff = abs(hue1 - hue2) % 360.0
    return min(diff, 360.0 - diff)
