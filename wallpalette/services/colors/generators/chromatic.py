"""
Chromatic Palette Strategy

The default strategy for diverse images: background and foreground come from
the lightness extremes of the image, slots 1-6 are nearest-hue matches
against the six ANSI target hues.
"""

from typing import Sequence

from ..analysis import (
    ColorLike,
    bright_version,
    find_background_index,
    find_best_color_match,
    find_foreground_index,
    is_dark_color,
)
from ..constants import ANSI_HUE_ARRAY
from ..conversions import hsl_to_hex
from .base import Palette, build_pool, empty_palette, finalize


def generate_chromatic_palette(colors: Sequence[ColorLike], prefer_light: bool) -> Palette:
    """
    Generate a vibrant palette from a diverse set of dominant colors.

    Args:
        colors: Dominant colors, most frequent first
        prefer_light: Generate a light theme (light background)

    Returns:
        16 ANSI colors
    """
    pool = build_pool(colors)

    bg_index = find_background_index(pool.hsls, prefer_light)
    used = {bg_index}
    fg_index = find_foreground_index(pool.hsls, prefer_light, used)
    used.add(fg_index)

    palette = empty_palette()
    palette[0] = pool.hexes[bg_index]
    palette[7] = pool.hexes[fg_index]

    for i, target_hue in enumerate(ANSI_HUE_ARRAY):
        match_index = find_best_color_match(target_hue, pool.hsls, used)
        palette[i + 1] = pool.hexes[match_index]
        used.add(match_index)

    # color8: gray for comments, derived from the background
    bg_hsl = pool.hsls[bg_index]
    if is_dark_color(palette[0]):
        color8_lightness = min(100.0, bg_hsl.l + 45)
    else:
        color8_lightness = max(0.0, bg_hsl.l - 40)
    palette[8] = hsl_to_hex(bg_hsl.h, bg_hsl.s * 0.5, color8_lightness)

    for i in range(1, 7):
        palette[i + 8] = bright_version(palette[i])

    palette[15] = bright_version(palette[7])

    return finalize(palette)
