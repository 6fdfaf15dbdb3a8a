"""
Material Palette Strategy

Clean Material Design backgrounds and foregrounds with chromatic slots still
matched from the image.
"""

from typing import Sequence

from ..analysis import ColorLike, find_best_color_match
from ..constants import ANSI_HUE_ARRAY
from ..conversions import clamp, hex_to_hsl, hsl_to_hex
from .base import Palette, build_pool, empty_palette, finalize

MATERIAL_LIGHT = {"background": "#FAFAFA", "foreground": "#212121",
                  "gray": "#757575", "bright_foreground": "#000000"}
MATERIAL_DARK = {"background": "#121212", "foreground": "#FFFFFF",
                 "gray": "#9E9E9E", "bright_foreground": "#FFFFFF"}

MIN_MATERIAL_SATURATION = 35


def generate_material_palette(colors: Sequence[ColorLike], prefer_light: bool) -> Palette:
    """
    Generate a Material Design inspired palette.

    Background, foreground, gray and bright foreground are constants. Slots
    1-6 are nearest-hue matches from the image with saturation floored at 35
    and lightness clamped to a narrow band.
    """
    pool = build_pool(colors)
    scheme = MATERIAL_LIGHT if prefer_light else MATERIAL_DARK

    palette = empty_palette()
    palette[0] = scheme["background"]
    palette[7] = scheme["foreground"]

    used = set()
    for i, target_hue in enumerate(ANSI_HUE_ARRAY):
        match_index = find_best_color_match(target_hue, pool.hsls, used)
        hsl = pool.hsls[match_index]

        saturation = max(hsl.s, MIN_MATERIAL_SATURATION)
        lightness = clamp(hsl.l, 35, 60) if prefer_light else clamp(hsl.l, 45, 70)

        palette[i + 1] = hsl_to_hex(hsl.h, saturation, lightness)
        used.add(match_index)

    palette[8] = scheme["gray"]

    for i in range(1, 7):
        hsl = hex_to_hsl(palette[i])
        bright_saturation = min(100.0, hsl.s + 8)
        if prefer_light:
            bright_lightness = max(30.0, hsl.l - 8)
        else:
            bright_lightness = min(75.0, hsl.l + 8)
        palette[i + 8] = hsl_to_hex(hsl.h, bright_saturation, bright_lightness)

    palette[15] = scheme["bright_foreground"]

    return finalize(palette)
