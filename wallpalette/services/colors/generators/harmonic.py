"""
Harmonic Palette Strategies

Single-hue (monochromatic) and adjacent-hue (analogous) palettes. Both trade
full spectrum coverage for visual harmony around one base hue taken from the
image.
"""

from typing import Sequence, Tuple

from ..analysis import ColorLike, sort_by_lightness
from ..constants import ANSI_HUE_ARRAY, MONOCHROME_SATURATION_THRESHOLD
from ..conversions import HSLColor, clamp, hsl_to_hex, hue_distance
from .base import ColorPool, Palette, build_pool, empty_palette, finalize

MONOCHROMATIC_SATURATION_LEVELS = [40, 50, 45, 55, 42, 48]
MONOCHROMATIC_BRIGHT_SATURATION_LEVELS = [60, 70, 65, 75, 62, 68]
MONOCHROMATIC_HOME_SATURATION_BAND = (40, 70)

ANALOGOUS_OFFSETS = [-30, -20, -10, 10, 20, 30]
ANALOGOUS_SATURATION_LEVELS = [45, 50, 48, 52, 47, 50]


def _most_frequent_chromatic(pool: ColorPool) -> HSLColor:
    for hsl in pool.hsls:
        if hsl.s > MONOCHROME_SATURATION_THRESHOLD:
            return hsl
    return pool.hsls[0]


def _most_saturated_chromatic(pool: ColorPool) -> HSLColor:
    chromatic = [h for h in pool.hsls if h.s > MONOCHROME_SATURATION_THRESHOLD]
    if not chromatic:
        return pool.hsls[0]
    return max(chromatic, key=lambda h: h.s)


def nearest_ansi_slot(hue: float) -> int:
    """Index (0-5) of the ANSI target hue closest to hue."""
    return min(range(len(ANSI_HUE_ARRAY)), key=lambda i: hue_distance(hue, ANSI_HUE_ARRAY[i]))


def _extremes(pool: ColorPool) -> Tuple[HSLColor, HSLColor]:
    by_lightness = sort_by_lightness(pool.hexes)
    return by_lightness[0].hsl, by_lightness[-1].hsl


def generate_monochromatic_palette(colors: Sequence[ColorLike], prefer_light: bool) -> Palette:
    """
    Generate a palette of shades of a single hue.

    The base color is the most frequent reasonably saturated color. Its hue
    maps to the nearest ANSI slot, which keeps the base color's own
    saturation; the other five chromatic slots use a fixed saturation table
    at the same hue.
    """
    pool = build_pool(colors)
    base = _most_frequent_chromatic(pool)
    base_hue = base.h
    darkest, lightest = _extremes(pool)
    home = nearest_ansi_slot(base_hue)

    palette = empty_palette()

    if prefer_light:
        palette[0] = hsl_to_hex(base_hue, 8, max(85.0, lightest.l))
        palette[7] = hsl_to_hex(base_hue, 25, min(30.0, darkest.l + 10))
    else:
        palette[0] = hsl_to_hex(base_hue, 15, min(15.0, darkest.l))
        palette[7] = hsl_to_hex(base_hue, 10, max(80.0, lightest.l - 10))

    lightness_base = 45 if prefer_light else 55
    saturations = list(MONOCHROMATIC_SATURATION_LEVELS)
    saturations[home] = clamp(base.s, *MONOCHROMATIC_HOME_SATURATION_BAND)

    for i in range(6):
        lightness = lightness_base + (i - 2.5) * 5
        palette[i + 1] = hsl_to_hex(base_hue, saturations[i], lightness)

    palette[8] = hsl_to_hex(base_hue, 20, 40 if prefer_light else 65)

    adjustment = -8 if prefer_light else 8
    for i in range(6):
        lightness = clamp(lightness_base + (i - 2.5) * 5 + adjustment, 0, 100)
        bright_saturation = max(MONOCHROMATIC_BRIGHT_SATURATION_LEVELS[i], saturations[i] + 10)
        palette[i + 9] = hsl_to_hex(base_hue, min(100.0, bright_saturation), lightness)

    if prefer_light:
        palette[15] = hsl_to_hex(base_hue, 30, min(25.0, darkest.l + 5))
    else:
        palette[15] = hsl_to_hex(base_hue, 15, max(85.0, lightest.l))

    return finalize(palette)


def generate_analogous_palette(colors: Sequence[ColorLike], prefer_light: bool) -> Palette:
    """
    Generate a palette of hues adjacent to the image's most saturated color.

    Slots 1-6 sit at -30..+30 degrees around the base hue with staggered
    saturation and lightness.
    """
    pool = build_pool(colors)
    base_hue = _most_saturated_chromatic(pool).h
    darkest, lightest = _extremes(pool)

    palette = empty_palette()

    if prefer_light:
        palette[0] = hsl_to_hex(base_hue, 12, max(90.0, lightest.l))
        palette[7] = hsl_to_hex(base_hue, 30, min(25.0, darkest.l + 10))
    else:
        palette[0] = hsl_to_hex(base_hue, 18, min(12.0, darkest.l))
        palette[7] = hsl_to_hex(base_hue, 15, max(85.0, lightest.l - 10))

    lightness_base = 45 if prefer_light else 58

    for i, offset in enumerate(ANALOGOUS_OFFSETS):
        hue = (base_hue + offset) % 360
        lightness = lightness_base + (-3 if i % 2 == 0 else 3)
        palette[i + 1] = hsl_to_hex(hue, ANALOGOUS_SATURATION_LEVELS[i], lightness)

    palette[8] = hsl_to_hex(base_hue, 20, 55) if prefer_light else hsl_to_hex(base_hue, 15, 45)

    for i, offset in enumerate(ANALOGOUS_OFFSETS):
        hue = (base_hue + offset) % 360
        lightness = 38 if prefer_light else 68
        palette[i + 9] = hsl_to_hex(hue, ANALOGOUS_SATURATION_LEVELS[i] + 8, lightness)

    palette[15] = hsl_to_hex(base_hue, 20, 20) if prefer_light else hsl_to_hex(base_hue, 10, 95)

    return finalize(palette)
