"""
Balanced Palette Strategies

Strategies picked automatically for images that would produce garish or
meaningless hue matches: a subtle fixed-saturation palette for low hue
diversity and a grayscale ramp for monochrome images.
"""

from typing import Sequence

from ..analysis import ColorLike, sort_by_lightness
from ..constants import (
    ANSI_HUE_ARRAY,
    MONOCHROME_COLOR8_SATURATION_FACTOR,
    MONOCHROME_SATURATION,
    MONOCHROME_SATURATION_THRESHOLD,
    SUBTLE_PALETTE_SATURATION,
)
from ..conversions import clamp, hsl_to_hex
from .base import Palette, build_pool, empty_palette, finalize


def _subtle_lightness(slot: int) -> float:
    # Spread of +-10 around 50 across slots 1-6
    return 50 + (slot - 2.5) * 4


def generate_subtle_balanced_palette(colors: Sequence[ColorLike], prefer_light: bool) -> Palette:
    """
    Generate a palette with the same subtle saturation in every chromatic slot.

    Per-color saturation of the image is ignored so a single vivid color
    cannot stand out against five muted ones.
    """
    pool = build_pool(colors)
    by_lightness = sort_by_lightness(pool.hexes)
    darkest = by_lightness[0]
    lightest = by_lightness[-1]

    chromatic_hues = [h.h for h in pool.hsls if h.s > MONOCHROME_SATURATION_THRESHOLD]
    avg_hue = sum(chromatic_hues) / len(chromatic_hues) if chromatic_hues else darkest.hsl.h

    palette = empty_palette()
    palette[0] = lightest.color if prefer_light else darkest.color
    palette[7] = darkest.color if prefer_light else lightest.color

    for i, hue in enumerate(ANSI_HUE_ARRAY):
        palette[i + 1] = hsl_to_hex(hue, SUBTLE_PALETTE_SATURATION, _subtle_lightness(i))

    if prefer_light:
        color8_lightness = max(0.0, lightest.hsl.l - 40)
    else:
        color8_lightness = min(100.0, darkest.hsl.l + 45)
    palette[8] = hsl_to_hex(avg_hue, SUBTLE_PALETTE_SATURATION * 0.5, color8_lightness)

    bright_saturation = SUBTLE_PALETTE_SATURATION + 8
    adjustment = -8 if prefer_light else 8
    for i, hue in enumerate(ANSI_HUE_ARRAY):
        lightness = clamp(_subtle_lightness(i) + adjustment, 0, 100)
        palette[i + 9] = hsl_to_hex(hue, bright_saturation, lightness)

    if prefer_light:
        palette[15] = hsl_to_hex(avg_hue, SUBTLE_PALETTE_SATURATION * 0.3,
                                 max(0.0, darkest.hsl.l - 5))
    else:
        palette[15] = hsl_to_hex(avg_hue, SUBTLE_PALETTE_SATURATION * 0.3,
                                 min(100.0, lightest.hsl.l + 5))

    return finalize(palette)


def generate_monochrome_palette(colors: Sequence[ColorLike], prefer_light: bool) -> Palette:
    """
    Generate a grayscale ramp tinted with the background's hue.

    Chromatic slots keep a near-zero saturation and only vary in lightness
    between the image's darkest and lightest colors.
    """
    pool = build_pool(colors)
    by_lightness = sort_by_lightness(pool.hexes)
    darkest = by_lightness[0]
    lightest = by_lightness[-1]
    base_hue = darkest.hsl.h

    palette = empty_palette()
    palette[0] = lightest.color if prefer_light else darkest.color
    palette[7] = darkest.color if prefer_light else lightest.color

    if prefer_light:
        start_l = darkest.hsl.l + 10
        end_l = min(darkest.hsl.l + 40, lightest.hsl.l - 10)
    else:
        start_l = max(darkest.hsl.l + 30, lightest.hsl.l - 40)
        end_l = lightest.hsl.l - 10
    step = (end_l - start_l) / 5

    for i in range(1, 7):
        lightness = start_l + (i - 1) * step
        palette[i] = hsl_to_hex(base_hue, MONOCHROME_SATURATION, lightness)

    if prefer_light:
        color8_lightness = max(0.0, darkest.hsl.l + 5)
    else:
        color8_lightness = min(100.0, lightest.hsl.l - 10)
    palette[8] = hsl_to_hex(base_hue,
                            MONOCHROME_SATURATION * MONOCHROME_COLOR8_SATURATION_FACTOR,
                            color8_lightness)

    adjustment = -10 if prefer_light else 10
    for i in range(1, 7):
        lightness = clamp(start_l + (i - 1) * step + adjustment, 0, 100)
        palette[i + 8] = hsl_to_hex(base_hue, MONOCHROME_SATURATION, lightness)

    if prefer_light:
        palette[15] = hsl_to_hex(base_hue, 2, max(0.0, darkest.hsl.l - 5))
    else:
        palette[15] = hsl_to_hex(base_hue, 2, min(100.0, lightest.hsl.l + 5))

    return finalize(palette)
