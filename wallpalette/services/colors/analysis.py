"""
Color Analysis Module

Image classification heuristics (monochrome, low hue diversity) and the
color matching helpers shared by every palette strategy.
"""

from enum import Enum
from typing import Iterable, List, NamedTuple, Optional, Sequence, Set, Union

from loguru import logger

from .constants import (
    BRIGHT_COLOR_LIGHTNESS_BOOST,
    BRIGHT_COLOR_SATURATION_BOOST,
    DARK_COLOR_THRESHOLD,
    DIVERSITY_SAMPLE_SIZE,
    HUE_BUCKET_COUNT,
    HUE_BUCKET_SIZE,
    MIN_CHROMATIC_SATURATION,
    MIN_OCCUPIED_HUE_BUCKETS,
    MONOCHROME_IMAGE_THRESHOLD,
    MONOCHROME_SATURATION_THRESHOLD,
    TOO_BRIGHT_THRESHOLD,
    TOO_DARK_THRESHOLD,
)
from .conversions import HSLColor, RGBColor, hex_to_hsl, hsl_to_hex, hue_distance
from .quantize import DominantColor

ColorLike = Union[RGBColor, DominantColor, str]


class ImageClass(str, Enum):
    """Outcome of image classification, used when no strategy is pinned."""
    MONOCHROME = "monochrome"
    LOW_DIVERSITY = "low_diversity"
    DIVERSE = "diverse"


class LightnessEntry(NamedTuple):
    color: str
    hsl: HSLColor


def as_rgb_list(colors: Iterable[ColorLike]) -> List[RGBColor]:
    """Normalize dominant colors, RGB colors or hex strings to RGBColor."""
    result = []
    for c in colors:
        if isinstance(c, DominantColor):
            result.append(c.color)
        elif isinstance(c, RGBColor):
            result.append(c)
        else:
            result.append(RGBColor.from_hex(c))
    return result


def is_dark_color(hex_color: str) -> bool:
    return hex_to_hsl(hex_color).l < DARK_COLOR_THRESHOLD


def is_monochrome_image(colors: Sequence[ColorLike]) -> bool:
    """
    Detect whether the extracted colors are mostly grayscale.

    True when more than MONOCHROME_IMAGE_THRESHOLD of the colors have a
    saturation below MONOCHROME_SATURATION_THRESHOLD.
    """
    rgb = as_rgb_list(colors)
    if not rgb:
        return False
    low_saturation = sum(1 for c in rgb if c.to_hsl().s < MONOCHROME_SATURATION_THRESHOLD)
    return low_saturation / len(rgb) > MONOCHROME_IMAGE_THRESHOLD


def has_low_color_diversity(colors: Sequence[ColorLike]) -> bool:
    """
    Detect whether chromatic colors cluster in too few hue buckets.

    Looks at the first DIVERSITY_SAMPLE_SIZE colors, keeps the chromatic ones
    and drops their hues into 30 degree buckets. Fewer than three chromatic
    colors cannot be judged and count as diverse.
    """
    sampled = as_rgb_list(colors)[:DIVERSITY_SAMPLE_SIZE]

    hues = []
    for color in sampled:
        hsl = color.to_hsl()
        if hsl.s >= MONOCHROME_SATURATION_THRESHOLD:
            hues.append(hsl.h)

    if len(hues) < 3:
        return False

    occupied = {int(h // HUE_BUCKET_SIZE) % HUE_BUCKET_COUNT for h in hues}
    return len(occupied) < MIN_OCCUPIED_HUE_BUCKETS


def classify_image(colors: Sequence[ColorLike]) -> ImageClass:
    """Pick the image class that drives automatic strategy selection."""
    if is_monochrome_image(colors):
        return ImageClass.MONOCHROME
    if has_low_color_diversity(colors):
        return ImageClass.LOW_DIVERSITY
    return ImageClass.DIVERSE


def _find_by_lightness(hsls: Sequence[HSLColor], find_lightest: bool,
                       exclude: Optional[Set[int]] = None) -> int:
    best_index = 0
    best_lightness = -1.0 if find_lightest else 101.0

    for i, hsl in enumerate(hsls):
        if exclude and i in exclude:
            continue
        better = hsl.l > best_lightness if find_lightest else hsl.l < best_lightness
        if better:
            best_lightness = hsl.l
            best_index = i

    return best_index


def find_background_index(hsls: Sequence[HSLColor], prefer_light: bool) -> int:
    """Darkest color for dark themes, lightest for light themes."""
    return _find_by_lightness(hsls, prefer_light)


def find_foreground_index(hsls: Sequence[HSLColor], prefer_light: bool,
                          used: Set[int]) -> int:
    """The lightness extreme opposite to the background."""
    return _find_by_lightness(hsls, not prefer_light, used)


def color_score(hsl: HSLColor, target_hue: float) -> float:
    """
    Score a candidate for an ANSI hue slot; lower is better.

    Hue accuracy dominates, then saturation is favored, with penalties for
    near-gray and for too dark or too bright candidates.
    """
    hue_diff = hue_distance(hsl.h, target_hue) * 3
    saturation_penalty = 50 if hsl.s < MIN_CHROMATIC_SATURATION else 0
    saturation_reward = (100 - hsl.s) / 2
    lightness_penalty = 10 if (hsl.l < TOO_DARK_THRESHOLD or hsl.l > TOO_BRIGHT_THRESHOLD) else 0

    return hue_diff + saturation_penalty + saturation_reward + lightness_penalty


def find_best_color_match(target_hue: float, hsls: Sequence[HSLColor],
                          used: Set[int]) -> int:
    """
    Index of the best unused candidate for target_hue.

    Falls back to index 0 when every candidate is already used.
    """
    best_index = -1
    best_score = float("inf")

    for i, hsl in enumerate(hsls):
        if i in used:
            continue
        score = color_score(hsl, target_hue)
        if score < best_score:
            best_score = score
            best_index = i

    if best_index == -1:
        logger.debug(f"No unused candidate for hue {target_hue}, reusing index 0")
        return 0
    return best_index


def bright_version(hex_color: str) -> str:
    """Lighter, slightly more saturated variant for the bright ANSI slots."""
    hsl = hex_to_hsl(hex_color)
    new_lightness = min(100.0, hsl.l + BRIGHT_COLOR_LIGHTNESS_BOOST)
    new_saturation = min(100.0, hsl.s * BRIGHT_COLOR_SATURATION_BOOST)
    return hsl_to_hex(hsl.h, new_saturation, new_lightness)


def adjust_lightness(hex_color: str, target_lightness: float) -> str:
    """Same hue and saturation at a new lightness."""
    hsl = hex_to_hsl(hex_color)
    return hsl_to_hex(hsl.h, hsl.s, target_lightness)


def sort_by_lightness(colors: Sequence[ColorLike]) -> List[LightnessEntry]:
    """Colors with their HSL values, darkest first."""
    entries = [LightnessEntry(c.hex, c.to_hsl()) for c in as_rgb_list(colors)]
    entries.sort(key=lambda e: e.hsl.l)
    return entries
