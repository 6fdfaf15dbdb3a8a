"""
Brightness Normalization Module

Corrective pass run on every generated palette to keep slots 1-7 readable
against the background. Only lightness changes: the background (slot 0) and
every hue are left alone, and a second run is a no-op.
"""

from typing import Dict, List, Sequence

from loguru import logger

from .analysis import adjust_lightness, bright_version
from .constants import (
    ABSOLUTE_MIN_LIGHTNESS,
    BRIGHT_THEME_THRESHOLD,
    MAX_LIGHTNESS_ON_LIGHT_BG,
    MIN_LIGHTNESS_ON_DARK_BG,
    OUTLIER_LIGHTNESS_THRESHOLD,
    OUTLIER_PULL,
    VERY_DARK_BACKGROUND_THRESHOLD,
    VERY_LIGHT_BACKGROUND_THRESHOLD,
)
from .conversions import hex_to_hsl

ADJUSTED_SLOTS = range(1, 8)
MAX_OUTLIER_PASSES = 64

# Lightness already within this distance of a target is left as is
LIGHTNESS_TOLERANCE = 1.0


def _set_lightness(palette: List[str], index: int, target: float) -> None:
    palette[index] = adjust_lightness(palette[index], target)
    if 1 <= index <= 6:
        palette[index + 8] = bright_version(palette[index])


def _lightness_map(palette: Sequence[str]) -> Dict[int, float]:
    return {i: hex_to_hsl(palette[i]).l for i in ADJUSTED_SLOTS}


def _crosses_background(index: int, value: float, target: float, bg_lightness: float) -> bool:
    """Whether moving slot 7 to target would put it across the background."""
    if index != 7:
        return False
    if abs(value - bg_lightness) <= LIGHTNESS_TOLERANCE:
        return True
    return (value > bg_lightness) != (target > bg_lightness)


def _raise_for_dark_background(palette: List[str], bg_lightness: float) -> None:
    for index, lightness in _lightness_map(palette).items():
        if lightness < MIN_LIGHTNESS_ON_DARK_BG:
            target = MIN_LIGHTNESS_ON_DARK_BG + index * 3
            if _crosses_background(index, lightness, target, bg_lightness):
                continue
            logger.debug(f"Adjusting color {index} for dark bg: {lightness:.1f}% -> {target:.1f}%")
            _set_lightness(palette, index, target)


def _lower_for_light_background(palette: List[str], bg_lightness: float) -> None:
    for index, lightness in _lightness_map(palette).items():
        if lightness > MAX_LIGHTNESS_ON_LIGHT_BG:
            target = max(ABSOLUTE_MIN_LIGHTNESS, MAX_LIGHTNESS_ON_LIGHT_BG - index * 2)
            if _crosses_background(index, lightness, target, bg_lightness):
                continue
            logger.debug(f"Adjusting color {index} for light bg: {lightness:.1f}% -> {target:.1f}%")
            _set_lightness(palette, index, target)


def _pull_outliers(palette: List[str], bg_lightness: float) -> None:
    """
    Pull lightness outliers that hurt readability toward the mean.

    Repeats until no harmful outlier is left, since moving one slot shifts
    the mean. The foreground is never moved past the background.
    """
    fg_lightness = hex_to_hsl(palette[7]).l
    adjust_foreground = abs(fg_lightness - bg_lightness) > LIGHTNESS_TOLERANCE
    fg_is_lighter = fg_lightness > bg_lightness

    for _ in range(MAX_OUTLIER_PASSES):
        lightness = _lightness_map(palette)
        avg = sum(lightness.values()) / len(lightness)
        bright_theme = avg > BRIGHT_THEME_THRESHOLD
        changed = False

        for index, value in lightness.items():
            if bright_theme and value < avg - OUTLIER_LIGHTNESS_THRESHOLD:
                target = avg - OUTLIER_PULL
            elif not bright_theme and value > avg + OUTLIER_LIGHTNESS_THRESHOLD:
                target = avg + OUTLIER_PULL
            else:
                continue

            if index == 7:
                if not adjust_foreground:
                    continue
                if fg_is_lighter:
                    target = max(target, bg_lightness + LIGHTNESS_TOLERANCE)
                else:
                    target = min(target, bg_lightness - LIGHTNESS_TOLERANCE)

            if abs(value - target) < LIGHTNESS_TOLERANCE:
                continue

            logger.debug(f"Adjusting outlier color {index}: {value:.1f}% -> {target:.1f}%")
            _set_lightness(palette, index, target)
            changed = True

        if not changed:
            return


def normalize_brightness(palette: Sequence[str]) -> List[str]:
    """
    Normalize lightness of ANSI colors for readability.

    Args:
        palette: 16 hex colors

    Returns:
        New normalized palette; the input is not modified
    """
    result = [c.upper() for c in palette]
    bg_lightness = hex_to_hsl(result[0]).l

    if bg_lightness < VERY_DARK_BACKGROUND_THRESHOLD:
        _raise_for_dark_background(result, bg_lightness)
    elif bg_lightness > VERY_LIGHT_BACKGROUND_THRESHOLD:
        _lower_for_light_background(result, bg_lightness)
    else:
        _pull_outliers(result, bg_lightness)

    return result
