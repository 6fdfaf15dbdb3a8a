"""
Chromatic Palette Transforms

Pastel, colorful, muted and bright palettes are post-processing passes over
the chromatic strategy's output. Each one remaps every slot's saturation and
lightness through a per-role rule table; hues always come from the
chromatic palette.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Sequence, Union

from ..analysis import ColorLike
from ..conversions import HSLColor, clamp, hex_to_hsl, hsl_to_hex
from .base import Palette, finalize
from .chromatic import generate_chromatic_palette

HSLRule = Callable[[HSLColor], str]


@dataclass(frozen=True)
class SlotRule:
    """Remapping of one palette slot for light and dark themes."""
    light: HSLRule
    dark: HSLRule


def fixed(saturation: float, lightness: float) -> HSLRule:
    """Keep the hue, replace saturation and lightness."""
    return lambda hsl: hsl_to_hex(hsl.h, saturation, lightness)


RuleTable = Dict[Union[int, str], SlotRule]


def _role_rules(background: SlotRule, foreground: SlotRule, gray: SlotRule,
                default: SlotRule) -> RuleTable:
    return {0: background, 7: foreground, 15: foreground, 8: gray, "default": default}


def transform_chromatic_palette(colors: Sequence[ColorLike], prefer_light: bool,
                                rules: RuleTable) -> Palette:
    """Generate the chromatic palette and remap every slot through rules."""
    palette = generate_chromatic_palette(colors, prefer_light)

    transformed = []
    for index, color in enumerate(palette):
        rule = rules.get(index, rules["default"])
        hsl = hex_to_hsl(color)
        transformed.append(rule.light(hsl) if prefer_light else rule.dark(hsl))

    return finalize(transformed)


PASTEL_RULES = _role_rules(
    background=SlotRule(light=fixed(10, 95), dark=fixed(15, 20)),
    foreground=SlotRule(light=fixed(25, 35), dark=fixed(20, 75)),
    gray=SlotRule(light=fixed(15, 65), dark=fixed(12, 45)),
    default=SlotRule(
        light=lambda hsl: hsl_to_hex(hsl.h, min(35, hsl.s), 50),
        dark=lambda hsl: hsl_to_hex(hsl.h, min(35, hsl.s), 70),
    ),
)

COLORFUL_RULES = _role_rules(
    background=SlotRule(light=fixed(8, 98), dark=fixed(12, 8)),
    foreground=SlotRule(light=fixed(15, 10), dark=fixed(10, 95)),
    gray=SlotRule(light=fixed(20, 50), dark=fixed(15, 55)),
    default=SlotRule(
        light=lambda hsl: hsl_to_hex(hsl.h, clamp(hsl.s + 30, 75, 95), clamp(hsl.l, 35, 55)),
        dark=lambda hsl: hsl_to_hex(hsl.h, clamp(hsl.s + 30, 75, 95), clamp(hsl.l, 55, 70)),
    ),
)

MUTED_RULES = _role_rules(
    background=SlotRule(light=fixed(5, 95), dark=fixed(8, 15)),
    foreground=SlotRule(light=fixed(10, 20), dark=fixed(8, 85)),
    gray=SlotRule(light=fixed(8, 60), dark=fixed(6, 50)),
    default=SlotRule(
        light=lambda hsl: hsl_to_hex(hsl.h, clamp(hsl.s * 0.5, 15, 35), clamp(hsl.l, 40, 60)),
        dark=lambda hsl: hsl_to_hex(hsl.h, clamp(hsl.s * 0.5, 15, 35), clamp(hsl.l, 50, 65)),
    ),
)

BRIGHT_RULES = _role_rules(
    background=SlotRule(light=fixed(6, 98), dark=fixed(10, 6)),
    foreground=SlotRule(light=fixed(12, 15), dark=fixed(8, 98)),
    gray=SlotRule(light=fixed(15, 55), dark=fixed(12, 65)),
    default=SlotRule(
        light=lambda hsl: hsl_to_hex(hsl.h, clamp(hsl.s, 45, 70), clamp(hsl.l + 10, 45, 65)),
        dark=lambda hsl: hsl_to_hex(hsl.h, clamp(hsl.s, 45, 70), clamp(hsl.l + 15, 65, 80)),
    ),
)


def generate_pastel_palette(colors: Sequence[ColorLike], prefer_light: bool) -> Palette:
    """Low saturation, high lightness."""
    return transform_chromatic_palette(colors, prefer_light, PASTEL_RULES)


def generate_colorful_palette(colors: Sequence[ColorLike], prefer_light: bool) -> Palette:
    """High saturation with readable lightness bands."""
    return transform_chromatic_palette(colors, prefer_light, COLORFUL_RULES)


def generate_muted_palette(colors: Sequence[ColorLike], prefer_light: bool) -> Palette:
    """Halved saturation, mid lightness."""
    return transform_chromatic_palette(colors, prefer_light, MUTED_RULES)


def generate_bright_palette(colors: Sequence[ColorLike], prefer_light: bool) -> Palette:
    """Elevated lightness with moderate saturation."""
    return transform_chromatic_palette(colors, prefer_light, BRIGHT_RULES)
