"""
Unit tests for palette strategies and mode dispatch.

Every strategy must fill all 16 slots with uppercase hex colors; the
strategy specific tests check the defining property of each palette.
"""

import re

import pytest

from wallpalette.errors import InvalidModeError
from wallpalette.services.colors.conversions import hex_to_hsl, hue_distance
from wallpalette.services.colors.generators import (
    GENERATORS,
    ExtractionMode,
    PaletteStrategy,
    generate_analogous_palette,
    generate_chromatic_palette,
    generate_material_palette,
    generate_monochromatic_palette,
    generate_monochrome_palette,
    generate_palette,
    generate_pastel_palette,
    generate_subtle_balanced_palette,
    resolve_strategy,
)
from wallpalette.services.colors.generators.base import build_pool, finalize
from wallpalette.services.colors.generators.harmonic import nearest_ansi_slot

HEX_RE = re.compile(r"^#[0-9A-F]{6}$")

DIVERSE = [
    "#101018", "#E8E8F0", "#C0392B", "#27AE60", "#F1C40F",
    "#2980B9", "#8E44AD", "#16A085", "#D35400", "#7F8C8D",
]
GRAYS = ["#0C0C0C", "#303030", "#505050", "#707070", "#909090", "#B0B0B0", "#D0D0D0", "#F0F0F0"]
BLUES = ["#0A1020", "#1F3A93", "#2C5AA0", "#3A6FC4", "#4A7FD4", "#5B8FE0", "#2A4F80", "#E0E8F0"]


def assert_valid_palette(palette):
    assert len(palette) == 16
    for color in palette:
        assert HEX_RE.match(color), color


class TestStrategyRegistry:
    """Test the closed strategy family."""

    def test_every_strategy_has_a_generator(self):
        assert set(GENERATORS) == set(PaletteStrategy)

    @pytest.mark.parametrize("strategy", list(PaletteStrategy))
    @pytest.mark.parametrize("prefer_light", [False, True])
    def test_every_generator_fills_all_slots(self, strategy, prefer_light):
        assert_valid_palette(GENERATORS[strategy](DIVERSE, prefer_light))

    @pytest.mark.parametrize("strategy", list(PaletteStrategy))
    def test_generators_work_on_grays(self, strategy):
        assert_valid_palette(GENERATORS[strategy](GRAYS, False))

    def test_empty_colors_rejected(self):
        with pytest.raises(ValueError):
            build_pool([])

    def test_finalize_rejects_missing_slots(self):
        with pytest.raises(ValueError):
            finalize(["#000000"] * 15 + [None])


class TestModeDispatch:
    """Test mode parsing and strategy resolution."""

    def test_parse_known_modes(self):
        assert ExtractionMode.parse("pastel") is ExtractionMode.PASTEL
        assert ExtractionMode.parse("  Material ") is ExtractionMode.MATERIAL
        assert ExtractionMode.parse(None) is ExtractionMode.DEFAULT
        assert ExtractionMode.parse(ExtractionMode.MUTED) is ExtractionMode.MUTED

    def test_normal_is_alias_for_default(self):
        assert ExtractionMode.parse("normal") is ExtractionMode.DEFAULT

    def test_unknown_mode_raises(self):
        with pytest.raises(InvalidModeError) as exc_info:
            ExtractionMode.parse("neon")
        assert isinstance(exc_info.value, ValueError)
        assert "neon" in str(exc_info.value)

    def test_default_mode_classifies(self):
        assert resolve_strategy(ExtractionMode.DEFAULT, GRAYS) is PaletteStrategy.MONOCHROME
        assert resolve_strategy(ExtractionMode.DEFAULT, BLUES) is PaletteStrategy.SUBTLE_BALANCED
        assert resolve_strategy(ExtractionMode.DEFAULT, DIVERSE) is PaletteStrategy.CHROMATIC

    @pytest.mark.parametrize("mode", [m for m in ExtractionMode if m is not ExtractionMode.DEFAULT])
    def test_pinned_modes_ignore_classification(self, mode):
        assert resolve_strategy(mode, GRAYS).value == mode.value

    def test_generate_palette_by_name(self):
        assert generate_palette("default", DIVERSE, False) == generate_chromatic_palette(DIVERSE, False)


class TestChromaticPalette:
    """Test the nearest-hue strategy."""

    def test_background_and_foreground_dark_theme(self):
        palette = generate_chromatic_palette(DIVERSE, prefer_light=False)
        assert palette[0] == "#101018"
        assert palette[7] == "#E8E8F0"

    def test_background_and_foreground_light_theme(self):
        palette = generate_chromatic_palette(DIVERSE, prefer_light=True)
        assert palette[0] == "#E8E8F0"
        assert palette[7] == "#101018"

    def test_slots_match_ansi_hues(self):
        palette = generate_chromatic_palette(DIVERSE, prefer_light=False)
        assert palette[1] == "#C0392B"
        assert palette[2] == "#27AE60"
        assert palette[4] == "#2980B9"

    def test_candidates_are_not_reused(self):
        palette = generate_chromatic_palette(DIVERSE, prefer_light=False)
        assert len(set(palette[0:8])) == 8

    def test_bright_slots_are_lighter(self):
        palette = generate_chromatic_palette(DIVERSE, prefer_light=False)
        for i in range(1, 8):
            assert hex_to_hsl(palette[i + 8]).l >= hex_to_hsl(palette[i]).l


class TestBalancedPalettes:
    """Test subtle-balanced and monochrome strategies."""

    def test_subtle_palette_has_uniform_saturation(self):
        palette = generate_subtle_balanced_palette(BLUES, prefer_light=False)
        for i in range(1, 7):
            assert hex_to_hsl(palette[i]).s == pytest.approx(28, abs=2)

    def test_subtle_palette_uses_ansi_hues(self):
        palette = generate_subtle_balanced_palette(BLUES, prefer_light=False)
        assert hue_distance(hex_to_hsl(palette[1]).h, 0) < 3
        assert hue_distance(hex_to_hsl(palette[4]).h, 240) < 3

    def test_monochrome_palette_is_nearly_gray(self):
        palette = generate_monochrome_palette(GRAYS, prefer_light=False)
        for i in range(1, 7):
            assert hex_to_hsl(palette[i]).s < 10

    def test_monochrome_ramp_is_ascending(self):
        palette = generate_monochrome_palette(GRAYS, prefer_light=False)
        lightness = [hex_to_hsl(palette[i]).l for i in range(1, 7)]
        assert lightness == sorted(lightness)


class TestHarmonicPalettes:
    """Test monochromatic and analogous strategies."""

    def test_nearest_ansi_slot(self):
        assert nearest_ansi_slot(10) == 0
        assert nearest_ansi_slot(350) == 0
        assert nearest_ansi_slot(230) == 3
        assert nearest_ansi_slot(190) == 5

    def test_monochromatic_shares_one_hue(self):
        palette = generate_monochromatic_palette(BLUES, prefer_light=False)
        # most frequent color with real saturation is the first one
        base_hue = hex_to_hsl(BLUES[0]).h
        for i in range(1, 7):
            assert hue_distance(hex_to_hsl(palette[i]).h, base_hue) < 3

    def test_analogous_stays_near_base_hue(self):
        palette = generate_analogous_palette(DIVERSE, prefer_light=False)
        saturations = {h: hex_to_hsl(h).s for h in DIVERSE}
        base_hue = hex_to_hsl(max(saturations, key=saturations.get)).h
        for i in range(1, 7):
            assert hue_distance(hex_to_hsl(palette[i]).h, base_hue) <= 33


class TestMaterialAndTransforms:
    """Test material palette constants and chromatic transforms."""

    def test_material_dark_constants(self):
        palette = generate_material_palette(DIVERSE, prefer_light=False)
        assert palette[0] == "#121212"
        assert palette[7] == "#FFFFFF"
        assert palette[8] == "#9E9E9E"

    def test_material_light_constants(self):
        palette = generate_material_palette(DIVERSE, prefer_light=True)
        assert palette[0] == "#FAFAFA"
        assert palette[7] == "#212121"
        assert palette[15] == "#000000"

    def test_material_saturation_floor(self):
        palette = generate_material_palette(GRAYS, prefer_light=False)
        for i in range(1, 7):
            assert hex_to_hsl(palette[i]).s >= 33

    def test_pastel_keeps_chromatic_hues(self):
        chromatic = generate_chromatic_palette(DIVERSE, prefer_light=False)
        pastel = generate_pastel_palette(DIVERSE, prefer_light=False)
        for i in range(1, 7):
            assert hue_distance(hex_to_hsl(pastel[i]).h, hex_to_hsl(chromatic[i]).h) < 3
            assert hex_to_hsl(pastel[i]).s <= 36
