"""
Palette Generators

A closed family of strategies mapping dominant colors onto the 16 ANSI
slots. ``ExtractionMode`` is what callers ask for; ``PaletteStrategy`` is
what actually runs. The default mode picks monochrome, subtle-balanced or
chromatic from the image classification; every other mode pins one
strategy.
"""

from enum import Enum
from typing import Callable, Dict, Sequence, Union

from loguru import logger

from wallpalette.errors import InvalidModeError
from ..analysis import ColorLike, ImageClass, classify_image
from .balanced import generate_monochrome_palette, generate_subtle_balanced_palette
from .base import Palette
from .chromatic import generate_chromatic_palette
from .harmonic import generate_analogous_palette, generate_monochromatic_palette
from .material import generate_material_palette
from .transforms import (
    generate_bright_palette,
    generate_colorful_palette,
    generate_muted_palette,
    generate_pastel_palette,
)

Generator = Callable[[Sequence[ColorLike], bool], Palette]


class ExtractionMode(str, Enum):
    """Modes accepted by the extraction entry point."""
    DEFAULT = "default"
    MONOCHROMATIC = "monochromatic"
    ANALOGOUS = "analogous"
    PASTEL = "pastel"
    MATERIAL = "material"
    COLORFUL = "colorful"
    MUTED = "muted"
    BRIGHT = "bright"

    @classmethod
    def parse(cls, value: Union["ExtractionMode", str, None]) -> "ExtractionMode":
        """
        Resolve a mode name.

        ``None`` and the legacy name ``normal`` mean ``default``.

        Raises:
            InvalidModeError: If the name is not a known mode
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.DEFAULT

        name = str(value).strip().lower()
        if name == "normal":
            return cls.DEFAULT
        try:
            return cls(name)
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise InvalidModeError(f"Unknown extraction mode '{value}'. Valid modes: {valid}") from None


class PaletteStrategy(str, Enum):
    """Concrete palette generation strategies."""
    CHROMATIC = "chromatic"
    SUBTLE_BALANCED = "subtle_balanced"
    MONOCHROME = "monochrome"
    MONOCHROMATIC = "monochromatic"
    ANALOGOUS = "analogous"
    PASTEL = "pastel"
    MATERIAL = "material"
    COLORFUL = "colorful"
    MUTED = "muted"
    BRIGHT = "bright"


GENERATORS: Dict[PaletteStrategy, Generator] = {
    PaletteStrategy.CHROMATIC: generate_chromatic_palette,
    PaletteStrategy.SUBTLE_BALANCED: generate_subtle_balanced_palette,
    PaletteStrategy.MONOCHROME: generate_monochrome_palette,
    PaletteStrategy.MONOCHROMATIC: generate_monochromatic_palette,
    PaletteStrategy.ANALOGOUS: generate_analogous_palette,
    PaletteStrategy.PASTEL: generate_pastel_palette,
    PaletteStrategy.MATERIAL: generate_material_palette,
    PaletteStrategy.COLORFUL: generate_colorful_palette,
    PaletteStrategy.MUTED: generate_muted_palette,
    PaletteStrategy.BRIGHT: generate_bright_palette,
}

_CLASS_STRATEGIES: Dict[ImageClass, PaletteStrategy] = {
    ImageClass.MONOCHROME: PaletteStrategy.MONOCHROME,
    ImageClass.LOW_DIVERSITY: PaletteStrategy.SUBTLE_BALANCED,
    ImageClass.DIVERSE: PaletteStrategy.CHROMATIC,
}


def resolve_strategy(mode: ExtractionMode, colors: Sequence[ColorLike]) -> PaletteStrategy:
    """Strategy for a mode; the default mode classifies the image first."""
    if mode is ExtractionMode.DEFAULT:
        image_class = classify_image(colors)
        strategy = _CLASS_STRATEGIES[image_class]
        logger.info(f"Detected {image_class.value} image - using {strategy.value} palette")
        return strategy
    return PaletteStrategy(mode.value)


def generate_palette(mode: Union[ExtractionMode, str], colors: Sequence[ColorLike],
                     prefer_light: bool) -> Palette:
    """Run the strategy selected by mode. Brightness is not normalized here."""
    strategy = resolve_strategy(ExtractionMode.parse(mode), colors)
    return GENERATORS[strategy](colors, prefer_light)


__all__ = [
    "ExtractionMode",
    "PaletteStrategy",
    "GENERATORS",
    "Palette",
    "resolve_strategy",
    "generate_palette",
    "generate_chromatic_palette",
    "generate_subtle_balanced_palette",
    "generate_monochrome_palette",
    "generate_monochromatic_palette",
    "generate_analogous_palette",
    "generate_pastel_palette",
    "generate_material_palette",
    "generate_colorful_palette",
    "generate_muted_palette",
    "generate_bright_palette",
]
