"""
Shared plumbing for palette strategies.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..analysis import ColorLike, as_rgb_list
from ..constants import ANSI_PALETTE_SIZE
from ..conversions import HSLColor

Palette = List[str]


@dataclass
class ColorPool:
    """Dominant colors in the representations strategies need."""
    hexes: List[str]
    hsls: List[HSLColor]

    def __len__(self) -> int:
        return len(self.hexes)


def build_pool(colors: Sequence[ColorLike]) -> ColorPool:
    """
    Prepare dominant colors for a strategy.

    Raises:
        ValueError: If no colors are given
    """
    rgb = as_rgb_list(colors)
    if not rgb:
        raise ValueError("Palette generation needs at least one dominant color")
    return ColorPool(hexes=[c.hex for c in rgb], hsls=[c.to_hsl() for c in rgb])


def empty_palette() -> List[Optional[str]]:
    return [None] * ANSI_PALETTE_SIZE


def finalize(palette: List[Optional[str]]) -> Palette:
    """Check every slot is filled and return the palette with uppercase hex."""
    missing = [i for i, c in enumerate(palette) if c is None]
    if len(palette) != ANSI_PALETTE_SIZE or missing:
        raise ValueError(f"Palette slots left undefined: {missing}")
    return [c.upper() for c in palette]
