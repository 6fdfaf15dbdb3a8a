"""
Wallpalette

Extracts 16-color ANSI terminal palettes from wallpaper images.
"""

from wallpalette.errors import (
    CacheIOError,
    ImageLoadError,
    InsufficientColorDataError,
    InvalidModeError,
    PaletteExtractionError,
    QuantizationError,
)
from wallpalette.services.cache import (
    ExtractionCache,
    FileCacheBackend,
    InMemoryCacheBackend,
)
from wallpalette.services.colors.generators import ExtractionMode, PaletteStrategy
from wallpalette.services.extractor import (
    ExtractionResult,
    PaletteExtractor,
    extract_palette,
)

__version__ = "1.0.0"

__all__ = [
    "extract_palette",
    "PaletteExtractor",
    "ExtractionResult",
    "ExtractionMode",
    "PaletteStrategy",
    "ExtractionCache",
    "FileCacheBackend",
    "InMemoryCacheBackend",
    "PaletteExtractionError",
    "ImageLoadError",
    "InsufficientColorDataError",
    "QuantizationError",
    "CacheIOError",
    "InvalidModeError",
]
