"""
Wallpalette Configuration
Manages environment variables and defaults for the extraction pipeline.
"""
import os
from pathlib import Path

from wallpalette.services.colors.constants import (
    DOMINANT_COLORS_TO_EXTRACT,
    IMAGE_SCALE_SIZE,
    MAX_PIXELS_TO_SAMPLE,
)


def _default_cache_dir() -> str:
    return str(Path.home() / ".cache" / "wallpalette" / "color-cache")


class Config:
    """Configuration class for the palette extraction engine."""

    # Logging
    LOG_LEVEL: str = os.environ.get("WALLPALETTE_LOG_LEVEL", "INFO")

    # Sampling
    MAX_EDGE: int = int(os.environ.get("WALLPALETTE_MAX_EDGE", IMAGE_SCALE_SIZE))
    MAX_SAMPLES: int = int(os.environ.get("WALLPALETTE_MAX_SAMPLES", MAX_PIXELS_TO_SAMPLE))
    DOMINANT_COLORS: int = int(os.environ.get("WALLPALETTE_DOMINANT_COLORS", DOMINANT_COLORS_TO_EXTRACT))

    # Caching
    CACHE_ENABLED: bool = bool(int(os.environ.get("WALLPALETTE_CACHE_ENABLED", "1")))
    CACHE_DIR: str = os.environ.get("WALLPALETTE_CACHE_DIR") or _default_cache_dir()
    CACHE_MAX_ENTRIES: int = int(os.environ.get("WALLPALETTE_CACHE_MAX_ENTRIES", "500"))

    @classmethod
    def validate_max_edge(cls, max_edge: int) -> bool:
        """Validate max_edge parameter."""
        return 16 <= max_edge <= 4096

    @classmethod
    def validate_max_samples(cls, max_samples: int) -> bool:
        """Validate max_samples parameter."""
        return 100 <= max_samples <= 1_000_000

    @classmethod
    def validate_dominant_colors(cls, num_colors: int) -> bool:
        """Validate number of dominant colors to quantize to."""
        return 8 <= num_colors <= 256


# Global config instance
config = Config()
