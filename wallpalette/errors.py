"""
Wallpalette Error Taxonomy
Typed failures raised by the extraction pipeline.
"""


class PaletteExtractionError(Exception):
    """Base class for every failure the extraction pipeline reports."""
    pass


class ImageLoadError(PaletteExtractionError):
    """Image file is missing, unreadable or cannot be decoded."""
    pass


class InsufficientColorDataError(PaletteExtractionError):
    """Too few sampled pixels or too few dominant colors to build a palette."""
    pass


class QuantizationError(PaletteExtractionError):
    """Median-cut quantization produced no colors."""
    pass


class CacheIOError(PaletteExtractionError):
    """Cache read or write failed. Recovered locally as a cache miss."""
    pass


class InvalidModeError(PaletteExtractionError, ValueError):
    """Extraction mode string does not name a known palette strategy."""
    pass
