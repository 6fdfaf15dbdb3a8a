"""
Wallpalette Extraction Entry Point
Chains sampling, quantization, strategy selection, generation, normalization
and caching into one call.
"""
import asyncio
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from wallpalette.config import config
from wallpalette.errors import InsufficientColorDataError, PaletteExtractionError
from wallpalette.services.cache import ExtractionCache, FileCacheBackend
from wallpalette.services.colors.constants import MIN_DOMINANT_COLORS
from wallpalette.services.colors.generators import (
    GENERATORS,
    ExtractionMode,
    PaletteStrategy,
    resolve_strategy,
)
from wallpalette.services.colors.normalize import normalize_brightness
from wallpalette.services.colors.quantize import extract_dominant_colors
from wallpalette.utils.logging import get_logger
from wallpalette.utils.metrics import MetricsCollector

PathLike = Union[str, Path]


@dataclass
class ExtractionResult:
    """Outcome of one extraction: a palette or the typed error that stopped it."""
    palette: Optional[List[str]] = None
    error: Optional[PaletteExtractionError] = None
    from_cache: bool = False
    strategy: Optional[PaletteStrategy] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.palette is not None

    def unwrap(self) -> List[str]:
        """Return the palette or raise the stored error."""
        if self.error is not None:
            raise self.error
        if self.palette is None:
            raise PaletteExtractionError("Extraction produced no palette")
        return self.palette


class PaletteExtractor:
    """
    Extracts 16-color ANSI palettes from image files.

    The cache and metrics collector are injected; pass ``use_cache=False``
    to skip caching entirely.
    """

    def __init__(
        self,
        cache: Optional[ExtractionCache] = None,
        metrics: Optional[MetricsCollector] = None,
        use_cache: Optional[bool] = None,
        num_colors: Optional[int] = None,
        max_edge: Optional[int] = None,
        max_samples: Optional[int] = None,
    ):
        self.use_cache = config.CACHE_ENABLED if use_cache is None else use_cache
        if self.use_cache and cache is None:
            cache = ExtractionCache(FileCacheBackend(config.CACHE_DIR))
        self.cache = cache if self.use_cache else None
        self.metrics = metrics or MetricsCollector()
        self.num_colors = num_colors or config.DOMINANT_COLORS
        self.max_edge = max_edge or config.MAX_EDGE
        self.max_samples = max_samples or config.MAX_SAMPLES

        if not config.validate_dominant_colors(self.num_colors):
            raise ValueError(f"num_colors out of range: {self.num_colors}")
        if not config.validate_max_edge(self.max_edge):
            raise ValueError(f"max_edge out of range: {self.max_edge}")
        if not config.validate_max_samples(self.max_samples):
            raise ValueError(f"max_samples out of range: {self.max_samples}")

        self.logger = get_logger()

    def _run(self, image_path: PathLike, prefer_light: bool,
             mode: Union[ExtractionMode, str, None]) -> ExtractionResult:
        extraction_mode = ExtractionMode.parse(mode)
        self.metrics.increment_extraction_count()
        context = self.logger.extraction_context(image_path, extraction_mode.value, prefer_light)
        start = time.perf_counter()

        cache_key = None
        if self.cache is not None:
            cache_key = self.cache.key_for_file(image_path, prefer_light, extraction_mode.value)
            if cache_key is not None:
                cached = self.cache.get(cache_key)
                if cached is not None:
                    self.metrics.increment_cache_hit()
                    self.logger.debug("Using cached palette", extra=context)
                    return ExtractionResult(palette=cached, from_cache=True)
                self.metrics.increment_cache_miss()

        try:
            with self.metrics.timed("quantization"):
                colors = extract_dominant_colors(
                    image_path,
                    num_colors=self.num_colors,
                    max_edge=self.max_edge,
                    max_samples=self.max_samples,
                )

            if len(colors) < MIN_DOMINANT_COLORS:
                raise InsufficientColorDataError(
                    f"Not enough distinct colors in image: {len(colors)} < {MIN_DOMINANT_COLORS}"
                )

            strategy = resolve_strategy(extraction_mode, colors)
            with self.metrics.timed("generation"):
                palette = GENERATORS[strategy](colors, prefer_light)
                palette = normalize_brightness(palette)
        except PaletteExtractionError as e:
            self.metrics.increment_failure_count(type(e).__name__)
            self.logger.log_extraction_failed(context, e)
            raise

        self.metrics.increment_strategy_count(strategy.value)

        if self.cache is not None and cache_key is not None:
            self.cache.put(cache_key, palette)

        duration_ms = (time.perf_counter() - start) * 1000
        self.logger.log_extraction_done(context, strategy.value, len(colors), duration_ms)
        return ExtractionResult(palette=palette, strategy=strategy)

    def extract(self, image_path: PathLike, prefer_light: bool = False,
                mode: Union[ExtractionMode, str, None] = ExtractionMode.DEFAULT) -> List[str]:
        """
        Extract a 16-color palette from an image file.

        Args:
            image_path: Path to the image file
            prefer_light: Generate a light theme palette
            mode: Extraction mode name

        Returns:
            16 uppercase ``#RRGGBB`` colors

        Raises:
            InvalidModeError: If mode is unknown
            ImageLoadError: If the image cannot be read
            InsufficientColorDataError: If the image has too little color data
            QuantizationError: If quantization produced no colors
        """
        start = time.perf_counter()
        result = self._run(image_path, prefer_light, mode)
        self.metrics.record_timing("extraction", (time.perf_counter() - start) * 1000)
        return result.unwrap()

    def extract_result(self, image_path: PathLike, prefer_light: bool = False,
                       mode: Union[ExtractionMode, str, None] = ExtractionMode.DEFAULT) -> ExtractionResult:
        """Same pipeline as ``extract`` but failures come back inside the result."""
        try:
            return self._run(image_path, prefer_light, mode)
        except PaletteExtractionError as e:
            return ExtractionResult(error=e)

    async def extract_palette(self, image_path: PathLike, prefer_light: bool = False,
                              mode: Union[ExtractionMode, str, None] = ExtractionMode.DEFAULT) -> List[str]:
        """Run ``extract`` in a worker thread."""
        return await asyncio.to_thread(self.extract, image_path, prefer_light, mode)


async def extract_palette(image_path: PathLike, prefer_light: bool = False,
                          mode: Union[ExtractionMode, str, None] = "default", *,
                          extractor: Optional[PaletteExtractor] = None) -> List[str]:
    """
    Extract a 16-color ANSI palette from an image.

    A new ``PaletteExtractor`` built from the environment configuration is
    used unless one is passed in.

    Mode names are strict: ``"normal"`` is accepted as another name for
    ``"default"``, but an unknown mode raises ``InvalidModeError`` (a
    ``ValueError``) instead of falling back to the default mode.
    """
    extractor = extractor or PaletteExtractor()
    return await extractor.extract_palette(image_path, prefer_light, mode)
