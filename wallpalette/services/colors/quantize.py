"""
Median-Cut Color Quantization

Reduces a cloud of sampled RGB pixels to a small set of dominant colors by
recursively splitting the bucket with the largest color volume along its
widest channel at the median.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

import numpy as np
from loguru import logger

from wallpalette.errors import InsufficientColorDataError, QuantizationError
from wallpalette.services.imaging import load_and_sample
from .constants import DOMINANT_COLORS_TO_EXTRACT, MIN_PIXELS_TO_SAMPLE
from .conversions import RGBColor


@dataclass(frozen=True)
class DominantColor:
    """A quantized color and the number of samples it represents."""
    color: RGBColor
    count: int

    @property
    def hex(self) -> str:
        return self.color.hex


class ColorBucket:
    """A set of RGB samples with cached per-channel ranges."""

    def __init__(self, colors: np.ndarray):
        self.colors = colors
        if len(colors):
            self.mins = colors.min(axis=0).astype(np.int64)
            self.maxs = colors.max(axis=0).astype(np.int64)
        else:
            self.mins = np.zeros(3, dtype=np.int64)
            self.maxs = np.zeros(3, dtype=np.int64)

    def __len__(self) -> int:
        return len(self.colors)

    @property
    def ranges(self) -> np.ndarray:
        return self.maxs - self.mins

    def longest_channel(self) -> int:
        """Index of the channel with the widest range (ties favor r, then g)."""
        return int(np.argmax(self.ranges))

    def longest_range(self) -> int:
        return int(self.ranges.max())

    def volume(self) -> int:
        """Product of channel ranges times population; larger splits first."""
        r, g, b = (int(x) for x in self.ranges)
        return r * g * b * len(self.colors)

    def can_split(self) -> bool:
        return len(self.colors) > 1 and self.longest_range() > 0

    def split(self) -> List["ColorBucket"]:
        """Split at the median along the longest channel."""
        channel = self.longest_channel()
        order = np.argsort(self.colors[:, channel], kind="stable")
        ordered = self.colors[order]
        midpoint = len(ordered) // 2
        return [ColorBucket(ordered[:midpoint]), ColorBucket(ordered[midpoint:])]

    def average_color(self) -> DominantColor:
        """Channel-wise mean, rounded half up."""
        count = len(self.colors)
        if count == 0:
            return DominantColor(RGBColor(0, 0, 0), 0)
        mean = self.colors.astype(np.float64).mean(axis=0)
        r, g, b = (int(np.floor(x + 0.5)) for x in mean)
        return DominantColor(RGBColor(r, g, b), count)


def _deduplicate(samples: np.ndarray) -> List[DominantColor]:
    seen = set()
    unique = []
    for r, g, b in samples.tolist():
        key = (r, g, b)
        if key not in seen:
            seen.add(key)
            unique.append(DominantColor(RGBColor(r, g, b), 1))
    return unique


def _find_bucket_to_split(buckets: List[ColorBucket]) -> int:
    """
    Index of the splittable bucket with the largest volume, or -1.

    Volume is zero whenever a bucket is flat in any channel, so the widest
    channel range breaks ties to keep planar color clouds splittable.
    """
    best_index = -1
    best_key = None
    for i, bucket in enumerate(buckets):
        if not bucket.can_split():
            continue
        key = (bucket.volume(), bucket.longest_range())
        if best_key is None or key > best_key:
            best_key = key
            best_index = i
    return best_index


def median_cut(samples: np.ndarray, num_colors: int) -> List[DominantColor]:
    """
    Quantize RGB samples into at most num_colors dominant colors.

    Args:
        samples: RGB samples (N, 3) uint8
        num_colors: Target number of colors

    Returns:
        Dominant colors sorted by descending population
    """
    samples = np.asarray(samples, dtype=np.uint8).reshape(-1, 3)

    if len(samples) == 0 or num_colors <= 0:
        return []

    if len(samples) <= num_colors:
        return _deduplicate(samples)

    buckets = [ColorBucket(samples)]

    while len(buckets) < num_colors:
        split_index = _find_bucket_to_split(buckets)
        if split_index == -1:
            break
        left, right = buckets[split_index].split()
        buckets[split_index:split_index + 1] = [left, right]

    colors = [bucket.average_color() for bucket in buckets]
    colors = [c for c in colors if c.count > 0]
    colors.sort(key=lambda c: -c.count)

    logger.debug(f"Median cut: {len(samples)} samples -> {len(colors)} colors")
    return colors


def extract_dominant_colors(image_path: Union[str, Path],
                            num_colors: int = DOMINANT_COLORS_TO_EXTRACT,
                            max_edge: Optional[int] = None,
                            max_samples: Optional[int] = None) -> List[DominantColor]:
    """
    Extract the most dominant colors of an image.

    Args:
        image_path: Path to the image file
        num_colors: Number of colors to quantize to
        max_edge: Downscale cap for the longest image side
        max_samples: Sample budget

    Returns:
        Dominant colors sorted by descending population

    Raises:
        ImageLoadError: If the image cannot be decoded
        InsufficientColorDataError: If fewer than MIN_PIXELS_TO_SAMPLE pixels were sampled
        QuantizationError: If quantization produced no colors
    """
    samples = load_and_sample(image_path, max_edge=max_edge, max_samples=max_samples)

    if len(samples) < MIN_PIXELS_TO_SAMPLE:
        raise InsufficientColorDataError(
            f"Not enough pixels to extract colors: {len(samples)} < {MIN_PIXELS_TO_SAMPLE}"
        )

    colors = median_cut(samples, num_colors)

    if not colors:
        raise QuantizationError("No colors extracted from image")

    return colors
