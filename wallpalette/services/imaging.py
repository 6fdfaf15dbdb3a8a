"""
Wallpalette Imaging Utilities
Handles image loading, downscaling and pixel sampling for color extraction.
"""
from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np
from loguru import logger
from PIL import Image, UnidentifiedImageError

from wallpalette.config import config
from wallpalette.errors import ImageLoadError
from wallpalette.services.colors.constants import ALPHA_VISIBILITY_THRESHOLD


def load_image_rgba(image_path: Union[str, Path]) -> np.ndarray:
    """
    Load an image file and decode it to an RGBA numpy array.

    Images without an alpha channel get a fully opaque one, so every
    downstream step can assume four channels.

    Args:
        image_path: Path to the image file

    Returns:
        numpy array of shape (H, W, 4), dtype uint8

    Raises:
        ImageLoadError: If the file is missing, unreadable or corrupt
    """
    path = Path(image_path)
    if not path.is_file():
        raise ImageLoadError(f"Image file not found: {path}")

    try:
        with Image.open(path) as pil_image:
            pil_image.load()
            if pil_image.mode != 'RGBA':
                pil_image = pil_image.convert('RGBA')
            rgba = np.array(pil_image, dtype=np.uint8)
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise ImageLoadError(f"Failed to decode image {path}: {e}") from e

    if rgba.ndim != 3 or rgba.shape[2] != 4 or rgba.size == 0:
        raise ImageLoadError(f"Unexpected image layout {rgba.shape} for {path}")

    return rgba


def resize_long_edge(rgba: np.ndarray, max_edge: Optional[int] = None) -> np.ndarray:
    """
    Resize image so the longest edge is at most max_edge pixels.

    Args:
        rgba: Input image (H, W, C)
        max_edge: Maximum edge size (default from config)

    Returns:
        Resized image; the input itself when it already fits
    """
    if max_edge is None:
        max_edge = config.MAX_EDGE

    height, width = rgba.shape[:2]
    current_max = max(height, width)

    if current_max <= max_edge:
        return rgba

    scale = max_edge / current_max
    new_width = min(max_edge, max(1, round(width * scale)))
    new_height = min(max_edge, max(1, round(height * scale)))

    # INTER_AREA averages source pixels, which suits downscaling
    return cv2.resize(rgba, (new_width, new_height), interpolation=cv2.INTER_AREA)


def sample_pixels(rgba: np.ndarray, max_samples: Optional[int] = None) -> np.ndarray:
    """
    Sample RGB pixels on a regular grid, skipping transparent ones.

    The stride is ``max(1, floor(W * H / max_samples))`` and is applied in
    both axes.

    Args:
        rgba: Image array (H, W, 4)
        max_samples: Sample budget used to derive the stride (default from config)

    Returns:
        RGB samples of shape (N, 3), dtype uint8
    """
    if max_samples is None:
        max_samples = config.MAX_SAMPLES

    height, width = rgba.shape[:2]
    stride = max(1, (width * height) // max_samples)

    grid = rgba[::stride, ::stride].reshape(-1, rgba.shape[2])
    if grid.shape[1] == 4:
        grid = grid[grid[:, 3] >= ALPHA_VISIBILITY_THRESHOLD]

    samples = np.ascontiguousarray(grid[:, :3], dtype=np.uint8)
    logger.debug(f"Sampled {len(samples)} pixels from {width}x{height} with stride {stride}")
    return samples


def load_and_sample(image_path: Union[str, Path],
                    max_edge: Optional[int] = None,
                    max_samples: Optional[int] = None) -> np.ndarray:
    """Load, downscale and sample an image in one step."""
    rgba = load_image_rgba(image_path)
    resized = resize_long_edge(rgba, max_edge)
    return sample_pixels(resized, max_samples)
