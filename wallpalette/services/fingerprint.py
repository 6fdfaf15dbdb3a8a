"""
Wallpalette Fingerprinting Utilities
Cache key generation for extracted palettes.
"""
import hashlib
import os
from pathlib import Path
from typing import Optional, Union

DEFAULT_MODE = "default"


def theme_label(prefer_light: bool) -> str:
    """Theme component of a cache key."""
    return "light" if prefer_light else "dark"


def generate_cache_key_digest(image_path: Union[str, Path], mtime_seconds: float,
                              prefer_light: bool) -> str:
    """
    Generate deterministic digest for an image version and theme.

    Args:
        image_path: Image path exactly as given by the caller
        mtime_seconds: Modification time of the image file
        prefer_light: Light or dark theme

    Returns:
        MD5 digest of ``"<path>-<mtime>-<light|dark>"``
    """
    key_string = f"{image_path}-{int(mtime_seconds)}-{theme_label(prefer_light)}"
    return hashlib.md5(key_string.encode()).hexdigest()


def generate_cache_key(image_path: Union[str, Path], mtime_seconds: float,
                       prefer_light: bool, mode: str = DEFAULT_MODE) -> str:
    """
    Generate the cache key for one extraction.

    Non-default modes append ``_<mode>`` so every mode caches separately.
    """
    digest = generate_cache_key_digest(image_path, mtime_seconds, prefer_light)
    if mode and mode != DEFAULT_MODE:
        return f"{digest}_{mode}"
    return digest


def file_mtime(image_path: Union[str, Path]) -> Optional[float]:
    """Modification time of a file, or None if it cannot be stat'ed."""
    try:
        return os.stat(image_path).st_mtime
    except OSError:
        return None
