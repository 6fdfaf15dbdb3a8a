"""
Test configuration and fixtures for wallpalette tests.

Images are synthesized with numpy and written as PNG files into tmp_path so
every test works on real files.
"""
import numpy as np
import pytest
from PIL import Image

from wallpalette.services.cache import ExtractionCache, InMemoryCacheBackend
from wallpalette.services.extractor import PaletteExtractor
from wallpalette.utils.metrics import MetricsCollector


def save_image(path, pixels: np.ndarray):
    """Write an (H, W, 3) or (H, W, 4) uint8 array as PNG."""
    Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8)).save(path)
    return path


def make_red_dominant_pixels() -> np.ndarray:
    """
    100x100 image dominated by varied reds.

    Rows 0-59 are red shades; below them are green, blue, yellow, near-black
    and near-white bands of 8 rows each.
    """
    pixels = np.zeros((100, 100, 3), dtype=np.uint8)
    ys, xs = np.mgrid[0:60, 0:100]
    pixels[:60, :, 0] = 150 + xs
    pixels[:60, :, 1] = (ys % 6) * 5
    pixels[:60, :, 2] = (xs % 5) * 5

    pixels[60:68] = (40, 170, 60)
    pixels[68:76] = (40, 70, 200)
    pixels[76:84] = (220, 200, 40)
    pixels[84:92] = (12, 12, 12)
    pixels[92:100] = (235, 235, 235)
    return pixels


def make_blue_only_pixels() -> np.ndarray:
    """Blue and cyan-blue shades only (hues 198-221) with gray bands."""
    pixels = np.zeros((100, 100, 3), dtype=np.uint8)
    ys, xs = np.mgrid[0:80, 0:100]
    pixels[:80, :, 0] = 30 + (ys % 10)
    pixels[:80, :, 1] = 100 + (xs % 30)
    pixels[:80, :, 2] = 180 + (ys % 40)
    pixels[80:90] = (10, 10, 10)
    pixels[90:100] = (240, 240, 240)
    return pixels


def make_dark_pixels() -> np.ndarray:
    """Varied colors that all sit below 25% lightness."""
    ys, xs = np.mgrid[0:100, 0:100]
    pixels = np.zeros((100, 100, 3), dtype=np.uint8)
    pixels[..., 0] = 10 + xs % 40
    pixels[..., 1] = 10 + ys % 30
    pixels[..., 2] = 20 + (xs + ys) % 35
    return pixels


def make_light_pixels() -> np.ndarray:
    """Varied colors that all sit above 75% lightness."""
    ys, xs = np.mgrid[0:100, 0:100]
    pixels = np.zeros((100, 100, 3), dtype=np.uint8)
    pixels[..., 0] = 200 + xs % 40
    pixels[..., 1] = 210 + ys % 30
    pixels[..., 2] = 195 + (xs + ys) % 35
    return pixels


def make_gray_gradient_pixels() -> np.ndarray:
    """Horizontal grayscale ramp from 10 to 245."""
    ramp = np.linspace(10, 245, 100).astype(np.uint8)
    gray = np.tile(ramp, (100, 1))
    return np.stack([gray, gray, gray], axis=-1)


@pytest.fixture
def red_image(tmp_path):
    return save_image(tmp_path / "red.png", make_red_dominant_pixels())


@pytest.fixture
def blue_image(tmp_path):
    return save_image(tmp_path / "blue.png", make_blue_only_pixels())


@pytest.fixture
def gray_image(tmp_path):
    return save_image(tmp_path / "gray.png", make_gray_gradient_pixels())


@pytest.fixture
def dark_image(tmp_path):
    return save_image(tmp_path / "dark.png", make_dark_pixels())


@pytest.fixture
def light_image(tmp_path):
    return save_image(tmp_path / "light.png", make_light_pixels())


@pytest.fixture
def solid_image(tmp_path):
    """Single flat color; quantizes to one dominant color."""
    pixels = np.full((100, 100, 3), (200, 30, 30), dtype=np.uint8)
    return save_image(tmp_path / "solid.png", pixels)


@pytest.fixture
def tiny_image(tmp_path):
    """5x5 image, fewer pixels than the sampling minimum."""
    rng = np.random.default_rng(7)
    pixels = rng.integers(0, 256, size=(5, 5, 3), dtype=np.uint8)
    return save_image(tmp_path / "tiny.png", pixels)


@pytest.fixture
def transparent_image(tmp_path):
    """Fully transparent RGBA image."""
    pixels = np.zeros((50, 50, 4), dtype=np.uint8)
    pixels[..., :3] = 180
    return save_image(tmp_path / "transparent.png", pixels)


@pytest.fixture
def memory_cache():
    return ExtractionCache(InMemoryCacheBackend(max_size=50))


@pytest.fixture
def metrics():
    return MetricsCollector()


@pytest.fixture
def extractor(memory_cache, metrics):
    """Extractor with an in-memory cache so tests never touch the user cache dir."""
    return PaletteExtractor(cache=memory_cache, metrics=metrics, use_cache=True)


@pytest.fixture
def uncached_extractor(metrics):
    return PaletteExtractor(metrics=metrics, use_cache=False)
