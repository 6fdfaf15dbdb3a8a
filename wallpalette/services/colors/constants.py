"""
Color extraction constants.

Thresholds are in HSL percent (0-100) and degrees (0-360) unless noted.
"""

# Palette
ANSI_PALETTE_SIZE = 16
DOMINANT_COLORS_TO_EXTRACT = 32
MIN_DOMINANT_COLORS = 8
CACHE_VERSION = 1

# Image classification
MONOCHROME_SATURATION_THRESHOLD = 15
MONOCHROME_IMAGE_THRESHOLD = 0.7
DIVERSITY_SAMPLE_SIZE = 16
HUE_BUCKET_COUNT = 12
HUE_BUCKET_SIZE = 30
MIN_OCCUPIED_HUE_BUCKETS = 3

# Color quality
MIN_CHROMATIC_SATURATION = 15
TOO_DARK_THRESHOLD = 20
TOO_BRIGHT_THRESHOLD = 85
DARK_COLOR_THRESHOLD = 50

# Brightness normalization
VERY_DARK_BACKGROUND_THRESHOLD = 20
VERY_LIGHT_BACKGROUND_THRESHOLD = 80
MIN_LIGHTNESS_ON_DARK_BG = 55
MAX_LIGHTNESS_ON_LIGHT_BG = 45
ABSOLUTE_MIN_LIGHTNESS = 25
OUTLIER_LIGHTNESS_THRESHOLD = 25
OUTLIER_PULL = 10
BRIGHT_THEME_THRESHOLD = 50

# Palette generation
SUBTLE_PALETTE_SATURATION = 28
MONOCHROME_SATURATION = 5
MONOCHROME_COLOR8_SATURATION_FACTOR = 0.5
BRIGHT_COLOR_LIGHTNESS_BOOST = 18
BRIGHT_COLOR_SATURATION_BOOST = 1.1

# Standard ANSI hue targets for slots 1-6
ANSI_COLOR_HUES = {
    "red": 0,
    "green": 120,
    "yellow": 60,
    "blue": 240,
    "magenta": 300,
    "cyan": 180,
}
ANSI_HUE_ARRAY = [
    ANSI_COLOR_HUES["red"],      # color1
    ANSI_COLOR_HUES["green"],    # color2
    ANSI_COLOR_HUES["yellow"],   # color3
    ANSI_COLOR_HUES["blue"],     # color4
    ANSI_COLOR_HUES["magenta"],  # color5
    ANSI_COLOR_HUES["cyan"],     # color6
]

# Image processing
IMAGE_SCALE_SIZE = 200
MIN_PIXELS_TO_SAMPLE = 100
MAX_PIXELS_TO_SAMPLE = 40000
ALPHA_VISIBILITY_THRESHOLD = 128
