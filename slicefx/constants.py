"""
constants.py
--------------------
Shared constants for the slice effect pipeline:
  - corner style enum
  - luma weights and contrast curve constants
  - randomisation tuning constants (slice height, corner jitter, tilt)
  - decoration geometry ratios
  - font candidates for labels
"""

from enum import StrEnum


class CornerStyle(StrEnum):
    ALL_CORNERS = "all_corners"
    SINGLE_RIGHT_ANGLE = "single_right_angle"


# Pixel transforms

LUMA_WEIGHTS: tuple[float, float, float] = (0.299, 0.587, 0.114)
CONTRAST_CURVE = 259.0
CONTRAST_PIVOT = 128.0
CHANNEL_MAX = 255.0

# Slicing

MIN_SLICE_HEIGHT = 10.0
MIN_SCALE = 0.01

# Tilt jitter amplitude in degrees at tilt_angle_random == 1
MAX_TILT_JITTER = 10.0

# Corner cuts

MIN_CORNER_SIZE = 5
# Asymmetric jitter: suppress an expected corner vs. inject an unexpected one
CORNER_SUPPRESS_WEIGHT = 0.3
CORNER_INJECT_WEIGHT = 0.2

# Decorations

CORNER_MARK_RATIO = 0.05
INNER_MARK_RATIO = 0.6
TEXT_INSET = 25

# Bold sans-serif faces tried in order before Pillow's bundled default
FONT_CANDIDATES: tuple[str, ...] = (
    "arialbd.ttf",
    "Arial Bold.ttf",
    "DejaVuSans-Bold.ttf",
    "LiberationSans-Bold.ttf",
    "FreeSansBold.ttf",
)

# Debounce window used by the interactive session
PREVIEW_DELAY = 0.1
