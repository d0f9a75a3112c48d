"""
bitmap.py
--------------------
RGBA raster buffer passed between pipeline stages.

A Bitmap wraps a numpy uint8 array of shape (H, W, 4). Conversions to and
from Pillow images are provided for the stages that draw with ImageDraw;
the buffer itself never aliases across stages (``region`` and ``copy``
always return private copies).
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image, ImageColor

from .exceptions import BitmapError


RGBA = tuple[int, int, int, int]


def parse_color(color: str) -> RGBA:
    """Parse any Pillow colour string ('#333', 'white', 'rgb(…)') to RGBA.

    Raises ValueError for strings Pillow does not understand.
    """
    rgb = ImageColor.getrgb(color)
    if len(rgb) == 3:
        return (rgb[0], rgb[1], rgb[2], 255)
    return (rgb[0], rgb[1], rgb[2], rgb[3])


@dataclass(slots=True)
class Bitmap:
    """Width × height RGBA pixels, row-major."""

    pixels: np.ndarray

    def __post_init__(self) -> None:
        arr = self.pixels
        if not isinstance(arr, np.ndarray):
            raise BitmapError(f"expected numpy array, got {type(arr).__name__}")
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise BitmapError(f"expected (H, W, 4) RGBA buffer, got shape {arr.shape}")
        if arr.dtype != np.uint8:
            raise BitmapError(f"expected uint8 buffer, got {arr.dtype}")

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    @classmethod
    def blank(cls, width: int, height: int, color: str | RGBA = (0, 0, 0, 0)) -> Bitmap:
        rgba = parse_color(color) if isinstance(color, str) else color
        arr = np.empty((max(0, height), max(0, width), 4), dtype=np.uint8)
        arr[...] = rgba
        return cls(arr)

    @classmethod
    def from_image(cls, image: Image.Image) -> Bitmap:
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(np.array(image, dtype=np.uint8))

    @classmethod
    def from_bytes(cls, width: int, height: int, data: bytes) -> Bitmap:
        """Build from a packed RGBA byte string (4 bytes per pixel)."""
        expected = width * height * 4
        if len(data) != expected:
            raise BitmapError(
                f"buffer holds {len(data)} bytes, {width}x{height} RGBA needs {expected}"
            )
        arr = np.frombuffer(data, dtype=np.uint8).reshape(height, width, 4)
        return cls(arr.copy())

    def to_image(self) -> Image.Image:
        return Image.fromarray(np.ascontiguousarray(self.pixels))

    def tobytes(self) -> bytes:
        return self.pixels.tobytes()

    def copy(self) -> Bitmap:
        return Bitmap(self.pixels.copy())

    def region(self, x: int, y: int, width: int, height: int) -> Bitmap:
        """Private copy of the given rectangle, clipped to the bitmap bounds."""
        x0 = max(0, min(self.width, x))
        y0 = max(0, min(self.height, y))
        x1 = max(x0, min(self.width, x + width))
        y1 = max(y0, min(self.height, y + height))
        return Bitmap(self.pixels[y0:y1, x0:x1].copy())
