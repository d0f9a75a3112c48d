"""
pixel.py
--------------------
Stateless tone filters over RGBA buffers.

Each filter:
  - Takes a numpy uint8 RGBA array (H, W, 4)
  - Leaves the alpha channel untouched
  - Returns a new uint8 array, or the input itself when the settings
    make the filter a no-op

apply_tone() enforces the per-band order: grayscale first, then
contrast/brightness.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from .constants import CHANNEL_MAX, CONTRAST_CURVE, CONTRAST_PIVOT, LUMA_WEIGHTS

if TYPE_CHECKING:
    from .params import Parameters


# Helpers

def _clip(arr: np.ndarray) -> np.ndarray:
    return np.clip(arr, 0, 255).astype(np.uint8)


def luma(pixels: np.ndarray) -> np.ndarray:
    """Rec. 601 luma of each pixel as float32 (H, W)."""
    rgb = pixels[..., :3].astype(np.float32)
    wr, wg, wb = LUMA_WEIGHTS
    return rgb[..., 0] * wr + rgb[..., 1] * wg + rgb[..., 2] * wb


def contrast_factor(contrast: float) -> float:
    """Classic 259/(259-c) contrast curve with c = 255 × contrast.

    contrast=0 → 1.0; the denominator stays ≥ 4 for contrast ≤ 1.
    """
    c = contrast * CHANNEL_MAX
    return (CONTRAST_CURVE * (c + CHANNEL_MAX)) / (CHANNEL_MAX * (CONTRAST_CURVE - c))


# Filters

def grayscale(pixels: np.ndarray, intensity: float) -> np.ndarray:
    """Blend each channel toward the pixel's luma; intensity=1 fully desaturates."""
    if intensity == 0:
        return pixels
    out = pixels.copy()
    rgb = pixels[..., :3].astype(np.float32)
    gray = luma(pixels)[..., np.newaxis]
    blended = rgb + (gray - rgb) * np.float32(intensity)
    out[..., :3] = _clip(np.rint(blended))
    return out


def contrast_brightness(pixels: np.ndarray, contrast: float, brightness: float) -> np.ndarray:
    """Apply the contrast curve about mid-grey, then a brightness offset."""
    if contrast == 0 and brightness == 0:
        return pixels
    out = pixels.copy()
    factor = np.float32(contrast_factor(contrast))
    offset = np.float32(brightness * CHANNEL_MAX)
    rgb = pixels[..., :3].astype(np.float32)
    adjusted = factor * (rgb - CONTRAST_PIVOT) + CONTRAST_PIVOT + offset
    out[..., :3] = _clip(np.floor(adjusted + 0.5))
    return out


def apply_tone(pixels: np.ndarray, params: Parameters) -> np.ndarray:
    """Grayscale then contrast/brightness, as configured in ``params``."""
    result = grayscale(pixels, params.grayscale)
    return contrast_brightness(result, params.contrast, params.brightness)
