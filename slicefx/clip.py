"""
clip.py
--------------------
Corner-cut clip polygons for slice bands.

Two outlines are supported:
  all corners       8-point octagon, an isosceles right triangle cut
                    from every corner of the band rectangle
  single right angle 7-point outline, the rectangle minus one square
                    notch at a randomly chosen corner

Coordinates are band-local with y pointing down; (0, 0) is the band's
top-left pixel corner.
"""

from __future__ import annotations

import math
from enum import IntEnum
from typing import TYPE_CHECKING

import numpy as np
from PIL import Image, ImageDraw

from .constants import (
    CORNER_INJECT_WEIGHT,
    CORNER_SUPPRESS_WEIGHT,
    MIN_CORNER_SIZE,
    CornerStyle,
)
from .utils import round_half_up

if TYPE_CHECKING:
    from .params import Parameters
    from .rng import RandomSource


Point = tuple[float, float]


class Corner(IntEnum):
    TOP_LEFT = 0
    TOP_RIGHT = 1
    BOTTOM_LEFT = 2
    BOTTOM_RIGHT = 3


def max_corner_size(width: float, height: float) -> float:
    return min(width, height) / 2


# Outlines

def all_corners_path(width: float, height: float, corner_size: float) -> list[Point]:
    """Octagon, clockwise from (corner_size, 0)."""
    c = max(0.0, min(corner_size, max_corner_size(width, height)))
    w, h = width, height
    return [
        (c, 0),
        (w - c, 0),
        (w, c),
        (w, h - c),
        (w - c, h),
        (c, h),
        (0, h - c),
        (0, c),
    ]


def single_corner_path(
    width: float, height: float, corner_size: float, corner: Corner
) -> list[Point]:
    """Rectangle minus a square notch at ``corner``; the last point closes the outline."""
    c = max(0.0, min(corner_size, max_corner_size(width, height)))
    w, h = width, height
    if corner == Corner.TOP_LEFT:
        return [(c, 0), (w, 0), (w, h), (0, h), (0, c), (c, c), (c, 0)]
    if corner == Corner.TOP_RIGHT:
        return [(0, 0), (w - c, 0), (w - c, c), (w, c), (w, h), (0, h), (0, 0)]
    if corner == Corner.BOTTOM_LEFT:
        return [(0, 0), (w, 0), (w, h), (c, h), (c, h - c), (0, h - c), (0, 0)]
    return [(0, 0), (w, 0), (w, h - c), (w - c, h - c), (w - c, h), (0, h), (0, 0)]


def pick_corner(rng: RandomSource) -> Corner:
    return Corner(min(3, math.floor(rng.random() * 4)))


def clip_path(
    style: CornerStyle,
    width: float,
    height: float,
    corner_size: float,
    rng: RandomSource,
) -> list[Point]:
    """Build the outline for ``style``; the single-corner style draws one random."""
    if style == CornerStyle.SINGLE_RIGHT_ANGLE:
        return single_corner_path(width, height, corner_size, pick_corner(rng))
    return all_corners_path(width, height, corner_size)


# Eligibility and size

def should_have_corner(index: int, params: Parameters, rng: RandomSource) -> bool:
    """Every ``corner_frequency``-th band gets a corner, with asymmetric jitter.

    With frequency jitter enabled an expected corner survives a draw above
    0.3 × jitter, and an unexpected one appears on a draw below 0.2 × jitter.
    """
    base = (index + 1) % params.corner_frequency == 0
    jitter = params.corner_frequency_random
    if jitter > 0:
        if base:
            return rng.random() > jitter * CORNER_SUPPRESS_WEIGHT
        return rng.random() < jitter * CORNER_INJECT_WEIGHT
    return base


def randomized_corner_size(params: Parameters, rng: RandomSource) -> float:
    if params.corner_size_random == 0:
        return params.corner_size
    factor = 1 + (rng.random() - 0.5) * params.corner_size_random
    return max(MIN_CORNER_SIZE, round_half_up(params.corner_size * factor))


# Rasterisation

def polygon_mask(width: int, height: int, points: list[Point]) -> np.ndarray:
    """uint8 (H, W) mask, 255 inside the polygon and 0 outside."""
    mask = Image.new("L", (width, height), 0)
    ImageDraw.Draw(mask).polygon(points, fill=255)
    return np.array(mask, dtype=np.uint8)
