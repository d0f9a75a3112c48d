"""
renderer.py
--------------------
Per-band rendering: plan the randomized geometry of one slice, then cut
it from the source, tone it, clip it and composite it onto the output
surface.

plan_slice() performs every random draw for a band, in a fixed order:
  1. width            (two draws when width jitter is on)
  2. corner eligibility (one draw when frequency jitter is on)
  3. corner size      (one draw when eligible and size jitter is on)
  4. tilt             (one draw when tilt jitter is on)
  5. notch corner     (one draw for the single-right-angle style)
draw_slice() is deterministic given a plan.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from PIL import Image

from .clip import Point, clip_path, polygon_mask, randomized_corner_size, should_have_corner
from .pixel import apply_tone
from .slices import randomized_tilt
from .utils import clamp, round_half_up

if TYPE_CHECKING:
    from .bitmap import Bitmap
    from .params import Parameters
    from .rng import RandomSource
    from .slices import Slice

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SlicePlan:
    """Resolved geometry for one band."""

    slice: Slice
    width: int
    x_offset: int
    row_start: int
    row_end: int
    cursor_y: float
    corner_size: float
    clip: list[Point] | None
    angle: float

    @property
    def band_height(self) -> int:
        return self.row_end - self.row_start

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.band_height <= 0


def randomized_width(params: Parameters, available: int, rng: RandomSource) -> int:
    """Band width within [slice_min_width, slice_max_width] ∩ [0, available]."""
    low = min(params.slice_min_width, available)
    high = min(params.slice_max_width, available)
    if params.slice_width_random == 0:
        return int(high)
    spread = high - low
    factor = rng.random() * params.slice_width_random
    width = low + spread * (0.5 + (rng.random() - 0.5) * factor)
    return int(clamp(round_half_up(width), low, high))


def plan_slice(
    band: Slice,
    params: Parameters,
    source_width: int,
    cursor_y: float,
    rng: RandomSource,
) -> SlicePlan:
    width = randomized_width(params, source_width, rng)
    row_start = round_half_up(band.source_y)
    row_end = round_half_up(band.source_bottom)

    has_corner = should_have_corner(band.index, params, rng)
    corner_size = randomized_corner_size(params, rng) if has_corner else 0
    angle = randomized_tilt(params, rng)

    clip = None
    if has_corner and corner_size > 0:
        clip = clip_path(params.corner_style, width, row_end - row_start, corner_size, rng)

    return SlicePlan(
        slice=band,
        width=width,
        x_offset=(source_width - width) // 2,
        row_start=row_start,
        row_end=row_end,
        cursor_y=cursor_y,
        corner_size=corner_size,
        clip=clip,
        angle=angle,
    )


def extract_band(source: Bitmap, plan: SlicePlan, params: Parameters) -> np.ndarray:
    """Private, toned and clipped RGBA pixels for the band."""
    band = source.region(plan.x_offset, plan.row_start, plan.width, plan.band_height)
    pixels = apply_tone(band.pixels, params)
    if plan.clip is not None:
        if pixels is band.pixels:
            pixels = pixels.copy()
        mask = polygon_mask(band.width, band.height, plan.clip)
        alpha = pixels[..., 3].astype(np.uint16) * mask // 255
        pixels[..., 3] = alpha.astype(np.uint8)
    return pixels


def draw_slice(surface: Image.Image, source: Bitmap, plan: SlicePlan, params: Parameters) -> bool:
    """Composite the planned band onto ``surface``.

    The band is rotated about its centre, centred horizontally on the
    canvas at ``cursor_y``, and the placement is scaled by ``params.scale``
    about the canvas centre. Returns False when nothing lands on the canvas.
    """
    if plan.is_empty:
        return False
    pixels = extract_band(source, plan, params)
    bh, bw = pixels.shape[:2]
    if bw == 0 or bh == 0:
        return False

    canvas_w, canvas_h = surface.size
    s = params.scale
    theta = math.radians(plan.angle)
    cos_t, sin_t = math.cos(theta), math.sin(theta)
    ox = (canvas_w - canvas_w * s) / 2
    oy = (canvas_h - canvas_h * s) / 2
    cx = canvas_w / 2
    cy = plan.cursor_y + bh / 2

    def forward(x: float, y: float) -> Point:
        u, v = x - bw / 2, y - bh / 2
        return (
            ox + s * (u * cos_t - v * sin_t + cx),
            oy + s * (u * sin_t + v * cos_t + cy),
        )

    corners = [forward(0, 0), forward(bw, 0), forward(bw, bh), forward(0, bh)]
    xs = [p[0] for p in corners]
    ys = [p[1] for p in corners]
    x0, x1 = max(0, math.floor(min(xs))), min(canvas_w, math.ceil(max(xs)))
    y0, y1 = max(0, math.floor(min(ys))), min(canvas_h, math.ceil(max(ys)))
    if x0 >= x1 or y0 >= y1:
        logger.debug("band %d falls outside the canvas", plan.slice.index)
        return False

    # Inverse affine: patch pixel → band-local coordinates
    qx0 = (x0 - ox) / s - cx
    qy0 = (y0 - oy) / s - cy
    coeffs = (
        cos_t / s, sin_t / s, cos_t * qx0 + sin_t * qy0 + bw / 2,
        -sin_t / s, cos_t / s, -sin_t * qx0 + cos_t * qy0 + bh / 2,
    )

    # Resample premultiplied so transparent fill does not darken the edges
    layer = Image.fromarray(pixels).convert("RGBa")
    patch = layer.transform(
        (x1 - x0, y1 - y0),
        Image.Transform.AFFINE,
        coeffs,
        resample=Image.Resampling.BILINEAR,
    ).convert("RGBA")
    surface.alpha_composite(patch, dest=(x0, y0))

    logger.debug(
        "band %d: %dx%d at y=%.1f angle=%.2f corner=%s",
        plan.slice.index, bw, bh, plan.cursor_y, plan.angle, plan.corner_size,
    )
    return True
