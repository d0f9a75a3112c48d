"""
compositor.py
--------------------
Top-level render: source bitmap + parameters + random source → output bitmap.

Stage order is fixed:
  1. background fill
  2. band stack (generate_slices → plan_slice/draw_slice per band),
     scaled about the canvas centre
  3. border strokes (when enabled)
  4. corner marks and labels

The output surface is private to one call; the source is never mutated.
"""

from __future__ import annotations

import logging

from PIL import Image

from .bitmap import Bitmap, parse_color
from .border import border_segments, draw_borders
from .decoration import draw_decorations
from .params import Parameters
from .renderer import draw_slice, plan_slice
from .rng import RandomSource, fresh
from .slices import generate_slices, randomized_gap

logger = logging.getLogger(__name__)


def draw_background(surface: Image.Image, params: Parameters) -> None:
    surface.paste(parse_color(params.background_color), (0, 0, *surface.size))


def draw_image_with_effects(
    surface: Image.Image, source: Bitmap, params: Parameters, rng: RandomSource
) -> int:
    """Place every band; returns how many reached the canvas."""
    slices = generate_slices(source.height, params, rng)
    placed = 0
    cursor_y = 0.0
    for band in slices:
        plan = plan_slice(band, params, source.width, cursor_y, rng)
        if draw_slice(surface, source, plan, params):
            placed += 1
        cursor_y += band.height + randomized_gap(params, rng)
    logger.debug("placed %d/%d bands, stack ends at y=%.1f", placed, len(slices), cursor_y)
    return placed


def apply_effects(
    source: Bitmap, params: Parameters | None = None, rng: RandomSource | None = None
) -> Bitmap:
    """Render the slice effect over ``source``.

    Args:
        source: RGBA bitmap; left untouched.
        params: parameter set, the baseline preset when omitted.
        rng:    random source; fresh entropy when omitted. Pass a seeded
                or replaying source for reproducible output.

    Returns:
        A new bitmap with the source's width and height.
    """
    if params is None:
        params = Parameters()
    if rng is None:
        rng = fresh()
    if source.is_empty:
        logger.debug("zero-area source, returning it unchanged")
        return source.copy()

    surface = Image.new("RGBA", source.size)
    draw_background(surface, params)
    draw_image_with_effects(surface, source, params, rng)

    if params.border_enabled:
        segments = border_segments(source.width, source.height, params, rng)
        draw_borders(surface, segments, params.border_color)
    else:
        logger.debug("border disabled")

    draw_decorations(surface, params)
    return Bitmap.from_image(surface)
