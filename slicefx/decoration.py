"""
decoration.py
--------------------
Frame ornaments drawn last, in unscaled canvas coordinates:
  - two nested sets of L-shaped tick marks at the four canvas corners
  - the upper-cased label centred on each edge; left and right copies
    run vertically
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING

from PIL import Image, ImageDraw, ImageFont

from .bitmap import parse_color
from .constants import CORNER_MARK_RATIO, FONT_CANDIDATES, INNER_MARK_RATIO, TEXT_INSET
from .utils import round_half_up

if TYPE_CHECKING:
    from .clip import Point
    from .params import Parameters

logger = logging.getLogger(__name__)

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


# Corner marks

def _corner_mark(x: float, y: float, size: float, left: bool, top: bool) -> list[Point]:
    dir_x = 1 if left else -1
    dir_y = 1 if top else -1
    return [(x, y - dir_y * size), (x, y), (x - dir_x * size, y)]


def corner_marks(width: int, height: int) -> list[list[Point]]:
    """Outer then inner L polylines for the four corners (TL, TR, BL, BR)."""
    marks = []
    outer = min(width, height) * CORNER_MARK_RATIO
    for size in (outer, outer * INNER_MARK_RATIO):
        marks.append(_corner_mark(size, size, size, True, True))
        marks.append(_corner_mark(width - size, size, size, False, True))
        marks.append(_corner_mark(size, height - size, size, True, False))
        marks.append(_corner_mark(width - size, height - size, size, False, False))
    return marks


def draw_corner_marks(surface: Image.Image, params: Parameters) -> None:
    line_width = round_half_up(params.line_width)
    if line_width <= 0:
        return
    draw = ImageDraw.Draw(surface, "RGBA")
    fill = parse_color(params.line_color)
    radius = params.line_width / 2
    for mark in corner_marks(*surface.size):
        draw.line(mark, fill=fill, width=line_width, joint="curve")
        # round caps
        for x, y in (mark[0], mark[-1]):
            draw.ellipse((x - radius, y - radius, x + radius, y + radius), fill=fill)


# Labels

@dataclass(frozen=True, slots=True)
class TextPlacement:
    """Label anchor; rotation is in degrees, clockwise as seen on screen."""

    center: Point
    rotation: int


def text_placements(width: int, height: int, params: Parameters) -> list[TextPlacement]:
    inset = params.border_offset + TEXT_INSET
    return [
        TextPlacement((width / 2, inset), 0),
        TextPlacement((width / 2, height - inset), 0),
        TextPlacement((inset, height / 2), -90),
        TextPlacement((width - inset, height / 2), 90),
    ]


@lru_cache(maxsize=16)
def load_font(size: int) -> Font:
    """Bold sans-serif at ``size`` px, falling back to Pillow's bundled font."""
    for name in FONT_CANDIDATES:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    logger.debug("no bold TrueType face found, using Pillow default font")
    return ImageFont.load_default(size=size)


def render_label(text: str, params: Parameters) -> Image.Image:
    """Transparent RGBA image holding the label, tightly cropped."""
    font = load_font(max(1, round_half_up(params.text_size)))
    left, top, right, bottom = font.getbbox(text)
    label = Image.new("RGBA", (max(1, right - left), max(1, bottom - top)), (0, 0, 0, 0))
    ImageDraw.Draw(label).text((-left, -top), text, font=font, fill=parse_color(params.text_color))
    return label


_ROTATIONS = {
    0: None,
    -90: Image.Transpose.ROTATE_90,   # counter-clockwise on screen
    90: Image.Transpose.ROTATE_270,   # clockwise on screen
}


def draw_text_labels(surface: Image.Image, params: Parameters) -> None:
    if not params.decor_text.strip() or params.text_size <= 0:
        return
    label = render_label(params.decor_text.upper(), params)
    for placement in text_placements(*surface.size, params):
        transpose = _ROTATIONS[placement.rotation]
        glyphs = label.transpose(transpose) if transpose is not None else label
        cx, cy = placement.center
        _composite_clipped(
            surface, glyphs, round_half_up(cx - glyphs.width / 2), round_half_up(cy - glyphs.height / 2)
        )


def _composite_clipped(surface: Image.Image, layer: Image.Image, x: int, y: int) -> None:
    """alpha_composite that tolerates layers hanging off the canvas."""
    sx, sy = max(0, -x), max(0, -y)
    dx, dy = max(0, x), max(0, y)
    w = min(layer.width - sx, surface.width - dx)
    h = min(layer.height - sy, surface.height - dy)
    if w <= 0 or h <= 0:
        return
    surface.alpha_composite(layer, dest=(dx, dy), source=(sx, sy, sx + w, sy + h))


def draw_decorations(surface: Image.Image, params: Parameters) -> None:
    draw_corner_marks(surface, params)
    draw_text_labels(surface, params)
