"""
border.py
--------------------
Inset border strokes drawn over the composited bands.

Four segments (top, bottom, left, right) sit ``border_offset`` px in from
the canvas edges. Each is shortened to ``border_length_fraction`` of its
edge, optionally jittered, and kept centred on the edge.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from PIL import Image, ImageDraw

from .bitmap import parse_color
from .utils import jitter, round_half_up

if TYPE_CHECKING:
    from .clip import Point
    from .params import Parameters
    from .rng import RandomSource


EDGES = ("top", "bottom", "left", "right")


@dataclass(frozen=True, slots=True)
class BorderSegment:
    edge: str
    start: Point
    end: Point
    width: float
    edge_length: float

    @property
    def length(self) -> float:
        return math.dist(self.start, self.end)


def _edge_lines(width: int, height: int, offset: float) -> dict[str, tuple[Point, Point]]:
    return {
        "top": ((offset, offset), (width - offset, offset)),
        "bottom": ((offset, height - offset), (width - offset, height - offset)),
        "left": ((offset, offset), (offset, height - offset)),
        "right": ((width - offset, offset), (width - offset, height - offset)),
    }


def border_segments(width: int, height: int, params: Parameters, rng: RandomSource) -> list[BorderSegment]:
    """Resolve the four strokes; each edge draws length then width jitter."""
    segments = []
    for edge, (start, end) in _edge_lines(width, height, params.border_offset).items():
        edge_length = math.dist(start, end)

        length = edge_length * params.border_length_fraction
        if params.border_length_random > 0:
            length *= min(1.0, jitter(rng.random(), params.border_length_random))

        stroke = params.border_width
        if params.border_width_random > 0:
            stroke = max(1, round_half_up(params.border_width * jitter(rng.random(), params.border_width_random)))

        trim = (edge_length - length) / 2
        (x1, y1), (x2, y2) = start, end
        if edge in ("top", "bottom"):
            step = math.copysign(trim, x2 - x1)
            start, end = (x1 + step, y1), (x2 - step, y2)
        else:
            step = math.copysign(trim, y2 - y1)
            start, end = (x1, y1 + step), (x2, y2 - step)

        segments.append(BorderSegment(edge, start, end, stroke, edge_length))
    return segments


def stroke_polygon(segment: BorderSegment) -> list[Point]:
    """Outline of the stroke with square caps (ends extended by half the width)."""
    (x1, y1), (x2, y2) = segment.start, segment.end
    half = segment.width / 2
    length = segment.length
    if length == 0:
        dx, dy = 1.0, 0.0
    else:
        dx, dy = (x2 - x1) / length, (y2 - y1) / length
    nx, ny = -dy * half, dx * half
    ex, ey = dx * half, dy * half
    return [
        (x1 - ex + nx, y1 - ey + ny),
        (x2 + ex + nx, y2 + ey + ny),
        (x2 + ex - nx, y2 + ey - ny),
        (x1 - ex - nx, y1 - ey - ny),
    ]


def draw_borders(surface: Image.Image, segments: list[BorderSegment], color: str) -> None:
    draw = ImageDraw.Draw(surface, "RGBA")
    fill = parse_color(color)
    for segment in segments:
        if segment.length == 0:
            continue
        draw.polygon(stroke_polygon(segment), fill=fill)
