"""Tests for slicefx.border module."""

from __future__ import annotations

import math
from random import Random

import numpy as np
import pytest
from PIL import Image

from slicefx.border import BorderSegment, border_segments, draw_borders, stroke_polygon
from slicefx.params import Parameters
from slicefx.rng import ReplayRandom


class TestBorderSegments:
    """Test cases for border geometry."""

    def test_default_segments(self, defaults: Parameters, zero_random: ReplayRandom) -> None:
        top, bottom, left, right = border_segments(1000, 600, defaults, zero_random)

        assert top.edge == "top" and top.start == (255, 10) and top.end == (745, 10)
        assert bottom.start == (255, 590) and bottom.end == (745, 590)
        assert left.start == (10, 155) and left.end == (10, 445)
        assert right.start == (990, 155) and right.end == (990, 445)
        assert all(s.width == 3 for s in (top, bottom, left, right))
        assert zero_random.draws == 0

    @pytest.mark.parametrize("seed", range(10))
    def test_length_bounded_and_centred(self, seed: int) -> None:
        params = Parameters(border_length_fraction=1, border_length_random=1, border_width_random=1)
        for segment in border_segments(800, 500, params, Random(seed)):
            assert segment.length <= segment.edge_length + 1e-9
            if segment.edge in ("top", "bottom"):
                head = segment.start[0] - params.border_offset
                tail = (800 - params.border_offset) - segment.end[0]
            else:
                head = segment.start[1] - params.border_offset
                tail = (500 - params.border_offset) - segment.end[1]
            assert head == pytest.approx(tail)
            assert segment.width >= 1

    def test_length_drawn_before_width(self) -> None:
        params = Parameters(border_length_random=1, border_width_random=1)
        top = border_segments(1000, 600, params, ReplayRandom([0.99, 0.0]))[0]

        # length factor 1.98 is capped at 1; width factor 0 floors at 1 px
        assert top.length == pytest.approx(490)
        assert top.width == 1

    def test_zero_fraction_collapses_to_midpoint(self, zero_random: ReplayRandom) -> None:
        params = Parameters(border_length_fraction=0)
        top = border_segments(1000, 600, params, zero_random)[0]
        assert top.start == top.end == (500, 10)


class TestStrokePolygon:
    """Test cases for square-capped strokes."""

    def test_caps_extend_half_width(self) -> None:
        segment = BorderSegment("top", (10, 10), (20, 10), 4, 30)
        xs = [p[0] for p in stroke_polygon(segment)]
        ys = [p[1] for p in stroke_polygon(segment)]

        assert (min(xs), max(xs)) == (8, 22)
        assert (min(ys), max(ys)) == (8, 12)

    def test_vertical_stroke(self) -> None:
        segment = BorderSegment("left", (5, 0), (5, 10), 2, 10)
        xs = [p[0] for p in stroke_polygon(segment)]
        ys = [p[1] for p in stroke_polygon(segment)]

        assert (min(xs), max(xs)) == (4, 6)
        assert (min(ys), max(ys)) == (-1, 11)


class TestDrawBorders:
    """Test cases for stroking the segments."""

    def test_paints_only_near_segments(self, defaults: Parameters, zero_random: ReplayRandom) -> None:
        surface = Image.new("RGBA", (100, 60), (255, 255, 255, 255))
        draw_borders(surface, border_segments(100, 60, defaults, zero_random), "#000000")
        out = np.array(surface)

        assert out[10, 50].tolist() == [0, 0, 0, 255]
        assert out[30, 10].tolist() == [0, 0, 0, 255]
        assert out[5, 5].tolist() == [255, 255, 255, 255]
        assert out[30, 50].tolist() == [255, 255, 255, 255]

    def test_segment_length_never_exceeds_edge(self, defaults: Parameters) -> None:
        for segment in border_segments(321, 123, defaults, Random(1)):
            assert math.dist(segment.start, segment.end) <= segment.edge_length
