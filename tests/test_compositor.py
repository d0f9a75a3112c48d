"""End-to-end tests for slicefx.compositor."""

from __future__ import annotations

import numpy as np
import pytest

from slicefx.bitmap import Bitmap
from slicefx.border import border_segments, stroke_polygon
from slicefx.compositor import apply_effects
from slicefx.params import Parameters
from slicefx.rng import ReplayRandom, seeded
from slicefx.slices import generate_slices


def _bare(**changes: object) -> Parameters:
    """Bands only: no frame, no labels."""
    base = dict(border_enabled=False, decor_text="", line_width=0)
    base.update(changes)
    return Parameters(**base)


class TestApplyEffects:
    """Test cases for the full render."""

    def test_output_matches_source_size(self, source: Bitmap, defaults: Parameters) -> None:
        out = apply_effects(source, defaults, seeded(1))
        assert out.size == (1000, 600)
        assert out.pixels.dtype == np.uint8

    def test_seeded_runs_are_byte_identical(self, source: Bitmap, defaults: Parameters) -> None:
        first = apply_effects(source, defaults, seeded(42))
        second = apply_effects(source, defaults, seeded(42))
        assert first.tobytes() == second.tobytes()

    def test_replayed_runs_are_byte_identical(self, source: Bitmap, defaults: Parameters) -> None:
        first = apply_effects(source, defaults, ReplayRandom([0.5, 0.2, 0.8]))
        second = apply_effects(source, defaults, ReplayRandom([0.5, 0.2, 0.8]))
        assert first.tobytes() == second.tobytes()

    def test_grayscale_changes_centre_pixel(self, source: Bitmap, defaults: Parameters) -> None:
        colour = apply_effects(source, defaults, ReplayRandom([0.5]))
        gray = apply_effects(source, defaults.with_changes(grayscale=1), ReplayRandom([0.5]))

        r, g, b, _ = colour.pixels[300, 500].tolist()
        assert abs(r - g) > 50
        gr, gg, gb, _ = gray.pixels[300, 500].tolist()
        assert gr == gg == gb
        assert colour.pixels[300, 500].tolist() != gray.pixels[300, 500].tolist()

    def test_source_not_mutated(self, source: Bitmap, defaults: Parameters) -> None:
        before = source.pixels.copy()
        apply_effects(source, defaults.with_changes(grayscale=1, contrast=0.5), seeded(3))
        assert np.array_equal(source.pixels, before)

    def test_single_band_spans_full_height_at_top(self, source: Bitmap) -> None:
        params = _bare(
            slice_count=1,
            slice_height_random=0,
            slice_gap=0,
            slice_width_random=0,
            tilt_angle=0,
            tilt_angle_random=0,
            corner_frequency_random=0,
        )
        slices = generate_slices(source.height, params, seeded(0))
        assert len(slices) == 1
        assert (slices[0].source_y, slices[0].height) == (0, 600)

        out = apply_effects(source, params, seeded(0))
        diff = np.abs(out.pixels.astype(int) - source.pixels.astype(int))
        assert diff.max() <= 1

    def test_disabled_border_differs_only_in_stroke_footprint(
        self, source: Bitmap, defaults: Parameters
    ) -> None:
        with_border = apply_effects(source, defaults, seeded(5))
        without = apply_effects(source, defaults.with_changes(border_enabled=False), seeded(5))

        changed = (with_border.pixels != without.pixels).any(axis=2)
        assert changed.any()

        footprint = np.zeros_like(changed)
        for segment in border_segments(1000, 600, defaults, seeded(0)):
            xs = [p[0] for p in stroke_polygon(segment)]
            ys = [p[1] for p in stroke_polygon(segment)]
            x0, x1 = int(min(xs)) - 1, int(max(xs)) + 2
            y0, y1 = int(min(ys)) - 1, int(max(ys)) + 2
            footprint[max(0, y0):y1, max(0, x0):x1] = True
        assert not (changed & ~footprint).any()

    def test_zero_area_source_returned_unchanged(self, defaults: Parameters) -> None:
        empty = Bitmap(np.zeros((0, 10, 4), dtype=np.uint8))
        out = apply_effects(empty, defaults, seeded(0))
        assert out.size == (10, 0)
        assert out is not empty

    def test_zero_slices_leaves_background(self, source: Bitmap) -> None:
        out = apply_effects(source, _bare(slice_count=0, background_color="#ff0000"), seeded(0))
        assert (out.pixels == [255, 0, 0, 255]).all()

    def test_scale_keeps_frame_in_place(self, source: Bitmap, defaults: Parameters) -> None:
        small = apply_effects(source, defaults.with_changes(scale=0.3), ReplayRandom([0.5]))
        big = apply_effects(source, defaults.with_changes(scale=1.0), ReplayRandom([0.5]))

        # border stroke at the top edge midpoint is unaffected by scale
        assert small.pixels[10, 500].tolist() == big.pixels[10, 500].tolist() == [0, 0, 0, 255]
        # shrunken stack leaves the outer band area to the background
        assert small.pixels[150, 100].tolist() == [255, 255, 255, 255]

    def test_default_random_source(self, small_source: Bitmap) -> None:
        out = apply_effects(small_source)
        assert out.size == small_source.size

    @pytest.mark.parametrize("style", ["all_corners", "single_right_angle"])
    def test_corner_styles_render(self, source: Bitmap, style: str) -> None:
        params = Parameters(corner_style=style, corner_frequency=1)
        out = apply_effects(source, params, seeded(9))
        assert out.size == source.size
