"""
slices.py
--------------------
Partition the source height into horizontal bands and jitter the
spacing and tilt used when the bands are placed.

generate_slices() only depends on the total height, the parameters and
the random source; it knows nothing about pixels.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .constants import MAX_TILT_JITTER, MIN_SLICE_HEIGHT
from .utils import jitter, lerp, round_half_up

if TYPE_CHECKING:
    from .params import Parameters
    from .rng import RandomSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Slice:
    """One band of the source: rows [source_y, source_y + height)."""

    height: float
    source_y: float
    index: int

    @property
    def source_bottom(self) -> float:
        return self.source_y + self.height


def generate_slices(total_height: float, params: Parameters, rng: RandomSource) -> list[Slice]:
    """Split ``total_height`` into at most ``slice_count`` bands, top to bottom.

    Each band starts at the average height; with height jitter enabled it
    is pulled toward a random height in [slice_min_height, slice_max_height]
    by a freshly drawn weight. Heights are clamped to [10, remaining], so
    the stack never runs past the source and the run may end early.
    """
    if params.slice_count <= 0 or total_height <= 0:
        return []

    slices: list[Slice] = []
    remaining = float(total_height)
    average = total_height / params.slice_count
    low, high = params.slice_min_height, params.slice_max_height

    while remaining > 0 and len(slices) < params.slice_count:
        height = average
        if params.slice_height_random > 0:
            weight = rng.random() * params.slice_height_random
            target = low + rng.random() * (high - low)
            height = lerp(height, target, weight)

        height = min(remaining, max(MIN_SLICE_HEIGHT, height))
        slices.append(Slice(height=height, source_y=total_height - remaining, index=len(slices)))
        remaining -= height

    logger.debug("generated %d of %d bands over %s px", len(slices), params.slice_count, total_height)
    return slices


def randomized_gap(params: Parameters, rng: RandomSource) -> float:
    """Vertical spacing placed after a band."""
    if params.slice_gap_random == 0:
        return params.slice_gap
    factor = jitter(rng.random(), params.slice_gap_random)
    return max(0, round_half_up(params.slice_gap * factor))


def randomized_tilt(params: Parameters, rng: RandomSource) -> float:
    """Band rotation in degrees; jitter reaches ±10° at tilt_angle_random=1."""
    if params.tilt_angle_random == 0:
        return params.tilt_angle
    spread = MAX_TILT_JITTER * params.tilt_angle_random
    return params.tilt_angle + (rng.random() - 0.5) * 2 * spread
