"""
utils.py
--------------------
Pure numeric helpers shared across modules.
No heavy dependencies — only stdlib.
"""

import math


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round .5 away from negative infinity (2.5 → 3, -2.5 → -2)."""
    return math.floor(value + 0.5)


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation from a toward b by t."""
    return a * (1 - t) + b * t


def jitter(rng_value: float, spread: float) -> float:
    """Map a [0, 1) draw to a multiplier in 1 ± spread.

      jitter(0.5, s) == 1.0
      jitter(0.0, s) == 1 - s
    """
    return 1 + (rng_value - 0.5) * 2 * spread
