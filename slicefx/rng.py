"""
rng.py
--------------------
Random sources for the pipeline.

Every randomized function in the package receives a ``RandomSource``
explicitly. ``random.Random`` already satisfies the protocol, so a
seeded stream is just ``Random(seed)``; the helpers here cover replaying
a fixed sequence and adapting a numpy ``Generator``.
"""

from __future__ import annotations

from collections.abc import Iterable
from random import Random
from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class RandomSource(Protocol):
    """Anything that yields uniform floats in [0, 1)."""

    def random(self) -> float: ...


def seeded(seed: int | str | None) -> Random:
    """Replayable stream: equal seeds give equal draws."""
    return Random(seed)


def fresh() -> Random:
    """New entropy on every call."""
    return Random()


class ReplayRandom:
    """Cycle through a fixed sequence of draws.

    ``ReplayRandom([0])`` always returns 0; ``ReplayRandom([0.1, 0.9])``
    alternates. Values must lie in [0, 1).
    """

    def __init__(self, values: Iterable[float]) -> None:
        self._values = [float(v) for v in values]
        if not self._values:
            raise ValueError("ReplayRandom needs at least one value")
        for v in self._values:
            if not 0.0 <= v < 1.0:
                raise ValueError(f"draw {v!r} outside [0, 1)")
        self._pos = 0
        self.draws = 0

    def random(self) -> float:
        value = self._values[self._pos]
        self._pos = (self._pos + 1) % len(self._values)
        self.draws += 1
        return value


class NumpyRandom:
    """Adapt a ``numpy.random.Generator`` to the RandomSource protocol."""

    def __init__(self, generator: np.random.Generator | None = None) -> None:
        self._gen = generator if generator is not None else np.random.default_rng()

    def random(self) -> float:
        return float(self._gen.random())
