"""Pytest configuration and shared fixtures for the slice effect pipeline."""

from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest

# Make the repository root importable without installation
REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))

from slicefx.bitmap import Bitmap  # noqa: E402
from slicefx.params import Parameters  # noqa: E402
from slicefx.rng import ReplayRandom  # noqa: E402


def gradient_pixels(width: int, height: int) -> np.ndarray:
    """Opaque RGBA test pattern: R follows x, G follows y, B constant."""
    ys, xs = np.mgrid[0:height, 0:width]
    arr = np.empty((height, width, 4), dtype=np.uint8)
    arr[..., 0] = xs % 256
    arr[..., 1] = ys % 256
    arr[..., 2] = 128
    arr[..., 3] = 255
    return arr


@pytest.fixture
def repo_root() -> Path:
    """Return the repository root path."""
    return REPO_ROOT


@pytest.fixture
def source() -> Bitmap:
    """1000×600 colour gradient."""
    return Bitmap(gradient_pixels(1000, 600))


@pytest.fixture
def small_source() -> Bitmap:
    """120×80 colour gradient for fast checks."""
    return Bitmap(gradient_pixels(120, 80))


@pytest.fixture
def defaults() -> Parameters:
    return Parameters()


@pytest.fixture
def mid_random() -> ReplayRandom:
    """Every draw is 0.5, which zeroes all symmetric jitter."""
    return ReplayRandom([0.5])


@pytest.fixture
def zero_random() -> ReplayRandom:
    return ReplayRandom([0.0])
