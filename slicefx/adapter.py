"""
adapter.py
--------------------
Interaction layer around the pure pipeline.

The core never touches files or holds state between renders; this module
does, for callers that need it:
  - decoding image files into Bitmaps and encoding results as PNG
  - translating slider-style values (percent knobs) into Parameters
  - EffectSession, which owns the current source, parameters and corner
    style, and coalesces bursts of changes into one debounced render
"""

from __future__ import annotations

import io
import logging
import threading
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from PIL import Image, UnidentifiedImageError

from .bitmap import Bitmap
from .compositor import apply_effects
from .constants import PREVIEW_DELAY, CornerStyle
from .exceptions import BitmapError, ParameterError
from .params import Parameters
from .rng import RandomSource, fresh, seeded

logger = logging.getLogger(__name__)

RenderCallback = Callable[[Bitmap], None]


# Files

def load_bitmap(source: str | Path | bytes) -> Bitmap:
    """Decode an image file (or its bytes) into an RGBA Bitmap."""
    try:
        data = source if isinstance(source, bytes) else Path(source).read_bytes()
        with Image.open(io.BytesIO(data)) as opened:
            bitmap = Bitmap.from_image(opened.convert("RGBA"))
    except (UnidentifiedImageError, OSError) as exc:
        raise BitmapError(f"cannot decode image: {exc}") from exc
    logger.info("loaded %dx%d image", bitmap.width, bitmap.height)
    return bitmap


def encode_png(bitmap: Bitmap) -> bytes:
    buf = io.BytesIO()
    bitmap.to_image().save(buf, format="PNG")
    return buf.getvalue()


def save_png(bitmap: Bitmap, path: str | Path) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(encode_png(bitmap))
    logger.info("wrote %s", out)
    return out


# Sliders

# Knobs whose slider works in percent of the model's unit range
PERCENT_SLIDERS: frozenset[str] = frozenset({
    "grayscale", "contrast", "brightness", "scale",
    "sliceHeightRandom", "sliceWidthRandom", "sliceGapRandom",
    "tiltAngleRandom", "cornerFrequencyRandom", "cornerSizeRandom",
    "borderWidthRandom", "borderLength", "borderLengthRandom",
})

# Slider ids that differ from the model's camelCase aliases
_SLIDER_ALIASES: dict[str, str] = {
    "bgColor": "backgroundColor",
    "borderLength": "borderLengthFraction",
    "cornerType": "cornerStyle",
}

_CORNER_TYPES: dict[str, CornerStyle] = {
    "corner": CornerStyle.ALL_CORNERS,
    "rightAngle": CornerStyle.SINGLE_RIGHT_ANGLE,
}


def parameters_from_sliders(values: Mapping[str, Any], base: Parameters | None = None) -> Parameters:
    """Build Parameters from UI control values.

    Percent sliders (0-100) are divided by 100; pixel, degree, colour,
    text and checkbox values pass through. Controls not present keep the
    value from ``base`` (the baseline preset by default).
    """
    changes: dict[str, Any] = {}
    for key, value in values.items():
        if key in PERCENT_SLIDERS:
            value = float(value) / 100
        if key == "cornerType":
            value = _CORNER_TYPES.get(value, value)
        changes[_SLIDER_ALIASES.get(key, key)] = value
    return (base or Parameters()).with_changes(**changes)


# Session

class EffectSession:
    """Mutable interaction state in front of ``apply_effects``.

    With a ``seed`` each render is reproducible until ``regenerate()``
    moves to the next variation; without one every render draws fresh
    entropy.
    """

    def __init__(
        self,
        source: Bitmap | None = None,
        params: Parameters | None = None,
        seed: int | None = None,
    ) -> None:
        self.source = source
        self.params = params or Parameters()
        self.seed = seed
        self.generation = 0
        self.last_output: Bitmap | None = None
        self._render_lock = threading.Lock()
        self._timer_lock = threading.Lock()
        self._timer: threading.Timer | None = None

    # state

    def load(self, path: str | Path | bytes) -> Bitmap:
        self.source = load_bitmap(path)
        self.last_output = None
        return self.source

    def update(self, **changes: Any) -> Parameters:
        self.params = self.params.with_changes(**changes)
        return self.params

    def update_sliders(self, values: Mapping[str, Any]) -> Parameters:
        self.params = parameters_from_sliders(values, base=self.params)
        return self.params

    def set_corner_style(self, style: CornerStyle | str) -> Parameters:
        return self.update(corner_style=CornerStyle(style))

    def reset(self) -> Parameters:
        """Back to the baseline preset."""
        self.params = Parameters()
        return self.params

    # rendering

    def _random_source(self) -> RandomSource:
        if self.seed is None:
            return fresh()
        return seeded(f"{self.seed}-{self.generation}")

    def render(self) -> Bitmap | None:
        """Render the current source; None when nothing is loaded."""
        if self.source is None:
            return None
        with self._render_lock:
            self.last_output = apply_effects(self.source, self.params, self._random_source())
        return self.last_output

    def regenerate(self) -> Bitmap | None:
        """Render a new random variation with unchanged parameters."""
        self.generation += 1
        return self.render()

    def schedule_render(self, callback: RenderCallback, delay: float = PREVIEW_DELAY) -> None:
        """Render ``delay`` seconds from now, superseding any pending request."""
        with self._timer_lock:
            if self._timer is not None:
                self._timer.cancel()
            timer = threading.Timer(delay, self._run_scheduled, args=(callback,))
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> None:
        with self._timer_lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _run_scheduled(self, callback: RenderCallback) -> None:
        with self._timer_lock:
            self._timer = None
        output = self.render()
        if output is not None:
            callback(output)

    def export_png(self, path: str | Path) -> Path | None:
        """Write the latest render as PNG; None when nothing has been rendered."""
        if self.last_output is None:
            return None
        return save_png(self.last_output, path)


def parse_override(item: str) -> tuple[str, str]:
    """Split a ``key=value`` override string."""
    key, sep, value = item.partition("=")
    key = key.strip()
    if not sep or not key:
        raise ParameterError(f"expected KEY=VALUE, got {item!r}")
    return key, value.strip()
