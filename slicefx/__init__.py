"""
slicefx package - slice effect image pipeline.

Public API:
    apply_effects  - Render the effect over a Bitmap
    Parameters     - Immutable parameter set (baseline preset by default)
    Bitmap         - RGBA pixel buffer
    CornerStyle    - Corner cut outline selector

Modules:
    adapter     - File I/O, slider mapping and the interactive session
    bitmap      - RGBA buffers and colour parsing
    border      - Inset border strokes
    clip        - Corner-cut polygons and eligibility
    compositor  - Stage orchestration
    constants   - Shared constants and enums
    decoration  - Corner marks and edge labels
    params      - Parameter model
    pixel       - Grayscale and contrast/brightness filters
    renderer    - Per-band planning and compositing
    rng         - Random sources
    slices      - Band generation, gap and tilt jitter
"""

from .bitmap import Bitmap
from .compositor import apply_effects
from .constants import CornerStyle
from .params import Parameters, default_parameters

__all__ = [
    "Bitmap",
    "CornerStyle",
    "Parameters",
    "apply_effects",
    "default_parameters",
]
