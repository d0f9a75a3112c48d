"""params.py — Pydantic v2 model for the immutable render parameter set.

Defaults reproduce the baseline preset. Numbers arriving outside their
documented range are clamped to the nearest bound; wrong types and
unparseable colours fail validation.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from .bitmap import parse_color
from .constants import MIN_SCALE, CornerStyle
from .utils import clamp


_UNIT_FIELDS = (
    "grayscale",
    "slice_height_random",
    "slice_width_random",
    "slice_gap_random",
    "tilt_angle_random",
    "corner_frequency_random",
    "corner_size_random",
    "border_width_random",
    "border_length_fraction",
    "border_length_random",
)
_SIGNED_UNIT_FIELDS = ("contrast", "brightness")
_NON_NEGATIVE_FIELDS = (
    "slice_count",
    "slice_min_height",
    "slice_min_width",
    "slice_gap",
    "corner_size",
    "border_offset",
    "text_size",
    "line_width",
)
_COLOR_FIELDS = ("background_color", "border_color", "text_color", "line_color")


class Parameters(BaseModel):
    """Fully-resolved parameter set for one render."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
        allow_inf_nan=False,
    )

    # Tone
    grayscale: float = Field(default=0.0, description="Blend toward luma, 0..1")
    contrast: float = Field(default=0.0, description="Contrast, -1..1")
    brightness: float = Field(default=0.0, description="Brightness offset, -1..1")
    scale: float = Field(default=1.0, description="Scale of the band stack about the centre")
    background_color: str = Field(default="#ffffff", description="Canvas fill")

    # Slices
    slice_count: int = Field(default=12, description="Requested number of bands")
    slice_min_height: float = Field(default=20, description="Lower bound of random band height (px)")
    slice_max_height: float = Field(default=80, description="Upper bound of random band height (px)")
    slice_height_random: float = Field(default=0.5, description="Band height jitter, 0..1")
    slice_min_width: float = Field(default=500, description="Minimum band width (px)")
    slice_max_width: float = Field(default=2000, description="Maximum band width (px)")
    slice_width_random: float = Field(default=0.3, description="Band width jitter, 0..1")
    slice_gap: float = Field(default=8, description="Vertical gap between bands (px)")
    slice_gap_random: float = Field(default=0.5, description="Gap jitter, 0..1")
    tilt_angle: float = Field(default=3, description="Band rotation (degrees)")
    tilt_angle_random: float = Field(default=0.3, description="Tilt jitter, 0..1 (up to ±10°)")

    # Corner cuts
    corner_frequency: int = Field(default=3, description="Every Nth band gets a corner cut")
    corner_frequency_random: float = Field(default=0.4, description="Corner eligibility jitter, 0..1")
    corner_size: float = Field(default=25, description="Corner cut size (px)")
    corner_size_random: float = Field(default=0.5, description="Corner size jitter, 0..1")
    corner_style: CornerStyle = Field(default=CornerStyle.ALL_CORNERS, description="Clip polygon style")

    # Border
    border_enabled: bool = Field(default=True, description="Draw the inset border strokes")
    border_color: str = Field(default="#000000", description="Border stroke colour")
    border_width: float = Field(default=3, description="Border stroke width (px)")
    border_width_random: float = Field(default=0.0, description="Border width jitter, 0..1")
    border_length_fraction: float = Field(default=0.5, description="Stroke length as a fraction of the edge")
    border_length_random: float = Field(default=0.0, description="Border length jitter, 0..1")
    border_offset: float = Field(default=10, description="Inset of the border from the canvas edge (px)")

    # Decorations
    decor_text: str = Field(default="IMAGE EFFECT", description="Label drawn on all four edges")
    text_size: float = Field(default=20, description="Label font size (px)")
    text_color: str = Field(default="#333333", description="Label colour")
    line_width: float = Field(default=2, description="Corner mark stroke width (px)")
    line_color: str = Field(default="#666666", description="Corner mark colour")

    @field_validator(*_UNIT_FIELDS)
    @classmethod
    def _clamp_unit(cls, value: float) -> float:
        return clamp(value, 0.0, 1.0)

    @field_validator(*_SIGNED_UNIT_FIELDS)
    @classmethod
    def _clamp_signed_unit(cls, value: float) -> float:
        return clamp(value, -1.0, 1.0)

    @field_validator(*_NON_NEGATIVE_FIELDS)
    @classmethod
    def _clamp_non_negative(cls, value: float) -> float:
        return max(0, value)

    @field_validator("scale")
    @classmethod
    def _clamp_scale(cls, value: float) -> float:
        return max(MIN_SCALE, value)

    @field_validator("corner_frequency", "border_width")
    @classmethod
    def _at_least_one(cls, value: float) -> float:
        return max(1, value)

    @field_validator("slice_max_height", "slice_max_width")
    @classmethod
    def _max_not_below_min(cls, value: float, info: ValidationInfo) -> float:
        partner = info.field_name.replace("_max_", "_min_")
        return max(value, info.data.get(partner, 0), 0)

    @field_validator(*_COLOR_FIELDS)
    @classmethod
    def _valid_color(cls, value: str) -> str:
        parse_color(value)
        return value

    def with_changes(self, **changes: Any) -> Parameters:
        """Return a re-validated copy with ``changes`` applied.

        Keys may be snake_case field names or their camelCase aliases.
        """
        data = self.model_dump()
        for key, value in changes.items():
            data[_field_name(key)] = value
        return Parameters.model_validate(data)


def _field_name(key: str) -> str:
    if key in Parameters.model_fields:
        return key
    for name, info in Parameters.model_fields.items():
        if info.alias == key:
            return name
    return key


def default_parameters() -> Parameters:
    """The baseline preset."""
    return Parameters()
