"""
Custom exceptions for the slice effect pipeline.
"""

from __future__ import annotations


class EffectError(Exception):
    """Base exception for slice effect errors."""

    pass


class BitmapError(EffectError):
    """Malformed pixel buffer or undecodable image."""

    pass


class ParameterError(EffectError):
    """Malformed parameter override or parameter file."""

    pass
