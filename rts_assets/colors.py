"""Colour shading used by every sprite recipe."""
from __future__ import annotations

from functools import lru_cache

from .models import ColorLike, ColorSpec


def _scale_channel(channel: int, percent: int) -> int:
    # Integer arithmetic keeps the result exact. Values below zero only
    # appear for percent < -100 and are clamped like the upper bound.
    scaled = channel * (100 + percent) // 100
    return max(0, min(255, scaled))


@lru_cache(maxsize=1024)
def _shade(color: ColorSpec, percent: int) -> ColorSpec:
    return ColorSpec(
        _scale_channel(color.r, percent),
        _scale_channel(color.g, percent),
        _scale_channel(color.b, percent),
    )


def shade(color: ColorLike, percent: int) -> ColorSpec:
    """Lighten (positive ``percent``) or darken (negative) ``color``.

    Each channel becomes ``floor(c * (100 + percent) / 100)`` clamped to
    ``[0, 255]``. ``percent == 0`` returns the colour unchanged.
    """

    if isinstance(percent, bool) or not isinstance(percent, int):
        raise TypeError(f"percent must be an int, got {type(percent).__name__}")
    return _shade(ColorSpec.parse(color), percent)


def shade_hex(color: ColorLike, percent: int) -> str:
    return shade(color, percent).hex
