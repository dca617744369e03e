"""
Analysis module for chromalife.

Provides census tools:
- Population and live fraction
- Per-color counts and dominant color
- Packed color helpers
"""

from .census import (
    pack_rgb,
    unpack_rgb,
    population,
    live_fraction,
    color_census,
    dominant_color,
)

__all__ = [
    "pack_rgb",
    "unpack_rgb",
    "population",
    "live_fraction",
    "color_census",
    "dominant_color",
]
