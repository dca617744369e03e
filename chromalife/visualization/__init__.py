"""
Visualization module for chromalife.

Provides visualization tools:
- Grid snapshots with ghost marker
- Population time series
- Seed palettes from matplotlib colormaps
"""

from .grid_viz import (
    to_rgb_image,
    seed_palette,
    plot_grid,
    plot_population,
)

__all__ = [
    'to_rgb_image',
    'seed_palette',
    'plot_grid',
    'plot_population',
]
