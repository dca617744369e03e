"""
Population and color census for chromalife grids.

Functions accept a raw (height, width) array or anything with a `cells`
attribute (Grid, GridState, Universe).
"""

from __future__ import annotations
from typing import Dict, Optional, Tuple
import numpy as np


def _as_cells(cells) -> np.ndarray:
    if hasattr(cells, 'cells'):
        cells = cells.cells
    return np.asarray(cells)


def pack_rgb(r: int, g: int, b: int) -> int:
    """Pack 8-bit channels into 0x00RRGGBB."""
    for channel in (r, g, b):
        if not 0 <= channel <= 255:
            raise ValueError(f"Channel value {channel} out of range [0, 255]")
    return (int(r) << 16) | (int(g) << 8) | int(b)


def unpack_rgb(color: int) -> Tuple[int, int, int]:
    """Split 0x00RRGGBB into (r, g, b)."""
    color = int(color)
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def population(cells) -> int:
    """Number of live cells."""
    return int(np.count_nonzero(_as_cells(cells)))


def live_fraction(cells) -> float:
    """Fraction of cells alive, in [0, 1]."""
    cells = _as_cells(cells)
    return population(cells) / cells.size if cells.size else 0.0


def color_census(cells) -> Dict[int, int]:
    """
    Live-cell count per color.

    Ordered by count (descending), then color (ascending).
    """
    cells = _as_cells(cells)
    colors, counts = np.unique(cells[cells != 0], return_counts=True)
    order = np.lexsort((colors, -counts))
    return {int(colors[i]): int(counts[i]) for i in order}


def dominant_color(cells) -> Optional[int]:
    """Most common live color, or None for an empty grid."""
    census = color_census(cells)
    if not census:
        return None
    return next(iter(census))
