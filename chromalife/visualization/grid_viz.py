"""
Grid visualization functions.

Renders packed-color grids and run histories with matplotlib. The host
renderer does the real-time drawing; these are for snapshots and reports.
"""

from __future__ import annotations
from typing import Any, List, Optional
import numpy as np

# Lazy import for matplotlib
_plt = None
_mpl = None

def _get_plt():
    global _plt
    if _plt is None:
        import matplotlib.pyplot as plt
        _plt = plt
    return _plt

def _get_mpl():
    global _mpl
    if _mpl is None:
        import matplotlib
        _mpl = matplotlib
    return _mpl


def to_rgb_image(cells: np.ndarray) -> np.ndarray:
    """
    Decode packed 0x00RRGGBB cells into an RGB image.

    Args:
        cells: (height, width) array, or Grid/GridState/Universe

    Returns:
        (height, width, 3) uint8 array; dead cells are black
    """
    if hasattr(cells, 'cells'):
        cells = cells.cells
    cells = np.asarray(cells, dtype=np.uint32)

    image = np.empty(cells.shape + (3,), dtype=np.uint8)
    image[..., 0] = (cells >> 16) & 0xFF
    image[..., 1] = (cells >> 8) & 0xFF
    image[..., 2] = cells & 0xFF
    return image


def seed_palette(count: int, cmap: str = "hsv") -> List[int]:
    """
    Evenly spaced packed colors sampled from a matplotlib colormap.

    Pure black is nudged to 0x000001 so every color is a live color.
    """
    if count < 1:
        raise ValueError(f"count must be at least 1, got {count}")
    colormap = _get_mpl().colormaps[cmap]

    colors = []
    for i in range(count):
        r, g, b, _ = colormap(i / count)
        packed = (round(r * 255) << 16) | (round(g * 255) << 8) | round(b * 255)
        colors.append(max(packed, 1))
    return colors


def plot_grid(
    cells: np.ndarray,
    ax: Optional[Any] = None,
    ghost: Optional[Any] = None,
    title: str = "",
    ghost_color: str = "#ff6464",
) -> Any:
    """
    Plot a grid state as an image.

    Args:
        cells: Cell array or Grid/GridState/Universe
        ax: Matplotlib axis (created if None)
        ghost: GhostSnapshot; drawn only when active
        title: Plot title
        ghost_color: Marker color for the ghost

    Returns:
        Matplotlib axis
    """
    plt = _get_plt()

    image = to_rgb_image(cells)
    height, width = image.shape[:2]

    if ax is None:
        fig, ax = plt.subplots(figsize=(6, 6 * height / max(width, 1)))

    ax.imshow(image, interpolation='nearest', origin='upper')

    if ghost is not None and ghost.active:
        ax.plot(ghost.x, ghost.y, marker='o', markersize=12,
                color=ghost_color, alpha=0.8, linestyle='none')

    ax.set_xticks([])
    ax.set_yticks([])

    if title:
        ax.set_title(title)

    return ax


def plot_population(
    history: List[Any],
    ax: Optional[Any] = None,
    title: str = "Population",
    color: str = "tab:blue",
) -> Any:
    """
    Plot live-cell count over a run, shading ticks with an active ghost.

    Args:
        history: List of UniverseState (e.g. EvolutionResult.history)
        ax: Matplotlib axis (created if None)
        title: Plot title
        color: Line color

    Returns:
        Matplotlib axis
    """
    plt = _get_plt()

    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 4))

    generations = np.array([s.generation for s in history])
    populations = np.array([s.grid.population() for s in history])
    active = np.array([s.ghost.active for s in history], dtype=bool)

    ax.plot(generations, populations, color=color)
    if active.any():
        ax.fill_between(generations, 0, populations.max(initial=0), where=active,
                        color='gray', alpha=0.2, step='mid', label='ghost active')
        ax.legend(loc='upper right')

    ax.set_xlabel('Generation')
    ax.set_ylabel('Live cells')

    if title:
        ax.set_title(title)

    return ax
