"""
Colored-life rule for chromalife evolution.

The rule is standard Life (B3/S23) with colors:
    - Live cell with 2 or 3 live neighbors survives, keeping its color
    - Dead cell with exactly 3 live neighbors is born
    - Everything else dies or stays dead

A newborn takes the mode color of its live neighbors. Ties go to the
color seen first when scanning N, NE, E, SE, S, SW, W, NW.

Two backends compute the same transition:
- numpy/scipy: convolution for counts, rolled neighbor stack for colors
- numba: JIT-compiled per-cell loop
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence
import numpy as np
from numba import jit
from scipy.ndimage import convolve

from .grid import Grid, DEAD, NEIGHBOR_OFFSETS


SURVIVE_COUNTS = (2, 3)
BIRTH_COUNT = 3

# Convolution kernel for live neighbor counts (reused every step)
NEIGHBOR_KERNEL = np.array([[1, 1, 1], [1, 0, 1], [1, 1, 1]], dtype=np.uint8)

_DR = np.array([dr for dr, _ in NEIGHBOR_OFFSETS], dtype=np.int64)
_DC = np.array([dc for _, dc in NEIGHBOR_OFFSETS], dtype=np.int64)


def mode_color(colors: Sequence[int]) -> int:
    """
    Most frequent live color in scan order.

    Dead entries are ignored. Among equally frequent colors the one that
    appears first wins. Returns 0 if nothing is alive.
    """
    counts: dict[int, int] = {}
    for color in colors:
        if color != DEAD:
            counts[color] = counts.get(color, 0) + 1

    best, best_count = DEAD, 0
    # dicts keep insertion order, i.e. first occurrence in the scan
    for color, count in counts.items():
        if count > best_count:
            best, best_count = color, count
    return int(best)


def transition(color: int, neighbor_colors: Sequence[int]) -> int:
    """
    Next color of a single cell.

    Args:
        color: Current packed color (0 = dead)
        neighbor_colors: Eight neighbor colors in N, NE, E, SE, S, SW, W, NW order
    """
    n = sum(1 for c in neighbor_colors if c != DEAD)
    if color != DEAD:
        return int(color) if n in SURVIVE_COUNTS else DEAD
    if n == BIRTH_COUNT:
        return mode_color(neighbor_colors)
    return DEAD


def live_neighbor_counts(cells: np.ndarray) -> np.ndarray:
    """Number of live toroidal neighbors for every cell."""
    alive = (cells != DEAD).astype(np.uint8)
    return convolve(alive, NEIGHBOR_KERNEL, mode="wrap")


def neighbor_stack(cells: np.ndarray) -> np.ndarray:
    """
    Neighbor colors for every cell, shape (8, height, width).

    Layer k holds the neighbor in direction NEIGHBOR_OFFSETS[k].
    """
    return np.stack([
        np.roll(cells, shift=(-dr, -dc), axis=(0, 1))
        for dr, dc in NEIGHBOR_OFFSETS
    ])


def _next_generation_numpy(cells: np.ndarray) -> np.ndarray:
    counts = live_neighbor_counts(cells)
    alive = cells != DEAD

    out = np.zeros_like(cells)
    survivors = alive & ((counts == SURVIVE_COUNTS[0]) | (counts == SURVIVE_COUNTS[1]))
    out[survivors] = cells[survivors]

    births = ~alive & (counts == BIRTH_COUNT)
    if births.any():
        neigh = neighbor_stack(cells)[:, births].T          # (n_births, 8)
        # First three live neighbors per birth, in scan order
        order = np.argsort(neigh == DEAD, axis=1, kind="stable")[:, :BIRTH_COUNT]
        a, b, c = np.take_along_axis(neigh, order, axis=1).T
        out[births] = np.where((a == b) | (a == c), a, np.where(b == c, b, a))

    return out


@jit(nopython=True)
def _mode_numba(colors: np.ndarray, n: int) -> int:
    """Mode of colors[:n], first occurrence wins ties."""
    best = colors[0]
    best_count = 0
    for i in range(n):
        count = 0
        for j in range(n):
            if colors[j] == colors[i]:
                count += 1
        if count > best_count:
            best_count = count
            best = colors[i]
    return best


@jit(nopython=True)
def _step_kernel_numba(cells: np.ndarray, out: np.ndarray) -> None:
    """Numba-optimized colored-life step from cells into out."""
    h, w = cells.shape
    live = np.empty(8, dtype=np.uint32)

    for r in range(h):
        for c in range(w):
            n = 0
            for k in range(8):
                nb = cells[(r + _DR[k] + h) % h, (c + _DC[k] + w) % w]
                if nb != 0:
                    live[n] = nb
                    n += 1

            cell = cells[r, c]
            if cell != 0:
                if n == 2 or n == 3:
                    out[r, c] = cell
                else:
                    out[r, c] = 0
            elif n == 3:
                out[r, c] = _mode_numba(live, n)
            else:
                out[r, c] = 0


def _next_generation_numba(cells: np.ndarray) -> np.ndarray:
    src = np.ascontiguousarray(cells, dtype=np.uint32)
    out = np.zeros_like(src)
    _step_kernel_numba(src, out)
    return out


@dataclass
class StepResult:
    """Outcome of one rule application."""
    births: int = 0
    deaths: int = 0
    population: int = 0


class RuleEngine:
    """
    Applies the colored-life rule to a Grid.

    The next generation is always built in a fresh array and swapped in,
    so no cell ever reads a value written during the same step and a
    failed step leaves the previous generation untouched.

    Example:
        engine = RuleEngine()
        result = engine.step(grid)
        print(result.births, result.deaths)
    """

    def __init__(self, use_numba: bool = False):
        """
        Initialize rule engine.

        Args:
            use_numba: Use the JIT kernel instead of the numpy/scipy path
        """
        self.use_numba = use_numba

    def next_generation(self, cells: np.ndarray) -> np.ndarray:
        """Compute the next generation of a (height, width) cell array."""
        if self.use_numba:
            return _next_generation_numba(cells)
        return _next_generation_numpy(np.asarray(cells, dtype=np.uint32))

    def step(self, grid: Grid) -> StepResult:
        """Advance grid by one generation (modified in place)."""
        current = grid.view()
        nxt = self.next_generation(current)

        was_alive = current != DEAD
        is_alive = nxt != DEAD
        result = StepResult(
            births=int(np.count_nonzero(is_alive & ~was_alive)),
            deaths=int(np.count_nonzero(was_alive & ~is_alive)),
            population=int(np.count_nonzero(is_alive)),
        )

        grid.replace(nxt)
        return result

    def __repr__(self) -> str:
        backend = "numba" if self.use_numba else "numpy"
        return f"RuleEngine(backend={backend})"
