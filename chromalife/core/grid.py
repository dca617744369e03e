"""
Grid representation for the colored-life universe.

The grid is a 2D array of packed colors, row-major, addressed (row, col):

    cell = 0x00RRGGBB   (0 = dead, anything else = alive with that color)

Key concepts:
- Storage: one contiguous numpy uint32 array per grid
- Topology: toroidal, but only neighbor queries wrap; direct access is range-checked
- Snapshots: immutable GridState for determinism checks and cycle detection
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple, Iterator
import numpy as np


DEAD = 0
MAX_COLOR = 0xFFFFFF

# (delta_row, delta_col) in the fixed scan order N, NE, E, SE, S, SW, W, NW.
# Birth-color tie-breaks depend on this order.
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
)


def is_valid_color(color: int) -> bool:
    """True for a packed color a live cell may carry (non-black 24-bit RGB)."""
    return 0 < int(color) <= MAX_COLOR


@dataclass(frozen=True)
class GridState:
    """
    Immutable snapshot of grid cells at a given generation.

    Attributes:
        cells: Read-only (height, width) uint32 array
        generation: Generation when this state was captured
    """
    cells: np.ndarray
    generation: int = 0

    def __post_init__(self):
        cells = np.array(self.cells, dtype=np.uint32, copy=True)
        cells.flags.writeable = False
        object.__setattr__(self, "cells", cells)

    @property
    def width(self) -> int:
        return int(self.cells.shape[1])

    @property
    def height(self) -> int:
        return int(self.cells.shape[0])

    def population(self) -> int:
        """Number of live cells."""
        return int(np.count_nonzero(self.cells))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridState):
            return False
        return np.array_equal(self.cells, other.cells)

    def __hash__(self) -> int:
        return hash((self.cells.shape, self.cells.tobytes()))


class Grid:
    """
    Mutable toroidal grid of packed colors.

    Example:
        grid = Grid(width=10, height=10)
        grid.set(0, 0, 0xFF0000)
        grid.set(9, 0, 0x00FF00)

        grid.neighbors(0, 0)[0]   # 0x00FF00, north of (0, 0) wraps to row 9
        grid.get(10, 0)           # IndexError
    """

    def __init__(self, width: int, height: int):
        """
        Initialize an all-dead grid.

        Args:
            width: Number of columns
            height: Number of rows
        """
        if width < 1 or height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self._cells = np.zeros((height, width), dtype=np.uint32)

    @classmethod
    def from_array(cls, array: np.ndarray | List[List[int]]) -> "Grid":
        """Create grid from a 2D array of packed colors."""
        array = np.asarray(array)
        if array.ndim != 2:
            raise ValueError(f"Expected a 2D array, got shape {array.shape}")
        if array.size and (array.min() < 0 or array.max() > MAX_COLOR):
            raise ValueError("Cell values must be packed 24-bit colors")
        height, width = array.shape
        grid = cls(width=width, height=height)
        grid._cells[:] = array.astype(np.uint32)
        return grid

    @property
    def width(self) -> int:
        return int(self._cells.shape[1])

    @property
    def height(self) -> int:
        return int(self._cells.shape[0])

    @property
    def shape(self) -> Tuple[int, int]:
        """(height, width)"""
        return self.height, self.width

    @property
    def cells(self) -> np.ndarray:
        """Raw cell values as numpy array (read-only copy)."""
        cells = self._cells.copy()
        cells.flags.writeable = False
        return cells

    def _check(self, row: int, col: int) -> None:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(
                f"Cell ({row}, {col}) out of bounds [0, {self.height}) x [0, {self.width})"
            )

    def get(self, row: int, col: int) -> int:
        """Packed color at (row, col); 0 when dead."""
        self._check(row, col)
        return int(self._cells[row, col])

    def set(self, row: int, col: int, color: int) -> None:
        """Overwrite the cell at (row, col)."""
        self._check(row, col)
        self._cells[row, col] = color

    def __getitem__(self, index: Tuple[int, int]) -> int:
        return self.get(*index)

    def __setitem__(self, index: Tuple[int, int], color: int) -> None:
        self.set(index[0], index[1], color)

    def neighbors(self, row: int, col: int) -> List[int]:
        """
        Colors of the eight toroidal neighbors of (row, col).

        Order is N, NE, E, SE, S, SW, W, NW.
        """
        self._check(row, col)
        h, w = self.shape
        return [
            int(self._cells[(row + dr + h) % h, (col + dc + w) % w])
            for dr, dc in NEIGHBOR_OFFSETS
        ]

    def live_neighbor_count(self, row: int, col: int) -> int:
        """Number of live cells among the eight neighbors."""
        return sum(1 for color in self.neighbors(row, col) if color != DEAD)

    def population(self) -> int:
        """Number of live cells."""
        return int(np.count_nonzero(self._cells))

    # ===== Bulk mutation =====

    def clear(self) -> "Grid":
        """Kill every cell."""
        self._cells.fill(DEAD)
        return self

    def clear_rect(self, row0: int, row1: int, col0: int, col1: int) -> int:
        """
        Kill cells in rows [row0, row1) and columns [col0, col1).

        The rectangle is clipped to the grid. Returns number of cells killed.
        """
        row0, row1 = max(0, row0), min(self.height, row1)
        col0, col1 = max(0, col0), min(self.width, col1)
        if row0 >= row1 or col0 >= col1:
            return 0
        region = self._cells[row0:row1, col0:col1]
        killed = int(np.count_nonzero(region))
        region.fill(DEAD)
        return killed

    def replace(self, cells: np.ndarray) -> None:
        """Swap in a complete next generation of the same shape."""
        if cells.shape != self._cells.shape:
            raise ValueError(f"Shape mismatch: {cells.shape} != {self._cells.shape}")
        self._cells = np.ascontiguousarray(cells, dtype=np.uint32)

    def view(self) -> np.ndarray:
        """Internal array without copying. Callers must not write to it."""
        return self._cells

    # ===== State management =====

    def to_state(self, generation: int = 0) -> GridState:
        """Create immutable snapshot of current cells."""
        return GridState(cells=self._cells, generation=generation)

    def from_state(self, state: GridState) -> "Grid":
        """Restore cells from a snapshot."""
        self.replace(np.array(state.cells, dtype=np.uint32))
        return self

    def copy(self) -> "Grid":
        """Create an independent copy of this grid."""
        new_grid = Grid(width=self.width, height=self.height)
        new_grid._cells = self._cells.copy()
        return new_grid

    # ===== Iteration =====

    def live_cells(self) -> Iterator[Tuple[int, int, int]]:
        """Iterate over (row, col, color) of live cells in row-major order."""
        rows, cols = np.nonzero(self._cells)
        for r, c in zip(rows, cols):
            yield int(r), int(c), int(self._cells[r, c])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return False
        return np.array_equal(self._cells, other._cells)

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height}, population={self.population()})"
