"""
Ghost: a decorative sweeper that crosses the grid at a fixed cadence.

State machine:
    INACTIVE --(tick % interval == 0)--> ACTIVE
    ACTIVE   --(elapsed == duration)---> INACTIVE

Everything is driven by the tick number handed to advance(); there is no
wall-clock or random input, so a given tick count always yields the same
ghost. Sweep directions cycle left->right, right->left, top->bottom,
bottom->top. The lane (perpendicular coordinate) of sweep k is the
fractional part of k * golden ratio, which spreads successive lanes
evenly across the grid.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple
import logging
import math

from ..config import GhostParams


logger = logging.getLogger(__name__)

GOLDEN_FRACTION = (math.sqrt(5.0) - 1.0) / 2.0


class GhostState(Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"


class Direction(IntEnum):
    LEFT_TO_RIGHT = 0
    RIGHT_TO_LEFT = 1
    TOP_TO_BOTTOM = 2
    BOTTOM_TO_TOP = 3

    @property
    def horizontal(self) -> bool:
        return self in (Direction.LEFT_TO_RIGHT, Direction.RIGHT_TO_LEFT)

    @property
    def reversed(self) -> bool:
        return self in (Direction.RIGHT_TO_LEFT, Direction.BOTTOM_TO_TOP)


@dataclass(frozen=True)
class GhostSnapshot:
    """Immutable copy of the ghost's observable state."""
    active: bool
    x: float
    y: float
    direction: Direction
    elapsed: int
    sweeps: int


class Ghost:
    """
    Generation-driven ghost sweep.

    Attributes are read-only from the outside; only advance() mutates.

    Example:
        ghost = Ghost(width=100, height=100, params=GhostParams(interval=10, duration=4))
        for tick in range(1, 11):
            ghost.advance(tick)
        ghost.active   # True, activated on tick 10
        ghost.x, ghost.y
    """

    def __init__(self, width: int, height: int, params: Optional[GhostParams] = None):
        if width < 1 or height < 1:
            raise ValueError(f"Ghost needs a positive grid, got {width}x{height}")
        params = params or GhostParams()
        if params.interval < 1:
            raise ValueError(f"interval must be at least 1, got {params.interval}")
        if not 0 < params.duration < params.interval:
            raise ValueError(
                f"duration must be in (0, interval={params.interval}), got {params.duration}"
            )
        if params.bob_period < 1:
            raise ValueError(f"bob_period must be at least 1, got {params.bob_period}")

        self.width = width
        self.height = height
        self.params = params

        self._state = GhostState.INACTIVE
        self._direction = Direction.LEFT_TO_RIGHT
        self._lane = 0.0
        self._elapsed = 0
        self._sweeps = 0
        self._x = 0.0
        self._y = 0.0

    # ===== Accessors =====

    @property
    def state(self) -> GhostState:
        return self._state

    @property
    def active(self) -> bool:
        return self._state is GhostState.ACTIVE

    @property
    def x(self) -> float:
        """Column coordinate in cell space. Meaningful only while active."""
        return self._x

    @property
    def y(self) -> float:
        """Row coordinate in cell space. Meaningful only while active."""
        return self._y

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def elapsed(self) -> int:
        return self._elapsed

    @property
    def sweeps(self) -> int:
        """Number of sweeps started so far."""
        return self._sweeps

    # ===== Dynamics =====

    def advance(self, tick: int) -> None:
        """
        Advance by one tick.

        Args:
            tick: Number of ticks completed, including the current one
        """
        if self.active:
            self._elapsed += 1
            if self._elapsed >= self.params.duration:
                self._deactivate(tick)
            else:
                self._place()
        elif tick > 0 and tick % self.params.interval == 0:
            self._activate(tick)

    def _activate(self, tick: int) -> None:
        self._sweeps += 1
        self._state = GhostState.ACTIVE
        self._direction = Direction((self._sweeps - 1) % len(Direction))
        self._lane = math.modf(self._sweeps * GOLDEN_FRACTION)[0]
        self._elapsed = 0
        self._place()
        logger.debug("Ghost sweep %d started at tick %d heading %s",
                     self._sweeps, tick, self._direction.name)

    def _deactivate(self, tick: int) -> None:
        self._state = GhostState.INACTIVE
        logger.debug("Ghost sweep %d finished at tick %d", self._sweeps, tick)

    def _place(self) -> None:
        """Recompute (x, y) from direction, lane and elapsed ticks."""
        p = self.params
        progress = self._elapsed / (p.duration - 1) if p.duration > 1 else 0.0
        if self._direction.reversed:
            progress = 1.0 - progress

        bob = p.bob_amplitude * math.sin(2.0 * math.pi * self._elapsed / p.bob_period)

        if self._direction.horizontal:
            along, across = self.width - 1, self.height - 1
        else:
            along, across = self.height - 1, self.width - 1

        pos = progress * along
        lane = min(max(self._lane * across + bob, 0.0), float(across))

        if self._direction.horizontal:
            self._x, self._y = pos, lane
        else:
            self._x, self._y = lane, pos

    def cleared_band(self) -> Optional[Tuple[int, int, int, int]]:
        """
        Rectangle (row0, row1, col0, col1) the ghost erases this tick.

        A one-cell-thick strip across the direction of travel, centered on
        the ghost. None when inactive or when clearing is disabled.
        """
        radius = self.params.clear_radius
        if not self.active or radius <= 0:
            return None

        col, row = int(self._x), int(self._y)
        if self._direction.horizontal:
            return row - radius, row + radius + 1, col, col + 1
        return row, row + 1, col - radius, col + radius + 1

    def snapshot(self) -> GhostSnapshot:
        return GhostSnapshot(
            active=self.active,
            x=self._x,
            y=self._y,
            direction=self._direction,
            elapsed=self._elapsed,
            sweeps=self._sweeps,
        )

    def __repr__(self) -> str:
        if not self.active:
            return f"Ghost(inactive, sweeps={self._sweeps})"
        return (f"Ghost(active, x={self._x:.2f}, y={self._y:.2f}, "
                f"direction={self._direction.name})")
