"""
Universe: the composition root of the engine.

Owns one Grid, one Ghost, the rule engine and a generation counter, and
exposes the operations a host renderer drives once per frame:

    universe = Universe.new(width, height)
    universe.seed_circle(colors)
    while running:
        universe.tick()
        for row in range(height):
            for col in range(width):
                draw(row, col, universe.get_cell(row, col))
        if universe.is_ghost_active():
            draw_ghost(universe.ghost_x(), universe.ghost_y())

Colors are packed 0x00RRGGBB integers; 0 means dead.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple
import logging
import math

import numpy as np

from ..config import ClusterShape, UniverseConfig
from .ghost import Ghost, GhostSnapshot
from .grid import Grid, GridState, is_valid_color
from .rules import RuleEngine, StepResult


logger = logging.getLogger(__name__)


# Cell offsets (delta_row, delta_col) stamped around each organism center
CLUSTER_OFFSETS: Dict[ClusterShape, Tuple[Tuple[int, int], ...]] = {
    ClusterShape.CELL: ((0, 0),),
    ClusterShape.BLOCK: tuple((dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1)),
    ClusterShape.BLINKER: ((0, -1), (0, 0), (0, 1)),
    ClusterShape.GLIDER: ((-1, 0), (0, 1), (1, -1), (1, 0), (1, 1)),
}


@dataclass(frozen=True)
class UniverseState:
    """Immutable snapshot of everything a tick can change."""
    grid: GridState
    ghost: GhostSnapshot
    generation: int


class Universe:
    """
    Colored-life universe with a roaming ghost.

    Example:
        universe = Universe.new(10, 10)
        universe.seed_circle([0xFF0000])
        universe.get_cell(5, 7)   # 0xFF0000
        universe.tick()
        universe.get_cell(5, 7)   # 0, a lone cell dies
    """

    def __init__(self, width: int, height: int, config: Optional[UniverseConfig] = None):
        """
        Create an all-dead universe with an inactive ghost.

        Args:
            width: Number of columns (cells, not pixels)
            height: Number of rows
            config: Engine settings; width/height inside it are overridden
        """
        if width < 1 or height < 1:
            raise ValueError(f"Universe dimensions must be positive, got {width}x{height}")

        config = replace(config or UniverseConfig(), width=width, height=height)
        issues = config.validate()
        if issues:
            raise ValueError("Invalid configuration: " + "; ".join(issues))

        self.config = config
        self._grid = Grid(width=width, height=height)
        self._ghost = Ghost(width=width, height=height, params=config.ghost)
        self._engine = RuleEngine(use_numba=config.engine.use_numba)
        self._generation = 0
        self._palette: Tuple[int, ...] = ()
        self._rng = np.random.default_rng(config.random_seed)
        self._last_step = StepResult()
        self._next_comet: Optional[int] = None
        if config.comet.interval > 0:
            self._next_comet = self._comet_delay()

    @classmethod
    def new(cls, width: int, height: int) -> "Universe":
        """Create a universe with default settings."""
        return cls(width, height)

    @classmethod
    def from_config(cls, config: UniverseConfig) -> "Universe":
        """Create a universe sized by its configuration."""
        return cls(config.width, config.height, config)

    # ===== Properties =====

    @property
    def width(self) -> int:
        return self._grid.width

    @property
    def height(self) -> int:
        return self._grid.height

    @property
    def generation(self) -> int:
        """Number of ticks performed so far."""
        return self._generation

    @property
    def palette(self) -> Tuple[int, ...]:
        """Colors passed to the last seed_circle call."""
        return self._palette

    @property
    def cells(self) -> np.ndarray:
        """Read-only copy of the grid, shape (height, width)."""
        return self._grid.cells

    @property
    def ghost(self) -> GhostSnapshot:
        return self._ghost.snapshot()

    @property
    def last_step(self) -> StepResult:
        """Rule statistics of the most recent tick."""
        return self._last_step

    def population(self) -> int:
        return self._grid.population()

    @property
    def rule_only(self) -> bool:
        """
        True when the grid changes only through the colored-life rule.

        Ghost clearing, respawn and comets make the next grid depend on
        more than the current one.
        """
        c = self.config
        return c.ghost.clear_radius == 0 and c.respawn.interval == 0 and c.comet.interval == 0

    # ===== Seeding =====

    def seed_positions(self, count: int) -> List[Tuple[int, int]]:
        """
        Organism centers (row, col) used by seed_circle for count colors.

        Centers sit at angles 2*pi*i/count on a circle around the grid
        center, floored to whole cells.
        """
        cx = self.width / 2.0
        cy = self.height / 2.0
        radius = self.config.seed.radius_fraction * min(self.width, self.height)

        positions = []
        for i in range(count):
            angle = i * 2.0 * math.pi / count
            col = int(math.floor(cx + radius * math.cos(angle))) % self.width
            row = int(math.floor(cy + radius * math.sin(angle))) % self.height
            positions.append((row, col))
        return positions

    def seed_circle(self, colors: Sequence[int]) -> None:
        """
        Replace the whole grid with one organism per color on a circle.

        Args:
            colors: Packed non-black colors, one organism each

        Raises:
            ValueError: if colors is empty, too long, holds an invalid color,
                or two organisms would share a cell
        """
        palette = tuple(int(c) for c in colors)
        if not palette:
            raise ValueError("seed_circle needs at least one color")
        if len(palette) > self.width * self.height:
            raise ValueError(
                f"{len(palette)} colors exceed grid capacity {self.width * self.height}"
            )
        for color in palette:
            _check_color(color)

        offsets = CLUSTER_OFFSETS[self.config.seed.cluster]
        footprints = [
            self._footprint(row, col, offsets)
            for row, col in self.seed_positions(len(palette))
        ]
        owner: Dict[Tuple[int, int], int] = {}
        for i, cells in enumerate(footprints):
            for cell in cells:
                if cell in owner:
                    raise ValueError(
                        f"Organisms {owner[cell]} and {i} overlap at {cell}: "
                        f"{len(palette)} {self.config.seed.cluster.value} clusters "
                        f"do not fit on the seed circle of a {self.width}x{self.height} grid"
                    )
                owner[cell] = i

        self._grid.clear()
        for cells, color in zip(footprints, palette):
            for row, col in cells:
                self._grid.set(row, col, color)

        self._palette = palette
        logger.debug("Seeded %d organisms (%s), population %d",
                     len(palette), self.config.seed.cluster.value, self.population())

    def seed_person(self, color: int, cell_count: int) -> None:
        """Scatter cell_count single live cells of one color at random positions."""
        _check_color(color)
        if cell_count < 0:
            raise ValueError(f"cell_count must be non-negative, got {cell_count}")

        rows = self._rng.integers(0, self.height, size=cell_count)
        cols = self._rng.integers(0, self.width, size=cell_count)
        for row, col in zip(rows, cols):
            self._grid.set(int(row), int(col), color)

    def _footprint(self, row: int, col: int,
                   offsets: Sequence[Tuple[int, int]]) -> List[Tuple[int, int]]:
        """Distinct wrapped cells covered by a cluster centered on (row, col)."""
        h, w = self.height, self.width
        return list(dict.fromkeys(((row + dr) % h, (col + dc) % w) for dr, dc in offsets))

    def _stamp(self, row: int, col: int, color: int,
               offsets: Sequence[Tuple[int, int]]) -> None:
        for r, c in self._footprint(row, col, offsets):
            self._grid.set(r, c, color)

    def _respawn(self) -> None:
        p = self.config.respawn
        count = int(self._rng.integers(p.min_clusters, p.max_clusters + 1))
        block = CLUSTER_OFFSETS[ClusterShape.BLOCK]
        for _ in range(count):
            row = int(self._rng.integers(0, self.height))
            col = int(self._rng.integers(0, self.width))
            color = self._palette[int(self._rng.integers(0, len(self._palette)))]
            self._stamp(row, col, color, block)
        logger.debug("Respawned %d clusters at generation %d", count, self._generation)

    def _comet_delay(self) -> int:
        p = self.config.comet
        return p.interval + int(self._rng.integers(0, p.jitter + 1))

    def _spawn_comet(self) -> None:
        """
        Drop a comet of a fresh random color at a random impact point.

        Ring k has radius 3 + 4k, 24(k + 1) candidate points and keeps each
        one with probability 1 / (1 + 0.3k). Outer rings are darkened by up
        to 40%, and some of their points also fill a cell two steps inward.
        A full-brightness square of half-width core_radius marks the impact.
        Points off the grid are dropped rather than wrapped.
        """
        p = self.config.comet
        rgb = self._rng.integers(0, 256, size=3)
        impact_row = int(self._rng.integers(0, self.height))
        impact_col = int(self._rng.integers(0, self.width))

        def put(row: int, col: int, color: int) -> None:
            if 0 <= row < self.height and 0 <= col < self.width:
                self._grid.set(row, col, color)

        for ripple in range(p.rings):
            radius = 3.0 + ripple * 4.0
            density = 1.0 / (1.0 + ripple * 0.3)
            num_points = 24 * (ripple + 1)
            color = _shade(rgb, 1.0 - (ripple / p.rings) * 0.4)

            for point in range(num_points):
                if self._rng.random() > density:
                    continue
                angle = point * 2.0 * math.pi / num_points
                cos, sin = math.cos(angle), math.sin(angle)
                put(impact_row + int(radius * sin), impact_col + int(radius * cos), color)

                if ripple > 0 and self._rng.random() > 0.7:
                    inner = radius - 2.0
                    put(impact_row + int(inner * sin), impact_col + int(inner * cos), color)

        core = _shade(rgb, 1.0)
        k = p.core_radius
        for dr in range(-k, k + 1):
            for dc in range(-k, k + 1):
                put(impact_row + dr, impact_col + dc, core)

        logger.debug("Comet %#08x hit (%d, %d) at generation %d",
                     core, impact_row, impact_col, self._generation)

    # ===== Dynamics =====

    def tick(self) -> None:
        """
        Advance the grid one generation, then move the ghost.

        Enabled extras run after the ghost, in order: band clear, respawn,
        comet drop.
        """
        self._last_step = self._engine.step(self._grid)
        self._generation += 1
        self._ghost.advance(self._generation)

        band = self._ghost.cleared_band()
        if band is not None:
            self._grid.clear_rect(*band)

        interval = self.config.respawn.interval
        if interval > 0 and self._palette and self._generation % interval == 0:
            self._respawn()

        if self._next_comet is not None and self._generation >= self._next_comet:
            self._spawn_comet()
            self._next_comet = self._generation + self._comet_delay()

    # ===== Reads =====

    def get_cell(self, row: int, col: int) -> int:
        """Packed color at (row, col), 0 when dead."""
        return self._grid.get(row, col)

    def is_ghost_active(self) -> bool:
        return self._ghost.active

    def ghost_x(self) -> float:
        return self._ghost.x

    def ghost_y(self) -> float:
        return self._ghost.y

    def to_state(self) -> UniverseState:
        return UniverseState(
            grid=self._grid.to_state(self._generation),
            ghost=self._ghost.snapshot(),
            generation=self._generation,
        )

    def __repr__(self) -> str:
        return (f"Universe(width={self.width}, height={self.height}, "
                f"generation={self._generation}, population={self.population()})")


def _shade(rgb: np.ndarray, factor: float) -> int:
    """Pack rgb scaled by factor; a result that would read as dead becomes 0x000001."""
    r, g, b = (int(channel * factor) for channel in rgb)
    return ((r << 16) | (g << 8) | b) or 1


def _check_color(color: int) -> None:
    if not is_valid_color(color):
        raise ValueError(f"Invalid cell color {color:#08x}: must be in [0x000001, 0xFFFFFF]")
