"""
Evolution runner for chromalife universes.

Drives a Universe for many ticks:
    S(t) -> S(t+1) = tick(S(t))

Key features:
- History tracking with configurable stride
- Cycle detection on grid snapshots (still lifes, oscillators) for
  universes driven by the rule alone
- Run statistics (births, deaths, ghost sweeps, throughput)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple
from collections import deque
import logging
import time

import numpy as np

from .grid import GridState
from .universe import Universe, UniverseState


logger = logging.getLogger(__name__)


@dataclass
class EvolutionStats:
    """Statistics from evolution run."""
    total_steps: int = 0
    births: int = 0
    deaths: int = 0
    ghost_sweeps: int = 0

    # Timing
    start_time: float = 0.0
    end_time: float = 0.0

    # State analysis
    cycle_length: Optional[int] = None
    cycle_start: Optional[int] = None

    avg_population: float = 0.0

    @property
    def elapsed_time(self) -> float:
        return self.end_time - self.start_time

    @property
    def steps_per_second(self) -> float:
        if self.elapsed_time > 0:
            return self.total_steps / self.elapsed_time
        return 0.0


@dataclass
class EvolutionResult:
    """
    Complete result of an evolution run.

    Contains:
    - Final state
    - History (if enabled)
    - Statistics
    - Stop reason
    """
    final_state: UniverseState
    history: List[UniverseState] = field(default_factory=list)
    stats: EvolutionStats = field(default_factory=EvolutionStats)
    stop_reason: str = "max_steps"

    def get_state_at(self, generation: int) -> Optional[UniverseState]:
        """Get state at specific generation (if in history)."""
        for state in self.history:
            if state.generation == generation:
                return state
        return None

    def population_series(self) -> np.ndarray:
        """Get live-cell count time series from history."""
        return np.array([s.grid.population() for s in self.history])

    def ghost_activity_series(self) -> np.ndarray:
        """1 where the ghost was active in a history entry, else 0."""
        return np.array([int(s.ghost.active) for s in self.history])


class CycleDetector:
    """
    Remember universe states by their grid and report the first repeat.

    A repeat is only a true cycle when the grid alone determines the next
    grid, which holds for universes whose rule_only property is True. The
    ghost is left out of the key: it keeps moving over a still life.

    Grid snapshots are hashable, so they key a dict directly; a deque
    records insertion order so the oldest grid leaves once the window fills.
    """

    def __init__(self, window_size: int = 10000):
        self.window_size = window_size
        self._first_seen: Dict[GridState, int] = {}
        self._order: deque = deque()

    def __len__(self) -> int:
        return len(self._first_seen)

    def check(self, state: UniverseState) -> Optional[Tuple[int, int]]:
        """
        Record state, or report the repeat it closes.

        Returns:
            (cycle_start, cycle_length) when the grid was seen before, else None
        """
        grid = state.grid
        first = self._first_seen.get(grid)
        if first is not None:
            return (first, state.generation - first)

        self._first_seen[grid] = state.generation
        self._order.append(grid)
        if len(self._order) > self.window_size:
            del self._first_seen[self._order.popleft()]
        return None

    def reset(self) -> None:
        """Forget every recorded grid."""
        self._first_seen.clear()
        self._order.clear()


class EvolutionRunner:
    """
    Runs a Universe for many ticks and collects the outcome.

    Example:
        universe = Universe.new(64, 64)
        universe.seed_circle(colors)

        runner = EvolutionRunner()
        result = runner.run(universe, max_steps=1000)
        print(result.stop_reason, result.stats.births)
    """

    def __init__(self, cycle_window: int = 10000):
        self.cycle_detector = CycleDetector(window_size=cycle_window)
        self._step_callbacks: List[Callable[[Universe, int], None]] = []

    def add_step_callback(self, callback: Callable[[Universe, int], None]) -> None:
        """Add callback to be called after each tick."""
        self._step_callbacks.append(callback)

    def run(
        self,
        universe: Universe,
        max_steps: int = 10000,
        store_history: bool = True,
        history_stride: int = 1,
        detect_cycles: bool = True,
        stop_when: Optional[Callable[[Universe, int], bool]] = None,
    ) -> EvolutionResult:
        """
        Run evolution for multiple ticks.

        Args:
            universe: Universe to evolve (modified in place)
            max_steps: Maximum number of ticks
            store_history: Whether to store state history
            history_stride: Store every N-th state
            detect_cycles: Stop once the grid repeats. Ignored for universes
                whose ghost clearing, respawn or comets are enabled
            stop_when: Optional predicate(universe, step), stops when True

        Returns:
            EvolutionResult with final state, history, and statistics
        """
        if history_stride < 1:
            raise ValueError(f"history_stride must be at least 1, got {history_stride}")

        stats = EvolutionStats(start_time=time.time())
        history: List[UniverseState] = []
        sweeps_before = universe.ghost.sweeps

        if detect_cycles and not universe.rule_only:
            logger.debug("Cycle detection off: grid changes outside the rule")
            detect_cycles = False

        if detect_cycles:
            self.cycle_detector.reset()
            self.cycle_detector.check(universe.to_state())

        if store_history:
            history.append(universe.to_state())

        stop_reason = "max_steps"
        populations = []

        for step in range(max_steps):
            universe.tick()

            stats.total_steps += 1
            stats.births += universe.last_step.births
            stats.deaths += universe.last_step.deaths
            populations.append(universe.last_step.population)

            current = universe.to_state()
            if store_history and (step + 1) % history_stride == 0:
                history.append(current)

            for callback in self._step_callbacks:
                callback(universe, step)

            if detect_cycles:
                cycle = self.cycle_detector.check(current)
                if cycle is not None:
                    stats.cycle_start, stats.cycle_length = cycle
                    stop_reason = f"cycle_detected (start={cycle[0]}, length={cycle[1]})"
                    break

            if stop_when is not None and stop_when(universe, step):
                stop_reason = "condition_met"
                break

        stats.end_time = time.time()
        stats.ghost_sweeps = universe.ghost.sweeps - sweeps_before
        if populations:
            stats.avg_population = float(np.mean(populations))

        return EvolutionResult(
            final_state=universe.to_state(),
            history=history,
            stats=stats,
            stop_reason=stop_reason,
        )

    def run_until(
        self,
        universe: Universe,
        condition: Callable[[Universe, int], bool],
        max_steps: int = 100000,
        **kwargs,
    ) -> EvolutionResult:
        """
        Run evolution until condition is met.

        Args:
            universe: Universe to evolve
            condition: Function(universe, step) -> bool, stops when True
            max_steps: Maximum ticks before giving up
            **kwargs: Additional arguments for run()
        """
        return self.run(
            universe,
            max_steps=max_steps,
            detect_cycles=False,
            stop_when=condition,
            **kwargs,
        )
