"""
Core module for the chromalife engine.

Contains:
- Grid: toroidal 2D array of packed 0x00RRGGBB colors
- RuleEngine: colored-life (B3/S23, mode-color births) transition
- Ghost: generation-driven sweep state machine
- Universe: composition root exposing seed/tick/read operations
- EvolutionRunner: multi-tick runs with history and cycle detection
"""

from .grid import Grid, GridState, NEIGHBOR_OFFSETS, DEAD, is_valid_color
from .rules import RuleEngine, StepResult, mode_color, transition
from .ghost import Ghost, GhostState, GhostSnapshot, Direction
from .universe import Universe, UniverseState, CLUSTER_OFFSETS
from .evolution import EvolutionRunner, EvolutionResult, EvolutionStats, CycleDetector

__all__ = [
    "Grid",
    "GridState",
    "NEIGHBOR_OFFSETS",
    "DEAD",
    "is_valid_color",
    # Rule
    "RuleEngine",
    "StepResult",
    "mode_color",
    "transition",
    # Ghost
    "Ghost",
    "GhostState",
    "GhostSnapshot",
    "Direction",
    # Universe
    "Universe",
    "UniverseState",
    "CLUSTER_OFFSETS",
    # Evolution
    "EvolutionRunner",
    "EvolutionResult",
    "EvolutionStats",
    "CycleDetector",
]
