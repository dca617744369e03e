"""
chromalife

A colored Game of Life engine for frame-driven renderers.
Cells carry packed 0x00RRGGBB colors on a toroidal grid, newborns inherit
the mode color of their parents, and a ghost sweeps the grid at a fixed
cadence.

Main components:
- core: Grid, rule engine, ghost, Universe, evolution runner
- analysis: Population and color census
- visualization: matplotlib rendering
- config: Dataclass configuration with JSON save/load
"""

__version__ = "0.1.0"
__author__ = "chromalife team"

from .core import Grid, RuleEngine, Ghost, Universe, EvolutionRunner
from .config import UniverseConfig, ClusterShape

__all__ = [
    "Grid",
    "RuleEngine",
    "Ghost",
    "Universe",
    "EvolutionRunner",
    "UniverseConfig",
    "ClusterShape",
]
