"""
Configuration module for the chromalife engine.

Contains all configurable parameters for a Universe.
"""

from dataclasses import dataclass, field
from typing import List
from enum import Enum
import json
from pathlib import Path


class ClusterShape(Enum):
    """Shape stamped for each organism placed by seed_circle."""
    CELL = "cell"           # Single live cell
    BLOCK = "block"         # 3x3 filled square
    BLINKER = "blinker"     # Horizontal period-2 oscillator
    GLIDER = "glider"       # South-east travelling glider


@dataclass
class SeedParams:
    """Circular seeding parameters."""
    cluster: ClusterShape = ClusterShape.CELL
    radius_fraction: float = 0.25   # Circle radius as a fraction of min(width, height)


@dataclass
class GhostParams:
    """
    Ghost sweep parameters.

    Defaults follow a 60 Hz host: a sweep every 10 seconds that takes
    4 seconds to cross the grid.
    """
    interval: int = 600             # Ticks between activations
    duration: int = 240             # Ticks a sweep stays active
    bob_amplitude: float = 1.5      # Perpendicular wobble (cells)
    bob_period: int = 60            # Ticks per wobble
    clear_radius: int = 0           # Half-width of the erased band (0 = decorative only)


@dataclass
class RespawnParams:
    """Periodic random reseeding from the last palette."""
    interval: int = 0               # Ticks between respawns (0 = disabled)
    min_clusters: int = 20
    max_clusters: int = 30


@dataclass
class CometParams:
    """
    Comet drops: a colored ripple of rings around a random impact point.

    The next drop lands interval + U[0, jitter] ticks after the previous one.
    """
    interval: int = 0               # Base ticks between drops (0 = disabled)
    jitter: int = 60                # Extra random delay, drawn per drop
    rings: int = 5                  # Concentric ripple rings
    core_radius: int = 2            # Half-width of the solid square at the impact


@dataclass
class EngineParams:
    """Rule engine backend selection."""
    use_numba: bool = False         # Use the numba JIT kernel instead of numpy/scipy


@dataclass
class UniverseConfig:
    """
    Main configuration container for a Universe.

    Example:
        config = UniverseConfig(
            width=200,
            height=200,
            seed=SeedParams(cluster=ClusterShape.BLOCK),
        )
        config.save("my_config.json")
    """
    width: int = 100
    height: int = 100

    # Drives seed_person and respawn only; stepping never draws randomness
    random_seed: int = 0

    # Sub-configurations
    seed: SeedParams = field(default_factory=SeedParams)
    ghost: GhostParams = field(default_factory=GhostParams)
    respawn: RespawnParams = field(default_factory=RespawnParams)
    comet: CometParams = field(default_factory=CometParams)
    engine: EngineParams = field(default_factory=EngineParams)

    def save(self, path: str | Path) -> None:
        """Save configuration to JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self._to_dict()
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    @classmethod
    def load(cls, path: str | Path) -> "UniverseConfig":
        """Load configuration from JSON file."""
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return cls._from_dict(data)

    def _to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        def convert(obj):
            if isinstance(obj, Enum):
                return obj.value
            elif isinstance(obj, Path):
                return str(obj)
            elif hasattr(obj, '__dataclass_fields__'):
                return {k: convert(v) for k, v in obj.__dict__.items()}
            elif isinstance(obj, (list, tuple)):
                return [convert(x) for x in obj]
            return obj

        return convert(self)

    @classmethod
    def _from_dict(cls, data: dict) -> "UniverseConfig":
        """Reconstruct from dictionary."""
        data = dict(data)

        if 'seed' in data:
            seed = dict(data['seed'])
            if 'cluster' in seed:
                seed['cluster'] = ClusterShape(seed['cluster'])
            data['seed'] = SeedParams(**seed)
        if 'ghost' in data:
            data['ghost'] = GhostParams(**data['ghost'])
        if 'respawn' in data:
            data['respawn'] = RespawnParams(**data['respawn'])
        if 'comet' in data:
            data['comet'] = CometParams(**data['comet'])
        if 'engine' in data:
            data['engine'] = EngineParams(**data['engine'])

        return cls(**data)

    def validate(self) -> List[str]:
        """Validate configuration, return list of errors."""
        issues = []

        if self.width < 1 or self.height < 1:
            issues.append("width and height must be at least 1")

        if not 0.0 <= self.seed.radius_fraction <= 0.5:
            issues.append("seed.radius_fraction must be in [0, 0.5]")

        if self.ghost.interval < 1:
            issues.append("ghost.interval must be at least 1")
        if not 0 < self.ghost.duration < self.ghost.interval:
            issues.append("ghost.duration must be in (0, ghost.interval)")
        if self.ghost.bob_period < 1:
            issues.append("ghost.bob_period must be at least 1")
        if self.ghost.bob_amplitude < 0:
            issues.append("ghost.bob_amplitude must be non-negative")
        if self.ghost.clear_radius < 0:
            issues.append("ghost.clear_radius must be non-negative")

        if self.respawn.interval < 0:
            issues.append("respawn.interval must be non-negative")
        if not 0 <= self.respawn.min_clusters <= self.respawn.max_clusters:
            issues.append("respawn cluster bounds must satisfy 0 <= min <= max")

        if self.comet.interval < 0 or self.comet.jitter < 0:
            issues.append("comet.interval and comet.jitter must be non-negative")
        if self.comet.rings < 0 or self.comet.core_radius < 0:
            issues.append("comet.rings and comet.core_radius must be non-negative")

        return issues


# Preset configurations
def minimal_config() -> UniverseConfig:
    """Small grid with a fast ghost cadence for quick testing."""
    return UniverseConfig(
        width=20,
        height=20,
        ghost=GhostParams(interval=10, duration=4, bob_period=4),
    )


def standard_config() -> UniverseConfig:
    """Lively setup close to the browser demo: block seeds and steady respawn."""
    return UniverseConfig(
        width=200,
        height=200,
        seed=SeedParams(cluster=ClusterShape.BLOCK),
        ghost=GhostParams(clear_radius=20),
        respawn=RespawnParams(interval=5),
        comet=CometParams(interval=120),
    )
