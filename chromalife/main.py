"""
chromalife - colored Game of Life with a roaming ghost.

Main entry point for headless runs.
"""

from __future__ import annotations
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from chromalife.config import (
    ClusterShape, CometParams, EngineParams, RespawnParams, SeedParams, UniverseConfig,
)
from chromalife.core import EvolutionRunner, Universe
from chromalife.analysis import color_census, live_fraction
from chromalife.visualization import plot_grid, plot_population, seed_palette


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def run_simulation(
    config: UniverseConfig,
    steps: int,
    colors: List[int],
    snapshot: Optional[Path] = None,
) -> dict:
    """
    Seed a universe, run it and optionally save a picture of the result.

    Args:
        config: Universe configuration
        steps: Number of ticks
        colors: Packed seed colors, one organism each
        snapshot: PNG path for a final grid + population figure

    Returns:
        Dictionary with the universe and the evolution result
    """
    logger.info(f"Starting universe {config.width}x{config.height}, {steps} ticks")

    universe = Universe.from_config(config)
    universe.seed_circle(colors)
    logger.info(f"Seeded {len(colors)} organisms ({config.seed.cluster.value}), "
                f"population {universe.population()}")

    progress_every = max(1, steps // 10)

    def log_progress(u: Universe, step: int) -> None:
        if (step + 1) % progress_every == 0:
            ghost = "active" if u.is_ghost_active() else "idle"
            logger.info(f"Generation {u.generation}/{steps} - population={u.population()}, "
                        f"live={live_fraction(u):.3f}, ghost {ghost}")

    runner = EvolutionRunner()
    runner.add_step_callback(log_progress)
    result = runner.run(universe, max_steps=steps)

    stats = result.stats
    logger.info(f"Stopped: {result.stop_reason}")
    logger.info(f"Births: {stats.births}, deaths: {stats.deaths}, "
                f"ghost sweeps: {stats.ghost_sweeps}, "
                f"{stats.steps_per_second:.1f} ticks/s")

    census = color_census(universe)
    for color, count in list(census.items())[:5]:
        logger.info(f"  {color:#08x}: {count} cells")

    if snapshot is not None:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        fig, (ax_grid, ax_pop) = plt.subplots(1, 2, figsize=(14, 6))
        plot_grid(universe, ax=ax_grid, ghost=universe.ghost,
                  title=f"Generation {universe.generation}")
        plot_population(result.history, ax=ax_pop)
        fig.tight_layout()

        snapshot = Path(snapshot)
        snapshot.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(snapshot, dpi=150)
        plt.close(fig)
        logger.info(f"Snapshot saved to: {snapshot}")

    return {
        'universe': universe,
        'result': result,
        'census': census,
    }


def build_config(args: argparse.Namespace) -> UniverseConfig:
    """Merge command-line options over a config file (or defaults)."""
    if args.config:
        config = UniverseConfig.load(args.config)
    else:
        config = UniverseConfig()

    if args.width is not None:
        config.width = args.width
    if args.height is not None:
        config.height = args.height
    if args.seed is not None:
        config.random_seed = args.seed
    if args.cluster is not None:
        config.seed = SeedParams(
            cluster=ClusterShape(args.cluster),
            radius_fraction=config.seed.radius_fraction,
        )
    if args.respawn_interval is not None:
        config.respawn = RespawnParams(
            interval=args.respawn_interval,
            min_clusters=config.respawn.min_clusters,
            max_clusters=config.respawn.max_clusters,
        )
    if args.comet_interval is not None:
        config.comet = CometParams(
            interval=args.comet_interval,
            jitter=config.comet.jitter,
            rings=config.comet.rings,
            core_radius=config.comet.core_radius,
        )
    if args.use_numba:
        config.engine = EngineParams(use_numba=True)

    return config


def main(argv: Optional[List[str]] = None):
    """Command-line interface for running a universe."""
    parser = argparse.ArgumentParser(description="chromalife colored Game of Life")

    parser.add_argument('--width', type=int, default=None,
                       help='Grid width in cells (default: 100)')
    parser.add_argument('--height', type=int, default=None,
                       help='Grid height in cells (default: 100)')
    parser.add_argument('--steps', type=int, default=1000,
                       help='Number of ticks (default: 1000)')
    parser.add_argument('--colors', type=int, default=25,
                       help='Number of seeded organisms (default: 25)')
    parser.add_argument('--cmap', type=str, default='hsv',
                       help='Matplotlib colormap for seed colors (default: hsv)')
    parser.add_argument('--cluster', choices=[s.value for s in ClusterShape], default=None,
                       help='Organism shape (default: cell)')
    parser.add_argument('--respawn-interval', type=int, default=None,
                       help='Ticks between random respawns, 0 disables (default: 0)')
    parser.add_argument('--comet-interval', type=int, default=None,
                       help='Base ticks between comet drops, 0 disables (default: 0)')
    parser.add_argument('--seed', type=int, default=None,
                       help='Random seed for respawn/scatter (default: 0)')
    parser.add_argument('--use-numba', action='store_true',
                       help='Use the numba rule kernel')
    parser.add_argument('--config', type=str, default=None,
                       help='Load settings from a JSON config file')
    parser.add_argument('--save-config', type=str, default=None,
                       help='Write the effective config to a JSON file')
    parser.add_argument('--snapshot', type=str, default=None,
                       help='Save a PNG of the final grid and population curve')

    args = parser.parse_args(argv)

    config = build_config(args)
    issues = config.validate()
    if issues:
        parser.error("; ".join(issues))

    if args.save_config:
        config.save(args.save_config)
        logger.info(f"Config saved to: {args.save_config}")

    colors = seed_palette(args.colors, cmap=args.cmap)

    run_simulation(
        config=config,
        steps=args.steps,
        colors=colors,
        snapshot=Path(args.snapshot) if args.snapshot else None,
    )

    logger.info("Done!")


if __name__ == "__main__":
    main()
