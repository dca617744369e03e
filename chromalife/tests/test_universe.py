"""
Tests for the Universe boundary operations.
"""

import pytest
import numpy as np
from chromalife.config import (
    ClusterShape, CometParams, EngineParams, GhostParams, RespawnParams, SeedParams,
    UniverseConfig,
)
from chromalife.core import Universe
from chromalife.analysis import color_census


RED = 0xFF0000
PALETTE = [0xFF0000, 0xFF8800, 0xFFFF00, 0x00FF00, 0x00FFFF, 0x0000FF, 0x8800FF, 0xFF00FF]


def config_with(**kwargs) -> UniverseConfig:
    return UniverseConfig(**kwargs)


class TestConstruction:
    """Tests for Universe creation."""

    def test_new_is_empty(self):
        universe = Universe.new(12, 8)
        assert (universe.width, universe.height) == (12, 8)
        assert universe.generation == 0
        assert universe.population() == 0
        assert not universe.is_ghost_active()

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (0, 0)])
    def test_zero_sized_grid_fails(self, width, height):
        with pytest.raises(ValueError):
            Universe.new(width, height)

    def test_invalid_config_fails(self):
        config = config_with(ghost=GhostParams(interval=100, duration=200))
        with pytest.raises(ValueError):
            Universe(10, 10, config)

    def test_arguments_override_config_size(self):
        universe = Universe(7, 9, config_with(width=100, height=100))
        assert (universe.width, universe.height) == (7, 9)

    def test_from_config(self):
        universe = Universe.from_config(config_with(width=16, height=4))
        assert universe.cells.shape == (4, 16)


class TestSeedCircle:
    """Tests for circular seeding."""

    def test_single_color_scenario(self):
        """new(10, 10) + seed_circle([red]) puts one red cell at (5, 7)."""
        universe = Universe.new(10, 10)
        universe.seed_circle([RED])

        assert universe.get_cell(5, 7) == RED
        others = [
            universe.get_cell(r, c)
            for r in range(10) for c in range(10)
            if (r, c) != (5, 7)
        ]
        assert len(others) == 99
        assert all(color == 0 for color in others)

    def test_k_clusters_at_expected_angles(self):
        universe = Universe.new(100, 100)
        universe.seed_circle(PALETTE)

        positions = universe.seed_positions(len(PALETTE))
        # radius 25 around (50, 50): angle 0 east, pi/2 south, pi west
        assert positions[0] == (50, 75)
        assert positions[2] == (75, 50)
        assert positions[4] == (50, 25)

        for (row, col), color in zip(positions, PALETTE):
            assert universe.get_cell(row, col) == color

        census = color_census(universe)
        assert set(census) == set(PALETTE)
        assert all(count == 1 for count in census.values())

    def test_block_clusters(self):
        config = config_with(seed=SeedParams(cluster=ClusterShape.BLOCK))
        universe = Universe(100, 100, config)
        universe.seed_circle(PALETTE)

        census = color_census(universe)
        assert len(census) == len(PALETTE)
        assert all(count == 9 for count in census.values())

        row, col = universe.seed_positions(len(PALETTE))[0]
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                assert universe.get_cell(row + dr, col + dc) == PALETTE[0]

    def test_glider_cluster_travels(self):
        config = config_with(seed=SeedParams(cluster=ClusterShape.GLIDER))
        universe = Universe(30, 30, config)
        universe.seed_circle([RED])
        start = np.argwhere(universe.cells)

        for _ in range(4):
            universe.tick()

        # A glider reappears one cell down and right every four generations
        np.testing.assert_array_equal(np.argwhere(universe.cells), start + 1)
        assert set(color_census(universe)) == {RED}

    def test_reseed_overwrites(self):
        universe = Universe.new(50, 50)
        universe.seed_circle(PALETTE[:3])
        universe.seed_circle([0x00FF00])

        assert universe.population() == 1
        assert color_census(universe) == {0x00FF00: 1}
        assert universe.palette == (0x00FF00,)

    def test_empty_colors_fail(self):
        with pytest.raises(ValueError):
            Universe.new(10, 10).seed_circle([])

    @pytest.mark.parametrize("bad", [0, 0x1000000, -5])
    def test_invalid_color_fails(self, bad):
        universe = Universe.new(10, 10)
        with pytest.raises(ValueError):
            universe.seed_circle([RED, bad])
        assert universe.population() == 0

    def test_too_many_colors_fail(self):
        with pytest.raises(ValueError):
            Universe.new(2, 2).seed_circle(PALETTE[:5])

    def test_more_colors_than_circle_cells_fail(self):
        # 25 organisms on a radius-2.5 circle land on fewer than 25 cells
        colors = [0x010000 * (i + 1) for i in range(25)]
        universe = Universe.new(10, 10)
        with pytest.raises(ValueError, match="overlap"):
            universe.seed_circle(colors)
        assert universe.population() == 0
        assert universe.palette == ()

    def test_overlapping_blocks_fail(self):
        config = config_with(seed=SeedParams(cluster=ClusterShape.BLOCK))
        universe = Universe(10, 10, config)
        # Blocks centered on (5, 7) and (7, 5) share (6, 6)
        with pytest.raises(ValueError, match="overlap"):
            universe.seed_circle(PALETTE[:4])
        assert universe.population() == 0

    def test_failed_seed_keeps_grid(self):
        universe = Universe.new(10, 10)
        universe.seed_circle([RED])
        with pytest.raises(ValueError):
            universe.seed_circle(PALETTE * 3)
        assert universe.population() == 1
        assert universe.get_cell(5, 7) == RED
        assert universe.palette == (RED,)


class TestTick:
    """Tests for stepping through the Universe."""

    def test_lone_cell_dies(self):
        universe = Universe.new(10, 10)
        universe.seed_circle([RED])
        universe.tick()

        assert universe.generation == 1
        assert universe.population() == 0
        assert universe.get_cell(5, 7) == 0

    def test_empty_universe_stays_empty(self):
        universe = Universe.new(16, 16)
        for _ in range(20):
            universe.tick()
        assert universe.population() == 0
        assert universe.generation == 20

    def test_seeding_keeps_generation(self):
        universe = Universe.new(10, 10)
        universe.tick()
        universe.seed_circle([RED])
        assert universe.generation == 1

    def test_get_cell_out_of_range(self):
        universe = Universe.new(10, 8)
        with pytest.raises(IndexError):
            universe.get_cell(8, 0)
        with pytest.raises(IndexError):
            universe.get_cell(0, 10)
        with pytest.raises(IndexError):
            universe.get_cell(-1, 0)

    def test_deterministic(self):
        def run():
            config = config_with(
                seed=SeedParams(cluster=ClusterShape.BLOCK, radius_fraction=0.3),
                ghost=GhostParams(interval=15, duration=6, clear_radius=2),
                respawn=RespawnParams(interval=7, min_clusters=2, max_clusters=4),
                comet=CometParams(interval=20, jitter=10),
                random_seed=99,
            )
            universe = Universe(40, 30, config)
            universe.seed_circle(PALETTE)
            universe.seed_person(0x123456, 25)
            for _ in range(60):
                universe.tick()
            return universe.to_state()

        assert run() == run()

    def test_numba_backend_matches(self):
        def run(use_numba):
            config = config_with(
                seed=SeedParams(cluster=ClusterShape.BLOCK),
                engine=EngineParams(use_numba=use_numba),
            )
            universe = Universe(48, 48, config)
            universe.seed_circle(PALETTE)
            for _ in range(25):
                universe.tick()
            return universe.cells

        np.testing.assert_array_equal(run(False), run(True))


class TestGhostAccessors:
    """Ghost reads through the Universe."""

    def test_ghost_cadence(self):
        config = config_with(ghost=GhostParams(interval=10, duration=4, bob_period=4))
        universe = Universe(20, 20, config)

        for _ in range(9):
            universe.tick()
        assert not universe.is_ghost_active()

        universe.tick()
        assert universe.is_ghost_active()
        assert 0.0 <= universe.ghost_x() <= 19.0
        assert 0.0 <= universe.ghost_y() <= 19.0

        for _ in range(4):
            universe.tick()
        assert not universe.is_ghost_active()

    def test_ghost_reads_are_pure(self):
        config = config_with(ghost=GhostParams(interval=5, duration=3))
        universe = Universe(20, 20, config)
        for _ in range(6):
            universe.tick()
        first = (universe.is_ghost_active(), universe.ghost_x(), universe.ghost_y())
        second = (universe.is_ghost_active(), universe.ghost_x(), universe.ghost_y())
        assert first == second
        assert universe.generation == 6

    def test_ghost_clears_band(self):
        config = config_with(
            seed=SeedParams(cluster=ClusterShape.BLOCK),
            ghost=GhostParams(interval=10, duration=4, bob_period=4, clear_radius=3),
        )
        universe = Universe(20, 20, config)
        universe.seed_circle([RED])
        for _ in range(10):
            universe.tick()

        row = int(universe.ghost_y())
        for r in range(max(0, row - 3), min(20, row + 4)):
            assert universe.get_cell(r, 0) == 0


class TestRandomSeeding:
    """seed_person and respawn."""

    def test_seed_person(self):
        universe = Universe.new(20, 20)
        universe.seed_person(0x00FF00, 10)
        assert 1 <= universe.population() <= 10
        assert set(color_census(universe)) == {0x00FF00}

    def test_seed_person_invalid(self):
        universe = Universe.new(20, 20)
        with pytest.raises(ValueError):
            universe.seed_person(0, 3)
        with pytest.raises(ValueError):
            universe.seed_person(RED, -1)

    def test_respawn_refills(self):
        config = config_with(respawn=RespawnParams(interval=5, min_clusters=3, max_clusters=3))
        universe = Universe(40, 40, config)
        universe.seed_circle([RED])

        universe.tick()
        assert universe.population() == 0
        for _ in range(4):
            universe.tick()
        assert universe.population() > 0
        assert set(color_census(universe)) == {RED}

    def test_respawn_needs_palette(self):
        config = config_with(respawn=RespawnParams(interval=2))
        universe = Universe(30, 30, config)
        for _ in range(10):
            universe.tick()
        assert universe.population() == 0

    def test_comet_drops(self):
        config = config_with(comet=CometParams(interval=10, jitter=0))
        universe = Universe(40, 40, config)
        assert not universe.rule_only

        for _ in range(9):
            universe.tick()
        assert universe.population() == 0

        universe.tick()
        # At least the clipped 3x3 corner of the 5x5 core lands on the grid
        assert universe.population() >= 9
        # One base color, darkened once per ring
        assert 1 <= len(color_census(universe)) <= 5

    def test_comet_core_only(self):
        config = config_with(comet=CometParams(interval=4, jitter=0, rings=0, core_radius=0))
        universe = Universe(20, 20, config)
        for _ in range(4):
            universe.tick()
        assert universe.population() == 1

        # The lone cell dies, and the next drop is due at generation 8
        for _ in range(3):
            universe.tick()
        assert universe.population() == 0
        universe.tick()
        assert universe.population() == 1

    def test_comet_reproducible(self):
        def run(random_seed):
            config = config_with(comet=CometParams(interval=5, jitter=3), random_seed=random_seed)
            universe = Universe(30, 30, config)
            for _ in range(30):
                universe.tick()
            return universe.to_state()

        assert run(4) == run(4)
