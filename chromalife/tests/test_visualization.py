"""
Tests for visualization helpers.
"""

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

import pytest
import numpy as np
from chromalife.config import GhostParams, UniverseConfig
from chromalife.core import Universe, EvolutionRunner
from chromalife.visualization import to_rgb_image, seed_palette, plot_grid, plot_population


class TestRgbImage:
    """Tests for to_rgb_image."""

    def test_decode(self):
        cells = np.array([[0xFF8001, 0], [0x00FF00, 0x0000FF]], dtype=np.uint32)
        image = to_rgb_image(cells)
        assert image.shape == (2, 2, 3)
        assert image.dtype == np.uint8
        assert tuple(image[0, 0]) == (0xFF, 0x80, 0x01)
        assert tuple(image[0, 1]) == (0, 0, 0)
        assert tuple(image[1, 1]) == (0, 0, 0xFF)

    def test_accepts_universe(self):
        universe = Universe.new(6, 4)
        universe.seed_circle([0xFF0000])
        assert to_rgb_image(universe).shape == (4, 6, 3)


class TestSeedPalette:
    """Tests for seed_palette."""

    def test_distinct_live_colors(self):
        colors = seed_palette(25)
        assert len(colors) == 25
        assert len(set(colors)) == 25
        assert all(0 < c <= 0xFFFFFF for c in colors)

    def test_black_is_nudged(self):
        assert seed_palette(1, cmap="gray") == [1]

    def test_invalid_count(self):
        with pytest.raises(ValueError):
            seed_palette(0)


class TestPlots:
    """Smoke tests for plotting."""

    def test_plot_grid_with_ghost(self):
        config = UniverseConfig(ghost=GhostParams(interval=5, duration=3))
        universe = Universe(16, 16, config)
        universe.seed_circle(seed_palette(4))
        for _ in range(5):
            universe.tick()

        ax = plot_grid(universe, ghost=universe.ghost, title="t=5")
        assert ax.get_title() == "t=5"
        assert len(ax.lines) == 1
        plt.close(ax.figure)

    def test_plot_population(self):
        config = UniverseConfig(ghost=GhostParams(interval=5, duration=3))
        universe = Universe(16, 16, config)
        result = EvolutionRunner().run(universe, max_steps=12, detect_cycles=False)

        ax = plot_population(result.history)
        assert ax.get_xlabel() == "Generation"
        plt.close(ax.figure)
