"""
Tests for configuration.
"""

from chromalife.config import (
    ClusterShape, CometParams, GhostParams, RespawnParams, SeedParams, UniverseConfig,
    minimal_config, standard_config,
)


class TestUniverseConfig:
    """Tests for UniverseConfig."""

    def test_defaults_are_valid(self):
        assert UniverseConfig().validate() == []

    def test_presets_are_valid(self):
        assert minimal_config().validate() == []
        assert standard_config().validate() == []

    def test_save_load(self, tmp_path):
        config = UniverseConfig(
            width=64,
            height=32,
            random_seed=5,
            seed=SeedParams(cluster=ClusterShape.GLIDER, radius_fraction=0.4),
            ghost=GhostParams(interval=50, duration=20, clear_radius=3),
            respawn=RespawnParams(interval=9),
            comet=CometParams(interval=30, jitter=5, rings=3),
        )
        path = tmp_path / "nested" / "config.json"
        config.save(path)

        loaded = UniverseConfig.load(path)
        assert loaded == config
        assert loaded.seed.cluster is ClusterShape.GLIDER
        assert loaded.comet.rings == 3

    def test_validate_reports_issues(self):
        config = UniverseConfig(
            width=0,
            ghost=GhostParams(interval=10, duration=10),
            respawn=RespawnParams(min_clusters=5, max_clusters=2),
        )
        issues = config.validate()
        assert len(issues) == 3
        assert any("width" in issue for issue in issues)
        assert any("duration" in issue for issue in issues)
        assert any("respawn" in issue for issue in issues)

    def test_comet_off_by_default(self):
        assert UniverseConfig().comet.interval == 0

    def test_validate_comet(self):
        config = UniverseConfig(comet=CometParams(interval=-1, rings=-2))
        issues = config.validate()
        assert len(issues) == 2
        assert all("comet" in issue for issue in issues)
