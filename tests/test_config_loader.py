"""
Tests for configuration loading and validation.
"""

from pathlib import Path

import pytest
import yaml

import rocketman
from rocketman.dodge_core.config_loader import load_config, get_config, reload_config


DEFAULT_CONFIG = Path(rocketman.__file__).parent / "game_config.yaml"


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def raw_config():
    with open(DEFAULT_CONFIG, "r") as f:
        return yaml.safe_load(f)


def write_config(tmp_path, raw):
    path = tmp_path / "game_config.yaml"
    with open(path, "w") as f:
        yaml.safe_dump(raw, f)
    return str(path)


class TestDefaults:
    """Shipped configuration values."""

    def test_play_area(self, config):
        assert config.play_area.min_usable_width == 100
        assert config.play_area.min_usable_height == 100
        assert config.play_area.retry_delay_ms == 100

    def test_player(self, config):
        assert config.player.width == 50
        assert config.player.height == 70
        assert config.player.speed == 5
        assert config.player.vertical_speed == 4

    def test_obstacles_and_spawn(self, config):
        assert config.obstacles.width == 40
        assert config.obstacles.height == 40
        assert config.obstacles.spawn_y == -40
        assert config.obstacles.base_speed == 2.0
        assert config.spawn.base_rate == pytest.approx(0.02)
        assert config.spawn.powerup_chance == pytest.approx(0.15)
        assert config.spawn.padding == 20

    def test_difficulty(self, config):
        assert config.difficulty.interval_seconds == 5
        assert config.difficulty.speed_multiplier == pytest.approx(1.2)
        assert config.difficulty.spawn_multiplier == pytest.approx(1.15)

    def test_kinds(self, config):
        keys = [k.key for k in config.kinds]
        assert keys == ["coldcuts", "juice", "kevin", "basketball"]
        assert config.powerup.key == "loussnacks"
        assert config.powerup.is_powerup
        assert not any(k.is_powerup for k in config.kinds)
        assert config.num_kinds == 5

    def test_leaderboard(self, config):
        assert config.leaderboard.storage_key == "rocketmanLouLeaderboard"
        assert config.leaderboard.max_entries == 10
        assert config.leaderboard.seed_name == "ANDREW LUCK"
        assert config.leaderboard.seed_score == 121212121212121212

    def test_highlights(self, config):
        assert config.presentation.score_highlight_ms == 200
        assert config.presentation.level_highlight_ms == 500


class TestValidation:
    """Invalid files are rejected."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_custom_path_loads(self, tmp_path, raw_config):
        raw_config["play_area"]["width"] = 320
        config = load_config(write_config(tmp_path, raw_config))
        assert config.play_area.width == 320

    def test_empty_catalog(self, tmp_path, raw_config):
        raw_config["kinds"] = []
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, raw_config))

    def test_non_positive_weight(self, tmp_path, raw_config):
        raw_config["kinds"][0]["weight"] = 0
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, raw_config))

    def test_duplicate_keys(self, tmp_path, raw_config):
        raw_config["powerup"]["key"] = raw_config["kinds"][0]["key"]
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, raw_config))

    def test_probability_out_of_range(self, tmp_path, raw_config):
        raw_config["spawn"]["powerup_chance"] = 1.5
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, raw_config))

    def test_shrinking_multiplier(self, tmp_path, raw_config):
        raw_config["difficulty"]["speed_multiplier"] = 0.9
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, raw_config))

    def test_bad_color(self, tmp_path, raw_config):
        raw_config["kinds"][0]["color"] = [1, 2]
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, raw_config))


class TestCaching:
    """Module-level config cache."""

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_reload_replaces_cache(self, tmp_path, raw_config):
        raw_config["scoring"]["powerup_bonus"] = 75
        try:
            reloaded = reload_config(write_config(tmp_path, raw_config))
            assert reloaded.scoring.powerup_bonus == 75
            assert get_config() is reloaded
        finally:
            reload_config()
