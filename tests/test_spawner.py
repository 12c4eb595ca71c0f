"""
Tests for the entity spawner.
"""

from dataclasses import replace

import pytest

from rocketman.dodge_core.config_loader import load_config
from rocketman.dodge_core.entities import EntityStore
from rocketman.dodge_core.spawner import Spawner


@pytest.fixture
def config():
    return load_config()


def with_powerup_chance(config, chance):
    return replace(config, spawn=replace(config.spawn, powerup_chance=chance))


class TestSpawner:
    """Per-frame spawning."""

    def test_forced_rate_spawns_exactly_one(self, config):
        spawner = Spawner(config, seed=42)
        store = EntityStore()
        entity = spawner.maybe_spawn(store, 480, 1.0)

        assert entity is not None
        assert len(store) == 1
        assert entity.y == -40
        assert 20 <= entity.x <= 480 - 60
        assert (entity.width, entity.height) == (40, 40)

    def test_rate_above_one_still_spawns_one(self, config):
        spawner = Spawner(config, seed=42)
        store = EntityStore()
        for _ in range(10):
            spawner.maybe_spawn(store, 480, 3.5)
        assert len(store) == 10

    def test_zero_rate_never_spawns(self, config):
        spawner = Spawner(config, seed=42)
        store = EntityStore()
        for _ in range(500):
            spawner.maybe_spawn(store, 480, 0.0)
        assert len(store) == 0

    def test_spawn_x_range(self, config):
        spawner = Spawner(config, seed=1)
        assert spawner.get_spawn_x_range(480) == (20, 420)

        store = EntityStore()
        for _ in range(300):
            spawner.maybe_spawn(store, 480, 1.0)
        assert all(20 <= e.x <= 420 for e in store)

    def test_narrow_area_skips(self, config):
        spawner = Spawner(config, seed=42)
        store = EntityStore()
        for _ in range(50):
            assert spawner.maybe_spawn(store, 99, 1.0) is None
        assert len(store) == 0

    def test_deterministic_with_seed(self, config):
        def run(seed):
            spawner = Spawner(config, seed=seed)
            store = EntityStore()
            for _ in range(200):
                spawner.maybe_spawn(store, 480, 0.3)
            return [(e.kind.id, e.x) for e in store]

        assert run(42) == run(42)
        assert run(42) != run(123)

    def test_reset_reseeds(self, config):
        spawner = Spawner(config, seed=5)
        first = [spawner.choose_kind().id for _ in range(20)]
        spawner.reset(seed=5)
        assert [spawner.choose_kind().id for _ in range(20)] == first


class TestKindChoice:
    """Powerup chance and weighted obstacles."""

    def test_always_powerup(self, config):
        spawner = Spawner(with_powerup_chance(config, 1.0), seed=3)
        assert all(spawner.choose_kind().is_powerup for _ in range(100))

    def test_never_powerup(self, config):
        spawner = Spawner(with_powerup_chance(config, 0.0), seed=3)
        kinds = [spawner.choose_kind() for _ in range(400)]
        assert not any(k.is_powerup for k in kinds)
        # Every obstacle kind turns up
        assert {k.id for k in kinds} == {0, 1, 2, 3}

    def test_powerup_share(self, config):
        spawner = Spawner(config, seed=11)
        picks = [spawner.choose_kind().is_powerup for _ in range(4000)]
        share = sum(picks) / len(picks)
        assert 0.11 < share < 0.19
