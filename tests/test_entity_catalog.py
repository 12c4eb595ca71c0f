"""
Tests for the entity catalog and entity store.
"""

import pytest

from rocketman.dodge_core.config_loader import load_config
from rocketman.dodge_core.entity_catalog import EntityCatalog
from rocketman.dodge_core.entities import EntityStore, Player, PlayArea


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def catalog(config):
    return EntityCatalog(config)


class TestEntityCatalog:
    """Kind IDs and lookups."""

    def test_obstacles_then_powerup(self, catalog):
        assert len(catalog) == 5
        assert [k.id for k in catalog.obstacles] == [0, 1, 2, 3]
        assert catalog.powerup.id == 4
        assert catalog[4].is_powerup

    def test_bad_index(self, catalog):
        with pytest.raises(IndexError):
            catalog[5]
        with pytest.raises(IndexError):
            catalog[-1]

    def test_get_by_key(self, catalog):
        assert catalog.get_by_key("KEVIN").name == "Kevin"
        assert catalog.get_by_key("loussnacks") is catalog.powerup
        assert catalog.get_by_key("pizza") is None

    def test_weights(self, catalog):
        assert catalog.obstacle_weights == (1, 1, 1, 1)


class TestPlayer:
    """Player creation geometry."""

    def test_create_default_area(self, config):
        player = Player.create(config.player, PlayArea(480, 720))
        assert player.x == 480 / 2 - 25
        assert player.max_y == 720 - 70 - 10
        assert player.min_y == 720 * 0.75 - 70
        assert player.y == player.max_y - 40
        assert player.min_y <= player.y <= player.max_y


class TestEntityStore:
    """Ordering and removal."""

    def test_spawn_assigns_increasing_uids(self, catalog):
        store = EntityStore()
        a = store.spawn(catalog[0], 0, 0, 40, 40)
        b = store.spawn(catalog[1], 0, 0, 40, 40)
        assert b.uid > a.uid
        assert len(store) == 2

    def test_newest_first(self, catalog):
        store = EntityStore()
        uids = [store.spawn(catalog[0], 0, 0, 40, 40).uid for _ in range(3)]
        assert [e.uid for e in store.newest_first()] == list(reversed(uids))

    def test_remove(self, catalog):
        store = EntityStore()
        a = store.spawn(catalog[0], 0, 0, 40, 40)
        assert store.remove(a.uid) is a
        assert store.remove(a.uid) is None
        assert len(store) == 0

    def test_retain_returns_removed(self, catalog):
        store = EntityStore()
        low = store.spawn(catalog[0], 0, 100, 40, 40)
        high = store.spawn(catalog[0], 0, 900, 40, 40)
        removed = store.retain(lambda e: e.y <= 720)
        assert removed == [high]
        assert store.entities == (low,)

    def test_iteration_survives_removal(self, catalog):
        store = EntityStore()
        for _ in range(4):
            store.spawn(catalog[0], 0, 0, 40, 40)
        seen = 0
        for entity in store:
            store.remove(entity.uid)
            seen += 1
        assert seen == 4
        assert len(store) == 0

    def test_clear_keeps_uid_sequence(self, catalog):
        store = EntityStore()
        a = store.spawn(catalog[0], 0, 0, 40, 40)
        store.clear()
        b = store.spawn(catalog[0], 0, 0, 40, 40)
        assert b.uid > a.uid
