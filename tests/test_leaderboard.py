"""
Tests for leaderboard persistence.
"""

import json

import pytest

from rocketman.dodge_core.config_loader import load_config
from rocketman.dodge_core.leaderboard import (
    JsonFileStorage,
    LeaderboardEntry,
    LeaderboardStore,
    MemoryStorage,
)


SEED_SCORE = 121212121212121212
KEY = "rocketmanLouLeaderboard"


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def storage():
    return MemoryStorage()


def make_store(storage, config):
    return LeaderboardStore(storage, config=config, today=lambda: "01/02/2026")


class TestSeedEntry:
    """Legacy seed row."""

    def test_seed_inserted_once(self, storage, config):
        store = make_store(storage, config)
        assert store.ensure_seed()
        assert not store.ensure_seed()

        # A second load against the same storage does not duplicate it
        assert not make_store(storage, config).ensure_seed()

        seeds = [e for e in store.entries() if e.score == SEED_SCORE]
        assert len(seeds) == 1
        assert seeds[0].name == "ANDREW LUCK"

    def test_seed_added_to_existing_list(self, storage, config):
        storage.set_item(KEY, json.dumps([{"name": "LOU", "score": 10, "date": "x"}]))
        store = make_store(storage, config)
        store.ensure_seed()
        assert [e.name for e in store.entries()] == ["ANDREW LUCK", "LOU"]


class TestSubmit:
    """Sorting, truncation and names."""

    def test_sorted_and_capped(self, storage, config):
        store = make_store(storage, config)
        store.ensure_seed()
        for score in [5, 500, 50, 5000, 1, 42, 9, 90, 900, 9000, 3, 77]:
            store.submit("p", score)

        entries = store.entries()
        assert len(entries) == 10
        scores = [e.score for e in entries]
        assert scores == sorted(scores, reverse=True)
        assert scores[0] == SEED_SCORE

    def test_low_score_truncated_away(self, storage, config):
        store = make_store(storage, config)
        store.ensure_seed()
        for score in range(1000, 10000, 1000):
            store.submit("p", score)
        assert len(store.entries()) == 10

        top = store.submit("low", 1)
        assert len(top) == 10
        assert all(e.name != "LOW" for e in top)
        assert store.rank_of(1) is None

    def test_name_normalized(self, storage, config):
        store = make_store(storage, config)
        store.submit("  lou  ", 10)
        store.submit("", 20)
        store.submit(None, 30)
        names = [e.name for e in store.entries()]
        assert names == ["PLAYER", "PLAYER", "LOU"]

    def test_entry_date(self, storage, config):
        store = make_store(storage, config)
        store.submit("lou", 10)
        assert store.entries()[0].date == "01/02/2026"

    def test_ties_keep_earlier_first(self, storage, config):
        store = make_store(storage, config)
        store.submit("first", 100)
        store.submit("second", 100)
        assert [e.name for e in store.entries()] == ["FIRST", "SECOND"]
        assert store.rank_of(100) == 0

    def test_rank_of(self, storage, config):
        store = make_store(storage, config)
        store.ensure_seed()
        store.submit("lou", 300)
        store.submit("nick", 200)
        assert store.rank_of(300) == 1
        assert store.rank_of(200) == 2


class TestMalformedData:
    """Bad stored data reads as empty."""

    @pytest.mark.parametrize("raw", ["not json", "{}", "42", '"text"', ""])
    def test_unreadable_is_empty(self, storage, config, raw):
        storage.set_item(KEY, raw)
        assert make_store(storage, config).entries() == []

    def test_bad_rows_skipped(self, storage, config):
        storage.set_item(KEY, json.dumps([
            {"name": "LOU", "score": 10, "date": "x"},
            {"name": "NO SCORE"},
            "junk",
        ]))
        entries = make_store(storage, config).entries()
        assert entries == [LeaderboardEntry("LOU", 10, "x")]


class TestJsonFileStorage:
    """File-backed storage."""

    def test_persists_across_instances(self, tmp_path, config):
        path = tmp_path / "scores" / "leaderboard.json"
        make_store(JsonFileStorage(path), config).submit("lou", 123)

        entries = make_store(JsonFileStorage(path), config).entries()
        assert entries == [LeaderboardEntry("LOU", 123, "01/02/2026")]

    def test_missing_file_is_empty(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "missing.json")
        assert storage.get_item(KEY) is None

    def test_malformed_file_is_empty(self, tmp_path, config):
        path = tmp_path / "leaderboard.json"
        path.write_text("{ broken")
        store = make_store(JsonFileStorage(path), config)
        assert store.entries() == []
        assert store.ensure_seed()
        assert len(store.entries()) == 1
