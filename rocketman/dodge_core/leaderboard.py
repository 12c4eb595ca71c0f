"""
Leaderboard Store
=================

Persists the top scores as a JSON list under a single key of a key-value
storage backend.

Usage:
    store = LeaderboardStore(JsonFileStorage("scores.json"))
    store.ensure_seed()
    store.submit("lou", 42_000)
"""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

from rocketman.dodge_core.config_loader import GameConfig, get_config


@dataclass(frozen=True)
class LeaderboardEntry:
    """One leaderboard row."""
    name: str
    score: int
    date: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LeaderboardEntry":
        return cls(
            name=str(data["name"]),
            score=int(data["score"]),
            date=str(data.get("date", ""))
        )


class MemoryStorage:
    """In-memory key-value storage."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class JsonFileStorage:
    """
    Key-value storage backed by one JSON object on disk.

    A missing or unreadable file reads as empty.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> Dict[str, str]:
        try:
            with open(self._path, "r") as f:
                data = json.load(f)
        except (OSError, ValueError):
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w") as f:
            json.dump(items, f, indent=2)


def _today() -> str:
    return datetime.now().strftime("%m/%d/%Y")


class LeaderboardStore:
    """
    Ordered top-N list of (name, score, date), highest score first.

    Every write sorts descending by score (stable, so earlier entries win
    ties) and truncates to max_entries.
    """

    def __init__(
        self,
        storage: Optional[Any] = None,
        config: Optional[GameConfig] = None,
        today: Optional[Callable[[], str]] = None
    ):
        """
        Initialize leaderboard store.

        Args:
            storage: Object with get_item(key)/set_item(key, value).
                Defaults to MemoryStorage.
            config: Game configuration. Uses default if None.
            today: Callable returning the date string for new entries.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._storage = storage if storage is not None else MemoryStorage()
        self._today = today or _today
        self._key = config.leaderboard.storage_key
        self._max_entries = config.leaderboard.max_entries
        self._default_name = config.leaderboard.default_name

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def entries(self) -> List[LeaderboardEntry]:
        """
        Read the stored list.

        Returns:
            Stored entries, or an empty list if nothing valid is stored.
        """
        raw = self._storage.get_item(self._key)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError:
            return []
        if not isinstance(data, list):
            return []

        entries = []
        for item in data:
            try:
                entries.append(LeaderboardEntry.from_dict(item))
            except (KeyError, TypeError, ValueError):
                continue
        return entries

    def save(self, entries: List[LeaderboardEntry]) -> None:
        """Persist entries as given. Callers keep them sorted and short."""
        self._storage.set_item(
            self._key,
            json.dumps([e.to_dict() for e in entries])
        )

    def _sorted_top(self, entries: List[LeaderboardEntry]) -> List[LeaderboardEntry]:
        ordered = sorted(entries, key=lambda e: e.score, reverse=True)
        return ordered[:self._max_entries]

    def normalize_name(self, name: Optional[str]) -> str:
        """Strip and uppercase a player name, falling back to the default."""
        cleaned = (name or "").strip().upper()
        return cleaned or self._default_name

    def ensure_seed(self) -> bool:
        """
        Make sure the legacy seed entry is present.

        Returns:
            True if the entry was inserted by this call.
        """
        seed_name = self._config.leaderboard.seed_name
        seed_score = self._config.leaderboard.seed_score
        entries = self.entries()
        if any(e.name == seed_name and e.score == seed_score for e in entries):
            return False

        entries.append(LeaderboardEntry(seed_name, seed_score, self._today()))
        self.save(self._sorted_top(entries))
        return True

    def submit(self, name: Optional[str], score: int) -> List[LeaderboardEntry]:
        """
        Add a score, re-sort, truncate and persist.

        Returns:
            The stored list after submission.
        """
        entries = self.entries()
        entries.append(LeaderboardEntry(self.normalize_name(name), int(score), self._today()))
        top = self._sorted_top(entries)
        self.save(top)
        return top

    def rank_of(self, score: int) -> Optional[int]:
        """Index of the first entry with this score, or None."""
        for i, entry in enumerate(self.entries()):
            if entry.score == score:
                return i
        return None
