"""Leaderboard stores that keep the best finished sessions.

Both stores expose the same four calls. Reads never raise: a missing or
unreadable store is treated as empty.
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import List

from gemrush.constants import LEADERBOARD_SIZE

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
    score: int
    completion_seconds: int
    moves: int
    timestamp: str

    @classmethod
    def from_dict(cls, payload: dict) -> LeaderboardEntry:
        return cls(
            score=int(payload.get("score", 0)),
            completion_seconds=int(payload.get("completion_seconds", 0)),
            moves=int(payload.get("moves", 0)),
            timestamp=str(payload.get("timestamp", "")),
        )


def _ranked(entries: List[LeaderboardEntry], size: int) -> List[LeaderboardEntry]:
    # Stable sort keeps the earlier of two equal scores first.
    return sorted(entries, key=lambda entry: entry.score, reverse=True)[:size]


class InMemoryLeaderboardStore:
    """Process-local store, used by tests and headless sessions."""

    def __init__(self, *, size: int = LEADERBOARD_SIZE) -> None:
        self._size = size
        self._entries: List[LeaderboardEntry] = []
        self._best_score = 0

    def record_score(self, entry: LeaderboardEntry) -> None:
        self._entries = _ranked(self._entries + [entry], self._size)
        if entry.score > self._best_score:
            self._best_score = entry.score

    def read_top_entries(self, limit: int = LEADERBOARD_SIZE) -> List[LeaderboardEntry]:
        return list(self._entries[:max(limit, 0)])

    def read_best_score(self) -> int:
        return self._best_score

    def clear(self) -> None:
        self._entries = []
        self._best_score = 0


class JsonLeaderboardStore:
    """Leaderboard persisted as a small JSON document on disk."""

    def __init__(self, save_path: Path | str | None = None, *, size: int = LEADERBOARD_SIZE) -> None:
        self._save_path = Path(save_path) if save_path is not None else self._default_save_path()
        self._size = size

    @staticmethod
    def _default_save_path() -> Path:
        return Path(__file__).resolve().parents[3] / "data" / "leaderboard.json"

    @property
    def save_path(self) -> Path:
        return self._save_path

    def _load(self) -> dict:
        try:
            with self._save_path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Failed to load leaderboard from %s: %s", self._save_path, exc)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Ignoring malformed leaderboard file %s", self._save_path)
            return {}
        return payload

    def _save(self, entries: List[LeaderboardEntry], best_score: int) -> None:
        try:
            self._save_path.parent.mkdir(parents=True, exist_ok=True)
            with self._save_path.open("w", encoding="utf-8") as handle:
                json.dump({
                    "entries": [asdict(entry) for entry in entries],
                    "best_score": best_score,
                }, handle, indent=2)
        except OSError as exc:
            logger.warning("Failed to save leaderboard to %s: %s", self._save_path, exc)

    def _entries(self, payload: dict) -> List[LeaderboardEntry]:
        entries: List[LeaderboardEntry] = []
        for raw in payload.get("entries", []):
            if not isinstance(raw, dict):
                continue
            try:
                entries.append(LeaderboardEntry.from_dict(raw))
            except (TypeError, ValueError):
                continue
        return _ranked(entries, self._size)

    @staticmethod
    def _best(payload: dict) -> int:
        try:
            return int(payload.get("best_score", 0))
        except (TypeError, ValueError):
            return 0

    def record_score(self, entry: LeaderboardEntry) -> None:
        payload = self._load()
        entries = _ranked(self._entries(payload) + [entry], self._size)
        best_score = max(self._best(payload), entry.score)
        self._save(entries, best_score)

    def read_top_entries(self, limit: int = LEADERBOARD_SIZE) -> List[LeaderboardEntry]:
        return self._entries(self._load())[:max(limit, 0)]

    def read_best_score(self) -> int:
        return self._best(self._load())

    def clear(self) -> None:
        try:
            self._save_path.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            logger.warning("Failed to clear leaderboard at %s: %s", self._save_path, exc)
