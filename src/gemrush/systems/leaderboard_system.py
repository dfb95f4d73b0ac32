from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from gemrush.events.bus import EVENT_GAME_OVER, EventBus
from gemrush.storage.leaderboard import InMemoryLeaderboardStore, LeaderboardEntry


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class LeaderboardSystem:
    """Records each finished session's final score in the leaderboard store."""

    def __init__(
        self,
        event_bus: EventBus,
        store=None,
        *,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self.event_bus = event_bus
        self.store = store if store is not None else InMemoryLeaderboardStore()
        self._now = now or _utc_now
        self.event_bus.subscribe(EVENT_GAME_OVER, self.on_game_over)

    def on_game_over(self, sender, **payload) -> None:
        entry = LeaderboardEntry(
            score=int(payload.get("score", 0)),
            completion_seconds=int(payload.get("completion_seconds", 0)),
            moves=int(payload.get("moves", 0)),
            timestamp=self._now().isoformat(),
        )
        self.store.record_score(entry)
