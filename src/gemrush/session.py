"""Headless game session: world, event bus and controller systems wired together."""
from __future__ import annotations

from datetime import datetime
from typing import Callable

from gemrush.components.countdown_timer import CountdownTimer
from gemrush.components.game_state import GameState
from gemrush.components.gem_source import GemSource
from gemrush.components.pacing import Pacing
from gemrush.constants import BOARD_SIZE, INITIAL_TIME
from gemrush.events.bus import EVENT_GAME_RESET_REQUEST, EVENT_TICK, EVENT_TILE_CLICK, EventBus
from gemrush.storage.leaderboard import InMemoryLeaderboardStore
from gemrush.systems.game_flow_system import GameFlowSystem
from gemrush.systems.leaderboard_system import LeaderboardSystem
from gemrush.systems.match import MatchSystem
from gemrush.systems.match_resolution import MatchResolutionSystem
from gemrush.systems.scheduler import SchedulerSystem
from gemrush.systems.selection import SelectionSystem
from gemrush.systems.timer import TimerSystem, get_timer
from gemrush.utils.game_state import get_game_state, get_gem_source
from gemrush.world import create_world


class GameSession:
    """One player's game: taps in, ticks in, state and events out.

    ``pacing`` controls the delays between cascade steps; ``Pacing.instant()``
    resolves each turn inside ``tap``. ``source`` and ``store`` are the
    injectable randomness and leaderboard collaborators.
    """

    def __init__(
        self,
        *,
        board_size: int = BOARD_SIZE,
        time_budget: int = INITIAL_TIME,
        pacing: Pacing | None = None,
        source: GemSource | None = None,
        store=None,
        event_bus: EventBus | None = None,
        now: Callable[[], datetime] | None = None,
    ) -> None:
        self.event_bus = event_bus or EventBus()
        self.pacing = pacing or Pacing()
        self.store = store if store is not None else InMemoryLeaderboardStore()
        self.world = create_world(
            board_size=board_size,
            time_budget=time_budget,
            source=source,
            high_score=self.store.read_best_score(),
        )
        self.scheduler_system = SchedulerSystem(self.world, self.event_bus)
        self.selection_system = SelectionSystem(self.world, self.event_bus)
        self.match_system = MatchSystem(self.world, self.event_bus, self.pacing)
        self.match_resolution_system = MatchResolutionSystem(self.world, self.event_bus, self.pacing)
        self.timer_system = TimerSystem(self.world, self.event_bus)
        self.leaderboard_system = LeaderboardSystem(self.event_bus, self.store, now=now)
        self.game_flow_system = GameFlowSystem(
            self.world,
            self.event_bus,
            board_size=board_size,
            time_budget=time_budget,
            store=self.store,
        )

    @property
    def state(self) -> GameState:
        return get_game_state(self.world)

    @property
    def source(self) -> GemSource:
        return get_gem_source(self.world)

    @property
    def timer(self) -> CountdownTimer | None:
        found = get_timer(self.world)
        return found[1] if found is not None else None

    @property
    def time_left(self) -> int:
        timer = self.timer
        return timer.time_left if timer is not None else 0

    def tap(self, row: int, col: int) -> None:
        self.event_bus.emit(EVENT_TILE_CLICK, row=row, col=col)

    def tick(self, dt: float) -> None:
        self.event_bus.emit(EVENT_TICK, dt=dt)

    def reset(self) -> None:
        self.event_bus.emit(EVENT_GAME_RESET_REQUEST)
