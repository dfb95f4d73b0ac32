"""Session lifecycle: fresh boards on reset and the timer that goes with them."""
from __future__ import annotations

from esper import World

from gemrush.components.game_state import SessionPhase
from gemrush.constants import BOARD_SIZE, INITIAL_TIME
from gemrush.events.bus import (
    EVENT_BOARD_CHANGED,
    EVENT_GAME_RESET,
    EVENT_GAME_RESET_REQUEST,
    EventBus,
)
from gemrush.storage.leaderboard import InMemoryLeaderboardStore
from gemrush.systems.board_ops import create_board
from gemrush.systems.timer import start_timer
from gemrush.utils.game_state import get_game_state, get_gem_source, set_phase


class GameFlowSystem:
    """Starts a new session on EVENT_GAME_RESET_REQUEST, from any phase.

    The previous timer handle is torn down before the new one is created, so
    a session never owns more than one running timer.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        board_size: int = BOARD_SIZE,
        time_budget: int = INITIAL_TIME,
        store=None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.board_size = board_size
        self.time_budget = time_budget
        self.store = store if store is not None else InMemoryLeaderboardStore()

        self.event_bus.subscribe(EVENT_GAME_RESET_REQUEST, self._on_reset_request)

    def _on_reset_request(self, sender, **payload) -> None:
        state = get_game_state(self.world)
        state.board = create_board(self.board_size, get_gem_source(self.world))
        state.score = 0
        state.moves = 0
        state.combo = 0
        state.selection = None
        state.high_score = self.store.read_best_score()
        start_timer(self.world, self.time_budget)
        set_phase(self.world, self.event_bus, SessionPhase.IDLE)
        self.event_bus.emit(EVENT_GAME_RESET, board_size=self.board_size, time_budget=self.time_budget)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason="reset")
