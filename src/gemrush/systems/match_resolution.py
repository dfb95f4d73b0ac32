import logging
from typing import List

from esper import World

from gemrush.components.board import Board
from gemrush.components.game_state import SessionPhase
from gemrush.components.match import Match
from gemrush.components.pacing import Pacing
from gemrush.events.bus import (EventBus, EVENT_TILE_SWAP_VALID, EVENT_STEP_DUE, EVENT_SCHEDULE_STEP,
                                EVENT_MATCH_FOUND, EVENT_MATCH_CLEARED, EVENT_GRAVITY_APPLIED,
                                EVENT_SCORE_AWARDED, EVENT_HIGH_SCORE_CHANGED, EVENT_CASCADE_STEP,
                                EVENT_CASCADE_COMPLETE, EVENT_BOARD_SHUFFLED, EVENT_BOARD_CHANGED,
                                EVENT_GAME_RESET)
from gemrush.systems.board_ops import (apply_gravity, calculate_score, find_matches, has_valid_moves,
                                       matched_positions, refill_positions, remove_matches, shuffle_board)
from gemrush.utils.game_state import get_game_state, get_gem_source, set_phase

logger = logging.getLogger(__name__)

STEP_MATCH_HIGHLIGHT = 'match_highlight'
STEP_GRAVITY = 'gravity'
STEP_CASCADE_CHECK = 'cascade_check'


class MatchResolutionSystem:
    """Runs the cascade loop after a committed swap.

    Flow per cascade depth (zero for the player's own move):
      - find matches; none left ends the turn (shuffling a deadlocked board);
      - after the highlight delay, score them with the depth as combo index
        and clear them;
      - after the removal delay, apply gravity and commit board and score;
      - after the settle delay, look again one depth deeper.
    The cleared board with empty cells stays private to this system until
    gravity has refilled it.
    """
    def __init__(self, world: World, event_bus: EventBus, pacing: Pacing | None = None):
        self.world = world
        self.event_bus = event_bus
        self.pacing = pacing or Pacing()
        self.event_bus.subscribe(EVENT_TILE_SWAP_VALID, self.on_swap_valid)
        self.event_bus.subscribe(EVENT_STEP_DUE, self.on_step_due)
        self.event_bus.subscribe(EVENT_GAME_RESET, self.on_game_reset)
        self._pending_matches: List[Match] = []
        self._pending_board: Board | None = None
        self._pending_points = 0

    def on_swap_valid(self, sender, **kwargs):
        self._resolve(depth=0)

    def on_game_reset(self, sender, **kwargs):
        self._clear_pending()

    def on_step_due(self, sender, **kwargs):
        kind = kwargs.get('kind')
        depth = kwargs.get('depth', 0)
        if kind not in (STEP_MATCH_HIGHLIGHT, STEP_GRAVITY, STEP_CASCADE_CHECK):
            return
        state = get_game_state(self.world)
        if state.phase != SessionPhase.RESOLVING:
            return
        if kind == STEP_MATCH_HIGHLIGHT:
            self._after_highlight(depth)
        elif kind == STEP_GRAVITY:
            self._after_removal(depth)
        else:
            self._resolve(depth)

    def _resolve(self, depth: int):
        state = get_game_state(self.world)
        if state.phase != SessionPhase.RESOLVING:
            return
        matches = find_matches(state.board)
        if not matches:
            self._finish(depth)
            return
        positions = sorted(matched_positions(matches))
        self._pending_matches = matches
        self.event_bus.emit(EVENT_CASCADE_STEP, depth=depth, positions=positions)
        self.event_bus.emit(EVENT_MATCH_FOUND, matches=matches, positions=positions, depth=depth)
        self._schedule(STEP_MATCH_HIGHLIGHT, self.pacing.match_highlight, depth)

    def _after_highlight(self, depth: int):
        state = get_game_state(self.world)
        matches = self._pending_matches
        if not matches:
            return
        self._pending_points = calculate_score(matches, depth)
        self._pending_board = remove_matches(state.board, matches)
        # Deterministic ordering for events/tests
        positions = sorted(matched_positions(matches))
        self.event_bus.emit(EVENT_MATCH_CLEARED, positions=positions, depth=depth)
        self._schedule(STEP_GRAVITY, self.pacing.match_removal, depth)

    def _after_removal(self, depth: int):
        cleared = self._pending_board
        if cleared is None:
            return
        state = get_game_state(self.world)
        longest = max(self._pending_matches, key=lambda match: match.length)
        points = self._pending_points
        new_tiles = refill_positions(cleared)
        state.board = apply_gravity(cleared, get_gem_source(self.world))
        state.score += points
        state.combo = depth + 1
        self._clear_pending()
        self.event_bus.emit(
            EVENT_SCORE_AWARDED,
            points=points,
            combo=depth,
            match_length=longest.length,
            position=longest.positions[0],
        )
        if state.score > state.high_score:
            state.high_score = state.score
            self.event_bus.emit(EVENT_HIGH_SCORE_CHANGED, high_score=state.high_score)
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, new_tiles=new_tiles, depth=depth)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason='cascade')
        self._schedule(STEP_CASCADE_CHECK, self.pacing.cascade_settle, depth + 1)

    def _finish(self, depth: int):
        state = get_game_state(self.world)
        if not has_valid_moves(state.board):
            logger.debug("No valid moves left after cascade depth %d; shuffling", depth)
            state.board = shuffle_board(state.board, get_gem_source(self.world))
            self.event_bus.emit(EVENT_BOARD_SHUFFLED, reason='deadlock')
            self.event_bus.emit(EVENT_BOARD_CHANGED, reason='shuffle')
        state.combo = 0
        set_phase(self.world, self.event_bus, SessionPhase.IDLE)
        self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=depth)

    def _schedule(self, kind: str, delay: float, depth: int):
        self.event_bus.emit(EVENT_SCHEDULE_STEP, kind=kind, delay=delay, payload={'depth': depth})

    def _clear_pending(self):
        self._pending_matches = []
        self._pending_board = None
        self._pending_points = 0
