from esper import World

from gemrush.components.game_state import SessionPhase
from gemrush.components.gem import Position
from gemrush.components.pacing import Pacing
from gemrush.events.bus import (
    EventBus,
    EVENT_SCHEDULE_STEP,
    EVENT_STEP_DUE,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_REQUEST,
    EVENT_TILE_SWAP_REVERTED,
    EVENT_TILE_SWAP_VALID,
)
from gemrush.systems.board_ops import are_adjacent, find_matches, swap_gems
from gemrush.utils.game_state import get_game_state, set_phase

STEP_SWAP_REVERT = 'swap_revert'


class MatchSystem:
    """Validates swap requests by swapping speculatively and scanning for matches.

    A swap that matches is committed (one move spent) and handed to the
    resolution system through EVENT_TILE_SWAP_VALID. A swap that does not is
    reverted after the pacing delay with no cost to the player.
    """
    def __init__(self, world: World, event_bus: EventBus, pacing: Pacing | None = None):
        self.world = world
        self.event_bus = event_bus
        self.pacing = pacing or Pacing()
        event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)
        event_bus.subscribe(EVENT_STEP_DUE, self.on_step_due)

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        state = get_game_state(self.world)
        if state.is_busy or state.is_over:
            return
        src = Position(*src)
        dst = Position(*dst)
        if not are_adjacent(src, dst):
            return
        swapped = swap_gems(state.board, src, dst)
        matches = find_matches(swapped)
        if not matches:
            set_phase(self.world, self.event_bus, SessionPhase.REVERTING)
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst)
            self.event_bus.emit(
                EVENT_SCHEDULE_STEP,
                kind=STEP_SWAP_REVERT,
                delay=self.pacing.invalid_revert,
                payload={'src': src, 'dst': dst},
            )
            return
        state.board = swapped
        state.moves += 1
        state.combo = 0
        set_phase(self.world, self.event_bus, SessionPhase.RESOLVING)
        self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst, matches=matches)

    def on_step_due(self, sender, **kwargs):
        if kwargs.get('kind') != STEP_SWAP_REVERT:
            return
        state = get_game_state(self.world)
        if state.phase != SessionPhase.REVERTING:
            return
        set_phase(self.world, self.event_bus, SessionPhase.IDLE)
        self.event_bus.emit(EVENT_TILE_SWAP_REVERTED, src=kwargs.get('src'), dst=kwargs.get('dst'))
