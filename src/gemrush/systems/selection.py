from esper import World

from gemrush.components.game_state import SessionPhase
from gemrush.components.gem import Position
from gemrush.events.bus import (
    EventBus,
    EVENT_TILE_CLICK,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
    EVENT_TILE_SWAP_REQUEST,
)
from gemrush.systems.board_ops import are_adjacent
from gemrush.utils.game_state import get_game_state, set_phase


class SelectionSystem:
    """Turns tile clicks into selections and swap requests.

    Idle + tap selects; tapping the selection again deselects; tapping a
    non-adjacent tile moves the selection; tapping an adjacent tile requests a
    swap. Taps while the board is resolving or after game over are dropped.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        state = get_game_state(self.world)
        if not state.accepts_input:
            return
        clicked = Position(int(row), int(col))
        if not state.board.contains(clicked):
            return
        selected = state.selection
        if selected is None:
            self._select(clicked)
            return
        if selected == clicked:
            state.selection = None
            set_phase(self.world, self.event_bus, SessionPhase.IDLE)
            self.event_bus.emit(EVENT_TILE_DESELECTED, reason='same_tile', prev_row=selected.row, prev_col=selected.col)
            return
        if are_adjacent(selected, clicked):
            state.selection = None
            self.event_bus.emit(EVENT_TILE_DESELECTED, reason='swap', prev_row=selected.row, prev_col=selected.col)
            self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=selected, dst=clicked)
        else:
            # Change selection to new tile
            self._select(clicked)

    def _select(self, pos: Position):
        state = get_game_state(self.world)
        state.selection = pos
        set_phase(self.world, self.event_bus, SessionPhase.ONE_SELECTED)
        self.event_bus.emit(EVENT_TILE_SELECTED, row=pos.row, col=pos.col)
