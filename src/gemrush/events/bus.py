from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                        # payload: dt=float
EVENT_SCHEDULE_STEP = "schedule_step"      # payload: kind=str, delay=float, payload=dict
EVENT_STEP_DUE = "step_due"                # payload: kind=str, **step payload
EVENT_TIMER_CHANGED = "timer_changed"      # payload: time_left=int, budget=int


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_TILE_CLICK = "tile_click"            # payload: row, col


# ============================================================================
# TILE & BOARD MECHANICS
# ============================================================================
EVENT_TILE_SELECTED = "tile_selected"              # payload: row, col
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: reason=str, prev_row, prev_col
EVENT_TILE_SWAP_REQUEST = "tile_swap_request"      # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_VALID = "tile_swap_valid"          # payload: src=(r,c), dst=(r,c), matches=list[Match]
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_REVERTED = "tile_swap_reverted"    # payload: src=(r,c), dst=(r,c)
EVENT_MATCH_FOUND = "match_found"                  # payload: matches=list[Match], positions=[(r,c),...], depth=int
EVENT_SCORE_AWARDED = "score_awarded"              # payload: points=int, combo=int, match_length=int, position=(r,c)
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(r,c),...], depth=int
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: new_tiles=[(r,c),...], depth=int
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, positions=[(r,c),...]
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int
EVENT_BOARD_SHUFFLED = "board_shuffled"            # payload: reason=str
EVENT_BOARD_CHANGED = "board_changed"              # payload: reason=str


# ============================================================================
# SCORING & SESSION
# ============================================================================
EVENT_HIGH_SCORE_CHANGED = "high_score_changed"    # payload: high_score=int
EVENT_PHASE_CHANGED = "phase_changed"              # payload: previous_phase=SessionPhase, new_phase=SessionPhase
EVENT_GAME_OVER = "game_over"                      # payload: score=int, moves=int, completion_seconds=int
EVENT_GAME_RESET_REQUEST = "game_reset_request"    # payload: None
EVENT_GAME_RESET = "game_reset"                    # payload: board_size=int, time_budget=int
