from gemrush.components.game_state import SessionPhase
from gemrush.components.gem import Position
from gemrush.events.bus import (
    EVENT_PHASE_CHANGED,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
    EVENT_TILE_SWAP_REQUEST,
)
from tests.helpers import make_session


def test_tap_selects_and_same_tap_deselects():
    session = make_session()
    events = []
    session.event_bus.subscribe(EVENT_TILE_SELECTED, lambda s, **k: events.append(('selected', k)))
    session.event_bus.subscribe(EVENT_TILE_DESELECTED, lambda s, **k: events.append(('deselected', k)))

    session.tap(0, 0)
    assert session.state.selection == Position(0, 0)
    assert session.state.phase == SessionPhase.ONE_SELECTED

    session.tap(0, 0)
    assert session.state.selection is None
    assert session.state.phase == SessionPhase.IDLE
    assert events == [
        ('selected', {'row': 0, 'col': 0}),
        ('deselected', {'reason': 'same_tile', 'prev_row': 0, 'prev_col': 0}),
    ]


def test_non_adjacent_tap_moves_selection():
    session = make_session()
    requests = []
    session.event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, lambda s, **k: requests.append(k))
    session.tap(2, 2)
    session.tap(5, 5)
    assert session.state.selection == Position(5, 5)
    assert session.state.phase == SessionPhase.ONE_SELECTED
    session.tap(4, 4)
    assert session.state.selection == Position(4, 4), 'diagonal neighbours are not adjacent'
    assert requests == []


def test_adjacent_tap_requests_swap():
    session = make_session()
    requests = []
    session.event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, lambda s, **k: requests.append(k))
    session.tap(3, 3)
    session.tap(3, 4)
    assert requests == [{'src': Position(3, 3), 'dst': Position(3, 4)}]
    assert session.state.selection is None


def test_taps_outside_board_are_ignored():
    session = make_session()
    phases = []
    session.event_bus.subscribe(EVENT_PHASE_CHANGED, lambda s, **k: phases.append(k['new_phase']))
    session.tap(8, 0)
    session.tap(-1, 3)
    assert session.state.selection is None
    assert phases == []


def test_diagonal_tap_reselects_instead_of_swapping():
    session = make_session()
    requests = []
    session.event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, lambda s, **k: requests.append(k))
    session.tap(1, 1)
    session.tap(2, 2)
    assert requests == []
    assert session.state.selection == Position(2, 2)
