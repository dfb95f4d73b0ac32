from gemrush.components.gem import Position
from gemrush.systems.board_ops import find_matches, find_valid_swaps, has_valid_moves
from tests.helpers import board_from_rows


def test_single_valid_swap_is_found():
    board = board_from_rows(["YYG", "BGY", "GRB"])
    assert find_matches(board) == []
    assert has_valid_moves(board)
    assert find_valid_swaps(board) == [(Position(0, 2), Position(1, 2))]


def test_removing_the_only_swap_deadlocks():
    board = board_from_rows(["YYG", "BGR", "GRB"])
    assert find_matches(board) == []
    assert not has_valid_moves(board)
    assert find_valid_swaps(board) == []


def test_diagonal_pattern_is_deadlocked():
    board = board_from_rows(["RBG", "BGR", "GRB"])
    assert not has_valid_moves(board)


def test_each_pair_checked_once():
    board = board_from_rows(["RRBR", "GBGY", "YGYB", "BYBG"])
    swaps = find_valid_swaps(board)
    assert len(swaps) == len(set(swaps))
    for a, b in swaps:
        # Only right and down neighbours are checked
        assert (b.row - a.row, b.col - a.col) in ((0, 1), (1, 0))
