from gemrush.components.gem import GemType, Position
from gemrush.systems.board_ops import apply_gravity, find_matches, refill_positions, remove_matches
from tests.helpers import ScriptedGemSource, board_from_rows, board_letters


def test_remove_clears_matched_cells_only():
    board = board_from_rows(["RRRB", "RGBG", "RBGB", "GYBY"])
    matches = find_matches(board)
    cleared = remove_matches(board, matches)
    assert board_letters(cleared) == ["...B", ".GBG", ".BGB", "GYBY"]
    # Input board untouched
    assert board.is_full()


def test_remove_is_idempotent():
    board = board_from_rows(["RRRB", "RGBG", "RBGB", "GYBY"])
    matches = find_matches(board)
    once = remove_matches(board, matches)
    assert remove_matches(once, matches) == once


def test_refill_positions_are_top_of_each_column():
    board = board_from_rows(["R.B", ".G.", "YB."])
    assert refill_positions(board) == [Position(0, 0), Position(0, 1), Position(0, 2), Position(1, 2)]


def test_gravity_compacts_columns_and_refills_from_top():
    board = board_from_rows(["R.B", ".G.", "YB."])
    source = ScriptedGemSource([GemType.PURPLE, GemType.ORANGE, GemType.PURPLE, GemType.ORANGE], seed=0)
    settled = apply_gravity(board, source)
    assert board_letters(settled) == ["POP", "RGO", "YBB"]
    assert settled.is_full()
    # Surviving gems keep their identity and relative order
    assert settled.at((1, 0)).id == "t-0-0"
    assert settled.at((2, 0)).id == "t-2-0"
    assert settled.at((2, 2)).id == "t-0-2"


def test_gravity_on_full_board_is_identity():
    board = board_from_rows(["RBG", "GRB", "BGR"])
    source = ScriptedGemSource(seed=0)
    assert apply_gravity(board, source) == board
    assert source.next_id(GemType.RED) == "red-1", "no gems should have been generated"


def test_gravity_after_removal_leaves_no_empty_cells():
    board = board_from_rows(["RRRB", "RGBG", "RBGB", "GYBY"])
    cleared = remove_matches(board, find_matches(board))
    settled = apply_gravity(cleared, ScriptedGemSource(seed=4))
    assert settled.is_full()
    assert board_letters(settled)[3] == "GYBY"
