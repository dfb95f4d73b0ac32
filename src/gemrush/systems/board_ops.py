"""Pure board engine: construction, match detection, gravity, scoring and shuffles.

Every function takes a Board value and returns a new value; nothing here
touches the ECS world, so the same helpers back the live session, the
speculative swap checks and the tests.
"""
from __future__ import annotations

import logging
import math
from collections import Counter
from typing import Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from gemrush.components.board import Board
from gemrush.components.gem import Gem, GemType, Position
from gemrush.components.gem_source import GemSource
from gemrush.components.match import Match
from gemrush.constants import MAX_PLACEMENT_ATTEMPTS, MAX_SHUFFLE_ATTEMPTS

logger = logging.getLogger(__name__)

Grid = List[List[Optional[Gem]]]
Swap = Tuple[Position, Position]


def generate_gem(source: GemSource) -> Gem:
    return source.generate_gem()


def _type_at(grid: Grid, row: int, col: int) -> GemType | None:
    gem = grid[row][col]
    return gem.type if gem is not None else None


def _would_create_match(grid: Grid, row: int, col: int, gem_type: GemType, size: int) -> bool:
    """Return True if gem_type at (row, col) would sit in a run of three or more."""
    # Horizontal sweep
    count = 1
    c_left = col - 1
    while c_left >= 0 and _type_at(grid, row, c_left) == gem_type:
        count += 1
        c_left -= 1
    c_right = col + 1
    while c_right < size and _type_at(grid, row, c_right) == gem_type:
        count += 1
        c_right += 1
    if count >= 3:
        return True
    # Vertical sweep
    count = 1
    r_up = row - 1
    while r_up >= 0 and _type_at(grid, r_up, col) == gem_type:
        count += 1
        r_up -= 1
    r_down = row + 1
    while r_down < size and _type_at(grid, r_down, col) == gem_type:
        count += 1
        r_down += 1
    return count >= 3


def create_board(
    size: int,
    source: GemSource,
    *,
    max_attempts: int = MAX_PLACEMENT_ATTEMPTS,
) -> Board:
    """Fill a size x size board row by row without pre-existing matches.

    A cell that still completes a run after ``max_attempts`` draws keeps its
    last gem, so a board may rarely start with a match.
    """
    if size < 1:
        raise ValueError(f"Board size must be positive, got {size}")
    grid: Grid = [[None] * size for _ in range(size)]
    fallbacks = 0
    for row in range(size):
        for col in range(size):
            gem = source.generate_gem()
            attempts = 1
            while _would_create_match(grid, row, col, gem.type, size):
                if attempts >= max_attempts:
                    fallbacks += 1
                    break
                gem = source.generate_gem()
                attempts += 1
            grid[row][col] = gem
    if fallbacks:
        logger.debug("create_board accepted %d pre-matched cell(s) on a %dx%d board", fallbacks, size, size)
    return Board.from_rows(grid)


def are_adjacent(a: Tuple[int, int], b: Tuple[int, int]) -> bool:
    ar, ac = a
    br, bc = b
    return (abs(ar - br) == 1 and ac == bc) or (abs(ac - bc) == 1 and ar == br)


def swap_gems(board: Board, a: Tuple[int, int], b: Tuple[int, int]) -> Board:
    """Exchange two cells. Adjacency and match checks are the caller's business."""
    gem_a = board.at(a)
    gem_b = board.at(b)
    rows = board.to_rows()
    rows[a[0]][a[1]] = gem_b
    rows[b[0]][b[1]] = gem_a
    return Board.from_rows(rows)


def _scan_line(line: Sequence[Tuple[Position, Optional[Gem]]]) -> List[Match]:
    matches: List[Match] = []
    run: List[Position] = []
    run_type: GemType | None = None
    for pos, gem in line:
        gem_type = gem.type if gem is not None else None
        if gem_type is not None and gem_type == run_type:
            run.append(pos)
            continue
        if len(run) >= 3:
            matches.append(Match(positions=tuple(run), type=run_type))
        run = [pos] if gem_type is not None else []
        run_type = gem_type
    if len(run) >= 3:
        matches.append(Match(positions=tuple(run), type=run_type))
    return matches


def find_matches(board: Board) -> List[Match]:
    """Detect every maximal horizontal or vertical run of length >= 3.

    Horizontal runs come first (row-major), then vertical runs
    (column-major). A gem at an L or T intersection appears in one match per
    axis; empty cells end a run.
    """
    size = board.size
    cells = board.cells
    matches: List[Match] = []
    # Horizontal runs
    for r in range(size):
        matches.extend(_scan_line([(Position(r, c), cells[r][c]) for c in range(size)]))
    # Vertical runs
    for c in range(size):
        matches.extend(_scan_line([(Position(r, c), cells[r][c]) for r in range(size)]))
    return matches


def matched_positions(matches: Iterable[Match]) -> Set[Position]:
    return {pos for match in matches for pos in match.positions}


def remove_matches(board: Board, matches: Iterable[Match]) -> Board:
    """Empty every matched cell; overlapping matches clear a cell once."""
    rows = board.to_rows()
    for row, col in matched_positions(matches):
        rows[row][col] = None
    return Board.from_rows(rows)


def refill_positions(board: Board) -> List[Position]:
    """Cells that apply_gravity will fill with new gems: the top of each column, one per gap."""
    positions: List[Position] = []
    for col in range(board.size):
        empty = sum(1 for row in range(board.size) if board.cells[row][col] is None)
        positions.extend(Position(row, col) for row in range(empty))
    return positions


def apply_gravity(board: Board, source: GemSource) -> Board:
    """Drop gems down their columns, keeping their order, and refill from the top."""
    size = board.size
    rows = board.to_rows()
    for col in range(size):
        stack = [rows[row][col] for row in range(size) if rows[row][col] is not None]
        empty = size - len(stack)
        for row in range(empty):
            rows[row][col] = source.generate_gem()
        for offset, gem in enumerate(stack):
            rows[empty + offset][col] = gem
    return Board.from_rows(rows)


def calculate_score(matches: Iterable[Match], combo_index: int) -> int:
    """Score a batch of matches cleared at cascade depth ``combo_index``."""
    multiplier = 1 + combo_index * 0.5
    total = 0.0
    for match in matches:
        length = len(match.positions)
        base = length * 10
        length_bonus = max(0, (length - 3) * 20)
        total += (base + length_bonus) * multiplier
    return math.floor(total)


def iter_valid_swaps(board: Board) -> Iterator[Swap]:
    """Yield adjacent swaps that would produce a match, probing each pair once."""
    size = board.size
    for row in range(size):
        for col in range(size):
            pos = Position(row, col)
            if col + 1 < size:
                right = Position(row, col + 1)
                if find_matches(swap_gems(board, pos, right)):
                    yield pos, right
            if row + 1 < size:
                down = Position(row + 1, col)
                if find_matches(swap_gems(board, pos, down)):
                    yield pos, down


def find_valid_swaps(board: Board) -> List[Swap]:
    return list(iter_valid_swaps(board))


def has_valid_moves(board: Board) -> bool:
    return next(iter_valid_swaps(board), None) is not None


def board_type_counts(board: Board) -> Counter:
    return Counter(gem.type for gem in board.gems())


def _board_from_flat(gems: Sequence[Gem], size: int) -> Board:
    return Board.from_rows([list(gems[row * size:(row + 1) * size]) for row in range(size)])


def _neighbours(pos: Position, size: int) -> Iterator[Position]:
    row, col = pos
    for dr, dc in ((0, 1), (1, 0), (0, -1), (-1, 0)):
        r, c = row + dr, col + dc
        if 0 <= r < size and 0 <= c < size:
            yield Position(r, c)


def _repair_by_swap(board: Board, matches: List[Match]) -> Board | None:
    """Swap one matched gem with a differing neighbour if that shrinks the matched area."""
    matched_count = len(matched_positions(matches))
    for match in matches:
        for pos in match.positions:
            for other in _neighbours(pos, board.size):
                neighbour = board.at(other)
                if neighbour is None or neighbour.type == match.type:
                    continue
                candidate = swap_gems(board, pos, other)
                if len(matched_positions(find_matches(candidate))) < matched_count:
                    return candidate
    return None


def _repair_by_replacement(board: Board, match: Match, source: GemSource) -> Board:
    """Replace the middle gem of a match with a type that completes no run."""
    row, col = match.positions[len(match.positions) // 2]
    rows = board.to_rows()
    rows[row][col] = None
    # Palette types first; other types only when every palette type completes a run.
    candidates = list(source.palette) + [t for t in GemType if t not in source.palette]
    for gem_type in candidates:
        if not _would_create_match(rows, row, col, gem_type, board.size):
            rows[row][col] = Gem(type=gem_type, id=source.next_id(gem_type))
            return Board.from_rows(rows)
    # Unreachable with six gem types: a cell has at most four neighbours.
    raise RuntimeError(f"No gem type breaks the match at {(row, col)}")


def _break_matches(board: Board, source: GemSource) -> Board:
    current = board
    while True:
        matches = find_matches(current)
        if not matches:
            return current
        repaired = _repair_by_swap(current, matches)
        if repaired is None:
            logger.warning("Shuffle repair replaced a gem at %s", matches[0].positions[len(matches[0].positions) // 2])
            repaired = _repair_by_replacement(current, matches[0], source)
        current = repaired


def shuffle_board(
    board: Board,
    source: GemSource,
    *,
    max_attempts: int = MAX_SHUFFLE_ATTEMPTS,
) -> Board:
    """Randomly permute the board's gems into a match-free arrangement.

    After ``max_attempts`` permutations that all contain a match, the last
    one is repaired in place: offending gems are swapped with differing
    neighbours, and only if no swap helps is a gem replaced.
    """
    size = board.size
    gems = [gem if gem is not None else source.generate_gem() for row in board.cells for gem in row]
    candidate = _board_from_flat(gems, size)
    for _ in range(max_attempts):
        source.shuffle(gems)
        candidate = _board_from_flat(gems, size)
        if not find_matches(candidate):
            return candidate
    logger.warning("No match-free shuffle after %d attempts; repairing", max_attempts)
    return _break_matches(candidate, source)
