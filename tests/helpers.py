from __future__ import annotations

from collections import deque
from typing import Iterable, Sequence

from gemrush.components.board import Board
from gemrush.components.gem import Gem, GemType
from gemrush.components.gem_source import GemSource
from gemrush.components.pacing import Pacing
from gemrush.session import GameSession

LETTERS = {
    'R': GemType.RED,
    'B': GemType.BLUE,
    'G': GemType.GREEN,
    'Y': GemType.YELLOW,
    'P': GemType.PURPLE,
    'O': GemType.ORANGE,
}


def board_from_rows(rows: Sequence[str]) -> Board:
    """Build a board from letter rows such as ``["RBG", "GRB", ...]``; '.' is an empty cell."""
    cells = []
    for r, line in enumerate(rows):
        row = []
        for c, letter in enumerate(line):
            if letter == '.':
                row.append(None)
            else:
                row.append(Gem(type=LETTERS[letter], id=f"t-{r}-{c}"))
        cells.append(row)
    return Board.from_rows(cells)


def board_letters(board: Board) -> list[str]:
    inverse = {gem_type: letter for letter, gem_type in LETTERS.items()}
    return [
        ''.join(inverse[gem.type] if gem is not None else '.' for gem in row)
        for row in board.cells
    ]


class ScriptedGemSource(GemSource):
    """GemSource that hands out queued types first, then falls back to its rng."""

    def __init__(self, types: Iterable[GemType] = (), **kwargs):
        super().__init__(**kwargs)
        self.queue: deque[GemType] = deque(types)

    def push(self, *types: GemType) -> None:
        self.queue.extend(types)

    def random_type(self) -> GemType:
        if self.queue:
            return self.queue.popleft()
        return super().random_type()


def make_session(rows: Sequence[str] | None = None, *, pacing: Pacing | None = None, **kwargs) -> GameSession:
    """Session with a scripted gem source, optionally starting from a crafted board."""
    kwargs.setdefault('source', ScriptedGemSource(seed=7))
    if rows is not None:
        kwargs.setdefault('board_size', len(rows))
    session = GameSession(pacing=pacing or Pacing.instant(), **kwargs)
    if rows is not None:
        session.state.board = board_from_rows(rows)
    return session
