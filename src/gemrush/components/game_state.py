"""Session state resource describing the board, score and turn phase."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from gemrush.components.board import Board
from gemrush.components.gem import Position


class SessionPhase(Enum):
    """Turn phases of a session; input is only accepted in IDLE and ONE_SELECTED."""
    IDLE = auto()
    ONE_SELECTED = auto()
    REVERTING = auto()
    RESOLVING = auto()
    GAME_OVER = auto()


@dataclass
class GameState:
    """Singleton component mutated only by the session systems."""
    board: Board
    score: int = 0
    moves: int = 0
    combo: int = 0
    selection: Optional[Position] = None
    phase: SessionPhase = SessionPhase.IDLE
    high_score: int = 0

    @property
    def is_busy(self) -> bool:
        return self.phase in (SessionPhase.REVERTING, SessionPhase.RESOLVING)

    @property
    def is_over(self) -> bool:
        return self.phase == SessionPhase.GAME_OVER

    @property
    def accepts_input(self) -> bool:
        return self.phase in (SessionPhase.IDLE, SessionPhase.ONE_SELECTED)
