from __future__ import annotations

from esper import World

from gemrush.components.game_state import GameState, SessionPhase
from gemrush.components.gem_registry import GemRegistry
from gemrush.components.gem_source import GemSource
from gemrush.constants import BOARD_SIZE, INITIAL_TIME
from gemrush.systems.board_ops import create_board
from gemrush.systems.timer import start_timer


def create_world(
    *,
    board_size: int = BOARD_SIZE,
    time_budget: int = INITIAL_TIME,
    source: GemSource | None = None,
    high_score: int = 0,
) -> World:
    """Build the session world: gem source, game state with a fresh board, and the timer."""
    world = World()
    source = source or GemSource()

    # Single registry entity owning the randomness and gem ids for this session.
    world.create_entity(GemRegistry(source=source))

    world.create_entity(
        GameState(
            board=create_board(board_size, source),
            phase=SessionPhase.IDLE,
            high_score=high_score,
        )
    )
    start_timer(world, time_budget)
    return world
