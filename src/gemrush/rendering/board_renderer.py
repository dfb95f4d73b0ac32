from __future__ import annotations

from typing import TYPE_CHECKING

from gemrush.constants import CELL_GAP, GEM_COLORS, HUD_HEIGHT
from gemrush.events.bus import (
    EVENT_GAME_OVER,
    EVENT_GAME_RESET,
    EVENT_MATCH_CLEARED,
    EVENT_MATCH_FOUND,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_REVERTED,
)
from gemrush.ui.layout import BoardGeometry, cell_center, compute_board_geometry

if TYPE_CHECKING:
    from gemrush.session import GameSession
    from gemrush.storage.leaderboard import LeaderboardEntry

SELECTION_COLOR = (255, 255, 255)
HIGHLIGHT_COLOR = (255, 240, 160)
INVALID_COLOR = (230, 80, 80)
BOARD_BACKGROUND = (24, 24, 36)
OVERLAY_COLOR = (0, 0, 0, 200)


class BoardRenderer:
    """Draws the board, HUD and game-over overlay for a session.

    Only presentation state lives here (positions being cleared, the swap
    being reverted, cached leaderboard rows); everything else is read from
    the session each frame.
    """
    def __init__(self, session: GameSession, window):
        self.session = session
        self.window = window
        self._highlighted: set[tuple[int, int]] = set()
        self._invalid_swap: tuple[tuple[int, int], tuple[int, int]] | None = None
        self._top_entries: list[LeaderboardEntry] | None = None
        bus = session.event_bus
        bus.subscribe(EVENT_MATCH_FOUND, self.on_match_found)
        bus.subscribe(EVENT_MATCH_CLEARED, self.on_match_cleared)
        bus.subscribe(EVENT_TILE_SWAP_INVALID, self.on_swap_invalid)
        bus.subscribe(EVENT_TILE_SWAP_REVERTED, self.on_swap_reverted)
        bus.subscribe(EVENT_GAME_RESET, self.on_game_reset)
        bus.subscribe(EVENT_GAME_OVER, self.on_game_over)

    def geometry(self) -> BoardGeometry:
        return compute_board_geometry(self.window.width, self.window.height, self.session.state.board.size)

    def on_match_found(self, sender, **kwargs):
        self._highlighted = {tuple(pos) for pos in kwargs.get('positions', [])}

    def on_match_cleared(self, sender, **kwargs):
        self._highlighted = set()

    def on_swap_invalid(self, sender, **kwargs):
        self._invalid_swap = (tuple(kwargs.get('src')), tuple(kwargs.get('dst')))

    def on_swap_reverted(self, sender, **kwargs):
        self._invalid_swap = None

    def on_game_reset(self, sender, **kwargs):
        self._highlighted = set()
        self._invalid_swap = None
        self._top_entries = None

    def on_game_over(self, sender, **kwargs):
        # Reloaded on the next overlay frame, after the finished game is recorded.
        self._top_entries = None

    def top_entries(self) -> list[LeaderboardEntry]:
        """Leaderboard rows for the game-over overlay, read from the store once per game over."""
        if self._top_entries is None:
            self._top_entries = self.session.store.read_top_entries(5)
        return self._top_entries

    def render(self):
        # Local import keeps the session and tests usable without a display.
        import arcade
        geometry = self.geometry()
        state = self.session.state
        arcade.draw_lrbt_rectangle_filled(
            geometry.left - CELL_GAP,
            geometry.left + geometry.width + CELL_GAP,
            geometry.bottom - CELL_GAP,
            geometry.top + CELL_GAP,
            BOARD_BACKGROUND,
        )
        radius = max(geometry.cell_size - CELL_GAP, 4) / 2
        invalid = set(self._invalid_swap) if self._invalid_swap else set()
        for pos in state.board.positions():
            gem = state.board.at(pos)
            if gem is None:
                continue
            x, y = cell_center(pos, geometry)
            arcade.draw_circle_filled(x, y, radius, GEM_COLORS[gem.type.value])
            if tuple(pos) in self._highlighted:
                arcade.draw_circle_outline(x, y, radius, HIGHLIGHT_COLOR, 3)
            elif tuple(pos) in invalid:
                arcade.draw_circle_outline(x, y, radius, INVALID_COLOR, 3)
            elif state.selection is not None and tuple(pos) == tuple(state.selection):
                arcade.draw_circle_outline(x, y, radius, SELECTION_COLOR, 3)
        self._render_hud(arcade, geometry)
        if state.is_over:
            self._render_game_over(arcade)

    def _render_hud(self, arcade, geometry: BoardGeometry):
        state = self.session.state
        top = geometry.top + HUD_HEIGHT / 2
        stats = [
            ("Score", f"{state.score:,}", arcade.color.GOLD),
            ("High Score", f"{state.high_score:,}", arcade.color.LIGHT_GREEN),
            ("Time", f"{self.session.time_left}s", arcade.color.RED if self.session.time_left <= 10 else arcade.color.LIGHT_BLUE),
            ("Moves", str(state.moves), arcade.color.LAVENDER),
        ]
        column_width = self.window.width / len(stats)
        for index, (label, value, color) in enumerate(stats):
            x = column_width * index + column_width / 2
            arcade.draw_text(label, x, top + 18, arcade.color.GRAY, 12, anchor_x="center")
            arcade.draw_text(value, x, top - 8, color, 20, anchor_x="center", bold=True)
        if state.combo > 0:
            arcade.draw_text(f"{state.combo}x COMBO!", self.window.width / 2, geometry.top + 8,
                             arcade.color.ORANGE, 14, anchor_x="center", bold=True)

    def _render_game_over(self, arcade):
        state = self.session.state
        width, height = self.window.width, self.window.height
        arcade.draw_lrbt_rectangle_filled(0, width, 0, height, OVERLAY_COLOR)
        cx = width / 2
        arcade.draw_text("Game Over!", cx, height * 0.7, arcade.color.WHITE, 32, anchor_x="center", bold=True)
        arcade.draw_text(f"Final Score: {state.score:,}", cx, height * 0.7 - 44, arcade.color.GOLD, 20, anchor_x="center")
        arcade.draw_text(f"Moves: {state.moves}", cx, height * 0.7 - 74, arcade.color.LIGHT_GRAY, 14, anchor_x="center")
        y = height * 0.7 - 120
        for rank, entry in enumerate(self.top_entries(), start=1):
            arcade.draw_text(
                f"{rank}. {entry.score:,}  ({entry.moves} moves, {entry.completion_seconds}s)",
                cx, y, arcade.color.LIGHT_GRAY, 12, anchor_x="center",
            )
            y -= 20
        arcade.draw_text("Press N to play again", cx, y - 20, arcade.color.WHITE, 14, anchor_x="center")
