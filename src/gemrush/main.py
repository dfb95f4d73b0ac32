"""Entry point for the Gem Rush match-three game.

Sets up the game session, leaderboard store, and Arcade window.
"""
import logging

from arcade import Window, color, key, run, set_background_color

from gemrush.rendering.board_renderer import BoardRenderer
from gemrush.session import GameSession
from gemrush.storage.leaderboard import JsonLeaderboardStore
from gemrush.ui.layout import cell_at_point

logger = logging.getLogger(__name__)


class GemRushWindow(Window):
    def __init__(self, width: int = 600, height: int = 720):
        super().__init__(width, height, "Gem Rush", resizable=True)
        self.set_update_rate(1/60)
        self.session = GameSession(store=JsonLeaderboardStore())
        self.board_renderer = BoardRenderer(self.session, self)
        set_background_color(color.BLACK)

    def on_draw(self):
        self.clear()
        self.board_renderer.render()

    def on_update(self, delta_time: float):
        self.session.tick(delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        pos = cell_at_point(x, y, self.board_renderer.geometry())
        if pos is None:
            return
        self.session.tap(pos.row, pos.col)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol in (key.N, key.R):
            logger.info("New game requested")
            self.session.reset()


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    GemRushWindow()
    run()


if __name__ == "__main__":
    main()
