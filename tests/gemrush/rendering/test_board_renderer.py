from gemrush.rendering.board_renderer import BoardRenderer
from gemrush.storage.leaderboard import InMemoryLeaderboardStore
from tests.helpers import make_session


class DummyWindow:
    def __init__(self, width=600, height=720):
        self.width = width; self.height = height


class CountingStore(InMemoryLeaderboardStore):
    def __init__(self):
        super().__init__()
        self.reads = 0

    def read_top_entries(self, limit=10):
        self.reads += 1
        return super().read_top_entries(limit)


def test_game_over_entries_read_once_per_game():
    store = CountingStore()
    session = make_session(time_budget=1, store=store)
    renderer = BoardRenderer(session, DummyWindow())
    session.tick(1.0)
    assert session.state.is_over
    for _ in range(60):
        entries = renderer.top_entries()
    assert store.reads == 1
    assert [e.score for e in entries] == [0]


def test_cache_refreshes_after_next_game_over():
    store = CountingStore()
    session = make_session(time_budget=1, store=store)
    renderer = BoardRenderer(session, DummyWindow())
    session.tick(1.0)
    renderer.top_entries()
    session.reset()
    session.tick(1.0)
    assert len(renderer.top_entries()) == 2
    assert store.reads == 2


def test_geometry_follows_window_and_board():
    session = make_session(["RBG", "GRB", "BGR"])
    renderer = BoardRenderer(session, DummyWindow(600, 720))
    geo = renderer.geometry()
    assert geo.size == 3
    assert geo.cell_size == 60
