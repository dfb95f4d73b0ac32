import json

import pytest

from gemrush.storage.leaderboard import InMemoryLeaderboardStore, JsonLeaderboardStore, LeaderboardEntry


def entry(score, moves=5, seconds=60):
    return LeaderboardEntry(score=score, completion_seconds=seconds, moves=moves, timestamp="2024-01-01T00:00:00+00:00")


@pytest.fixture(params=["memory", "json"])
def store(request, tmp_path):
    if request.param == "memory":
        return InMemoryLeaderboardStore()
    return JsonLeaderboardStore(tmp_path / "leaderboard.json")


def test_empty_store_reads_nothing(store):
    assert store.read_top_entries() == []
    assert store.read_best_score() == 0


def test_entries_sorted_and_truncated_to_ten(store):
    for score in [50, 10, 90, 30, 70, 20, 80, 40, 60, 100, 5, 15]:
        store.record_score(entry(score))
    top = store.read_top_entries()
    assert [e.score for e in top] == [100, 90, 80, 70, 60, 50, 40, 30, 20, 15]
    assert [e.score for e in store.read_top_entries(3)] == [100, 90, 80]
    assert store.read_best_score() == 100


def test_best_score_only_rises(store):
    store.record_score(entry(200))
    store.record_score(entry(50))
    assert store.read_best_score() == 200


def test_clear_empties_store(store):
    store.record_score(entry(10))
    store.clear()
    assert store.read_top_entries() == []
    assert store.read_best_score() == 0


def test_json_store_persists_between_instances(tmp_path):
    path = tmp_path / "nested" / "leaderboard.json"
    JsonLeaderboardStore(path).record_score(entry(42, moves=7, seconds=60))
    reloaded = JsonLeaderboardStore(path)
    assert reloaded.read_best_score() == 42
    assert reloaded.read_top_entries() == [entry(42, moves=7, seconds=60)]
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["best_score"] == 42
    assert payload["entries"][0]["moves"] == 7


def test_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "leaderboard.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonLeaderboardStore(path)
    assert store.read_top_entries() == []
    assert store.read_best_score() == 0
    store.record_score(entry(12))
    assert store.read_best_score() == 12


def test_malformed_entries_are_skipped(tmp_path):
    path = tmp_path / "leaderboard.json"
    path.write_text(json.dumps({
        "entries": [{"score": "abc"}, "junk", {"score": 9, "moves": 2, "completion_seconds": 60, "timestamp": "t"}],
        "best_score": "high",
    }), encoding="utf-8")
    store = JsonLeaderboardStore(path)
    assert [e.score for e in store.read_top_entries()] == [9]
    assert store.read_best_score() == 0


def test_clear_on_missing_file_is_noop(tmp_path):
    JsonLeaderboardStore(tmp_path / "missing.json").clear()
