"""Shared fixtures: a clean in-memory store and helpers to play through rounds."""

import pytest

import store
from game import rooms, turns
from game.fallbacks import get_fallback_line


@pytest.fixture(autouse=True)
def clean_store(monkeypatch):
    store.reset()
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.setenv("LINEJAM_AI_DELAY_MIN_MS", "0")
    monkeypatch.setenv("LINEJAM_AI_DELAY_MAX_MS", "0")
    yield
    store.reset()


@pytest.fixture
def lobby():
    """Lobby hosted by alice with bob and carol joined."""
    room = rooms.create_room("alice", "Alice")
    rooms.join_room(room.code, "bob", "Bob")
    rooms.join_room(room.code, "carol", "Carol")
    return room


@pytest.fixture
def play_round():
    """Return a function that makes every listed player write their line."""

    def _play(code: str, user_ids: list[str]) -> dict[str, str]:
        written = {}
        for user_id in user_ids:
            assignment = turns.get_current_assignment(code, user_id)
            assert assignment is not None, f"{user_id} has nothing to write"
            text = get_fallback_line(assignment["target_word_count"])
            turns.submit_line(assignment["poem_id"], assignment["line_index"], text, user_id)
            written[user_id] = assignment["poem_id"]
        return written

    return _play
