"""Tests for GameState snapshots and repositories."""
from pathlib import Path

import pytest

from marias.bot import bot_action
from marias.engine import apply_move
from marias.persistence import (
    InMemoryRepository,
    JsonFileRepository,
    state_from_dict,
    state_from_json,
    state_to_dict,
    state_to_json,
)
from marias.state import GameState, Phase, new_game


def _mid_game_state(moves: int = 10) -> GameState:
    state = new_game(17, forhont=2)
    for _ in range(moves):
        seat = state.actor if state.phase in (Phase.BIDDING, Phase.TALON) else state.current_seat
        state = apply_move(state, bot_action(state, seat))
    return state


def test_round_trip_dict():
    state = _mid_game_state()
    assert state.history
    d = state_to_dict(state)
    assert d["phase"] == "PLAYING"
    assert d["seats"][0]["hand"][0].keys() == {"suit", "rank"}
    assert state_from_dict(d) == state


def test_round_trip_json_fresh_game():
    state = new_game(3)
    s = state_to_json(state)
    assert '"trump": null' in s
    assert state_from_json(s) == state


def test_round_trip_json_finished_game():
    state = _mid_game_state(moves=33)
    assert state.phase == Phase.FINISHED
    assert state_from_json(state_to_json(state)) == state


def test_snapshot_needs_three_seats():
    d = state_to_dict(new_game(3))
    d["seats"] = d["seats"][:2]
    with pytest.raises(ValueError):
        state_from_dict(d)


def test_in_memory_repository():
    repo = InMemoryRepository()
    assert repo.load() is None
    state = _mid_game_state()
    repo.save(state)
    assert repo.load() == state
    repo.clear()
    assert repo.load() is None


def test_json_file_repository(tmp_path: Path):
    path = tmp_path / "saves" / "game.json"
    repo = JsonFileRepository(path)
    assert repo.load() is None

    state = _mid_game_state()
    repo.save(state)
    assert path.exists()
    assert JsonFileRepository(path).load() == state

    repo.clear()
    assert not path.exists()
    assert repo.load() is None


def test_json_file_repository_unreadable_file(tmp_path: Path):
    path = tmp_path / "game.json"
    path.write_text("{not json", encoding="utf-8")
    assert JsonFileRepository(path).load() is None

    path.write_text('{"seed": 1}', encoding="utf-8")
    assert JsonFileRepository(path).load() is None
