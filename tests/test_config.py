"""Tests for configuration schemas."""

from __future__ import annotations

import pytest

from gamemaster.config import AppConfig, SessionConfig, load_config
from gamemaster.registry import make_game
from gamemaster.session import GameMode
import gamemaster.matches  # noqa: F401 - ensures default games are registered


def test_app_config_parsing():
    data = {
        "game": {"id": "tictactoe", "params": {"size": 4, "difficulty": "Hard"}},
        "agent": {"id": "minimax", "params": {"time_budget": 0.5}},
        "session": {"best_of": 3, "deuce": False, "mode": "Swap Move", "max_decision_time": 30},
        "seed": "7",
    }

    cfg = AppConfig.from_dict(data)
    assert cfg.game.id == "tictactoe"
    assert cfg.game.params["size"] == 4
    assert cfg.agent.id == "minimax"
    assert cfg.session.best_of == 3
    assert cfg.session.deuce is False
    assert cfg.session.mode is GameMode.SWAP_MOVE
    assert cfg.session.max_decision_time == 30
    assert cfg.seed == 7


def test_app_config_defaults():
    cfg = AppConfig.from_dict({"game": {"id": "rps"}})
    assert cfg.agent is None
    assert cfg.session.best_of == 1
    assert cfg.session.mode is GameMode.CLASSIC
    assert cfg.seed is None


def test_app_config_requires_game():
    with pytest.raises(ValueError):
        AppConfig.from_dict({"session": {"best_of": 3}})


def test_load_config_builds_match(tmp_path):
    path = tmp_path / "match.yaml"
    path.write_text(
        "game:\n"
        "  id: tictactoe\n"
        "  params:\n"
        "    size: 5\n"
        "session:\n"
        "  best_of: 5\n"
        "  mode: Chaos\n"
    )

    cfg = load_config(path)
    match = make_game(cfg.game.id, **cfg.game.params, **cfg.session.as_match_kwargs())
    assert match.size == 5
    assert match.game.win_length == 4
    assert match.best_of == 5
    assert match.mode is GameMode.CHAOS


def test_load_config_rejects_non_mapping(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ValueError):
        load_config(path)


@pytest.mark.parametrize("game_id", ["tictactoe", "rps"])
def test_session_config_fields_are_match_arguments(game_id):
    session = SessionConfig(best_of=3, deuce=False, max_decision_time=5.0, lobby_timeout=2.0)
    match = make_game(game_id, **session.as_match_kwargs())

    assert set(session.as_match_kwargs()) == {
        "best_of", "deuce", "mode", "max_decision_time", "lobby_timeout", "notice_delay", "think_delay",
    }
    settings = match.session_settings(against_agent=False)
    assert settings.title == match.title
    assert settings.best_of == 3
    assert settings.deuce is False
    assert settings.max_decision_time == 5.0
    assert settings.lobby_timeout == 2.0
