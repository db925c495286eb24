"""Tests for match and agent registries."""

from __future__ import annotations

from uuid import uuid4

import pytest

from gamemaster.registry import (
    get_agent_entry,
    get_game_entry,
    list_agents,
    list_games,
    make_agent,
    make_game,
    register_agent,
    register_game,
)
from gamemaster.agents import GridMinimaxAgent, RandomAgent
from gamemaster.matches import RPSMatch, TicTacToeMatch


class _StubMatch:
    def __init__(self, size: int, best_of: int = 1) -> None:
        self.size = size
        self.best_of = best_of


class _StubAgent:
    def __init__(self, name: str, chance: float) -> None:
        self.name = name
        self.chance = chance


def test_register_and_make_game():
    game_id = f"stub_game_{uuid4().hex}"
    register_game(game_id, _StubMatch, description="stub", size=4, best_of=3)

    instance = make_game(game_id, best_of=5)
    assert isinstance(instance, _StubMatch)
    assert instance.size == 4
    assert instance.best_of == 5

    entry = get_game_entry(game_id)
    assert entry.factory is _StubMatch
    assert entry.defaults == {"size": 4, "best_of": 3}
    assert entry.description == "stub"

    with pytest.raises(ValueError):
        register_game(game_id, _StubMatch)


def test_register_and_make_agent():
    agent_id = f"stub_agent_{uuid4().hex}"
    register_agent(agent_id, _StubAgent)

    instance = make_agent(agent_id, name="test", chance=0.1)
    assert isinstance(instance, _StubAgent)
    assert instance.name == "test"
    assert instance.chance == 0.1

    assert get_agent_entry(agent_id).factory is _StubAgent

    with pytest.raises(ValueError):
        register_agent(agent_id, _StubAgent)


def test_registry_lists_include_defaults():
    assert {"tictactoe", "rps"}.issubset(set(list_games()))
    assert {"random", "minimax"}.issubset(set(list_agents()))


def test_default_entries_build_real_objects():
    assert isinstance(make_game("tictactoe", size=4), TicTacToeMatch)
    assert isinstance(make_game("rps"), RPSMatch)
    assert isinstance(make_agent("random", seed=1), RandomAgent)
    assert isinstance(make_agent("minimax", size=3), GridMinimaxAgent)


def test_registry_make_missing_entries():
    with pytest.raises(KeyError):
        make_game("missing_game")
    with pytest.raises(KeyError):
        make_agent("missing_agent")
