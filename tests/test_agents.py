"""Tests for agents."""

import numpy as np
import pytest

from gamemaster.agents import Difficulty, GridMinimaxAgent, RandomAgent, effective_difficulty
from gamemaster.matches import TicTacToeMatch
from gamemaster.session import GameMode, Identity, QueueSurface, SpecialRule, find_component

ALICE = Identity("alice", "Alice")
BOT = Identity("bot", "Bot", is_agent=True)


def _fill(session, marks):
    for move_id, mark in marks.items():
        component = find_component(session.components, move_id)
        component.fill(mark)
        component.disabled = True


@pytest.fixture
def session():
    match = TicTacToeMatch(size=3, difficulty=Difficulty.IMPOSSIBLE, notice_delay=0, think_delay=0)
    return match.create_session([ALICE, BOT], QueueSurface(), rng=np.random.default_rng(0))


def test_random_agent():
    agent = RandomAgent(seed=42)
    legal = ["0_0", "1_1", "2_2"]
    assert {agent(None, legal) for _ in range(50)} == set(legal)
    with pytest.raises(ValueError):
        agent(None, [])


def test_difficulty_tiers():
    assert Difficulty.EASY.random_move_chance == 1.0
    assert Difficulty.MEDIUM.random_move_chance == 0.1
    assert Difficulty.HARD.random_move_chance == 0.05
    assert Difficulty.IMPOSSIBLE.random_move_chance == 0.0

    biased = Difficulty.COMPUTER_BIASED
    assert effective_difficulty(biased, GameMode.CLASSIC) is Difficulty.IMPOSSIBLE
    assert effective_difficulty(biased, GameMode.OVERRULE, against_agent=False) is Difficulty.IMPOSSIBLE
    assert effective_difficulty(biased, GameMode.OVERRULE) is biased
    assert effective_difficulty(Difficulty.HARD, GameMode.CLASSIC) is Difficulty.HARD


def test_easy_grid_agent_is_rejected():
    with pytest.raises(ValueError):
        GridMinimaxAgent(difficulty=Difficulty.EASY)


def test_match_picks_agent_by_difficulty():
    easy = TicTacToeMatch(difficulty=Difficulty.EASY).make_agent(np.random.default_rng(0))
    hard = TicTacToeMatch(difficulty=Difficulty.HARD).make_agent(np.random.default_rng(0))
    assert isinstance(easy, RandomAgent)
    assert isinstance(hard, GridMinimaxAgent)


def test_agent_blocks_open_line(session):
    _fill(session, {"0_0": "X", "0_1": "X", "1_1": "O"})
    agent = session.agent_player.agent_strategy
    assert agent(session, session.enabled_move_ids) == "0_2"


def test_agent_takes_win_over_block(session):
    _fill(session, {"0_0": "X", "0_1": "X", "1_0": "O", "1_1": "O", "2_2": "X"})
    agent = session.agent_player.agent_strategy
    assert agent(session, session.enabled_move_ids) == "1_2"


def test_encode_uses_owner_perspective(session):
    _fill(session, {"0_0": "X", "1_1": "O"})
    agent = session.agent_player.agent_strategy
    alice, bot = session.players

    as_bot = agent.encode(session, bot)
    as_alice = agent.encode(session, alice)
    assert as_bot.board[1, 1] == 1 and as_bot.board[0, 0] == -1
    assert as_alice.board[0, 0] == 1 and as_alice.board[1, 1] == -1


def test_swap_move_never_completes_opponent_line(session):
    _fill(session, {"0_0": "X", "0_1": "X", "1_0": "O", "2_2": "O"})
    session.special_rule = SpecialRule.SWAP_MOVE
    agent = session.agent_player.agent_strategy

    # The pressed cell is credited to X; 0_2 would hand X the round.
    assert agent(session, session.enabled_move_ids) != "0_2"


def test_agent_falls_back_when_only_own_marks_enabled(session):
    _fill(session, {"0_0": "O"})
    agent = session.agent_player.agent_strategy
    assert agent(session, ["0_0"]) == "0_0"
