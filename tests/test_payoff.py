"""Tests for simultaneous-move payoff games."""

import pytest

from gamemaster.games.payoff import PayoffGame, rock_paper_scissors_lizard_spock


def test_rock_beats_scissors():
    game = rock_paper_scissors_lizard_spock()
    result = game.resolve(["Rock", "Scissors"])

    assert not result.is_tie
    assert result.winning_move == "Rock"
    assert result.winner_index == 0
    assert result.description == "Rock crushes Scissors"


def test_later_submission_can_win():
    game = rock_paper_scissors_lizard_spock()
    result = game.resolve(["Spock", "Lizard"])
    assert result.winner_index == 1
    assert result.description == "Lizard poisons Spock"


def test_identical_moves_tie():
    game = rock_paper_scissors_lizard_spock()
    result = game.resolve(["Paper", "Paper"])
    assert result.is_tie
    assert result.winner_index is None
    assert result.description == ""


def test_every_pair_of_distinct_moves_has_one_winner():
    game = rock_paper_scissors_lizard_spock()
    for first in game.moves:
        for second in game.moves:
            if first == second:
                continue
            forward = game.verb(first, second) is not None
            backward = game.verb(second, first) is not None
            assert forward != backward


def test_invalid_tables_and_moves():
    with pytest.raises(ValueError):
        PayoffGame({"Rock": (("Scissors", "crushes"),), "Scissors": (("Rock", "blunts"),)})
    with pytest.raises(ValueError):
        PayoffGame({"Rock": (("Dynamite", "fears"),)})

    game = rock_paper_scissors_lizard_spock()
    with pytest.raises(ValueError):
        game.resolve([])
    with pytest.raises(ValueError):
        game.resolve(["Rock", "Dynamite"])
