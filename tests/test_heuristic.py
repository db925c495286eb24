"""Tests for the grid heuristic value function."""

import numpy as np
import pytest

from gamemaster.games.grid import GridGame
from gamemaster.search.grid import GridHeuristicValueFn, HeuristicWeights, count_two_way_wins, score_lines


def _state(game, rows, to_move=1):
    symbols = {".": 0, "X": 1, "O": -1}
    board = np.array([[symbols[ch] for ch in row] for row in rows], dtype=np.int8)
    return game.state_from_board(board, to_move=to_move)


def test_empty_board_is_neutral():
    game = GridGame(size=3)
    value_fn = GridHeuristicValueFn()
    state = game.initial_state()
    assert value_fn.evaluate(game, state, 1) == 0.0
    assert value_fn.evaluate(game, state, -1) == 0.0


def test_score_lines_counts_open_windows():
    game = GridGame(size=3)
    weights = HeuristicWeights()
    # X in the centre sits on four open lines, each one mark of three.
    state = _state(game, ["...", ".X.", "..."])
    cells = state.board.ravel().tolist()
    assert score_lines(cells, game, 1, weights) == pytest.approx(4 * weights.building)

    # Two in a row with the third cell empty is a near win; blocked lines score nothing.
    state = _state(game, ["XX.", "O..", "..."])
    cells = state.board.ravel().tolist()
    assert score_lines(cells, game, 1, weights) >= weights.near_win
    assert score_lines(cells, game, -1, weights) == pytest.approx(1 * weights.building)


def test_two_way_wins_counted_once_per_cell():
    game = GridGame(size=3)
    state = _state(game, [".XX", "X..", "X.."])
    cells = state.board.ravel().tolist()
    assert count_two_way_wins(cells, game, 1) == 1
    assert count_two_way_wins(cells, game, -1) == 0


def test_fork_favours_its_owner():
    game = GridGame(size=3)
    value_fn = GridHeuristicValueFn()
    state = _state(game, [".XX", "X..", "X.."])
    assert value_fn.evaluate(game, state, 1) > 0
    assert value_fn.evaluate(game, state, -1) < 0


def test_normalised_scores_stay_below_terminal_range():
    game = GridGame(size=5)
    value_fn = GridHeuristicValueFn()
    state = _state(game, ["XXX..", "XXX..", "XX...", ".....", "....."])
    raw = value_fn.raw_score(game, state, 1)
    value = value_fn.evaluate(game, state, 1)
    assert raw > 0
    assert 0 < value < value_fn.weights.scale


def test_unnormalised_returns_raw_score():
    game = GridGame(size=3)
    value_fn = GridHeuristicValueFn(normalize=False)
    state = _state(game, [".XX", "X..", "X.."])
    assert value_fn.evaluate(game, state, 1) == value_fn.raw_score(game, state, 1)
