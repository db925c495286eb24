"""Tests for the N x N grid rules."""

import numpy as np
import pytest

from gamemaster.games.grid import (
    GridGame,
    build_lines,
    cell_move_id,
    default_win_length,
    parse_move_id,
)


def _board(rows):
    symbols = {".": 0, "X": 1, "O": -1}
    return np.array([[symbols[ch] for ch in row] for row in rows], dtype=np.int8)


def test_initial_state():
    game = GridGame(size=3)
    state = game.initial_state()
    assert state.board.shape == (3, 3)
    assert np.all(state.board == 0)
    assert game.current_player(state) == 1
    assert not game.is_terminal(state)
    assert list(game.legal_actions(state)) == list(range(9))


def test_win_length_follows_grid_size():
    assert default_win_length(3) == 3
    assert default_win_length(4) == 4
    assert default_win_length(5) == 4
    assert GridGame(size=5).win_length == 4


def test_invalid_sizes_rejected():
    with pytest.raises(ValueError):
        GridGame(size=2)
    with pytest.raises(ValueError):
        GridGame(size=3, win_length=4)


def test_line_counts():
    assert len(build_lines(3, 3)) == 8
    assert len(build_lines(4, 4)) == 10
    # 5x5 with four in a row: 10 rows, 10 columns, 4 + 4 diagonals.
    assert len(build_lines(5, 4)) == 28


def test_apply_action_is_immutable_and_alternates():
    game = GridGame(size=3)
    state = game.initial_state()
    next_state = game.apply_action(state, 4)

    assert state.board[1, 1] == 0
    assert next_state.board[1, 1] == 1
    assert game.current_player(next_state) == -1
    assert next_state.last_move == (1, 1)
    assert 4 not in game.legal_actions(next_state)


def test_row_win_detected():
    game = GridGame(size=3)
    state = game.initial_state()
    for action in (0, 3, 1, 4, 2):
        state = game.apply_action(state, action)
    assert game.is_terminal(state)
    assert game.winner(state) == 1
    assert game.legal_actions(state) == []
    with pytest.raises(ValueError):
        game.apply_action(state, 5)


def test_draw_detected():
    game = GridGame(size=3)
    state = game.initial_state()
    # X O X / X O O / O X X
    for action in (0, 1, 2, 4, 3, 5, 7, 6, 8):
        state = game.apply_action(state, action)
    assert game.is_terminal(state)
    assert game.winner(state) == 0


def test_cannot_overwrite_own_mark():
    game = GridGame(size=3)
    state = game.state_from_board(_board(["X..", "...", "..."]), to_move=1)
    with pytest.raises(ValueError):
        game.apply_action(state, 0)
    with pytest.raises(ValueError):
        game.apply_action(state, 9)


def test_state_from_board_detects_finished_positions():
    game = GridGame(size=3)
    won = game.state_from_board(_board(["OOO", "XX.", "X.."]), to_move=1)
    assert won.done and won.winner == -1

    open_state = game.state_from_board(_board(["X..", ".O.", "..."]), to_move=-1)
    assert not open_state.done
    assert game.current_player(open_state) == -1


def test_state_key_encodes_every_cell():
    game = GridGame(size=3)
    state = game.state_from_board(_board(["X..", ".O.", "..X"]))
    assert game.state_key(state) == "X...O...X"


def test_order_actions_prefers_centre():
    game = GridGame(size=3)
    state = game.initial_state()
    ordered = game.order_actions(state, game.legal_actions(state))
    assert ordered[0] == 4
    # Edges (distance 1) come before corners (distance 2).
    assert set(ordered[1:5]) == {1, 3, 5, 7}
    assert set(ordered[5:]) == {0, 2, 6, 8}


def test_tactical_actions_win_before_block():
    game = GridGame(size=3)
    state = game.state_from_board(_board(["XX.", "OO.", "..."]), to_move=1)
    assert list(game.tactical_actions(state)) == [2]

    blocking = game.state_from_board(_board(["XX.", "O..", "O.."]), to_move=-1)
    # O has no win of its own; it must block X at cell 2.
    assert list(game.tactical_actions(blocking)) == [2]


def test_move_ids_round_trip():
    assert cell_move_id(2, 1) == "2_1"
    assert parse_move_id("2_1") == (2, 1)
    with pytest.raises(ValueError):
        parse_move_id("Rock")
