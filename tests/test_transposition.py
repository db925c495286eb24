"""Tests for the depth- and bound-aware transposition table."""

import math

from gamemaster.search import Bound, TranspositionTable

KEY = ("X...O....", 1)


def test_exact_entry_answers_same_or_shallower_queries():
    table = TranspositionTable()
    table.store(KEY, depth=4, score=12.0, alpha_orig=-math.inf, beta_orig=math.inf, best_move=2)

    assert table.probe(KEY, depth=4, alpha=-math.inf, beta=math.inf) == 12.0
    assert table.probe(KEY, depth=2, alpha=0.0, beta=1.0) == 12.0
    assert table.probe(KEY, depth=5, alpha=-math.inf, beta=math.inf) is None
    assert table.hits == 2
    assert table.best_move(KEY) == 2


def test_bounds_only_answer_decided_windows():
    table = TranspositionTable()

    # Fail-high: score >= beta, so it is only a lower bound.
    table.store(KEY, depth=3, score=20.0, alpha_orig=0.0, beta_orig=10.0)
    assert table._entries[KEY].bound is Bound.LOWER
    assert table.probe(KEY, depth=3, alpha=0.0, beta=15.0) == 20.0
    assert table.probe(KEY, depth=3, alpha=0.0, beta=30.0) is None

    other = ("O...X....", -1)
    # Fail-low: score <= alpha, so it is only an upper bound.
    table.store(other, depth=3, score=-5.0, alpha_orig=0.0, beta_orig=10.0)
    assert table._entries[other].bound is Bound.UPPER
    assert table.probe(other, depth=3, alpha=-1.0, beta=10.0) == -5.0
    assert table.probe(other, depth=3, alpha=-10.0, beta=10.0) is None


def test_deeper_entries_are_not_overwritten():
    table = TranspositionTable()
    table.store(KEY, depth=6, score=3.0, alpha_orig=-math.inf, beta_orig=math.inf)
    table.store(KEY, depth=2, score=-40.0, alpha_orig=-math.inf, beta_orig=math.inf)

    assert table.probe(KEY, depth=2, alpha=-math.inf, beta=math.inf) == 3.0
    assert len(table) == 1


def test_player_to_move_is_part_of_the_key():
    table = TranspositionTable()
    table.store(("X........", 1), depth=1, score=7.0, alpha_orig=-math.inf, beta_orig=math.inf)
    assert table.probe(("X........", -1), depth=1, alpha=-math.inf, beta=math.inf) is None
    assert table.hits == 0
