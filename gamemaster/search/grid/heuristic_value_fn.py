"""Line-pattern heuristic for N x N win-in-a-row minimax."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List

from gamemaster.games.grid import GridGame, GridState
from gamemaster.games.turn_based_game import TurnBasedGame
from ..value_fn import StateValueFn


@dataclass
class HeuristicWeights:
    near_win: float = 5.0  # one mark short of a line, rest empty
    building: float = 2.0  # two marks short of a line, rest empty
    two_way_bonus: float = 10.0
    two_way_penalty: float = 15.0
    scale: float = 50.0  # bound of the normalised score


def score_lines(cells: List[int], game: GridGame, player: int, weights: HeuristicWeights) -> float:
    """Score open windows holding only ``player`` marks and empty cells."""
    score = 0.0
    target = game.win_length
    for _, line in game.lines:
        count = 0
        for idx in line:
            value = cells[idx]
            if value == player:
                count += 1
            elif value != 0:
                count = -1
                break
        if count == target - 1:
            score += weights.near_win
        elif count == target - 2 and count > 0:
            score += weights.building
    return score


def count_two_way_wins(cells: List[int], game: GridGame, player: int) -> int:
    """
    Count empty cells where a ``player`` mark would complete lines in two
    or more directions at once.
    """
    forks = 0
    for cell in range(game.num_cells):
        if cells[cell] != 0:
            continue
        directions = set()
        for line_idx in game.lines_through[cell]:
            direction, line = game.lines[line_idx]
            if direction in directions:
                continue
            if all(cells[idx] == player for idx in line if idx != cell):
                directions.add(direction)
        if len(directions) >= 2:
            forks += 1
    return forks


class GridHeuristicValueFn(StateValueFn[GridState]):
    """Evaluates grid positions from partial runs and two-way wins."""

    def __init__(self, weights: HeuristicWeights | None = None, normalize: bool = True) -> None:
        self.weights = weights or HeuristicWeights()
        self._normalize = normalize

    def raw_score(self, game: GridGame, state: GridState, player: int) -> float:
        cells = state.board.ravel().tolist()
        w = self.weights
        return (
            score_lines(cells, game, player, w)
            + w.two_way_bonus * count_two_way_wins(cells, game, player)
            - w.two_way_penalty * count_two_way_wins(cells, game, -player)
        )

    def evaluate(
        self,
        game: TurnBasedGame[GridState],
        state: GridState,
        player: int,
    ) -> float:
        assert isinstance(game, GridGame), "GridHeuristicValueFn needs a GridGame"
        raw = self.raw_score(game, state, player)

        if self._normalize:
            return self.weights.scale * math.tanh(raw / 100.0)

        return raw
