"""Ready-made minimax policies for grid games."""

from __future__ import annotations

from typing import Optional

import numpy as np

from gamemaster.games.grid import GridGame
from ..minimax_policy import MinimaxConfig, MinimaxPolicy
from .heuristic_value_fn import GridHeuristicValueFn, HeuristicWeights

# Quiescence only pays off once the board is too big to search to the end.
QUIESCENCE_MIN_SIZE = 4
QUIESCENCE_PLY = 5


def make_grid_minimax_policy(
    game: GridGame,
    random_move_chance: float = 0.0,
    rng: Optional[np.random.Generator] = None,
    max_depth: int = 10,
    time_budget: Optional[float] = 1.0,
    weights: Optional[HeuristicWeights] = None,
) -> MinimaxPolicy:
    config = MinimaxConfig(
        max_depth=max_depth,
        time_budget=time_budget,
        quiescence_ply=QUIESCENCE_PLY if game.size >= QUIESCENCE_MIN_SIZE else None,
        random_move_chance=random_move_chance,
    )
    return MinimaxPolicy(GridHeuristicValueFn(weights), config=config, rng=rng)
