"""Grid-specific search components."""

from .heuristic_value_fn import GridHeuristicValueFn, HeuristicWeights, count_two_way_wins, score_lines
from .factory import make_grid_minimax_policy

__all__ = [
    "GridHeuristicValueFn",
    "HeuristicWeights",
    "count_two_way_wins",
    "make_grid_minimax_policy",
    "score_lines",
]
