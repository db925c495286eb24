"""Search algorithms (minimax) and value functions."""

from .value_fn import StateValueFn
from .transposition import Bound, TranspositionTable
from .minimax_policy import WIN_SCORE, MinimaxConfig, MinimaxPolicy, SearchResult

__all__ = [
    "Bound",
    "MinimaxConfig",
    "MinimaxPolicy",
    "SearchResult",
    "StateValueFn",
    "TranspositionTable",
    "WIN_SCORE",
]
