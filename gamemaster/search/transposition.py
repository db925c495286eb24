"""Transposition table scoped to a single top-level search."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple


class Bound(Enum):
    EXACT = "exact"
    LOWER = "lower"  # fail-high: true score >= stored score
    UPPER = "upper"  # fail-low: true score <= stored score


@dataclass(slots=True)
class TableEntry:
    score: float
    depth: int
    bound: Bound
    best_move: Optional[int] = None


TableKey = Tuple[str, int]  # (board hash, player to move)


class TranspositionTable:
    """
    Memoizes ``(board_hash, player_to_move)`` -> (score, best move) with the depth and
    alpha-beta bound it was computed under.

    An entry only answers a query searched to at most its own depth, and a
    bound entry only answers when it already decides the query window.
    """

    def __init__(self) -> None:
        self._entries: Dict[TableKey, TableEntry] = {}
        self.hits = 0

    def __len__(self) -> int:
        return len(self._entries)

    def probe(self, key: TableKey, depth: int, alpha: float, beta: float) -> Optional[float]:
        entry = self._entries.get(key)
        if entry is None or entry.depth < depth:
            return None
        if entry.bound is Bound.EXACT:
            self.hits += 1
            return entry.score
        if entry.bound is Bound.LOWER and entry.score >= beta:
            self.hits += 1
            return entry.score
        if entry.bound is Bound.UPPER and entry.score <= alpha:
            self.hits += 1
            return entry.score
        return None

    def store(
        self,
        key: TableKey,
        depth: int,
        score: float,
        alpha_orig: float,
        beta_orig: float,
        best_move: Optional[int] = None,
    ) -> None:
        """Store a fail-soft result searched with window ``(alpha_orig, beta_orig)``."""
        if score <= alpha_orig:
            bound = Bound.UPPER
        elif score >= beta_orig:
            bound = Bound.LOWER
        else:
            bound = Bound.EXACT

        existing = self._entries.get(key)
        if existing is not None and existing.depth > depth:
            return
        self._entries[key] = TableEntry(score=score, depth=depth, bound=bound, best_move=best_move)

    def best_move(self, key: TableKey) -> Optional[int]:
        """Best move recorded for ``key`` at any depth, used for move ordering."""
        entry = self._entries.get(key)
        return entry.best_move if entry is not None else None
