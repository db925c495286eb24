"""Abstract state value function for search algorithms."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from gamemaster.games.turn_based_game import TurnBasedGame

StateT = TypeVar("StateT")


class StateValueFn(Generic[StateT], ABC):
    """
    Static evaluator for non-terminal states, scored for ``player``.
    """

    @abstractmethod
    def evaluate(self, game: TurnBasedGame[StateT], state: StateT, player: int) -> float:
        """
        Higher is better for ``player``. Implementations must stay strictly
        inside the terminal utility range used by the search.
        """
        ...
