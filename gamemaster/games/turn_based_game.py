from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, Sequence, TypeVar

S = TypeVar("S")  # state type
Action = int  # actions are flat cell indices for now


class TurnBasedGame(ABC, Generic[S]):
    """
    Rules of a deterministic two-player game with perfect information.
    Pure state transitions only: no sessions, no rendering.
    """

    @abstractmethod
    def legal_actions(self, state: S) -> Sequence[Action]:
        """All legal actions in ``state``."""

    @abstractmethod
    def apply_action(self, state: S, action: Action) -> S:
        """Return a new state after ``action``; ``state`` is left untouched."""

    @abstractmethod
    def current_player(self, state: S) -> int:
        """
        Token of the player to move: 1 or -1.
        """

    @abstractmethod
    def is_terminal(self, state: S) -> bool:
        """Whether the state is finished (win or draw)."""

    @abstractmethod
    def winner(self, state: S) -> Optional[int]:
        """
        Who won:

        * 1  -- the player with token +1
        * -1 -- the player with token -1
        * 0  -- draw
        * None -- not finished yet
        """

    @abstractmethod
    def state_key(self, state: S) -> str:
        """Canonical string encoding of the position (every cell's mark)."""

    def order_actions(self, state: S, actions: Sequence[Action]) -> list[Action]:
        """Order candidate actions for search; the default keeps the given order."""
        return list(actions)

    def tactical_actions(self, state: S) -> Sequence[Action]:
        """Actions worth extending past the search horizon (none by default)."""
        return []
