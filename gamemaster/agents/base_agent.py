"""Base agent interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from gamemaster.session import Session


class BaseAgent(ABC):
    """
    Base class for all agents.

    An agent is used directly as a session's agent strategy: calling it with
    ``(session, legal_move_ids)`` returns the chosen move id.
    """

    @abstractmethod
    def select_move(self, session: "Session", legal_move_ids: Sequence[str]) -> str:
        """Return one of ``legal_move_ids``."""

    def __call__(self, session: "Session", legal_move_ids: Sequence[str]) -> str:
        return self.select_move(session, legal_move_ids)
