"""Session-facing game adapters."""

from __future__ import annotations

from abc import abstractmethod
from typing import List, Optional, Sequence, Tuple

import numpy as np

from gamemaster.session import (
    ActionSurface,
    AgentStrategy,
    Board,
    GameMode,
    Identity,
    InvalidConfiguration,
    RoundResolver,
    Session,
    SessionSettings,
)


class GameMatch(RoundResolver):
    """
    A game as the orchestrator sees it: its blank board, its session flags,
    its agent and its round resolution.
    """

    title = "Game"
    allowed_modes: Tuple[GameMode, ...] = tuple(GameMode)
    default_max_decision_time: Optional[float] = None

    def __init__(
        self,
        best_of: int = 1,
        deuce: bool = True,
        mode: GameMode = GameMode.CLASSIC,
        max_decision_time: Optional[float] = None,
        lobby_timeout: float = 10.0,
        notice_delay: float = 1.0,
        think_delay: float = 0.2,
    ) -> None:
        self.mode = GameMode(mode)
        if self.mode not in self.allowed_modes:
            allowed = ", ".join(mode.value for mode in self.allowed_modes)
            raise InvalidConfiguration(f"{self.title} supports {allowed}; got {self.mode.value}")
        self.best_of = best_of
        self.deuce = deuce
        self.max_decision_time = max_decision_time if max_decision_time is not None else self.default_max_decision_time
        self.lobby_timeout = lobby_timeout
        self.notice_delay = notice_delay
        self.think_delay = think_delay

    @abstractmethod
    def build_components(self) -> Board:
        """The blank board."""

    def session_settings(self, against_agent: bool) -> SessionSettings:
        return SessionSettings(
            title=self.title,
            best_of=self.best_of,
            deuce=self.deuce,
            mode=self.mode,
            max_decision_time=self.max_decision_time,
            lobby_timeout=self.lobby_timeout,
            notice_delay=self.notice_delay,
            think_delay=self.think_delay,
            modifiers=self.modifiers(against_agent),
        )

    def modifiers(self, against_agent: bool) -> List[Tuple[str, str]]:
        return []

    @abstractmethod
    def make_agent(self, rng: Optional[np.random.Generator] = None) -> AgentStrategy:
        """Strategy for the agent seat."""

    def create_session(
        self,
        identities: Sequence[Identity],
        surface: ActionSurface,
        rng: Optional[np.random.Generator] = None,
        agent_strategy: Optional[AgentStrategy] = None,
    ) -> Session:
        """Build a session; ``agent_strategy`` replaces the match's own agent when given."""
        rng = rng if rng is not None else np.random.default_rng()
        against_agent = any(identity.is_agent for identity in identities)
        if against_agent and agent_strategy is None:
            agent_strategy = self.make_agent(rng)
        return Session(
            self.session_settings(against_agent),
            self.build_components(),
            self,
            identities,
            surface,
            agent_strategy=agent_strategy if against_agent else None,
            rng=rng,
        )
