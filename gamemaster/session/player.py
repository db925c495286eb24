"""Players, teams and recorded actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Optional, Sequence
from uuid import uuid4

if TYPE_CHECKING:
    from .orchestrator import Session

# (session, legal move ids) -> chosen move id
AgentStrategy = Callable[["Session", Sequence[str]], str]


def generate_id() -> str:
    """Generate a short unique ID."""
    return uuid4().hex[:8]


@dataclass(frozen=True)
class Identity:
    """Who stands behind a player: a human account or the agent."""

    id: str
    display_name: str
    is_agent: bool = False


@dataclass(eq=False)
class Player:
    """
    A seat in the match.

    ``team`` may be reassigned mid-game by special rules; every reassignment
    goes through :meth:`set_team` / :meth:`reset_team`, which fire
    ``on_change`` so the session can re-point recorded actions.
    """

    identity: Identity
    team: Optional[str] = None
    on_change: Optional[Callable[["Player"], None]] = field(default=None, repr=False)
    agent_strategy: Optional[AgentStrategy] = field(default=None, repr=False)
    score: int = field(default=0, init=False)
    id: str = field(default_factory=generate_id, init=False)
    _original_team: Optional[str] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self._original_team = self.team

    @property
    def original_team(self) -> Optional[str]:
        return self._original_team

    @property
    def is_agent(self) -> bool:
        return self.agent_strategy is not None or self.identity.is_agent

    def reset_team(self) -> "Player":
        self.team = self._original_team
        self._notify()
        return self

    def set_team(self, team: Optional[str]) -> "Player":
        self.team = team
        self._notify()
        return self

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self)


@dataclass
class Action:
    """A collected move; ``player`` is the author as currently attributed."""

    move_id: str
    player: Player
