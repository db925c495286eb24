"""Action surface: where a session renders its state and reads player input."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .components import Board, copy_board


@dataclass(frozen=True)
class PlayerInput:
    """A button press (or a lobby answer such as ``ready``/``abandon``)."""

    identity_id: str
    move_id: str


@dataclass
class MatchSummary:
    winner: Optional[str]
    description: str
    scores: List[int]
    agent_lost: Optional[bool] = None  # None when no agent played

    @property
    def final_score(self) -> str:
        return " - ".join(str(score) for score in self.scores)


@dataclass
class SessionView:
    """Snapshot of everything a presentation layer needs to draw a session."""

    title: str
    status: str
    components: Board = field(default_factory=list)
    scores: List[Tuple[str, int]] = field(default_factory=list)
    teams: List[Optional[str]] = field(default_factory=list)
    turn: Optional[str] = None
    special_rule: Optional[str] = None
    notice: Optional[str] = None
    game_status: Optional[str] = None
    awaiting: Tuple[str, ...] = ()
    footer: Optional[str] = None
    deuce: Optional[List[str]] = None
    fields: List[Tuple[str, str]] = field(default_factory=list)
    summary: Optional[MatchSummary] = None
    inputs_enabled: bool = True

    def __post_init__(self) -> None:
        # Views are snapshots; later board mutations must not leak into them.
        self.components = copy_board(self.components)


class ActionSurface(ABC):
    """
    The surrounding application's UI: a chat message with buttons, a terminal,
    or a test double.
    """

    @abstractmethod
    async def render(self, view: SessionView) -> None:
        """Show ``view``."""

    @abstractmethod
    async def next_input(self) -> PlayerInput:
        """Wait for the next press from anyone; filtering is the caller's job."""

    @abstractmethod
    async def set_inputs_enabled(self, enabled: bool) -> None:
        """Disable or re-enable every input on the surface."""


class QueueSurface(ActionSurface):
    """In-memory surface fed through :meth:`submit`; keeps every rendered view."""

    def __init__(self, inputs: Sequence[PlayerInput] = ()) -> None:
        self.views: List[SessionView] = []
        self.inputs_enabled = True
        self._queue: asyncio.Queue[PlayerInput] = asyncio.Queue()
        for item in inputs:
            self._queue.put_nowait(item)

    def submit(self, identity_id: str, move_id: str) -> None:
        self._queue.put_nowait(PlayerInput(identity_id, move_id))

    async def render(self, view: SessionView) -> None:
        self.views.append(view)

    async def next_input(self) -> PlayerInput:
        return await self._queue.get()

    async def set_inputs_enabled(self, enabled: bool) -> None:
        self.inputs_enabled = enabled

    @property
    def last_view(self) -> Optional[SessionView]:
        return self.views[-1] if self.views else None
