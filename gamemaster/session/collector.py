"""Move collection: one (turn-based) or many (simultaneous) actions per turn."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Collection, List, Optional, Sequence

import numpy as np

from .errors import GameAbandoned, GameTimeout
from .player import Player
from .surface import ActionSurface, PlayerInput

logger = logging.getLogger(__name__)

READY = "ready"
ABANDON = "abandon"

AgentChoice = Callable[[Sequence[str]], str]


class MoveCollector:
    """
    Reads presses from an :class:`ActionSurface` until every expected player
    has acted or ``max_decision_time`` runs out.

    Presses from unexpected identities, repeated presses and presses on
    disabled move ids are ignored.
    """

    def __init__(
        self,
        surface: ActionSurface,
        *,
        max_decision_time: Optional[float] = None,
        think_delay: float = 0.2,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.surface = surface
        self.rng = rng or np.random.default_rng()
        self.max_decision_time = max_decision_time
        self.think_delay = think_delay

    async def confirm(self, identity_ids: Sequence[str], timeout: float) -> None:
        """Lobby: wait for every identity to answer ``ready``."""
        pending = set(identity_ids)
        if not pending:
            return

        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while pending:
            remaining = deadline - loop.time()
            if remaining <= 0:
                raise GameTimeout(f"Timed out waiting for players to get ready ({len(pending)} missing).")
            try:
                press = await asyncio.wait_for(self.surface.next_input(), remaining)
            except asyncio.TimeoutError:
                raise GameTimeout(
                    f"Timed out waiting for players to get ready ({len(pending)} missing)."
                ) from None

            if press.identity_id not in identity_ids:
                continue
            if press.move_id == ABANDON:
                raise GameAbandoned(f"{press.identity_id} abandoned the game.")
            if press.move_id == READY:
                pending.discard(press.identity_id)

    async def act_for_agent(
        self,
        agent: Player,
        enabled_ids: Collection[str],
        choose: Optional[AgentChoice],
        extra_delay: float = 0.0,
    ) -> str:
        """Ask the agent for a move after a short pause; falls back to a random enabled id."""
        legal = list(enabled_ids)
        assert legal, "agent asked to act with no enabled moves"

        delay = self.think_delay + extra_delay
        if delay > 0:
            await asyncio.sleep(delay)

        if choose is not None:
            move_id = choose(legal)
        else:
            move_id = legal[int(self.rng.integers(len(legal)))]
        assert move_id in legal, f"agent {agent.identity.display_name} picked disabled move {move_id!r}"
        return move_id

    async def collect(
        self,
        expected: Sequence[Player],
        enabled_ids: Callable[[], Collection[str]],
        record: Callable[[Player, str], None],
    ) -> int:
        """
        Collect one press from each player in ``expected``.

        ``enabled_ids`` is re-read for every press because recording a move
        may disable it. Raises :class:`GameTimeout` if the decision time
        elapses first; the caller owns discarding whatever was recorded.
        """
        by_identity = {player.identity.id: player for player in expected}
        acted: List[str] = []
        if not by_identity:
            return 0

        loop = asyncio.get_running_loop()
        deadline = None if self.max_decision_time is None else loop.time() + self.max_decision_time

        while len(acted) < len(by_identity):
            press = await self._next_press(loop, deadline, len(acted), len(by_identity))
            player = by_identity.get(press.identity_id)
            if player is None or press.identity_id in acted:
                logger.debug("Ignoring press %s from %s", press.move_id, press.identity_id)
                continue
            if press.move_id not in enabled_ids():
                logger.debug("Ignoring disabled move %s from %s", press.move_id, press.identity_id)
                continue
            acted.append(press.identity_id)
            record(player, press.move_id)

        return len(acted)

    async def _next_press(
        self,
        loop: asyncio.AbstractEventLoop,
        deadline: Optional[float],
        received: int,
        expected: int,
    ) -> PlayerInput:
        if deadline is None:
            return await self.surface.next_input()

        remaining = deadline - loop.time()
        try:
            if remaining <= 0:
                raise asyncio.TimeoutError
            return await asyncio.wait_for(self.surface.next_input(), remaining)
        except asyncio.TimeoutError:
            logger.warning("Move collection timed out with %d/%d actions", received, expected)
            raise GameTimeout(f"Timed out waiting for players ({received}/{expected} acted).") from None
