"""Minimax-backed agent for N x N grid matches."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence

import numpy as np

from gamemaster.games.grid import GridGame, GridState, cell_move_id, parse_move_id
from gamemaster.search.grid import make_grid_minimax_policy
from gamemaster.session.components import iter_components
from gamemaster.session.player import Player
from gamemaster.session.rules import SpecialRule
from .base_agent import BaseAgent
from .difficulty import Difficulty

if TYPE_CHECKING:
    from gamemaster.session import Session

logger = logging.getLogger(__name__)


class GridMinimaxAgent(BaseAgent):
    """
    Reads the session board into a :class:`GridState` and asks the minimax
    policy for a cell.

    The board is encoded from the point of view of the player the move will
    be credited to: their marks are +1, every other mark -1. Under Swap Move
    that player is the opponent, so the search minimises at the root.
    """

    def __init__(
        self,
        size: int = 3,
        difficulty: Difficulty = Difficulty.IMPOSSIBLE,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        max_depth: int = 10,
        time_budget: Optional[float] = 1.0,
    ):
        self.difficulty = Difficulty(difficulty)
        if self.difficulty is Difficulty.EASY:
            raise ValueError("Easy difficulty plays randomly; use the random agent")
        self.game = GridGame(size)
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.policy = make_grid_minimax_policy(
            self.game,
            random_move_chance=self.difficulty.random_move_chance,
            rng=self.rng,
            max_depth=max_depth,
            time_budget=time_budget,
        )

    def select_move(self, session: "Session", legal_move_ids: Sequence[str]) -> str:
        if not legal_move_ids:
            raise ValueError("No legal moves available")

        agent = session.agent_player
        assert agent is not None, "grid minimax agent used in a session without an agent player"
        invert = session.special_rule is SpecialRule.SWAP_MOVE
        owner = self._next_player(session, agent) if invert else agent

        state = self.encode(session, owner)
        legal = self._legal_cells(state, legal_move_ids)
        if state.done or not legal:
            # Nothing to search (a finished line or only own marks enabled).
            logger.warning("No searchable position; picking a random legal move")
            return legal_move_ids[int(self.rng.integers(len(legal_move_ids)))]

        action = self.policy.select_action(self.game, state, legal, invert=invert)
        return cell_move_id(*divmod(action, self.game.size))

    def encode(self, session: "Session", owner: Player) -> GridState:
        """Session components -> grid state with ``owner`` to move as +1."""
        size = self.game.size
        board = np.zeros((size, size), dtype=np.int8)
        for component in iter_components(session.components):
            if not component.is_filled:
                continue
            row, col = parse_move_id(component.move_id)
            if not (0 <= row < size and 0 <= col < size):
                raise ValueError(f"Move id {component.move_id!r} is outside a {size}x{size} board")
            board[row, col] = 1 if component.mark == owner.team else -1
        return self.game.state_from_board(board, to_move=1)

    def _legal_cells(self, state: GridState, legal_move_ids: Sequence[str]) -> List[int]:
        cells: List[int] = []
        for move_id in legal_move_ids:
            row, col = parse_move_id(move_id)
            if state.board[row, col] != 1:
                cells.append(row * self.game.size + col)
        return cells

    @staticmethod
    def _next_player(session: "Session", player: Player) -> Player:
        seat = session.players.index(player)
        return session.players[(seat + 1) % len(session.players)]
