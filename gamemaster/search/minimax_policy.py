"""Minimax search policy with alpha-beta pruning, iterative deepening and quiescence."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from time import perf_counter
from typing import Callable, Generic, List, Optional, Sequence, Tuple, TypeVar

import numpy as np

from gamemaster.games.turn_based_game import Action, TurnBasedGame
from .transposition import TranspositionTable
from .value_fn import StateValueFn

logger = logging.getLogger(__name__)

StateT = TypeVar("StateT")

# Terminal utility is +/-(WIN_SCORE - ply): faster wins and slower losses score better.
WIN_SCORE = 100.0


@dataclass
class MinimaxConfig:
    max_depth: int = 10
    time_budget: Optional[float] = 1.0  # seconds, checked between deepening iterations
    quiescence_ply: Optional[int] = 5  # switch to quiescence at this ply; None disables
    quiescence_depth: int = 4
    random_move_chance: float = 0.0
    use_alpha_beta: bool = True
    use_transposition_table: bool = True


@dataclass
class SearchResult:
    best_move: Optional[Action]
    score: float
    depth: int
    nodes: int
    scored_moves: List[Tuple[Action, float]] = field(default_factory=list)


@dataclass
class _SearchContext:
    game: TurnBasedGame
    root_player: int
    table: Optional[TranspositionTable]
    nodes: int = 0
    horizon_hit: bool = False


class MinimaxPolicy(Generic[StateT]):
    """
    Alpha-beta minimax over TurnBasedGame + StateValueFn.

    Scores are always from the root mover's point of view; nodes where the
    root mover is to play maximise, the others minimise.
    """

    def __init__(
        self,
        value_fn: StateValueFn[StateT],
        config: Optional[MinimaxConfig] = None,
        rng: Optional[np.random.Generator] = None,
        clock: Callable[[], float] = perf_counter,
    ) -> None:
        self.value_fn = value_fn
        self.config = config or MinimaxConfig()
        self.rng = rng or np.random.default_rng()
        self._clock = clock
        self.last_result: Optional[SearchResult] = None

    def select_action(
        self,
        game: TurnBasedGame[StateT],
        state: StateT,
        legal_actions: Optional[Sequence[Action]] = None,
        *,
        invert: bool = False,
    ) -> Action:
        """
        Pick a move for the player to move in ``state``.

        With ``invert`` the move is handed to the opponent afterwards, so the
        root minimises instead: the worst move for the mover is returned and
        neither the winning-move shortcut nor random degradation apply.
        """
        legal = self._legal(game, state, legal_actions)

        if not invert:
            mover = game.current_player(state)
            for action in game.order_actions(state, legal):
                if game.winner(game.apply_action(state, action)) == mover:
                    return action

        result = self.search(game, state, legal, invert=invert)
        move = result.best_move
        assert move is not None and move in legal, f"search returned illegal move {move}"

        chance = self.config.random_move_chance
        if not invert and chance > 0 and self.rng.random() < chance:
            move = legal[int(self.rng.integers(len(legal)))]
            logger.debug("Degraded to random move %s", move)
        return move

    def search(
        self,
        game: TurnBasedGame[StateT],
        state: StateT,
        legal_actions: Optional[Sequence[Action]] = None,
        *,
        invert: bool = False,
    ) -> SearchResult:
        """Iterative deepening up to ``max_depth`` within ``time_budget``."""
        if self.config.max_depth <= 0:
            raise ValueError("Minimax depth must be >= 1")

        legal = self._legal(game, state, legal_actions)
        actions = game.order_actions(state, legal)
        table = TranspositionTable() if self.config.use_transposition_table else None
        ctx = _SearchContext(game=game, root_player=game.current_player(state), table=table)

        # Past the quiescence ply every limit runs the same search.
        deepest = self.config.max_depth
        if self.config.quiescence_ply is not None:
            deepest = min(deepest, max(1, self.config.quiescence_ply))

        budget = self.config.time_budget
        started = self._clock()
        result: Optional[SearchResult] = None

        for limit in range(1, deepest + 1):
            ctx.horizon_hit = False
            iteration = self._search_root(ctx, state, actions, limit, invert)
            elapsed = self._clock() - started

            if result is not None and budget is not None and elapsed > budget:
                break
            result = iteration

            proven = abs(iteration.score) >= WIN_SCORE - limit
            if not ctx.horizon_hit or proven:
                break
            if budget is not None and elapsed >= budget:
                break

        assert result is not None
        logger.debug(
            "Minimax finished: depth=%d nodes=%d score=%.2f move=%s table=%d hits=%d",
            result.depth,
            ctx.nodes,
            result.score,
            result.best_move,
            len(table) if table is not None else 0,
            table.hits if table is not None else 0,
        )
        self.last_result = result
        return result

    def _legal(
        self,
        game: TurnBasedGame[StateT],
        state: StateT,
        legal_actions: Optional[Sequence[Action]],
    ) -> List[Action]:
        assert not game.is_terminal(state), "cannot search a finished position"
        legal = list(game.legal_actions(state)) if legal_actions is None else list(legal_actions)
        if not legal:
            raise ValueError("No legal actions available for minimax")
        return legal

    def _search_root(
        self,
        ctx: _SearchContext,
        state: StateT,
        actions: Sequence[Action],
        limit: int,
        invert: bool,
    ) -> SearchResult:
        alpha, beta = -math.inf, math.inf
        best_move: Optional[Action] = None
        best_score = math.inf if invert else -math.inf
        scored_moves: List[Tuple[Action, float]] = []
        nodes_before = ctx.nodes

        for action in actions:
            child = ctx.game.apply_action(state, action)
            score = self._alphabeta(ctx, child, 1, limit - 1, alpha, beta)
            scored_moves.append((action, score))

            if invert:
                if score < best_score:
                    best_score, best_move = score, action
                if self.config.use_alpha_beta:
                    beta = min(beta, score)
            else:
                if score > best_score:
                    best_score, best_move = score, action
                if self.config.use_alpha_beta:
                    alpha = max(alpha, score)

        return SearchResult(
            best_move=best_move,
            score=best_score,
            depth=limit,
            nodes=ctx.nodes - nodes_before,
            scored_moves=scored_moves,
        )

    def _alphabeta(
        self,
        ctx: _SearchContext,
        state: StateT,
        ply: int,
        remaining: int,
        alpha: float,
        beta: float,
    ) -> float:
        ctx.nodes += 1
        terminal = self._terminal_score(ctx, state, ply)
        if terminal is not None:
            return terminal

        quiescence_ply = self.config.quiescence_ply
        if remaining <= 0 or (quiescence_ply is not None and ply >= quiescence_ply):
            ctx.horizon_hit = True
            return self._quiescence(ctx, state, ply, alpha, beta, self.config.quiescence_depth)

        game = ctx.game
        key = None
        if ctx.table is not None:
            key = (game.state_key(state), game.current_player(state))
            cached = ctx.table.probe(key, remaining, alpha, beta)
            if cached is not None:
                return cached

        alpha_orig, beta_orig = alpha, beta
        actions = game.order_actions(state, game.legal_actions(state))
        assert actions, "non-terminal position without legal actions"
        if ctx.table is not None:
            hint = ctx.table.best_move(key)
            if hint in actions:
                actions.remove(hint)
                actions.insert(0, hint)

        best_action: Optional[Action] = None

        if game.current_player(state) == ctx.root_player:
            value = -math.inf
            for action in actions:
                child_value = self._alphabeta(
                    ctx, game.apply_action(state, action), ply + 1, remaining - 1, alpha, beta
                )
                if child_value > value:
                    value, best_action = child_value, action
                if self.config.use_alpha_beta:
                    alpha = max(alpha, value)
                    if alpha >= beta:
                        break
        else:
            value = math.inf
            for action in actions:
                child_value = self._alphabeta(
                    ctx, game.apply_action(state, action), ply + 1, remaining - 1, alpha, beta
                )
                if child_value < value:
                    value, best_action = child_value, action
                if self.config.use_alpha_beta:
                    beta = min(beta, value)
                    if alpha >= beta:
                        break

        if ctx.table is not None:
            ctx.table.store(key, remaining, value, alpha_orig, beta_orig, best_action)
        return value

    def _quiescence(
        self,
        ctx: _SearchContext,
        state: StateT,
        ply: int,
        alpha: float,
        beta: float,
        depth: int,
    ) -> float:
        """Extend only tactical moves; otherwise return the static evaluation."""
        ctx.nodes += 1
        terminal = self._terminal_score(ctx, state, ply)
        if terminal is not None:
            return terminal

        game = ctx.game
        stand_pat = self.value_fn.evaluate(game, state, ctx.root_player)
        if depth <= 0:
            return stand_pat
        actions = game.tactical_actions(state)
        if not actions:
            return stand_pat

        if game.current_player(state) == ctx.root_player:
            if stand_pat >= beta:
                return stand_pat
            value = stand_pat
            alpha = max(alpha, stand_pat)
            for action in actions:
                score = self._quiescence(
                    ctx, game.apply_action(state, action), ply + 1, alpha, beta, depth - 1
                )
                value = max(value, score)
                alpha = max(alpha, value)
                if alpha >= beta:
                    break
        else:
            if stand_pat <= alpha:
                return stand_pat
            value = stand_pat
            beta = min(beta, stand_pat)
            for action in actions:
                score = self._quiescence(
                    ctx, game.apply_action(state, action), ply + 1, alpha, beta, depth - 1
                )
                value = min(value, score)
                beta = min(beta, value)
                if alpha >= beta:
                    break
        return value

    @staticmethod
    def _terminal_score(ctx: _SearchContext, state: StateT, ply: int) -> Optional[float]:
        if not ctx.game.is_terminal(state):
            return None
        winner = ctx.game.winner(state)
        if not winner:
            return 0.0
        if winner == ctx.root_player:
            return WIN_SCORE - ply
        return -(WIN_SCORE - ply)
