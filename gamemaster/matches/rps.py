"""Rock-paper-scissors-lizard-spock: simultaneous moves, no search."""

from __future__ import annotations

from typing import Mapping, Optional

import numpy as np

from gamemaster.games.payoff import PayoffGame, rock_paper_scissors_lizard_spock
from gamemaster.registry import make_agent
from gamemaster.session import Action, AgentStrategy, Board, Component, GameMode, Session
from .base import GameMatch


class RPSMatch(GameMatch):
    title = "RPS"
    allowed_modes = (GameMode.CLASSIC, GameMode.SWAP_MOVE)
    default_max_decision_time = 10.0

    def __init__(self, game: Optional[PayoffGame] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.game = game or rock_paper_scissors_lizard_spock()

    def build_components(self) -> Board:
        return [[Component(move_id=move, label=move) for move in self.game.moves]]

    def make_agent(self, rng: Optional[np.random.Generator] = None) -> AgentStrategy:
        return make_agent("random", rng=rng)

    def on_action_collect(self, session: Session, actions: Mapping[str, Action]) -> None:
        ordered = list(actions.values())
        result = self.game.resolve([action.move_id for action in ordered])
        if result.is_tie:
            session.set_game_status(description=f"All chose {ordered[0].move_id}")
            return
        session.set_game_status(ordered[result.winner_index].player, result.description)
