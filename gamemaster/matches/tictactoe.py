"""Tic-tac-toe on an N x N grid, played through a session."""

from __future__ import annotations

import dataclasses
from typing import List, Mapping, Optional, Tuple

import numpy as np

from gamemaster.agents import Difficulty, effective_difficulty
from gamemaster.games.grid import GridGame, cell_move_id
from gamemaster.registry import make_agent
from gamemaster.session import (
    Action,
    AgentStrategy,
    Board,
    Component,
    Session,
    SessionSettings,
    SpecialRule,
    iter_components,
)
from .base import GameMatch

TEAMS: Tuple[str, str] = ("X", "O")


class TicTacToeMatch(GameMatch):
    """
    Turn-based N x N grid: ``X`` sits first, win length follows the grid size.

    Clicked cells are disabled, the board is cleared between points and every
    special rule is available (Swap Teams uses the X/O labels).
    """

    title = "TicTacToe"

    def __init__(self, size: int = 3, difficulty: Difficulty = Difficulty.MEDIUM, **kwargs) -> None:
        super().__init__(**kwargs)
        self.game = GridGame(size)
        self.difficulty = Difficulty(difficulty)

    @property
    def size(self) -> int:
        return self.game.size

    def build_components(self) -> Board:
        return [[Component(move_id=cell_move_id(row, col)) for col in range(self.size)] for row in range(self.size)]

    def session_settings(self, against_agent: bool) -> SessionSettings:
        difficulty = effective_difficulty(self.difficulty, self.mode, against_agent)
        return dataclasses.replace(
            super().session_settings(against_agent),
            turn_based=True,
            disable_on_click=True,
            clear_board_on_point=True,
            teams=TEAMS,
            computer_biased_game_master=against_agent and difficulty is Difficulty.COMPUTER_BIASED,
        )

    def modifiers(self, against_agent: bool) -> List[Tuple[str, str]]:
        fields = [("Grid", f"{self.size}x{self.size}")]
        if against_agent:
            fields.append(("Bot Difficulty", effective_difficulty(self.difficulty, self.mode).value))
        return fields

    def make_agent(self, rng: Optional[np.random.Generator] = None) -> AgentStrategy:
        difficulty = effective_difficulty(self.difficulty, self.mode)
        if difficulty is Difficulty.EASY:
            return make_agent("random", rng=rng)
        return make_agent("minimax", size=self.size, difficulty=difficulty, rng=rng)

    def on_action_collect(self, session: Session, actions: Mapping[str, Action]) -> None:
        overrule = session.special_rule is SpecialRule.OVERRULE
        cells = {component.move_id: component for component in iter_components(session.components)}
        for move_id, action in actions.items():
            component = cells[move_id]
            if action.player.team is None:
                raise ValueError(f"Player {action.player.identity.display_name} has no team")
            if not component.is_filled or overrule:
                component.fill(action.player.team)

        marks = [component.mark for component in iter_components(session.components)]
        filled = sum(mark is not None for mark in marks)
        if filled < self.game.win_length:
            return

        for _, line in self.game.lines:
            first = marks[line[0]]
            if first is not None and all(marks[idx] == first for idx in line):
                session.set_game_status(session.player_by_team(first))
                return

        if filled == len(marks):
            session.set_game_status()
