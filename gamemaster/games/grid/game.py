"""N x N win-in-a-row rules (immutable state, for search algorithms)."""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from gamemaster.games.turn_based_game import Action, TurnBasedGame
from .state import GridState
from .utils import (
    CELL_SYMBOLS,
    MIN_GRID_SIZE,
    build_lines,
    check_n_in_row,
    default_win_length,
    find_line_winner,
)


class GridGame(TurnBasedGame[GridState]):
    """
    Pure N x N rules: marks are placed on flat cell indices ``row * size + col``.

    A move may replace an opponent's mark (the root move of an overruled
    turn); it can never replace the mover's own mark.
    """

    def __init__(self, size: int = 3, win_length: Optional[int] = None) -> None:
        if size < MIN_GRID_SIZE:
            raise ValueError(f"Grid size must be >= {MIN_GRID_SIZE}, got {size}")
        win_length = win_length or default_win_length(size)
        if not 1 < win_length <= size:
            raise ValueError(f"Win length must be in 2..{size}, got {win_length}")

        self.size = size
        self.win_length = win_length
        self.num_cells = size * size
        self.lines = build_lines(size, win_length)
        self.lines_through: List[List[int]] = [[] for _ in range(self.num_cells)]
        for line_idx, (_, cells) in enumerate(self.lines):
            for cell in cells:
                self.lines_through[cell].append(line_idx)
        self._player_tokens = np.array([1, -1], dtype=np.int8)

        center = size // 2
        self._center_distance = [
            abs(cell // size - center) + abs(cell % size - center)
            for cell in range(self.num_cells)
        ]

    def initial_state(self) -> GridState:
        board = np.zeros((self.size, self.size), dtype=np.int8)
        return GridState(board=board, current_player_index=0, winner=None, done=False)

    def state_from_board(self, board: np.ndarray, to_move: int = 1) -> GridState:
        """Build a state from an existing board with ``to_move`` as the player to move."""
        board = np.asarray(board, dtype=np.int8)
        if board.shape != (self.size, self.size):
            raise ValueError(f"Expected a {self.size}x{self.size} board, got {board.shape}")
        if to_move not in (1, -1):
            raise ValueError(f"Player token must be 1 or -1, got {to_move}")

        winner = find_line_winner(board.ravel().tolist(), self.lines)
        done = winner is not None
        if not done and np.all(board != 0):
            winner = 0
            done = True
        return GridState(
            board=board.copy(),
            current_player_index=0 if to_move == 1 else 1,
            winner=winner,
            done=done,
        )

    def legal_actions(self, state: GridState) -> Sequence[Action]:
        if state.done:
            return []
        return [int(cell) for cell in np.flatnonzero(state.board.ravel() == 0)]

    def apply_action(self, state: GridState, action: Action) -> GridState:
        if state.done:
            raise ValueError("Cannot apply action in terminal state")

        if action < 0 or action >= self.num_cells:
            raise ValueError(f"Illegal action: {action}")

        row, col = divmod(action, self.size)
        current_token = int(self._player_tokens[state.current_player_index])
        if state.board[row, col] == current_token:
            raise ValueError(f"Cell {action} is already marked by the mover")

        board = state.board.copy()
        board[row, col] = current_token

        winner: Optional[int] = None
        done = False

        if check_n_in_row(board, row, col, current_token, n=self.win_length):
            winner = current_token
            done = True
        elif np.all(board != 0):
            winner = 0
            done = True

        return GridState(
            board=board,
            current_player_index=1 - state.current_player_index,
            winner=winner,
            done=done,
            last_move=(row, col),
        )

    def current_player(self, state: GridState) -> int:
        return int(self._player_tokens[state.current_player_index])

    def is_terminal(self, state: GridState) -> bool:
        return state.done

    def winner(self, state: GridState) -> Optional[int]:
        return state.winner

    def state_key(self, state: GridState) -> str:
        return "".join(CELL_SYMBOLS[int(v)] for v in state.board.ravel())

    def order_actions(self, state: GridState, actions: Sequence[Action]) -> list[Action]:
        # Closer to the centre first (Manhattan distance); stable for ties.
        return sorted(actions, key=self._center_distance.__getitem__)

    def winning_actions(self, state: GridState, token: int) -> list[Action]:
        """Empty cells that would complete a line for ``token``."""
        cells = state.board.ravel().tolist()
        wins: list[Action] = []
        for cell in range(self.num_cells):
            if cells[cell] != 0:
                continue
            for line_idx in self.lines_through[cell]:
                _, line = self.lines[line_idx]
                if all(cells[idx] == token for idx in line if idx != cell):
                    wins.append(cell)
                    break
        return wins

    def tactical_actions(self, state: GridState) -> Sequence[Action]:
        if state.done:
            return []
        mover = self.current_player(state)
        wins = self.winning_actions(state, mover)
        if wins:
            return wins
        return self.winning_actions(state, -mover)
