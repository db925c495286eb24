"""Shared utilities for N x N win-in-a-row grids."""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

MIN_GRID_SIZE = 3
MAX_GRID_SIZE = 5

# (row step, col step): horizontal, vertical, TL-BR diagonal, TR-BL diagonal
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (1, 1), (1, -1))

CELL_SYMBOLS = {0: ".", 1: "X", -1: "O"}

Line = Tuple[int, Tuple[int, ...]]  # (direction index, flat cell indices)


def default_win_length(size: int) -> int:
    """Boards below 5x5 need a full line; larger boards need four in a row."""
    return size if size < 5 else 4


def cell_move_id(row: int, col: int) -> str:
    return f"{row}_{col}"


def parse_move_id(move_id: str) -> Tuple[int, int]:
    """Parse ``"<row>_<col>"`` into a (row, col) pair."""
    row, _, col = move_id.partition("_")
    try:
        return int(row), int(col)
    except ValueError:
        raise ValueError(f"Not a grid move id: {move_id!r}") from None


def build_lines(size: int, win_length: int) -> List[Line]:
    """
    Enumerate every window of ``win_length`` consecutive cells on the board.

    Args:
        size: Board side length.
        win_length: Number of marks in a row needed to win.

    Returns:
        List of (direction index, flat cell indices) tuples.
    """
    lines: List[Line] = []
    for row in range(size):
        for col in range(size):
            for direction, (dr, dc) in enumerate(DIRECTIONS):
                end_row = row + dr * (win_length - 1)
                end_col = col + dc * (win_length - 1)
                if not (0 <= end_row < size and 0 <= end_col < size):
                    continue
                cells = tuple(
                    (row + dr * i) * size + (col + dc * i) for i in range(win_length)
                )
                lines.append((direction, cells))
    return lines


def check_n_in_row(
    board: np.ndarray,
    row: int,
    col: int,
    player: int,
    n: int,
) -> bool:
    """
    Check if there are at least n marks in a row for the given player
    passing through (row, col).

    Args:
        board: Square game board array.
        row: Row position to check from.
        col: Column position to check from.
        player: Player token (1 or -1).
        n: Number of marks in a row to check for.

    Returns:
        True if player has at least n in a row through (row, col).
    """
    rows, cols = board.shape

    for dr, dc in DIRECTIONS:
        count = 1
        for i in range(1, n):
            r, c = row + dr * i, col + dc * i
            if 0 <= r < rows and 0 <= c < cols and board[r, c] == player:
                count += 1
            else:
                break
        for i in range(1, n):
            r, c = row - dr * i, col - dc * i
            if 0 <= r < rows and 0 <= c < cols and board[r, c] == player:
                count += 1
            else:
                break

        if count >= n:
            return True

    return False


def find_line_winner(cells: List[int], lines: List[Line]) -> Optional[int]:
    """Return the token owning a complete line, or None."""
    for _, line in lines:
        first = cells[line[0]]
        if first != 0 and all(cells[idx] == first for idx in line[1:]):
            return first
    return None


def render_board(board: np.ndarray) -> str:
    return "\n".join(" ".join(CELL_SYMBOLS[int(cell)] for cell in row) for row in board)
