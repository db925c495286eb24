"""N x N win-in-a-row grid rules."""

from .state import GridState
from .game import GridGame
from .utils import (
    MAX_GRID_SIZE,
    MIN_GRID_SIZE,
    build_lines,
    cell_move_id,
    check_n_in_row,
    default_win_length,
    parse_move_id,
    render_board,
)

__all__ = [
    "GridState",
    "GridGame",
    "MAX_GRID_SIZE",
    "MIN_GRID_SIZE",
    "build_lines",
    "cell_move_id",
    "check_n_in_row",
    "default_win_length",
    "parse_move_id",
    "render_board",
]
