"""Game matches playable through a session."""

from .base import GameMatch
from .tictactoe import TEAMS, TicTacToeMatch
from .rps import RPSMatch
from ..registry import list_games, register_game

if "tictactoe" not in list_games():
    register_game("tictactoe", TicTacToeMatch, description="N x N tic-tac-toe against a player or the agent")
if "rps" not in list_games():
    register_game("rps", RPSMatch, description="Rock-paper-scissors-lizard-spock")

__all__ = ["GameMatch", "RPSMatch", "TEAMS", "TicTacToeMatch"]
