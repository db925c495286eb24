"""Agent modules."""

from .base_agent import BaseAgent
from .random_agent import RandomAgent
from .difficulty import Difficulty, effective_difficulty
from .grid_minimax_agent import GridMinimaxAgent
from ..registry import list_agents, register_agent

if "random" not in list_agents():
    register_agent("random", RandomAgent, description="Uniformly random legal move")
if "minimax" not in list_agents():
    register_agent("minimax", GridMinimaxAgent, description="Alpha-beta minimax for N x N grids")

__all__ = [
    "BaseAgent",
    "Difficulty",
    "GridMinimaxAgent",
    "RandomAgent",
    "effective_difficulty",
]
