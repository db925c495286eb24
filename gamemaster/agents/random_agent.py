"""Random agent implementation."""

from typing import Optional, Sequence

import numpy as np

from .base_agent import BaseAgent


class RandomAgent(BaseAgent):
    """Agent that selects moves uniformly from the legal ones."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None):
        """
        Initialize random agent.

        Args:
            seed: Random seed for reproducibility (ignored when ``rng`` is given)
            rng: Generator to draw from
        """
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def select_move(self, session, legal_move_ids: Sequence[str]) -> str:
        """
        Select a random legal move.

        Args:
            session: Current session (unused)
            legal_move_ids: Enabled move ids

        Returns:
            Randomly selected move id
        """
        if not legal_move_ids:
            raise ValueError("No legal moves available")
        return legal_move_ids[int(self.rng.integers(len(legal_move_ids)))]
