"""Agent difficulty tiers."""

from __future__ import annotations

from enum import Enum
from typing import Dict

from gamemaster.session.rules import GameMode


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"
    IMPOSSIBLE = "Impossible"
    COMPUTER_BIASED = "Computer Biased Game Master"

    @property
    def random_move_chance(self) -> float:
        return RANDOM_MOVE_CHANCE[self]


# Easy never searches; it plays uniformly at random.
RANDOM_MOVE_CHANCE: Dict[Difficulty, float] = {
    Difficulty.EASY: 1.0,
    Difficulty.MEDIUM: 0.1,
    Difficulty.HARD: 0.05,
    Difficulty.IMPOSSIBLE: 0.0,
    Difficulty.COMPUTER_BIASED: 0.0,
}


def effective_difficulty(difficulty: Difficulty, mode: GameMode, against_agent: bool = True) -> Difficulty:
    """A biased game master needs special rules and an agent to favour; otherwise play Impossible."""
    difficulty = Difficulty(difficulty)
    if difficulty is Difficulty.COMPUTER_BIASED and (GameMode(mode) is GameMode.CLASSIC or not against_agent):
        return Difficulty.IMPOSSIBLE
    return difficulty
