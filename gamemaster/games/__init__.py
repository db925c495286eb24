from __future__ import annotations

from .turn_based_game import Action, TurnBasedGame

__all__ = ["Action", "TurnBasedGame"]
