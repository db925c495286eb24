"""Payoff-matrix games (no search)."""

from .game import RPSLS_OUTCOMES, PayoffGame, PayoffResult, rock_paper_scissors_lizard_spock

__all__ = ["RPSLS_OUTCOMES", "PayoffGame", "PayoffResult", "rock_paper_scissors_lizard_spock"]
