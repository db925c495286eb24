"""Simultaneous-move payoff games (rock-paper-scissors and friends)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

# move -> ((defeated move, verb), ...)
Outcomes = Mapping[str, Sequence[Tuple[str, str]]]

RPSLS_OUTCOMES: Dict[str, Tuple[Tuple[str, str], ...]] = {
    "Rock": (("Scissors", "crushes"), ("Lizard", "crushes")),
    "Paper": (("Rock", "covers"), ("Spock", "disproves")),
    "Scissors": (("Paper", "cuts"), ("Lizard", "decapitates")),
    "Lizard": (("Spock", "poisons"), ("Paper", "eats")),
    "Spock": (("Rock", "vaporizes"), ("Scissors", "smashes")),
}


@dataclass(frozen=True)
class PayoffResult:
    """Outcome of one simultaneous round."""

    winning_move: Optional[str]
    beaten: Tuple[Tuple[str, str], ...] = ()
    winner_index: Optional[int] = None  # index into the submitted moves

    @property
    def is_tie(self) -> bool:
        return self.winning_move is None

    @property
    def description(self) -> str:
        if self.winning_move is None:
            return ""
        defeats = ", ".join(f"{verb} {move}" for move, verb in self.beaten)
        return f"{self.winning_move} {defeats}"


class PayoffGame:
    """
    A fixed outcome table: each move lists the moves it defeats.

    The table must be antisymmetric (no two moves defeat each other).
    """

    def __init__(self, outcomes: Outcomes) -> None:
        self.outcomes: Dict[str, Tuple[Tuple[str, str], ...]] = {
            move: tuple(beats) for move, beats in outcomes.items()
        }
        for move, beats in self.outcomes.items():
            for defeated, _ in beats:
                if defeated not in self.outcomes:
                    raise ValueError(f"{move!r} defeats unknown move {defeated!r}")
                if self.verb(defeated, move) is not None:
                    raise ValueError(f"{move!r} and {defeated!r} defeat each other")

    @property
    def moves(self) -> List[str]:
        return list(self.outcomes)

    def verb(self, move: str, other: str) -> Optional[str]:
        """How ``move`` defeats ``other``, or None when it does not."""
        for defeated, verb in self.outcomes[move]:
            if defeated == other:
                return verb
        return None

    def resolve(self, moves: Sequence[str]) -> PayoffResult:
        """
        The first move (in submission order) that defeats any other submitted
        move wins; when none does, the round is a tie.
        """
        if not moves:
            raise ValueError("Cannot resolve a round without moves")
        for move in moves:
            if move not in self.outcomes:
                raise ValueError(f"Unknown move: {move!r}")

        present = set(moves)
        for index, move in enumerate(moves):
            beaten = tuple(
                (defeated, verb) for defeated, verb in self.outcomes[move] if defeated in present
            )
            if beaten:
                return PayoffResult(winning_move=move, beaten=beaten, winner_index=index)
        return PayoffResult(winning_move=None)


def rock_paper_scissors_lizard_spock() -> PayoffGame:
    return PayoffGame(RPSLS_OUTCOMES)
