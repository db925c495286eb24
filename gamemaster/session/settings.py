"""Runtime settings handed to a Session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .errors import InvalidConfiguration
from .rules import TEAM_RULES, GameMode

MAX_BEST_OF_ROUNDS = 9

BEST_OF_CHOICES = tuple(range(1, MAX_BEST_OF_ROUNDS + 1, 2))


@dataclass
class SessionSettings:
    title: str
    best_of: int = 1
    deuce: bool = True
    mode: GameMode = GameMode.CLASSIC
    max_decision_time: Optional[float] = None  # seconds; None waits forever
    lobby_timeout: float = 10.0
    notice_delay: float = 1.0
    think_delay: float = 0.2
    turn_based: bool = False
    disable_on_click: bool = False
    clear_board_on_point: bool = False
    teams: Sequence[str] = ()
    computer_biased_game_master: bool = False
    modifiers: List[Tuple[str, str]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.mode = GameMode(self.mode)
        self.teams = tuple(self.teams)

    def validate(self) -> None:
        if self.best_of not in BEST_OF_CHOICES:
            raise InvalidConfiguration(
                f"best_of must be an odd number between 1 and {MAX_BEST_OF_ROUNDS}, got {self.best_of}"
            )
        if self.max_decision_time is not None and self.max_decision_time <= 0:
            raise InvalidConfiguration("max_decision_time must be positive")
        if self.lobby_timeout <= 0:
            raise InvalidConfiguration("lobby_timeout must be positive")
        if self.notice_delay < 0 or self.think_delay < 0:
            raise InvalidConfiguration("Delays cannot be negative")
        if self.mode.special_rule in TEAM_RULES and not self.teams:
            raise InvalidConfiguration(f"{self.mode.value} requires teams")
        if len(set(self.teams)) != len(self.teams):
            raise InvalidConfiguration(f"Team labels must be unique, got {list(self.teams)}")

    @property
    def lobby_fields(self) -> List[Tuple[str, str]]:
        """Name/value pairs shown while waiting for players to get ready."""
        fields = [
            ("Best of", str(self.best_of)),
            ("Deuce", "enabled" if self.deuce else "disabled"),
            ("Game Mode", self.mode.value),
        ]
        if self.max_decision_time:
            fields.append(("Max Decision Time", f"{self.max_decision_time:g} seconds"))
        return fields + list(self.modifiers)
