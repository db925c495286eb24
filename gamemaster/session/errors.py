"""Session error types."""

from __future__ import annotations


class GameError(Exception):
    """Base class for session errors."""


class InvalidConfiguration(GameError, ValueError):
    """Session settings that can never produce a playable match."""


class GameCancelled(GameError):
    """The match was cancelled before it could finish; nothing is scored."""

    reason = "The game was cancelled."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.reason)


class GameTimeout(GameCancelled):
    reason = "Timed out waiting for players."


class GameAbandoned(GameCancelled):
    reason = "A player abandoned the game."
