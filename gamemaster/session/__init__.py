"""Match sessions: players, special rules, move collection and the orchestrator."""

from .components import BLANK_LABEL, Board, Component, copy_board, find_component, iter_components
from .errors import GameAbandoned, GameCancelled, GameError, GameTimeout, InvalidConfiguration
from .player import Action, AgentStrategy, Identity, Player
from .rules import GameMode, SpecialRule, SpecialRuleEngine, SpecialRuleState
from .settings import MAX_BEST_OF_ROUNDS, SessionSettings
from .surface import ActionSurface, MatchSummary, PlayerInput, QueueSurface, SessionView
from .collector import ABANDON, READY, MoveCollector
from .orchestrator import RoundResolver, Session, SessionStatus

__all__ = [
    "ABANDON",
    "Action",
    "ActionSurface",
    "AgentStrategy",
    "BLANK_LABEL",
    "Board",
    "Component",
    "GameAbandoned",
    "GameCancelled",
    "GameError",
    "GameMode",
    "GameTimeout",
    "Identity",
    "InvalidConfiguration",
    "MAX_BEST_OF_ROUNDS",
    "MatchSummary",
    "MoveCollector",
    "Player",
    "PlayerInput",
    "QueueSurface",
    "READY",
    "RoundResolver",
    "Session",
    "SessionSettings",
    "SessionStatus",
    "SessionView",
    "SpecialRule",
    "SpecialRuleEngine",
    "SpecialRuleState",
    "copy_board",
    "find_component",
    "iter_components",
]
