"""Configuration schema for matches."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from gamemaster.session.rules import GameMode


@dataclass
class GameConfig:
    id: str
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class AgentConfig:
    id: str
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SessionConfig:
    best_of: int = 1
    deuce: bool = True
    mode: GameMode = GameMode.CLASSIC
    max_decision_time: Optional[float] = None
    lobby_timeout: float = 10.0
    notice_delay: float = 1.0
    think_delay: float = 0.2

    def __post_init__(self) -> None:
        self.mode = GameMode(self.mode)

    def as_match_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments accepted by every GameMatch constructor."""
        return asdict(self)


@dataclass
class AppConfig:
    game: GameConfig
    agent: Optional[AgentConfig] = None
    session: SessionConfig = field(default_factory=SessionConfig)
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        if "game" not in data:
            raise ValueError("game is required")
        game = GameConfig(**data["game"])
        agent = AgentConfig(**data["agent"]) if data.get("agent") else None

        session_data = data.get("session", {}) or {}
        session = SessionConfig(
            best_of=int(session_data.get("best_of", 1)),
            deuce=bool(session_data.get("deuce", True)),
            mode=GameMode(session_data.get("mode", GameMode.CLASSIC.value)),
            max_decision_time=session_data.get("max_decision_time"),
            lobby_timeout=float(session_data.get("lobby_timeout", 10.0)),
            notice_delay=float(session_data.get("notice_delay", 1.0)),
            think_delay=float(session_data.get("think_delay", 0.2)),
        )

        seed = data.get("seed")
        if seed is not None:
            seed = int(seed)

        return cls(game=game, agent=agent, session=session, seed=seed)


def load_config(path: Union[str, Path]) -> AppConfig:
    """Load AppConfig from a YAML file."""
    path = Path(path)
    with path.open() as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a YAML mapping, got {type(data)}")
    return AppConfig.from_dict(data)
