"""Config package exports."""

from .schema import AgentConfig, AppConfig, GameConfig, SessionConfig, load_config

__all__ = [
    "AgentConfig",
    "AppConfig",
    "GameConfig",
    "SessionConfig",
    "load_config",
]
