"""Central registries for game matches and agent strategies."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable


MatchFactory = Callable[..., Any]
AgentFactory = Callable[..., Any]


@dataclass(frozen=True)
class RegistryEntry:
    factory: Callable[..., Any]
    defaults: Dict[str, Any] = field(default_factory=dict)
    description: str = ""


_GAME_REGISTRY: Dict[str, RegistryEntry] = {}
_AGENT_REGISTRY: Dict[str, RegistryEntry] = {}


def register_game(
    game_id: str,
    entry_point: MatchFactory,
    *,
    description: str = "",
    **default_kwargs: Any,
) -> None:
    """Register a game match constructor (e.g. ``TicTacToeMatch``)."""
    if game_id in _GAME_REGISTRY:
        raise ValueError(f"Game id '{game_id}' is already registered.")
    _GAME_REGISTRY[game_id] = RegistryEntry(entry_point, dict(default_kwargs), description)


def make_game(game_id: str, **overrides: Any) -> Any:
    """Instantiate a registered game match; ``overrides`` win over registered defaults."""
    entry = get_game_entry(game_id)
    params = {**entry.defaults, **overrides}
    return entry.factory(**params)


def list_games() -> Iterable[str]:
    return tuple(_GAME_REGISTRY.keys())


def get_game_entry(game_id: str) -> RegistryEntry:
    if game_id not in _GAME_REGISTRY:
        raise KeyError(f"Game id '{game_id}' is not registered.")
    return _GAME_REGISTRY[game_id]


def register_agent(agent_id: str, ctor: AgentFactory, *, description: str = "") -> None:
    """Register an agent strategy constructor."""
    if agent_id in _AGENT_REGISTRY:
        raise ValueError(f"Agent id '{agent_id}' is already registered.")
    _AGENT_REGISTRY[agent_id] = RegistryEntry(ctor, {}, description)


def make_agent(agent_id: str, **kwargs: Any) -> Any:
    return get_agent_entry(agent_id).factory(**kwargs)


def list_agents() -> Iterable[str]:
    return tuple(_AGENT_REGISTRY.keys())


def get_agent_entry(agent_id: str) -> RegistryEntry:
    if agent_id not in _AGENT_REGISTRY:
        raise KeyError(f"Agent id '{agent_id}' is not registered.")
    return _AGENT_REGISTRY[agent_id]
