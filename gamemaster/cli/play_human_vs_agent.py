"""CLI for playing against the agent in the terminal."""

import asyncio
import logging
import sys
from typing import Any, Dict, List, Literal, Optional

import numpy as np
import tyro

import gamemaster.matches  # noqa: F401  (registers games)
from gamemaster.agents import Difficulty
from gamemaster.config import AppConfig, GameConfig, SessionConfig, load_config
from gamemaster.registry import make_agent, make_game
from gamemaster.session import (
    ActionSurface,
    GameCancelled,
    GameMode,
    Identity,
    PlayerInput,
    SessionView,
    iter_components,
)

HUMAN = Identity(id="human", display_name="Player")
AGENT = Identity(id="agent", display_name="Game Master", is_agent=True)


def format_view(view: SessionView) -> str:
    """Plain-text rendering of a session view."""
    lines: List[str] = [f"== {view.title} =="]
    for name, value in view.fields:
        lines.append(f"{name}: {value}")
    if view.scores:
        lines.append("  ".join(f"{label}: {score}" for label, score in view.scores))
    if view.deuce:
        lines.append("[DEUCE]: " + "; ".join(view.deuce))
    if view.notice:
        lines.append(view.notice)
    if view.game_status:
        lines.append(view.game_status)
    if view.summary is not None:
        lines.append(view.summary.description)
    if view.components and view.summary is None:
        for row in view.components:
            cells = []
            for component in row:
                text = component.label.strip() or component.move_id
                cells.append(f"[{text}]" if not component.disabled else f" {text} ")
            lines.append(" ".join(cells))
    if view.turn:
        lines.append(view.turn)
    if view.footer:
        lines.append(view.footer)
    return "\n".join(lines)


class TerminalSurface(ActionSurface):
    """Prints views to stdout and reads one human's presses from stdin."""

    def __init__(self, identity_id: str) -> None:
        self.identity_id = identity_id
        self.inputs_enabled = True
        self._move_ids: List[str] = []

    async def render(self, view: SessionView) -> None:
        self._move_ids = [component.move_id for component in iter_components(view.components)]
        print(format_view(view))
        print()

    async def next_input(self) -> PlayerInput:
        line = await asyncio.to_thread(input, "> ")
        return PlayerInput(self.identity_id, self.normalize(line))

    async def set_inputs_enabled(self, enabled: bool) -> None:
        self.inputs_enabled = enabled

    def normalize(self, text: str) -> str:
        """Accept ``1 2`` for ``1_2`` and move names in any case."""
        text = "_".join(text.strip().split())
        for move_id in self._move_ids:
            if move_id.lower() == text.lower():
                return move_id
        return text.lower()


def _match_params(game: str, size: int, difficulty: Difficulty) -> Dict[str, Any]:
    if game == "tictactoe":
        return {"size": size, "difficulty": difficulty}
    return {}


def play_human_vs_agent(
    game: Literal["tictactoe", "rps"] = "tictactoe",
    size: int = 3,
    difficulty: Difficulty = Difficulty.MEDIUM,
    best_of: int = 1,
    deuce: bool = True,
    mode: GameMode = GameMode.CLASSIC,
    human_first: bool = True,
    config: Optional[str] = None,
    seed: Optional[int] = None,
    verbose: bool = False,
):
    """
    Play a match against the agent. Type ``ready`` to start, ``abandon`` to quit.

    Args:
        game: Game to play ('tictactoe' or 'rps')
        size: Grid size for tictactoe
        difficulty: Agent difficulty for tictactoe
        best_of: Number of rounds (odd)
        deuce: Require a two-point margin after a tie at match point
        mode: Game mode (special rules)
        human_first: Whether the human takes the first seat
        config: Optional YAML config; overrides the options above
        seed: Random seed
        verbose: Log session events
    """
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING)

    if config is not None:
        app = load_config(config)
    else:
        app = AppConfig(
            game=GameConfig(id=game, params=_match_params(game, size, difficulty)),
            session=SessionConfig(best_of=best_of, deuce=deuce, mode=mode),
            seed=seed,
        )

    match = make_game(app.game.id, **app.game.params, **app.session.as_match_kwargs())
    identities = [HUMAN, AGENT] if human_first else [AGENT, HUMAN]
    surface = TerminalSurface(HUMAN.id)
    rng = np.random.default_rng(app.seed)
    agent = make_agent(app.agent.id, rng=rng, **app.agent.params) if app.agent is not None else None
    session = match.create_session(identities, surface, rng=rng, agent_strategy=agent)

    print("=" * 50)
    print(f"{match.title} - Human vs Agent")
    print("=" * 50)

    try:
        summary = asyncio.run(session.run())
    except GameCancelled as exc:
        print(f"Game cancelled: {exc}")
        sys.exit(1)

    print("=" * 50)
    print(summary.description)
    print(f"Final Score: {summary.final_score}")
    print("=" * 50)


if __name__ == "__main__":
    tyro.cli(play_human_vs_agent)
