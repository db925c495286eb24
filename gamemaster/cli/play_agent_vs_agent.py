"""CLI for playing agent vs agent on an N x N grid."""

from typing import Callable, Literal, Optional

import numpy as np
import tyro

from gamemaster.agents import Difficulty
from gamemaster.games.grid import GridGame, GridState, render_board
from gamemaster.search.grid import make_grid_minimax_policy

Mover = Callable[[GridState], int]


def make_mover(
    kind: Literal["random", "minimax"],
    game: GridGame,
    difficulty: Difficulty,
    rng: np.random.Generator,
    time_budget: Optional[float] = 1.0,
) -> Mover:
    if kind == "random" or Difficulty(difficulty) is Difficulty.EASY:
        def random_move(state: GridState) -> int:
            legal = game.legal_actions(state)
            return int(legal[int(rng.integers(len(legal)))])

        return random_move

    policy = make_grid_minimax_policy(
        game,
        random_move_chance=Difficulty(difficulty).random_move_chance,
        rng=rng,
        time_budget=time_budget,
    )
    return lambda state: policy.select_action(game, state)


def play_agent_vs_agent(
    agent1_type: Literal["random", "minimax"] = "minimax",
    agent2_type: Literal["random", "minimax"] = "random",
    agent1_difficulty: Difficulty = Difficulty.IMPOSSIBLE,
    agent2_difficulty: Difficulty = Difficulty.IMPOSSIBLE,
    size: int = 3,
    num_games: int = 1,
    render: bool = True,
    seed: int = 42,
):
    """
    Play agent vs agent games.

    Args:
        agent1_type: Type of agent1 ('random' or 'minimax'), plays X
        agent2_type: Type of agent2 ('random' or 'minimax'), plays O
        agent1_difficulty: Difficulty tier for agent1 when it is minimax
        agent2_difficulty: Difficulty tier for agent2 when it is minimax
        size: Grid size N
        num_games: Number of games to play
        render: Whether to render games
        seed: Random seed
    """
    game = GridGame(size)
    agent1 = make_mover(agent1_type, game, agent1_difficulty, np.random.default_rng(seed))
    agent2 = make_mover(agent2_type, game, agent2_difficulty, np.random.default_rng(seed + 1))

    print("=" * 50)
    print(f"TicTacToe {size}x{size} - Agent vs Agent")
    print("=" * 50)
    print(f"Agent 1: {agent1_type} ({agent1_difficulty.value})")
    print(f"Agent 2: {agent2_type} ({agent2_difficulty.value})")
    print(f"Games: {num_games}")
    print("=" * 50)
    print()

    agent1_wins = 0
    agent2_wins = 0
    draws = 0

    for index in range(num_games):
        state = game.initial_state()

        if render:
            print(f"\nGame {index + 1}/{num_games}")
            print("-" * 50)

        while not game.is_terminal(state):
            mover = agent1 if game.current_player(state) == 1 else agent2
            state = game.apply_action(state, mover(state))
            if render:
                print(render_board(state.board))
                print()

        winner = game.winner(state)
        if winner == 1:
            agent1_wins += 1
            if render:
                print("Agent 1 wins!")
        elif winner == -1:
            agent2_wins += 1
            if render:
                print("Agent 2 wins!")
        else:
            draws += 1
            if render:
                print("Draw!")

    print("=" * 50)
    print("Results Summary")
    print("=" * 50)
    print(f"Agent 1 wins: {agent1_wins} ({agent1_wins / num_games * 100:.1f}%)")
    print(f"Agent 2 wins: {agent2_wins} ({agent2_wins / num_games * 100:.1f}%)")
    print(f"Draws: {draws} ({draws / num_games * 100:.1f}%)")
    print("=" * 50)


if __name__ == "__main__":
    tyro.cli(play_agent_vs_agent)
