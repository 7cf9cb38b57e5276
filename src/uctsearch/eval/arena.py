"""
Arena for evaluating engines through head-to-head matches.

An agent is any callable mapping a position to the position after its move.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

from ..games.base import GameState, Status, random_index
from ..mcts import MCTS


Agent = Callable[[GameState], GameState]


def mcts_agent(engine: MCTS) -> Agent:
    """Agent that moves with find_next_move for the side to play."""

    def move(state: GameState) -> GameState:
        return engine.find_next_move(state, state.current_player)

    return move


def random_agent(rng: Any = None) -> Agent:
    """Agent that picks a uniformly random successor."""

    def move(state: GameState) -> GameState:
        successors = state.next_states()
        return successors[random_index(rng, len(successors))]

    return move


def play_match(
    first: Agent,
    second: Agent,
    initial_state: GameState,
) -> Tuple[Status, int]:
    """
    Play one game between two agents.

    Args:
        first: Agent moving from initial_state
        second: Agent replying
        initial_state: Starting position

    Returns:
        (final status, number of moves played)
    """
    state = initial_state
    agents = (first, second)
    num_moves = 0

    status = state.status()
    while not status.is_terminal:
        state = agents[num_moves % 2](state)
        num_moves += 1
        status = state.status()

    return status, num_moves


@dataclass
class ArenaResult:
    """Results from arena evaluation."""

    wins: int
    losses: int
    draws: int
    total_games: int
    win_rate: float

    @property
    def score(self) -> float:
        """Win rate counting draws as half."""
        return (self.wins + 0.5 * self.draws) / self.total_games if self.total_games > 0 else 0.0


class Arena:
    """
    Arena for evaluation matches.

    Args:
        game_cls: GameState subclass to play
    """

    def __init__(self, game_cls: type[GameState]):
        self.game_cls = game_cls

    def evaluate(
        self,
        candidate: Agent,
        opponent: Agent,
        num_games: int = 20,
        progress_callback: Optional[Callable[[int, str], None]] = None,
    ) -> ArenaResult:
        """
        Evaluate candidate against opponent.

        Plays num_games matches, alternating who goes first.

        Args:
            candidate: Agent being evaluated
            opponent: Reference agent
            num_games: Number of games to play
            progress_callback: Optional callback(games_completed, result)

        Returns:
            ArenaResult from candidate's perspective
        """
        wins = 0
        losses = 0
        draws = 0

        for i in range(num_games):
            initial = self.game_cls.initial_state()
            first_player = initial.current_player

            # Alternate who plays first
            if i % 2 == 0:
                status, _ = play_match(candidate, opponent, initial)
                candidate_player = first_player
            else:
                status, _ = play_match(opponent, candidate, initial)
                candidate_player = first_player.other

            if status.winner is None:
                draws += 1
                result = "D"
            elif status.winner == candidate_player:
                wins += 1
                result = "W"
            else:
                losses += 1
                result = "L"

            if progress_callback:
                progress_callback(i + 1, result)

        total = wins + losses + draws
        win_rate = wins / total if total > 0 else 0.0

        return ArenaResult(
            wins=wins,
            losses=losses,
            draws=draws,
            total_games=total,
            win_rate=win_rate,
        )
