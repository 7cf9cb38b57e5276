"""
Abstract base classes for searchable games.

Any game that implements the GameState interface can be searched with the
UCT engine. The engine doesn't need to know anything about the game rules -
it just needs these methods to:
1. Enumerate every position reachable in one move
2. Know when the game is over and who won
3. Play a uniformly random legal move during playouts
4. Copy a position cheaply
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Optional, Protocol, TypeVar
import numpy as np


class GameContractError(RuntimeError):
    """
    Raised when a game implementation breaks the GameState contract.

    Examples: a terminal position that still reports continuations, an
    in-progress position with no continuations, or a random play requested
    on a finished game. These are programming errors, never retried.
    """


class Player(Protocol):
    """A participant in a two-player game. Hashable, and knows its opponent."""

    @property
    def other(self) -> Player:
        ...


class Mark(Enum):
    """The two marks of a board game. X always moves first."""
    X = 1
    O = -1

    @property
    def other(self) -> Mark:
        return Mark.O if self is Mark.X else Mark.X

    @classmethod
    def parse(cls, text: str) -> Mark:
        """Parse 'x' / 'o' (any case) into a Mark."""
        try:
            return cls[text.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown mark '{text}', expected X or O") from None

    def __str__(self) -> str:
        return self.name


P = TypeVar('P')


class Outcome(Enum):
    """Coarse classification of a position."""
    IN_PROGRESS = "in_progress"
    DRAW = "draw"
    WIN = "win"


@dataclass(frozen=True)
class Status(Generic[P]):
    """
    Outcome of a position, plus the winner when there is one.

    Build instances through the classmethods rather than directly.
    """
    outcome: Outcome
    winner: Optional[P] = None

    @classmethod
    def in_progress(cls) -> Status:
        return cls(Outcome.IN_PROGRESS)

    @classmethod
    def draw(cls) -> Status:
        return cls(Outcome.DRAW)

    @classmethod
    def won(cls, player: P) -> Status:
        return cls(Outcome.WIN, player)

    @property
    def is_terminal(self) -> bool:
        return self.outcome is not Outcome.IN_PROGRESS

    def __str__(self) -> str:
        if self.outcome is Outcome.WIN:
            return f"{self.winner} wins"
        return self.outcome.value.replace("_", " ")


S = TypeVar('S', bound='GameState')


class GameState(ABC, Generic[P]):
    """
    Abstract base class for one position of a two-player, perfect-information,
    turn-based game.

    Key concepts:
    - A state is a value: the engine copies it freely and never shares
      mutable data between copies.
    - next_states() and status() must agree: a terminal position has no
      continuations and an in-progress one has at least one.
    - next_random_play() is the only mutating method, and the engine only
      calls it on private copies.
    """

    @classmethod
    @abstractmethod
    def initial_state(cls: type[S]) -> S:
        """Return the starting position of the game."""
        pass

    @property
    @abstractmethod
    def current_player(self) -> P:
        """The player whose turn it is."""
        pass

    @abstractmethod
    def next_states(self: S) -> list[S]:
        """
        Return every state reachable by exactly one legal move.

        Returns:
            List of successor states; empty if and only if the position
            is terminal
        """
        pass

    @abstractmethod
    def status(self) -> Status[P]:
        """
        Classify the position.

        Returns:
            Status.in_progress(), Status.draw() or Status.won(player)
        """
        pass

    @abstractmethod
    def next_random_play(self, rng: Any = None) -> None:
        """
        Apply one uniformly random legal move in place.

        Args:
            rng: numpy Generator (or the np.random module) to draw from.
                Defaults to the process-wide np.random state.

        Raises:
            GameContractError: if the position is already terminal
        """
        pass

    @abstractmethod
    def copy(self: S) -> S:
        """Create an independent copy of the state."""
        pass

    def player_won(self) -> Optional[P]:
        """Return the winner, or None for draws and unfinished games."""
        return self.status().winner

    def render(self) -> str:
        """
        Render state as string for display.

        Optional - default returns empty string.
        """
        return ""


def random_index(rng: Any, n: int) -> int:
    """Draw a uniform index in [0, n) from a Generator or the np.random module."""
    if rng is None:
        rng = np.random
    return int(rng.choice(n))


# Registry of available games
_GAME_REGISTRY: dict[str, type[GameState]] = {}


def register_game(name: str):
    """Decorator to register a game state class."""
    def decorator(cls: type[GameState]):
        _GAME_REGISTRY[name] = cls
        return cls
    return decorator


def get_game(name: str) -> type[GameState]:
    """Get a game state class by name."""
    if name not in _GAME_REGISTRY:
        available = ", ".join(_GAME_REGISTRY.keys())
        raise ValueError(f"Unknown game '{name}'. Available: {available}")
    return _GAME_REGISTRY[name]


def list_games() -> list[str]:
    """List all registered games."""
    return list(_GAME_REGISTRY.keys())
