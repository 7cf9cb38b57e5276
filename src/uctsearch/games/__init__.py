"""
Game implementations for the UCT engine.

Each game implements the GameState interface from base.py.
"""

from .base import (
    GameContractError,
    GameState,
    Mark,
    Outcome,
    Player,
    Status,
    register_game,
    get_game,
    list_games,
)

# Import games to register them
from . import connect4
from . import tictactoe

from .connect4 import Connect4State
from .tictactoe import TicTacToeState, parse_move, format_move, move_between

__all__ = [
    "GameContractError",
    "GameState",
    "Mark",
    "Outcome",
    "Player",
    "Status",
    "register_game",
    "get_game",
    "list_games",
    "Connect4State",
    "TicTacToeState",
    "parse_move",
    "format_move",
    "move_between",
]
