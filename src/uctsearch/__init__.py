"""
uctsearch - Monte Carlo Tree Search for two-player games.

Search any two-player perfect-information game with UCT and random
playouts. The game only has to implement the GameState interface.

Supported games:
- Tic-Tac-Toe
- Connect 4

Usage:
    from uctsearch.games import TicTacToeState
    from uctsearch.mcts import MCTS

    state = TicTacToeState.initial_state()
    engine = MCTS(iterations=10_000)
    state = engine.find_next_move(state, state.current_player)
"""

__version__ = "0.1.0"

from . import games
from . import mcts
from . import play
from . import eval

__all__ = [
    "games",
    "mcts",
    "play",
    "eval",
    "__version__",
]
