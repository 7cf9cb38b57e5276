"""
Human move input for console play.
"""

from __future__ import annotations

from typing import Callable

from ..games.tictactoe import TicTacToeState, parse_move


def prompt_move(
    state: TicTacToeState,
    ask: Callable[[], str],
    report: Callable[[str], None],
) -> TicTacToeState:
    """
    Read coordinates until a legal move is entered.

    Args:
        state: Position the human moves from
        ask: Returns one line of input
        report: Receives the reason an input was rejected

    Returns:
        State after the human's move
    """
    while True:
        text = ask()
        try:
            row, col = parse_move(text)
            return state.play(row, col)
        except ValueError as e:
            report(str(e))
