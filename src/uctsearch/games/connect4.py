"""
Connect 4 game implementation.

Rules:
- 6 rows x 7 columns board
- Players drop pieces into columns, X first
- First to get 4 in a row (horizontal, vertical, or diagonal) wins
- If board fills up with no winner, it's a draw

Board representation:
- +1 = X pieces
- -1 = O pieces
- 0 = empty
Row 0 is the top of the board.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np

from .base import GameContractError, GameState, Mark, Status, random_index, register_game


# Board dimensions
ROWS = 6
COLS = 7
WIN_LENGTH = 4


@register_game("connect4")
@dataclass(eq=False)
class Connect4State(GameState[Mark]):
    """Connect 4 position. Moves are column indices (0-6)."""
    board: np.ndarray  # shape (6, 7), dtype int8
    to_move: Mark = Mark.X

    def __post_init__(self):
        if self.board.shape != (ROWS, COLS):
            raise ValueError(f"Board must be {ROWS}x{COLS}")
        if self.board.dtype != np.int8:
            self.board = self.board.astype(np.int8)

    @classmethod
    def initial_state(cls) -> Connect4State:
        """Return empty board."""
        return cls(board=np.zeros((ROWS, COLS), dtype=np.int8))

    @property
    def current_player(self) -> Mark:
        return self.to_move

    def legal_columns(self) -> list[int]:
        """Return columns that aren't full."""
        return [c for c in range(COLS) if self.board[0, c] == 0]

    def play(self, column: int) -> Connect4State:
        """Drop the current player's piece and return the new state."""
        new_state = self.copy()
        new_state._drop(column)
        return new_state

    def next_states(self) -> list[Connect4State]:
        if self.status().is_terminal:
            return []
        return [self.play(c) for c in self.legal_columns()]

    def status(self) -> Status[Mark]:
        if self._has_winner(Mark.X.value):
            return Status.won(Mark.X)
        if self._has_winner(Mark.O.value):
            return Status.won(Mark.O)

        # Check for draw (board full)
        if not np.any(self.board == 0):
            return Status.draw()

        return Status.in_progress()

    def next_random_play(self, rng: Any = None) -> None:
        if self.status().is_terminal:
            raise GameContractError("next_random_play called on a finished game")
        columns = self.legal_columns()
        self._drop(columns[random_index(rng, len(columns))])

    def copy(self) -> Connect4State:
        return Connect4State(board=self.board.copy(), to_move=self.to_move)

    def render(self) -> str:
        """Render board as ASCII art."""
        symbols = {0: ".", 1: "X", -1: "O"}

        lines = []
        lines.append(" " + " ".join(str(i) for i in range(COLS)))
        lines.append("-" * (COLS * 2 + 1))

        for r in range(ROWS):
            row_str = "|" + "|".join(
                symbols[int(self.board[r, c])] for c in range(COLS)
            ) + "|"
            lines.append(row_str)

        lines.append("-" * (COLS * 2 + 1))
        return "\n".join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Connect4State):
            return NotImplemented
        return self.to_move is other.to_move and np.array_equal(self.board, other.board)

    def __hash__(self) -> int:
        return hash((self.board.tobytes(), self.to_move))

    # --- Helper methods ---

    def _drop(self, column: int) -> None:
        if column < 0 or column >= COLS:
            raise ValueError(f"Invalid column {column}, must be 0-{COLS-1}")
        if self.board[0, column] != 0:
            raise ValueError(f"Column {column} is full")

        # Find lowest empty row in column
        row = ROWS - 1
        while row >= 0 and self.board[row, column] != 0:
            row -= 1

        self.board[row, column] = self.to_move.value
        self.to_move = self.to_move.other

    def _has_winner(self, player: int) -> bool:
        """Check if the given player has 4 in a row."""
        for r in range(ROWS):
            for c in range(COLS):
                if self.board[r, c] != player:
                    continue
                # Horizontal
                if c <= COLS - WIN_LENGTH:
                    if self._check_line(r, c, 0, 1, player):
                        return True
                # Vertical
                if r <= ROWS - WIN_LENGTH:
                    if self._check_line(r, c, 1, 0, player):
                        return True
                # Diagonal down-right
                if r <= ROWS - WIN_LENGTH and c <= COLS - WIN_LENGTH:
                    if self._check_line(r, c, 1, 1, player):
                        return True
                # Diagonal down-left
                if r <= ROWS - WIN_LENGTH and c >= WIN_LENGTH - 1:
                    if self._check_line(r, c, 1, -1, player):
                        return True
        return False

    def _check_line(self, r: int, c: int, dr: int, dc: int, player: int) -> bool:
        """Check if there are 4 in a row starting from (r,c) in direction (dr,dc)."""
        for i in range(WIN_LENGTH):
            if self.board[r + i * dr, c + i * dc] != player:
                return False
        return True
