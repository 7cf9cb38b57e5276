"""
Tic-Tac-Toe game implementation.

Simple 3x3 game - the reference implementation of the GameState contract.

Rules:
- 3x3 board
- Players alternate placing their mark, X first
- First to get 3 in a row (horizontal, vertical, diagonal) wins
- If board fills with no winner, it's a draw

Coordinates are a column letter and a row digit, e.g. "b2" for the center:

     a   b   c
  1  . | . | .
  2  . | . | .
  3  . | . | .
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple
import numpy as np

from .base import GameContractError, GameState, Mark, Status, random_index, register_game


BOARD_SIZE = 3
COLUMN_LETTERS = "abc"

# Winning lines (indices into flattened board)
WINNING_LINES = np.array([
    # Rows
    [0, 1, 2],
    [3, 4, 5],
    [6, 7, 8],
    # Columns
    [0, 3, 6],
    [1, 4, 7],
    [2, 5, 8],
    # Diagonals
    [0, 4, 8],
    [2, 4, 6],
])

_SYMBOLS = {0: ".", 1: "X", -1: "O"}


@register_game("tictactoe")
@dataclass(eq=False)
class TicTacToeState(GameState[Mark]):
    """
    Tic-Tac-Toe position.

    board holds Mark values (+1 for X, -1 for O, 0 for empty), shape (3, 3),
    rows top to bottom.
    """
    board: np.ndarray
    to_move: Mark = Mark.X

    def __post_init__(self):
        if self.board.shape != (BOARD_SIZE, BOARD_SIZE):
            raise ValueError(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}")
        if self.board.dtype != np.int8:
            self.board = self.board.astype(np.int8)

    @classmethod
    def initial_state(cls) -> TicTacToeState:
        """Return empty board, X to move."""
        return cls(board=np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8))

    @classmethod
    def from_string(cls, text: str, to_move: Optional[Mark] = None) -> TicTacToeState:
        """
        Build a position from rows separated by '/' or newlines.

        'x', 'o' and '.' (or '-') mark the cells, e.g. "x.o/.x./..o".
        When to_move is omitted it is inferred from the mark counts.
        """
        rows = [r.strip() for r in text.replace("\n", "/").split("/") if r.strip()]
        if len(rows) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in rows):
            raise ValueError(f"Expected {BOARD_SIZE} rows of {BOARD_SIZE} cells, got '{text}'")

        board = np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)
        for r, row in enumerate(rows):
            for c, ch in enumerate(row.lower()):
                if ch == "x":
                    board[r, c] = Mark.X.value
                elif ch == "o":
                    board[r, c] = Mark.O.value
                elif ch not in ".-":
                    raise ValueError(f"Invalid cell '{ch}' in '{text}'")

        if to_move is None:
            x_count = int(np.sum(board == Mark.X.value))
            o_count = int(np.sum(board == Mark.O.value))
            if x_count - o_count not in (0, 1):
                raise ValueError(f"Impossible mark counts X={x_count} O={o_count}")
            to_move = Mark.X if x_count == o_count else Mark.O

        return cls(board=board, to_move=to_move)

    def to_string(self) -> str:
        """Inverse of from_string (lowercase marks)."""
        return "/".join(
            "".join(_SYMBOLS[int(v)].lower() for v in row) for row in self.board
        )

    @property
    def current_player(self) -> Mark:
        return self.to_move

    def empty_cells(self) -> list[Tuple[int, int]]:
        """Return (row, col) of every empty cell, row-major."""
        return [(int(r), int(c)) for r, c in np.argwhere(self.board == 0)]

    def play(self, row: int, col: int) -> TicTacToeState:
        """
        Place the current player's mark and return the new state.

        Raises:
            ValueError: if the cell is off the board or already occupied,
                or the game is already over
        """
        if not (0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE):
            raise ValueError(f"Cell ({row}, {col}) is off the board")
        if self.board[row, col] != 0:
            raise ValueError(f"Cell {format_move(row, col)} is already occupied")
        if self.status().is_terminal:
            raise ValueError("Game is already over")

        new_board = self.board.copy()
        new_board[row, col] = self.to_move.value
        return TicTacToeState(board=new_board, to_move=self.to_move.other)

    def next_states(self) -> list[TicTacToeState]:
        """One successor per empty cell; none once the game is decided."""
        if self.status().is_terminal:
            return []
        return [self.play(r, c) for r, c in self.empty_cells()]

    def status(self) -> Status[Mark]:
        flat = self.board.flatten()
        sums = flat[WINNING_LINES].sum(axis=1)

        if np.any(sums == 3 * Mark.X.value):
            return Status.won(Mark.X)
        if np.any(sums == 3 * Mark.O.value):
            return Status.won(Mark.O)

        # Check for draw (no empty cells)
        if not np.any(flat == 0):
            return Status.draw()

        return Status.in_progress()

    def next_random_play(self, rng: Any = None) -> None:
        if self.status().is_terminal:
            raise GameContractError("next_random_play called on a finished game")

        cells = self.empty_cells()
        row, col = cells[random_index(rng, len(cells))]
        self.board[row, col] = self.to_move.value
        self.to_move = self.to_move.other

    def copy(self) -> TicTacToeState:
        return TicTacToeState(board=self.board.copy(), to_move=self.to_move)

    def render(self) -> str:
        """Render board as ASCII art with coordinates."""
        lines = ["     " + "   ".join(COLUMN_LETTERS)]
        for r in range(BOARD_SIZE):
            row_str = " | ".join(
                _SYMBOLS[int(self.board[r, c])] for c in range(BOARD_SIZE)
            )
            lines.append(f"  {r + 1}  {row_str}")
            if r < BOARD_SIZE - 1:
                lines.append("    -----------")
        return "\n".join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TicTacToeState):
            return NotImplemented
        return self.to_move is other.to_move and np.array_equal(self.board, other.board)

    def __hash__(self) -> int:
        return hash((self.board.tobytes(), self.to_move))


def parse_move(text: str) -> Tuple[int, int]:
    """
    Parse a coordinate like "b2" into (row, col).

    Raises:
        ValueError: if the text is not a column letter a-c followed by a
            row digit 1-3
    """
    move = text.strip().lower()
    if len(move) != 2 or move[0] not in COLUMN_LETTERS or move[1] not in "123":
        raise ValueError(f"Invalid move '{text.strip()}', expected e.g. 'b2'")
    return int(move[1]) - 1, COLUMN_LETTERS.index(move[0])


def format_move(row: int, col: int) -> str:
    """Inverse of parse_move."""
    return f"{COLUMN_LETTERS[col]}{row + 1}"


def move_between(before: TicTacToeState, after: TicTacToeState) -> Tuple[int, int]:
    """
    Return the cell filled between two consecutive positions.

    Raises:
        ValueError: if the positions don't differ by exactly one new mark
    """
    changed = np.argwhere(before.board != after.board)
    if len(changed) != 1 or before.board[tuple(changed[0])] != 0:
        raise ValueError("Positions are not one move apart")
    row, col = changed[0]
    return int(row), int(col)
