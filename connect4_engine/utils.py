"""
utils.py - Constants, enumerations, errors and helpers for the Connect Four engine

This module provides the board dimensions, player markers, line directions,
the error taxonomy and small argument guards shared by the game and AI code.
"""

from enum import Enum, auto
from typing import List, NamedTuple, Tuple

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win

# Search constants
DEFAULT_SEARCH_DEPTH = 5
WIN_SCORE = 10000
NO_LEGAL_MOVE = -1  # Returned by the search when every column is full


class Player(Enum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # Player A
    TWO = 2    # Player B

    def other(self) -> 'Player':
        """Get the opposing player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        raise InvalidPlayerError("EMPTY has no opponent")

    def __str__(self):
        if self == Player.EMPTY:
            return "."
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


class GameResult(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    PLAYER_ONE_WIN = auto()
    PLAYER_TWO_WIN = auto()
    DRAW = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameResult.IN_PROGRESS

    @classmethod
    def win_for(cls, player: Player) -> 'GameResult':
        return cls.PLAYER_ONE_WIN if player == Player.ONE else cls.PLAYER_TWO_WIN


class Direction(Enum):
    """Line directions, in the order the win detector tries them."""
    HORIZONTAL = (0, 1)
    VERTICAL = (1, 0)
    DIAGONAL_DOWN_RIGHT = (1, 1)
    DIAGONAL_DOWN_LEFT = (1, -1)


DIRECTION_VECTORS: List[Tuple[int, int]] = [d.value for d in Direction]


class WinResult(NamedTuple):
    """Outcome of a win check: the flag plus the four winning cells."""
    won: bool
    cells: List[Tuple[int, int]]


NO_WIN = WinResult(False, [])


# --- Errors ---

class Connect4Error(Exception):
    """Base class for all engine errors."""


class ColumnFullError(Connect4Error):
    """Raised when a piece is dropped into a column with no empty cell."""

    def __init__(self, column: int):
        super().__init__(f"Column {column} is full")
        self.column = column


class InvalidColumnError(Connect4Error, ValueError):
    """Raised for a column index that is not an integer in [0, COLS)."""


class InvalidPlayerError(Connect4Error, ValueError):
    """Raised when a concrete player marker is required but not given."""


class InvalidBoardError(Connect4Error, ValueError):
    """Raised for a grid with the wrong shape, values or floating pieces."""


# --- Guards ---

def require_column(column) -> int:
    """
    Validate a column index.

    Args:
        column: Column index supplied by a caller

    Returns:
        The column as a plain int

    Raises:
        InvalidColumnError: If the column is not an integer in range
    """
    if isinstance(column, bool) or not isinstance(column, (int, np.integer)):
        raise InvalidColumnError(f"Column must be an integer, got {column!r}")
    if not 0 <= column < COLS:
        raise InvalidColumnError(f"Column {column} out of range 0-{COLS - 1}")
    return int(column)


def require_player(player) -> Player:
    """Validate that ``player`` is Player.ONE or Player.TWO."""
    if not isinstance(player, Player) or player == Player.EMPTY:
        raise InvalidPlayerError(f"Expected Player.ONE or Player.TWO, got {player!r}")
    return player


def is_valid_position(row: int, col: int) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < ROWS and 0 <= col < COLS


def render_board_ascii(grid: np.ndarray) -> str:
    """
    Render a board grid as ASCII art.

    Args:
        grid: ROWS x COLS array of Player values

    Returns:
        ASCII representation of the board, column numbers underneath
    """
    border = "|" + "-" * (COLS * 2 - 1) + "|"
    lines = [border]
    for row in range(ROWS):
        cells = [str(Player(int(value))) for value in grid[row]]
        lines.append("|" + " ".join(cells) + "|")
    lines.append(border)
    lines.append("|" + " ".join(str(col) for col in range(COLS)) + "|")
    return "\n".join(lines)
