"""
board.py - Board representation and move application for Connect Four

A Board is an immutable value: applying a move returns a new Board and the
row the piece landed in, leaving the original untouched. This makes boards
safe to share between the turn controller and the search engine.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from connect4_engine.debug import debug
from connect4_engine.utils import (ROWS, COLS, Player, ColumnFullError,
                                   InvalidBoardError, require_column,
                                   require_player, render_board_ascii)

_CELL_VALUES = frozenset(p.value for p in Player)


class Board:
    """
    Represents a Connect Four game board.

    The grid is a read-only ROWS x COLS numpy array of Player values with
    row 0 at the top. Within every column the occupied cells form a
    contiguous run ending at the bottom row.
    """

    __slots__ = ('grid',)

    def __init__(self, grid: Optional[Sequence[Sequence[int]]] = None):
        """
        Create a board, empty by default.

        Args:
            grid: Optional ROWS x COLS cell values (ints or Player members)

        Raises:
            InvalidBoardError: If the grid has the wrong shape, unknown
                values, or pieces floating above an empty cell
        """
        if grid is None:
            array = np.zeros((ROWS, COLS), dtype=np.int8)
        else:
            array = self._coerce(grid)
        array.flags.writeable = False
        self.grid = array

    @staticmethod
    def _coerce(grid) -> np.ndarray:
        if isinstance(grid, np.ndarray):
            values = grid
        else:
            values = [[cell.value if isinstance(cell, Player) else cell for cell in row]
                      for row in grid]
        try:
            array = np.array(values, dtype=np.int8)
        except (TypeError, ValueError, OverflowError) as e:
            raise InvalidBoardError(f"Cannot build a board from {grid!r}: {e}") from e

        if array.shape != (ROWS, COLS):
            raise InvalidBoardError(f"Board must be {ROWS}x{COLS}, got shape {array.shape}")
        if not set(np.unique(array).tolist()) <= _CELL_VALUES:
            raise InvalidBoardError(f"Board cells must be one of {sorted(_CELL_VALUES)}")

        occupied = array != Player.EMPTY.value
        floating = occupied[:-1] & ~occupied[1:]
        if floating.any():
            row, col = np.argwhere(floating)[0]
            raise InvalidBoardError(f"Floating piece at ({row}, {col})")
        return array.copy()

    @classmethod
    def from_position(cls, position: str) -> 'Board':
        """
        Build a board from a comma-separated position string.

        Args:
            position: ROWS * COLS cell values in row-major order, top row first

        Returns:
            The parsed board
        """
        try:
            values = [int(v) for v in position.split(',')]
        except ValueError as e:
            raise InvalidBoardError(f"Position values must be integers: {e}") from e
        if len(values) != ROWS * COLS:
            raise InvalidBoardError(f"Position string must have {ROWS * COLS} values, got {len(values)}")
        return cls(np.array(values).reshape(ROWS, COLS))

    def cell(self, row: int, col: int) -> Player:
        return Player(int(self.grid[row, col]))

    def __getitem__(self, position: Tuple[int, int]) -> Player:
        return self.cell(*position)

    def is_valid_move(self, column: int) -> bool:
        """
        Check if a column can still receive a piece.

        Args:
            column: The column to check (0-indexed)

        Returns:
            True if the column's top cell is empty
        """
        column = require_column(column)
        return self.grid[0, column] == Player.EMPTY.value

    def get_valid_moves(self) -> List[int]:
        """Columns whose top cell is empty, in ascending order."""
        return [col for col in range(COLS) if self.grid[0, col] == Player.EMPTY.value]

    def is_full(self) -> bool:
        return not self.get_valid_moves()

    def column_height(self, column: int) -> int:
        """Number of pieces currently in ``column``."""
        column = require_column(column)
        return int(np.count_nonzero(self.grid[:, column]))

    @property
    def move_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def apply_move(self, column: int, player: Player) -> Tuple['Board', int]:
        """
        Drop a piece into a column.

        Args:
            column: The column to place a piece (0-indexed)
            player: The player whose marker is dropped

        Returns:
            A new Board with the piece placed, and the row it landed in

        Raises:
            ColumnFullError: If the column has no empty cell
        """
        column = require_column(column)
        player = require_player(player)

        # Find the lowest empty row in the column
        for row in range(ROWS - 1, -1, -1):
            if self.grid[row, column] == Player.EMPTY.value:
                grid = self.grid.copy()
                grid[row, column] = player.value
                grid.flags.writeable = False
                return Board._wrap(grid), row

        debug.debug(f"Rejected move: column {column} is full", "board")
        raise ColumnFullError(column)

    @classmethod
    def _wrap(cls, grid: np.ndarray) -> 'Board':
        # Skips validation; only used for grids derived from a valid board
        board = cls.__new__(cls)
        board.grid = grid
        return board

    def get_state(self) -> np.ndarray:
        """
        Get the current board state as a writable numpy array.

        Returns:
            2D numpy array representing the board
        """
        return self.grid.copy()

    def to_position(self) -> str:
        """Inverse of ``from_position``."""
        return ",".join(str(v) for v in self.grid.ravel().tolist())

    def render(self) -> str:
        return render_board_ascii(self.grid)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash(self.grid.tobytes())

    def __repr__(self) -> str:
        return f"Board.from_position({self.to_position()!r})"

    def __str__(self) -> str:
        return self.render()


def create_empty_board() -> Board:
    """Create a board with every cell empty."""
    return Board()


def apply_move(board: Board, column: int, player: Player) -> Tuple[Board, int]:
    """
    Apply a move to ``board`` without modifying it.

    Returns:
        The resulting board and the row where the piece landed

    Raises:
        ColumnFullError: If the column is already full
    """
    return board.apply_move(column, player)
