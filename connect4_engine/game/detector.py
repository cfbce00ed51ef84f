"""
detector.py - Win and draw detection for Connect Four

check_win inspects the lines through a just-placed piece; find_winner rescans
every occupied cell and is what position analysis and the exhaustive search
terminal test rely on.
"""

from typing import List, Optional, Tuple

from connect4_engine.game.board import Board
from connect4_engine.utils import (ROWS, COLS, CONNECT_N, DIRECTION_VECTORS,
                                   NO_WIN, Player, WinResult, is_valid_position,
                                   require_player)


def _run_through(grid, row: int, col: int, dr: int, dc: int,
                 value: int) -> List[Tuple[int, int]]:
    """Contiguous same-value cells through (row, col), negative end first."""
    cells = [(row, col)]

    # Positive direction
    for i in range(1, CONNECT_N):
        r, c = row + dr * i, col + dc * i
        if not is_valid_position(r, c) or grid[r, c] != value:
            break
        cells.append((r, c))

    # Negative direction
    for i in range(1, CONNECT_N):
        r, c = row - dr * i, col - dc * i
        if not is_valid_position(r, c) or grid[r, c] != value:
            break
        cells.insert(0, (r, c))

    return cells


def check_win(board: Board, row: int, col: int, player: Player) -> WinResult:
    """
    Check whether the piece at (row, col) completes four in a row.

    Only meaningful when ``player`` is the marker that was just placed at
    (row, col). Directions are tried in the order horizontal, vertical,
    diagonal down-right, diagonal down-left and the first one with a run of
    at least four wins.

    Args:
        board: Board containing the placed piece
        row: Row index of the placed piece
        col: Column index of the placed piece
        player: Owner of the placed piece

    Returns:
        WinResult with the first four cells of the winning run, negative
        end first, or an empty cell list when there is no win
    """
    player = require_player(player)
    if not is_valid_position(row, col):
        raise IndexError(f"Cell ({row}, {col}) is off the board")

    grid = board.grid
    value = player.value
    for dr, dc in DIRECTION_VECTORS:
        cells = _run_through(grid, row, col, dr, dc, value)
        if len(cells) >= CONNECT_N:
            return WinResult(True, cells[:CONNECT_N])
    return NO_WIN


def is_draw(board: Board) -> bool:
    """
    True when the top row is completely occupied.

    Columns fill bottom-up, so a full top row means a full board.
    """
    return bool((board.grid[0] != Player.EMPTY.value).all())


def find_winner(board: Board) -> Optional[Player]:
    """
    Scan every occupied cell for a completed line.

    Cells are visited in row-major order and each is checked as if its
    occupant had just placed it; the first winner found is returned.

    Returns:
        The winning player, or None when no line of four exists
    """
    result = find_winning_line(board)
    if not result.won:
        return None
    return board.cell(*result.cells[0])


def find_winning_line(board: Board) -> WinResult:
    """Like find_winner, but returns the cells of the first line found."""
    grid = board.grid
    for row in range(ROWS):
        for col in range(COLS):
            value = int(grid[row, col])
            if value != Player.EMPTY.value:
                result = check_win(board, row, col, Player(value))
                if result.won:
                    return result
    return NO_WIN
