"""
evaluator.py - Static position evaluation for the minimax search

Every length-4 window along the four line directions is scored from the
perspective player's point of view and the window scores are summed. Only six
window patterns carry weight; mixed windows and lone pieces score nothing.
"""

import numpy as np

from connect4_engine.game.board import Board
from connect4_engine.utils import (ROWS, COLS, CONNECT_N, DIRECTION_VECTORS,
                                   WIN_SCORE, Player, is_valid_position,
                                   require_player)

THREE_SCORE = 100
TWO_SCORE = 10


def score_window(mine: int, theirs: int) -> int:
    """
    Score one window given how many cells each side holds.

    Args:
        mine: Cells held by the perspective player
        theirs: Cells held by the opponent

    Returns:
        The window's contribution to the position score
    """
    empty = CONNECT_N - mine - theirs
    if mine == 4:
        return WIN_SCORE
    elif mine == 3 and empty == 1:
        return THREE_SCORE
    elif mine == 2 and empty == 2:
        return TWO_SCORE
    elif theirs == 4:
        return -WIN_SCORE
    elif theirs == 3 and empty == 1:
        return -THREE_SCORE
    elif theirs == 2 and empty == 2:
        return -TWO_SCORE
    return 0


def _build_windows() -> np.ndarray:
    """Flat grid indices of every window, shape (n_windows, CONNECT_N)."""
    windows = []
    for row in range(ROWS):
        for col in range(COLS):
            for dr, dc in DIRECTION_VECTORS:
                cells = [(row + dr * i, col + dc * i) for i in range(CONNECT_N)]
                if all(is_valid_position(r, c) for r, c in cells):
                    windows.append([r * COLS + c for r, c in cells])
    return np.array(windows, dtype=np.intp)


WINDOWS = _build_windows()

# SCORE_TABLE[mine, theirs] == score_window(mine, theirs)
SCORE_TABLE = np.array([[score_window(m, t) if m + t <= CONNECT_N else 0
                         for t in range(CONNECT_N + 1)]
                        for m in range(CONNECT_N + 1)], dtype=np.int64)


def evaluate(board: Board, player: Player) -> int:
    """
    Heuristic value of ``board`` for ``player``; higher is better.

    Args:
        board: The position to evaluate
        player: The perspective player

    Returns:
        Sum of the window scores over all windows on the board
    """
    player = require_player(player)
    cells = board.grid.ravel()[WINDOWS]
    mine = np.count_nonzero(cells == player.value, axis=1)
    theirs = np.count_nonzero(cells == player.other().value, axis=1)
    return int(SCORE_TABLE[mine, theirs].sum())
