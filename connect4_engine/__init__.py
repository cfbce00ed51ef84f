"""
connect4_engine - Connect Four game engine with a minimax opponent

This package provides an immutable board with gravity-drop move application,
win and draw detection, a static position evaluator and a depth-limited
minimax search with alpha-beta pruning. Callers own the game state and pass
boards in; the engine keeps nothing between calls.
"""

from connect4_engine.game.board import Board, apply_move, create_empty_board
from connect4_engine.game.detector import check_win, is_draw
from connect4_engine.ai.minimax import MinimaxPlayer, choose_move
from connect4_engine.utils import (NO_LEGAL_MOVE, ColumnFullError, Connect4Error,
                                   Player, WinResult)

# Version number
__version__ = '0.1.0'

__all__ = [
    'Board', 'Player', 'WinResult', 'MinimaxPlayer',
    'create_empty_board', 'apply_move', 'check_win', 'is_draw', 'choose_move',
    'NO_LEGAL_MOVE', 'Connect4Error', 'ColumnFullError',
]
