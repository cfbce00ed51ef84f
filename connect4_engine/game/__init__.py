"""
connect4_engine.game - Core game mechanics for Connect Four

This package contains the board representation, move application and
win/draw detection. The turn controller and gymnasium environment live in
connect4_engine.game.rules, which is not imported here to avoid a circular
import with the search engine.
"""

from connect4_engine.game.board import Board, apply_move, create_empty_board
from connect4_engine.game.detector import check_win, find_winner, is_draw

__all__ = ['Board', 'apply_move', 'create_empty_board', 'check_win', 'find_winner', 'is_draw']
