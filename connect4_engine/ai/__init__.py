"""
connect4_engine/ai/__init__.py - Automated opponent for Connect Four

This package provides the static position evaluator and the minimax search
that picks moves for the computer player.
"""

from connect4_engine.ai.evaluator import evaluate
from connect4_engine.ai.minimax import MinimaxPlayer, choose_move

__all__ = ['evaluate', 'MinimaxPlayer', 'choose_move']
