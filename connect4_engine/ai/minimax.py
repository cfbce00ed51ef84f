"""
minimax.py - Minimax algorithm with alpha-beta pruning for Connect Four

This module provides a MinimaxPlayer class that picks moves by searching the
game tree to a configurable depth and scoring leaves with the static
evaluator. Columns are always explored in ascending order and ties keep the
earlier column, so the search is deterministic for a given board, player
and depth.
"""

import math
import time
from typing import Optional, Tuple

import numpy as np

from connect4_engine.debug import debug
from connect4_engine.ai.evaluator import evaluate
from connect4_engine.game.board import Board
from connect4_engine.game.detector import check_win, find_winner, is_draw
from connect4_engine.utils import (DEFAULT_SEARCH_DEPTH, NO_LEGAL_MOVE, WIN_SCORE,
                                   Player, require_player)


class MinimaxPlayer:
    """
    A Connect Four player that uses the minimax algorithm with alpha-beta pruning.

    Boards are immutable, so every explored position is a fresh copy and
    nothing has to be undone when a branch returns.
    """

    def __init__(self, depth: int = DEFAULT_SEARCH_DEPTH, use_pruning: bool = True,
                 full_scan: bool = False, rng: Optional[np.random.Generator] = None):
        """
        Initialize the minimax player.

        Args:
            depth: Plies searched including the root move (higher = stronger but slower)
            use_pruning: Apply alpha-beta cutoffs; False runs plain minimax
            full_scan: Rescan the whole board for wins at every node instead
                of only checking the last placed piece
            rng: Generator for the random fallback move
        """
        if depth < 1:
            raise ValueError(f"Search depth must be >= 1, got {depth}")
        self.depth = depth
        self.use_pruning = use_pruning
        self.full_scan = full_scan
        self.rng = rng if rng is not None else np.random.default_rng()
        self.nodes_evaluated = 0  # For performance tracking
        self.fallback_triggered = False

    def get_move(self, board: Board, player: Player) -> int:
        """
        Get the best column for ``player``.

        Returns:
            The chosen column, or NO_LEGAL_MOVE when the board is full
        """
        return self.analyze(board, player)[0]

    def analyze(self, board: Board, player: Player) -> Tuple[int, float]:
        """
        Search every legal root move and report the best one.

        Args:
            board: The current game board
            player: The player to move, and the perspective being maximized

        Returns:
            (column, score) of the best root move; (NO_LEGAL_MOVE, -inf)
            when every column is full
        """
        player = require_player(player)
        self.nodes_evaluated = 0
        self.fallback_triggered = False

        valid_moves = board.get_valid_moves()
        if not valid_moves:
            debug.warning("Move requested on a full board", "search")
            return NO_LEGAL_MOVE, -math.inf

        # Wins already on the board persist into every child, so only a
        # full rescan reproduces their scores
        full_scan = self.full_scan or find_winner(board) is not None
        if full_scan and not self.full_scan:
            debug.warning("Searching a position that already contains a win", "search")

        started = time.perf_counter()
        best_score = -math.inf
        best_column = NO_LEGAL_MOVE
        alpha = -math.inf
        beta = math.inf

        for column in valid_moves:
            child, row = board.apply_move(column, player)

            # Evaluate this move (next level is minimizing)
            score = self._minimax(child, self.depth - 1, alpha, beta, False,
                                  player, (row, column), full_scan)
            debug.trace(f"Root column {column}: score {score}", "search")

            if score > best_score:
                best_score = score
                best_column = column

            if self.use_pruning:
                alpha = max(alpha, score)

        if best_column == NO_LEGAL_MOVE:
            # Unreachable while the board has an open column
            self.fallback_triggered = True
            best_column = int(self.rng.choice(valid_moves))
            debug.warning(f"No root move beat the sentinel, playing random column {best_column}",
                          "search")

        elapsed = time.perf_counter() - started
        debug.info(f"Player {player} plays column {best_column} (score {best_score}, "
                   f"depth {self.depth}, {self.nodes_evaluated} nodes, {elapsed:.3f}s)", "search")
        return best_column, best_score

    def _winner(self, board: Board, last_move: Tuple[int, int],
                full_scan: bool) -> Optional[Player]:
        if full_scan:
            return find_winner(board)
        row, col = last_move
        mover = board.cell(row, col)
        if check_win(board, row, col, mover).won:
            return mover
        return None

    def _minimax(self, board: Board, depth: int, alpha: float, beta: float,
                 is_maximizing: bool, maximizing_player: Player,
                 last_move: Tuple[int, int], full_scan: bool) -> float:
        """
        Minimax algorithm with alpha-beta pruning.

        Args:
            board: Current board state
            depth: Remaining search depth
            alpha: Best score the maximizer can guarantee so far
            beta: Best score the minimizer can guarantee so far
            is_maximizing: True if ``maximizing_player`` moves next
            maximizing_player: The player we're trying to maximize score for
            last_move: (row, col) of the piece placed to reach ``board``
            full_scan: Use the whole-board win scan as the terminal test

        Returns:
            The evaluation score for this position
        """
        self.nodes_evaluated += 1

        winner = self._winner(board, last_move, full_scan)
        if winner is not None:
            return WIN_SCORE if winner == maximizing_player else -WIN_SCORE

        if depth == 0 or is_draw(board):
            return evaluate(board, maximizing_player)

        if is_maximizing:
            max_score = -math.inf

            for column in board.get_valid_moves():
                child, row = board.apply_move(column, maximizing_player)
                score = self._minimax(child, depth - 1, alpha, beta, False,
                                      maximizing_player, (row, column), full_scan)
                max_score = max(max_score, score)

                if self.use_pruning:
                    alpha = max(alpha, score)
                    # Beta cutoff
                    if beta <= alpha:
                        break

            return max_score

        else:  # Minimizing
            min_score = math.inf
            opponent = maximizing_player.other()

            for column in board.get_valid_moves():
                child, row = board.apply_move(column, opponent)
                score = self._minimax(child, depth - 1, alpha, beta, True,
                                      maximizing_player, (row, column), full_scan)
                min_score = min(min_score, score)

                if self.use_pruning:
                    beta = min(beta, score)
                    # Alpha cutoff
                    if beta <= alpha:
                        break

            return min_score


def choose_move(board: Board, player: Player, depth: int = DEFAULT_SEARCH_DEPTH) -> int:
    """
    Pick a column for ``player`` with a fresh MinimaxPlayer.

    Returns:
        Column index, or NO_LEGAL_MOVE (-1) when no column is open
    """
    return MinimaxPlayer(depth=depth).get_move(board, player)
