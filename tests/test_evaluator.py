"""Tests for the static evaluator."""

import numpy as np
import pytest

from connect4_engine.ai.evaluator import WINDOWS, evaluate, score_window
from connect4_engine.game.board import Board
from connect4_engine.utils import (ROWS, COLS, DIRECTION_VECTORS, InvalidPlayerError,
                                   Player, is_valid_position)


def slow_evaluate(board: Board, player: Player) -> int:
    """Window-by-window evaluation straight from the scoring rules."""
    score = 0
    for row in range(ROWS):
        for col in range(COLS):
            for dr, dc in DIRECTION_VECTORS:
                cells = [(row + dr * i, col + dc * i) for i in range(4)]
                if not all(is_valid_position(r, c) for r, c in cells):
                    continue
                values = [board[r, c] for r, c in cells]
                score += score_window(values.count(player), values.count(player.other()))
    return score


def random_board(seed: int) -> Board:
    rng = np.random.default_rng(seed)
    board, player = Board(), Player.ONE
    for _ in range(int(rng.integers(0, 30))):
        board, _ = board.apply_move(int(rng.choice(board.get_valid_moves())), player)
        player = player.other()
    return board


def test_window_count():
    """24 horizontal, 21 vertical and 12 per diagonal direction."""
    assert WINDOWS.shape == (69, 4)
    assert len({tuple(sorted(w)) for w in WINDOWS.tolist()}) == 69


@pytest.mark.parametrize("mine, theirs, expected", [
    (4, 0, 10000),
    (3, 0, 100),
    (2, 0, 10),
    (1, 0, 0),
    (0, 4, -10000),
    (0, 3, -100),
    (0, 2, -10),
    (0, 1, 0),
    (0, 0, 0),
    (2, 1, 0),
    (1, 2, 0),
    (3, 1, 0),
    (2, 2, 0),
])
def test_score_window(mine, theirs, expected):
    assert score_window(mine, theirs) == expected


def test_empty_board_scores_zero():
    assert evaluate(Board(), Player.ONE) == 0
    assert evaluate(Board(), Player.TWO) == 0


@pytest.mark.parametrize("rows, expected", [
    (("XX.....",), 10),
    (("XXX....",), 110),
    (("XXXX...",), 10110),
    (("XXO....",), 0),
])
def test_bottom_row_patterns(make_board, rows, expected):
    board = make_board(*rows)
    assert evaluate(board, Player.ONE) == expected
    assert evaluate(board, Player.TWO) == -expected


def test_matches_window_by_window_scoring():
    for seed in range(25):
        board = random_board(seed)
        for player in (Player.ONE, Player.TWO):
            assert evaluate(board, player) == slow_evaluate(board, player)


def test_scores_are_antisymmetric():
    for seed in range(25):
        board = random_board(seed)
        assert evaluate(board, Player.ONE) == -evaluate(board, Player.TWO)


def test_returns_plain_int(make_board):
    assert type(evaluate(make_board("XX....."), Player.ONE)) is int


def test_empty_perspective_rejected():
    with pytest.raises(InvalidPlayerError):
        evaluate(Board(), Player.EMPTY)
