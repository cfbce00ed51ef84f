"""Shared fixtures for the Connect Four engine tests."""

import pytest

from connect4_engine.game.board import Board
from connect4_engine.utils import ROWS, COLS, Player

SYMBOLS = {'.': Player.EMPTY, 'X': Player.ONE, 'O': Player.TWO}

# Full board without any four in a row
DRAW_ROWS = (
    "XOXOXOX",
    "XOXOXOX",
    "OXOXOXO",
    "OXOXOXO",
    "XOXOXOX",
    "XOXOXOX",
)


def board_from_rows(*rows: str) -> Board:
    """Build a board from text rows, top row first; missing top rows are empty."""
    rows = ('.' * COLS,) * (ROWS - len(rows)) + rows
    return Board([[SYMBOLS[ch] for ch in row] for row in rows])


def play_columns(*columns: int) -> Board:
    """Apply ``columns`` from an empty board, Player.ONE moving first."""
    board, player = Board(), Player.ONE
    for column in columns:
        board, _ = board.apply_move(column, player)
        player = player.other()
    return board


@pytest.fixture
def make_board():
    return board_from_rows


@pytest.fixture
def play():
    return play_columns


@pytest.fixture
def draw_board():
    return board_from_rows(*DRAW_ROWS)


@pytest.fixture
def block_position():
    """Player.TWO to move and must block column 3."""
    return board_from_rows(
        "OO.....",
        "XXX....",
    )
