"""Tests for the command-line interface and logging setup."""

import argparse

import pytest

from connect4_engine.debug import DebugLevel, debug
from connect4_engine.interfaces.cli import SimpleCLI, add_common_arguments, side_to_move
from connect4_engine.utils import Player

from conftest import board_from_rows


def parse(*argv):
    parser = argparse.ArgumentParser()
    parser.add_argument('command', choices=['play', 'test', 'benchmark'])
    add_common_arguments(parser)
    return parser.parse_args(list(argv))


@pytest.fixture
def restore_debug_level():
    level = debug.level
    yield
    debug.configure(level=level)


def test_position_analysis_suggests_block(capsys, block_position, restore_debug_level):
    SimpleCLI(parse('test', '--position', block_position.to_position(), '--depth', '3')).run()
    out = capsys.readouterr().out
    assert "No win detected" in out
    assert "Valid moves: [0, 1, 2, 3, 4, 5, 6]" in out
    assert "Suggested move for O: column 3" in out


def test_position_analysis_reports_win(capsys, restore_debug_level):
    board = board_from_rows("OOO....", "XXXX...")
    SimpleCLI(parse('test', '--position', board.to_position())).run()
    assert "Win for X detected at [(5, 0), (5, 1), (5, 2), (5, 3)]" in capsys.readouterr().out


def test_bad_position(capsys, restore_debug_level):
    SimpleCLI(parse('test', '--position', '1,2,3')).run()
    assert "Error parsing position" in capsys.readouterr().out


def test_side_to_move(play):
    assert side_to_move(play()) == Player.ONE
    assert side_to_move(play(3)) == Player.TWO
    assert side_to_move(play(3, 3)) == Player.ONE


def test_friend_game_from_input(monkeypatch, capsys, restore_debug_level):
    moves = iter(['0', '1', 'x', '0', '9', '1', '0', '1', '0'])
    monkeypatch.setattr('builtins.input', lambda prompt: next(moves))
    SimpleCLI(parse('play', '--mode', 'friend')).run()
    out = capsys.readouterr().out
    assert "Invalid input" in out
    assert "Column must be between 0 and 6." in out
    assert "Player X wins!" in out
    assert "Winning line: [(2, 0), (3, 0), (4, 0), (5, 0)]" in out


def test_quit(monkeypatch, capsys, restore_debug_level):
    monkeypatch.setattr('builtins.input', lambda prompt: 'q')
    SimpleCLI(parse('play', '--depth', '2')).run()
    assert "Quitting game." in capsys.readouterr().out


def test_benchmark(capsys, restore_debug_level):
    SimpleCLI(parse('benchmark', '--iterations', '50', '--depth', '2')).run()
    out = capsys.readouterr().out
    assert "Evaluating 50 positions" in out
    assert "Depth 2 search from the empty board" in out


def test_debug_level_from_flags(restore_debug_level):
    SimpleCLI(parse('test', '--debug_level', 'info')).run()
    assert debug.level == DebugLevel.INFO
    SimpleCLI(parse('test', '--debug')).run()
    assert debug.level == DebugLevel.DEBUG


def test_unknown_debug_level_is_ignored(restore_debug_level):
    debug.configure(level=DebugLevel.ERROR)
    debug.set_from_string("loud")
    assert debug.level == DebugLevel.ERROR


def test_component_filter(restore_debug_level):
    debug.configure(level=DebugLevel.TRACE, components=["search"])
    try:
        assert debug.enabled_for(DebugLevel.TRACE, "search")
        assert not debug.enabled_for(DebugLevel.INFO, "board")
    finally:
        debug.configure(components=[])


def test_timer_without_start(restore_debug_level):
    assert debug.end_timer("never-started") is None
