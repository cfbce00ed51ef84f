"""Tests for the turn controller and the gymnasium environment."""

import numpy as np
import pytest

from connect4_engine.game.rules import ConnectFourEnv, ConnectFourGame, GameMode
from connect4_engine.utils import ROWS, COLS, GameResult, Player

from conftest import DRAW_ROWS, board_from_rows


@pytest.fixture
def friend_game():
    return ConnectFourGame(mode=GameMode.FRIEND)


@pytest.fixture
def robot_game():
    return ConnectFourGame(mode=GameMode.ROBOT, depth=2)


def test_players_alternate(friend_game):
    assert friend_game.get_current_player() == Player.ONE
    assert friend_game.make_move(3)
    assert friend_game.get_current_player() == Player.TWO
    assert friend_game.make_move(3)
    assert friend_game.get_current_player() == Player.ONE
    assert friend_game.board[ROWS - 1, 3] == Player.ONE
    assert friend_game.board[ROWS - 2, 3] == Player.TWO
    assert friend_game.last_move == (ROWS - 2, 3)


def test_vertical_win_ends_game(friend_game):
    for column in [0, 1, 0, 1, 0, 1, 0]:
        assert friend_game.make_move(column)

    assert friend_game.is_game_over()
    assert friend_game.game_result == GameResult.PLAYER_ONE_WIN
    assert friend_game.get_winner() == Player.ONE
    assert friend_game.winning_cells == [(2, 0), (3, 0), (4, 0), (5, 0)]
    # The winner keeps the turn and no further moves are accepted
    assert friend_game.get_current_player() == Player.ONE
    assert friend_game.get_valid_moves() == []
    assert not friend_game.make_move(2)


def test_full_column_is_rejected(friend_game):
    for _ in range(ROWS):
        friend_game.make_move(5)
    player = friend_game.get_current_player()

    assert not friend_game.make_move(5)
    assert friend_game.get_current_player() == player
    assert 5 not in friend_game.get_valid_moves()


def test_last_piece_draws(friend_game):
    friend_game.board = board_from_rows(".OXOXOX", *DRAW_ROWS[1:])
    assert friend_game.make_move(0)
    assert friend_game.game_result == GameResult.DRAW
    assert friend_game.get_winner() is None
    assert friend_game.winning_cells == []


def test_reset_clears_state(friend_game):
    friend_game.make_move(0)
    friend_game.reset()
    assert friend_game.board.move_count == 0
    assert friend_game.get_current_player() == Player.ONE
    assert friend_game.game_result == GameResult.IN_PROGRESS
    assert friend_game.last_move is None


def test_friend_mode_has_no_computer(friend_game):
    friend_game.make_move(0)
    assert not friend_game.is_ai_turn()
    assert friend_game.make_ai_move() is None
    assert friend_game.make_move(1)


def test_robot_answers_human(robot_game):
    assert robot_game.make_move(3)
    assert robot_game.is_ai_turn()
    # Humans cannot move for the computer
    assert not robot_game.make_move(4)

    column = robot_game.make_ai_move()
    assert column in range(COLS)
    assert robot_game.board.move_count == 2
    assert robot_game.get_current_player() == Player.ONE
    assert robot_game.make_ai_move() is None


def test_robot_blocks_threat(robot_game, block_position):
    robot_game.board = block_position
    robot_game.current_player = Player.TWO
    assert robot_game.make_ai_move() == 3
    assert robot_game.board[ROWS - 1, 3] == Player.TWO


def test_set_mode_restarts(friend_game):
    friend_game.make_move(0)
    friend_game.set_mode(GameMode.ROBOT)
    assert friend_game.mode == GameMode.ROBOT
    assert friend_game.board.move_count == 0


def test_env_reset():
    env = ConnectFourEnv()
    observation, info = env.reset(seed=0)
    assert observation.shape == (ROWS, COLS)
    assert env.observation_space.contains(observation)
    assert np.all(observation == 0)
    assert info['valid_moves'] == list(range(COLS))
    assert info['current_player'] == Player.ONE.value


def test_env_opponent_replies():
    env = ConnectFourEnv(opponent_depth=2)
    env.reset(seed=0)
    observation, reward, terminated, truncated, info = env.step(3)

    assert observation[ROWS - 1, 3] == Player.ONE.value
    assert np.count_nonzero(observation == Player.TWO.value) == 1
    assert reward == env.reward_step
    assert not terminated and not truncated
    assert info['moves_made'] == 2


def test_env_invalid_action_truncates():
    env = ConnectFourEnv(opponent_depth=None)
    env.reset()
    for _ in range(ROWS):
        env.step(0)

    observation, reward, terminated, truncated, info = env.step(0)
    assert truncated and not terminated
    assert reward == env.reward_invalid_move
    assert info['invalid_move']
    assert 0 not in info['valid_moves']


def test_env_win_reward():
    env = ConnectFourEnv(opponent_depth=None)
    env.reset()
    for column in [0, 1, 0, 1, 0, 1]:
        env.step(column)

    observation, reward, terminated, truncated, info = env.step(0)
    assert terminated
    assert reward == env.reward_win
    assert info['game_result'] == 'PLAYER_ONE_WIN'
    assert info['winning_line'] == [(2, 0), (3, 0), (4, 0), (5, 0)]


def test_env_ascii_render():
    env = ConnectFourEnv(render_mode="ascii", opponent_depth=None)
    env.reset()
    env.step(2)
    assert "X" in env.render()
