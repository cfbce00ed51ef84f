"""
rules.py - Turn management and Gymnasium environment for Connect Four

This module provides:
1. ConnectFourGame, the turn controller that owns the authoritative board,
   whose turn it is and the result, and drives the stateless engine
2. ConnectFourEnv, a gymnasium-compatible environment built on top of it
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from connect4_engine.debug import debug
from connect4_engine.ai.minimax import MinimaxPlayer
from connect4_engine.game.board import Board, create_empty_board
from connect4_engine.game.detector import check_win, is_draw
from connect4_engine.utils import (ROWS, COLS, DEFAULT_SEARCH_DEPTH, NO_LEGAL_MOVE,
                                   ColumnFullError, GameResult, Player)


class GameMode(Enum):
    FRIEND = 'friend'  # Two humans share the board
    ROBOT = 'robot'    # Player TWO is played by the search


class ConnectFourGame:
    """
    High-level Connect Four game manager.

    Holds one game's state between calls into the engine. In robot mode the
    computer always plays Player.TWO.
    """

    def __init__(self, mode: GameMode = GameMode.FRIEND,
                 depth: int = DEFAULT_SEARCH_DEPTH,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize a new Connect Four game.

        Args:
            mode: Friend (two humans) or robot (computer plays Player.TWO)
            depth: Search depth used for the computer's moves
            rng: Generator for the search's random fallback
        """
        debug.debug(f"Initializing ConnectFourGame in {mode.value} mode", "game")
        self.mode = mode
        self.ai = MinimaxPlayer(depth=depth, rng=rng)
        self.ai_player = Player.TWO
        self.reset()

    def reset(self) -> None:
        """Reset the game to initial state, keeping the mode."""
        debug.debug("Resetting game", "game")
        self.board = create_empty_board()
        self.current_player = Player.ONE
        self.game_result = GameResult.IN_PROGRESS
        self.winning_cells: List[Tuple[int, int]] = []
        self.last_move: Optional[Tuple[int, int]] = None

    def set_mode(self, mode: GameMode) -> None:
        """Switch game mode; this always starts a new game."""
        self.mode = mode
        self.reset()

    def is_ai_turn(self) -> bool:
        return self.mode == GameMode.ROBOT and self.current_player == self.ai_player

    def make_move(self, column: int) -> bool:
        """
        Play ``column`` for the human whose turn it is.

        Args:
            column: Column to place a piece (0-indexed)

        Returns:
            True if the move was played; False when the game is over, it is
            the computer's turn, or the column is full
        """
        if self.is_game_over():
            debug.debug(f"Ignoring move {column}: game is over", "game")
            return False
        if self.is_ai_turn():
            debug.debug(f"Ignoring move {column}: waiting for the computer", "game")
            return False
        return self._play(column)

    def make_ai_move(self) -> Optional[int]:
        """
        Let the computer play its move.

        Returns:
            The column played, or None when it is not the computer's turn
        """
        if self.is_game_over() or not self.is_ai_turn():
            return None

        column = self.ai.get_move(self.board, self.ai_player)
        if column == NO_LEGAL_MOVE:
            return None
        self._play(column)
        return column

    def _play(self, column: int) -> bool:
        player = self.current_player
        try:
            self.board, row = self.board.apply_move(column, player)
        except ColumnFullError as e:
            debug.debug(str(e), "game")
            return False

        self.last_move = (row, column)
        result = check_win(self.board, row, column, player)
        if result.won:
            self.game_result = GameResult.win_for(player)
            self.winning_cells = result.cells
            debug.info(f"Player {player} wins with {result.cells}", "game")
        elif is_draw(self.board):
            self.game_result = GameResult.DRAW
            debug.info("Game ends in a draw", "game")
        else:
            self.current_player = player.other()
        return True

    def is_game_over(self) -> bool:
        return self.game_result.is_game_over()

    def get_winner(self) -> Optional[Player]:
        """
        Get the winner of the game.

        Returns:
            The winning player, or None if no winner yet or draw
        """
        if self.game_result == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        elif self.game_result == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    def get_current_player(self) -> Player:
        return self.current_player

    def get_valid_moves(self) -> List[int]:
        if self.is_game_over():
            return []
        return self.board.get_valid_moves()

    def render(self) -> str:
        return self.board.render()


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    The agent plays Player.ONE. With an ``opponent_depth`` the minimax player
    answers every agent move as Player.TWO; without one the agent moves for
    both sides in turn. Rewards are from Player.ONE's point of view.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None,
                 opponent_depth: Optional[int] = 2):
        """
        Initialize the Connect Four environment.

        Args:
            render_mode: Mode for rendering the environment
            opponent_depth: Search depth of the built-in opponent, None for no opponent
        """
        debug.debug("Initializing ConnectFourEnv", "env")

        self.action_space = spaces.Discrete(COLS)
        # Observation space: 6x7 board with 3 possible values (0, 1, 2)
        self.observation_space = spaces.Box(low=0, high=2, shape=(ROWS, COLS), dtype=np.int8)

        self.render_mode = render_mode
        self.opponent_depth = opponent_depth
        mode = GameMode.ROBOT if opponent_depth is not None else GameMode.FRIEND
        self.game = ConnectFourGame(mode=mode, depth=opponent_depth or DEFAULT_SEARCH_DEPTH)

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01  # Small negative reward to encourage faster solutions

    def reset(self, seed: Optional[int] = None,
              options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to initial state.

        Returns:
            Initial observation and info dictionary
        """
        super().reset(seed=seed)
        self.game.ai.rng = self.np_random
        self.game.reset()

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        """
        Take a step in the environment by making a move.

        Args:
            action: Column to place a piece (0-indexed)

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        if not self.game.make_move(int(action)):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        opponent_column = self.game.make_ai_move()
        if opponent_column is not None:
            debug.debug(f"Opponent answers with column {opponent_column}", "env")

        reward = self.reward_step
        terminated = self.game.is_game_over()
        if self.game.game_result == GameResult.PLAYER_ONE_WIN:
            reward = self.reward_win
        elif self.game.game_result == GameResult.PLAYER_TWO_WIN:
            reward = self.reward_lose
        elif self.game.game_result == GameResult.DRAW:
            reward = self.reward_draw
        if terminated:
            debug.info(f"Episode over: {self.game.game_result.name}", "env")

        if self.render_mode == "human":
            self.render()
        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.game.render()
        if self.render_mode == "human":
            print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.board.get_state()

    def _get_info(self) -> Dict[str, Any]:
        valid_moves = self.game.get_valid_moves()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.game.current_player.value,
            'game_result': self.game.game_result.name,
            'moves_made': self.game.board.move_count,
            'winning_line': list(self.game.winning_cells),
            'last_move': self.game.last_move,
        }
