"""
cli.py - Command-line interface for the Connect Four engine

This module provides a CLI for playing against the minimax opponent (or a
friend), analyzing board positions, and benchmarking the engine.
"""

import argparse
import random
import sys
import time
from typing import Optional

from connect4_engine.debug import debug, DebugLevel
from connect4_engine.ai.evaluator import evaluate
from connect4_engine.ai.minimax import MinimaxPlayer
from connect4_engine.game.board import Board
from connect4_engine.game.detector import check_win, find_winning_line, is_draw
from connect4_engine.game.rules import ConnectFourGame, GameMode
from connect4_engine.utils import (COLS, DEFAULT_SEARCH_DEPTH, NO_LEGAL_MOVE,
                                   Connect4Error, Player)

QUIT = -1
RESTART = -2


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Register the options shared by every CLI command."""
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug mode (equivalent to --debug_level debug)')
    parser.add_argument('--debug_level',
                        choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
                        default=None, help='Set debug level')
    parser.add_argument('--depth', type=int, default=DEFAULT_SEARCH_DEPTH,
                        help=f'Search depth for the computer (default: {DEFAULT_SEARCH_DEPTH})')
    parser.add_argument('--mode', choices=[m.value for m in GameMode], default='robot',
                        help='robot (play against the computer) or friend (two humans)')
    parser.add_argument('--position', type=str,
                        help='Board position to analyze (42 comma-separated values, top row first)')
    parser.add_argument('--player', type=int, choices=[1, 2], default=None,
                        help='Player to analyze the position for (default: side to move)')
    parser.add_argument('--iterations', type=int, default=1000,
                        help='Number of iterations for benchmarking')


def configure_debug(args) -> None:
    """Configure debug level based on args.debug or args.debug_level."""
    if getattr(args, 'debug', False):
        debug.configure(level=DebugLevel.DEBUG)
    elif getattr(args, 'debug_level', None):
        debug.set_from_string(args.debug_level)


def side_to_move(board: Board) -> Player:
    """Player.ONE moves first, so equal piece counts mean it is ONE's turn."""
    ones = int((board.grid == Player.ONE.value).sum())
    twos = int((board.grid == Player.TWO.value).sum())
    return Player.ONE if ones <= twos else Player.TWO


class SimpleCLI:
    """Simple command-line interface for the Connect Four engine."""

    def __init__(self, args: Optional[argparse.Namespace] = None):
        """
        Initialize the CLI.

        Args:
            args: Already parsed arguments; parsed from sys.argv when omitted
        """
        self.args = args
        self.game: Optional[ConnectFourGame] = None

    def parse_args(self) -> None:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(description='Connect Four CLI')
        parser.add_argument('command', choices=['play', 'test', 'benchmark'],
                            help='play (interactive game), test (analyze a position), '
                                 'benchmark (performance testing)')
        add_common_arguments(parser)
        self.args = parser.parse_args()

    def run(self) -> None:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args()
        configure_debug(self.args)

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'test':
            self.test_position()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            sys.exit(1)

    def play_game(self) -> None:
        """Play a Connect Four game interactively."""
        mode = GameMode(self.args.mode)
        self.game = ConnectFourGame(mode=mode, depth=self.args.depth)

        print("Starting a new Connect Four game!")
        print("Enter column number (0-6) to make a move.")
        print("Other commands: 'q' to quit, 'r' to restart.")
        print(self.game.render())

        while not self.game.is_game_over():
            if self.game.is_ai_turn():
                print("Computer is thinking...")
                column = self.game.make_ai_move()
                print(f"Computer plays column {column}")
                print(self.game.render())
                continue

            move = self.get_human_move()
            if move is None:
                continue
            elif move == QUIT:
                print("Quitting game.")
                return
            elif move == RESTART:
                self.game.reset()
                print("Game restarted.")
                print(self.game.render())
                continue

            if self.game.make_move(move):
                print(self.game.render())
            else:
                print(f"Column {move} is full, pick another one.")

        print("Game over!")
        winner = self.game.get_winner()
        if winner is None:
            print("It's a draw!")
        elif mode == GameMode.ROBOT:
            print("You win! Congratulations!" if winner == Player.ONE
                  else "Computer wins! Better luck next time.")
        else:
            print(f"Player {winner} wins!")
        if winner is not None:
            print(f"Winning line: {self.game.winning_cells}")

    def get_human_move(self) -> Optional[int]:
        """
        Get a move from human player input.

        Returns:
            Column index, or special command code, or None if invalid input
        """
        player = self.game.get_current_player()
        user_input = input(f"Player {player} move (columns 0-{COLS - 1}, q/r): ").strip().lower()

        if user_input == 'q':
            return QUIT
        elif user_input == 'r':
            return RESTART

        try:
            move = int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or special command.")
            return None
        if not 0 <= move < COLS:
            print(f"Column must be between 0 and {COLS - 1}.")
            return None
        return move

    def test_position(self) -> None:
        """Analyze a specific board position."""
        if not self.args.position:
            print("Please provide a position string with --position")
            return

        try:
            board = Board.from_position(self.args.position)
        except Connect4Error as e:
            print(f"Error parsing position: {e}")
            return

        print("Loaded position:")
        print(board.render())

        result = find_winning_line(board)
        if result.won:
            winner = board.cell(*result.cells[0])
            print(f"Win for {winner} detected at {result.cells}")
            return
        print("No win detected for any player")

        if is_draw(board):
            print("Board is full: draw")
            return

        player = Player(self.args.player) if self.args.player else side_to_move(board)
        print(f"Empty spaces: {board.grid.size - board.move_count}")
        print(f"Valid moves: {board.get_valid_moves()}")
        print(f"Evaluation for {player}: {evaluate(board, player)}")

        ai = MinimaxPlayer(depth=self.args.depth)
        start = time.perf_counter()
        column, score = ai.analyze(board, player)
        elapsed = time.perf_counter() - start
        print(f"Suggested move for {player}: column {column} (score {score}, "
              f"{ai.nodes_evaluated} nodes, {elapsed:.3f}s)")

    def benchmark(self) -> None:
        """Benchmark the performance of the engine."""
        iterations = self.args.iterations
        print(f"Running benchmark with {iterations} iterations...")

        # Random playouts exercise move application and win checks
        debug.start_timer("moves")
        moves_made = 0
        games_played = 0
        while moves_made < iterations:
            board, player = Board(), Player.ONE
            games_played += 1
            while True:
                column = random.choice(board.get_valid_moves())
                board, row = board.apply_move(column, player)
                moves_made += 1
                if check_win(board, row, column, player).won or is_draw(board):
                    break
                player = player.other()
        moves_time = debug.end_timer("moves", "cli")
        print(f"Making {moves_made} moves in {games_played} games: {moves_time:.6f} seconds total, "
              f"{moves_time / moves_made * 1000:.6f} ms per move")

        debug.start_timer("evaluate")
        for _ in range(iterations):
            evaluate(board, Player.ONE)
        eval_time = debug.end_timer("evaluate", "cli")
        print(f"Evaluating {iterations} positions: {eval_time:.6f} seconds total, "
              f"{eval_time / iterations * 1000:.6f} ms per evaluation")

        ai = MinimaxPlayer(depth=self.args.depth)
        debug.start_timer("search")
        column = ai.get_move(Board(), Player.ONE)
        search_time = debug.end_timer("search", "cli")
        if column != NO_LEGAL_MOVE:
            print(f"Depth {self.args.depth} search from the empty board: column {column}, "
                  f"{ai.nodes_evaluated} nodes, {search_time:.6f} seconds")


def main():
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    cli.run()


if __name__ == "__main__":
    main()
