#!/usr/bin/env python3
"""
run.py - Main entry point for the Connect Four engine
"""

import argparse

from connect4_engine.interfaces.cli import SimpleCLI, add_common_arguments


def main():
    """Main entry point for the Connect Four engine."""
    parser = argparse.ArgumentParser(
        description='Connect Four with a minimax opponent',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
    Examples:

    # Play against the computer (default search depth 5)
    python run.py play

    # Play against an easier computer
    python run.py play --depth 3

    # Play with two human players
    python run.py play --mode friend

    # Analyze a position: winner, evaluation and suggested move
    python run.py test --position 0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,2,2,0,0,0,0,0,1,1,1,0,0,0,0

    # Benchmark move application, evaluation and search
    python run.py benchmark --iterations 5000 --depth 4

    # Show the search log of every computer move
    python run.py play --debug_level info
    """
    )
    parser.add_argument('command', choices=['play', 'test', 'benchmark'],
                        help='play (interactive game), test (analyze a position), '
                             'benchmark (performance testing)')
    add_common_arguments(parser)

    args = parser.parse_args()
    SimpleCLI(args).run()


if __name__ == "__main__":
    main()
