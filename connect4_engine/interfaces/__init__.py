"""
connect4_engine.interfaces - User interfaces for Connect Four

This package contains the command-line interface used to play against the
engine and to analyze positions.
"""

# Don't import anything here to avoid circular imports
__all__ = []
