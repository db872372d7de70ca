"""
Minefield game module.

Provides the core engine: cells, board, game session, and the
Gymnasium environment built on them.
"""
from .cell import Cell, CellState, MINE
from .board import (
    Board,
    BoardConfig,
    Difficulty,
    RevealOutcome,
    EASY,
    MEDIUM,
    HARD,
    create_board,
    render_ansi,
)
from .random_source import RandomSource, NumpyRandomSource
from .session import GameSession, SessionStatus
from .environment import MinesweeperEnv

__all__ = [
    "Cell",
    "CellState",
    "MINE",
    "Board",
    "BoardConfig",
    "Difficulty",
    "RevealOutcome",
    "EASY",
    "MEDIUM",
    "HARD",
    "create_board",
    "render_ansi",
    "RandomSource",
    "NumpyRandomSource",
    "GameSession",
    "SessionStatus",
    "MinesweeperEnv",
]
