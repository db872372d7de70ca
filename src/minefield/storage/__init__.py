"""
Score persistence.
"""
from .scores import Game, ScoreKey, ScoreOrder, ScoreStore

__all__ = [
    "Game",
    "ScoreKey",
    "ScoreOrder",
    "ScoreStore",
]
