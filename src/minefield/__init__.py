"""
Minefield - a Minesweeper engine with sessions, scores and translations.
"""
__version__ = "1.0.0"
