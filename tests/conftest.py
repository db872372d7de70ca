"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Iterable, List, Tuple

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield.game import Board, BoardConfig, Cell, Difficulty, GameSession
from minefield.storage import ScoreStore


# ============================================================================
# Randomness
# ============================================================================

class ScriptedRandom:
    """RandomSource that replays a fixed list of integers."""

    def __init__(self, values: Iterable[int]) -> None:
        self.values: List[int] = list(values)
        self.calls = 0

    def next_below(self, n: int) -> int:
        value = self.values[self.calls]
        self.calls += 1
        assert 0 <= value < n
        return value


def scripted_mines(positions: Iterable[Tuple[int, int]]) -> ScriptedRandom:
    """Random source that places mines exactly on positions, in order."""
    values: List[int] = []
    for row, col in positions:
        values.extend((row, col))
    return ScriptedRandom(values)


# Column 6 walled off with mines, plus the bottom-right corner.
WALL_MINES = [(row, 6) for row in range(9)] + [(8, 8)]


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board with 10 mines."""
    return Board()


@pytest.fixture
def small_board() -> Board:
    """Create a small 3x3 board with 1 mine for testing."""
    return Board(BoardConfig(3, 3, 1))


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    board = Board(BoardConfig(5, 5, 0))
    board.place_mines_at([])
    return board


@pytest.fixture
def wall_board() -> Board:
    """9x9 board with mines down column 6 and at (8, 8)."""
    board = Board(BoardConfig(9, 9, 10))
    board.place_mines_at(WALL_MINES)
    return board


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(value=-1)


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    cell = Cell(value=3)
    cell.reveal()
    return cell


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def scores() -> ScoreStore:
    """In-memory score store."""
    return ScoreStore()


@pytest.fixture
def wall_session(scores: ScoreStore) -> GameSession:
    """Easy session whose mines land on WALL_MINES."""
    return GameSession(
        Difficulty.EASY, rng=scripted_mines(WALL_MINES), scores=scores
    )
