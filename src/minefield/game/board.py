"""
Board module for the Minefield engine.

Implements the grid with lazy mine placement, adjacency counts,
flood-fill revealing, flagging and chording. The board knows nothing
about turns, timers or scores; GameSession layers those on top.
"""
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, List, Tuple, Optional

import numpy as np

from .cell import Cell, CellState, MINE
from .random_source import RandomSource


# ============================================================================
# Constants
# ============================================================================

class RevealOutcome(Enum):
    """What a reveal or chord gesture did to the board."""

    IGNORED = auto()
    REVEALED = auto()
    EXPLODED = auto()


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        mines: Total mines to place.
    """

    rows: int = 9
    cols: int = 9
    mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise ValueError("Board dimensions must be positive")
        if self.mines < 0:
            raise ValueError("Number of mines cannot be negative")
        max_mines = self.rows * self.cols - 1
        if self.mines > max_mines:
            raise ValueError(f"Too many mines (max {max_mines})")

    @property
    def safe_cells(self) -> int:
        return self.rows * self.cols - self.mines


# Preset difficulty levels
EASY = BoardConfig(9, 9, 10)
MEDIUM = BoardConfig(16, 16, 40)
HARD = BoardConfig(16, 30, 99)


class Difficulty(Enum):
    """Named presets, in the order the difficulty selector cycles them."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def config(self) -> BoardConfig:
        return _PRESETS[self]

    def next(self) -> "Difficulty":
        """The difficulty that follows this one (wrapping around)."""
        members = list(Difficulty)
        return members[(members.index(self) + 1) % len(members)]


_PRESETS = {
    Difficulty.EASY: EASY,
    Difficulty.MEDIUM: MEDIUM,
    Difficulty.HARD: HARD,
}


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Manages the grid of cells, mine placement and the reveal, flag and
    chord gestures. Coordinates must be in bounds; the UI only ever
    supplies valid ones.
    """

    config: BoardConfig = field(default_factory=lambda: BoardConfig())
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _mines_placed: bool = False
    _safe_revealed: int = 0
    _flag_count: int = 0

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self._init_grid()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create a grid of covered, valueless cells."""
        self._grid = [
            [Cell() for _ in range(self.config.cols)]
            for _ in range(self.config.rows)
        ]
        self._mines_placed = False
        self._safe_revealed = 0
        self._flag_count = 0

    def place_mines(
        self, exclude_row: int, exclude_col: int, rng: RandomSource
    ) -> None:
        """
        Scatter the configured number of mines, keeping one cell clear.

        Coordinates are drawn from the whole grid; draws landing on the
        excluded cell or on an existing mine are thrown away.

        Args:
            exclude_row: Row of the cell that must stay mine-free.
            exclude_col: Column of the cell that must stay mine-free.
            rng: Source of uniformly random integers.
        """
        assert self.in_bounds(exclude_row, exclude_col)
        placed = 0
        while placed < self.config.mines:
            row = rng.next_below(self.config.rows)
            col = rng.next_below(self.config.cols)
            if (row, col) == (exclude_row, exclude_col):
                continue
            cell = self._grid[row][col]
            if cell.is_mine:
                continue
            cell.value = MINE
            placed += 1
        self._calculate_adjacent_mines()
        self._mines_placed = True

    def place_mines_at(self, positions: Iterable[Tuple[int, int]]) -> None:
        """
        Lay mines on an exact set of cells instead of sampling them.

        Raises:
            ValueError: If the number of distinct positions differs from
                the configured mine count.
        """
        unique = set(positions)
        if len(unique) != self.config.mines:
            raise ValueError(
                f"Expected {self.config.mines} mine positions, got {len(unique)}"
            )
        for row, col in unique:
            assert self.in_bounds(row, col)
            self._grid[row][col].value = MINE
        self._calculate_adjacent_mines()
        self._mines_placed = True

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                cell = self._grid[row][col]
                if not cell.is_mine:
                    cell.value = self._count_adjacent_mines(row, col)

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for the up-to-8 surrounding cells.
        """
        result = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.in_bounds(new_row, new_col):
                    result.append((new_row, new_col))
        return result

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.cols

    # ========================================================================
    # Player Gestures (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealOutcome:
        """
        Uncover a cell, flooding outwards from empty cells.

        A cell with no mined neighbours uncovers every hidden neighbour,
        which in turn floods if it is also empty. The flood runs off an
        explicit work-list so its depth never depends on board size.

        Returns:
            IGNORED if the cell was already revealed or is flagged,
            EXPLODED if it held a mine, REVEALED otherwise.
        """
        assert self.in_bounds(row, col)
        cell = self._grid[row][col]
        if not cell.reveal():
            return RevealOutcome.IGNORED
        if cell.is_mine:
            return RevealOutcome.EXPLODED

        self._safe_revealed += 1
        if cell.value == 0:
            self._flood_from(row, col)
        return RevealOutcome.REVEALED

    def _flood_from(self, row: int, col: int) -> None:
        """Reveal the zero region around (row, col) and its numbered rim."""
        pending = deque(self.neighbors(row, col))
        while pending:
            next_row, next_col = pending.popleft()
            cell = self._grid[next_row][next_col]
            # Neighbours of a zero cell are never mines.
            if not cell.reveal():
                continue
            self._safe_revealed += 1
            if cell.value == 0:
                pending.extend(
                    position
                    for position in self.neighbors(next_row, next_col)
                    if self._grid[position[0]][position[1]].is_hidden
                )

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a cell.

        Returns:
            True if flag was toggled, False if the cell is revealed.
        """
        assert self.in_bounds(row, col)
        cell = self._grid[row][col]
        if not cell.toggle_flag():
            return False
        self._flag_count += 1 if cell.is_flagged else -1
        return True

    def chord(self, row: int, col: int) -> RevealOutcome:
        """
        Reveal every hidden neighbour of a satisfied number.

        Only applies to a revealed, numbered cell whose flagged-neighbour
        count equals its number. Anything else is ignored without
        touching the board.

        Returns:
            EXPLODED if any uncovered neighbour was a mine, REVEALED if
            at least one cell was uncovered, IGNORED otherwise.
        """
        if not self._can_chord(row, col):
            return RevealOutcome.IGNORED

        outcome = RevealOutcome.IGNORED
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            result = self.reveal(neighbor_row, neighbor_col)
            if result == RevealOutcome.EXPLODED:
                outcome = RevealOutcome.EXPLODED
            elif result == RevealOutcome.REVEALED and outcome != RevealOutcome.EXPLODED:
                outcome = RevealOutcome.REVEALED
        return outcome

    def _can_chord(self, row: int, col: int) -> bool:
        """Check if chord action is valid."""
        assert self.in_bounds(row, col)
        cell = self._grid[row][col]
        if not cell.is_revealed or cell.is_mine or cell.value == 0:
            return False
        return self._count_adjacent_flags(row, col) == cell.value

    def _count_adjacent_flags(self, row: int, col: int) -> int:
        """Count flagged cells adjacent to position."""
        count = 0
        for neighbor_row, neighbor_col in self.neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_flagged:
                count += 1
        return count

    def check_win(self) -> bool:
        """True once every non-mine cell is revealed. Flags don't matter."""
        return self._safe_revealed == self.config.safe_cells

    # ========================================================================
    # End-of-game Display
    # ========================================================================

    def reveal_all_mines(self) -> None:
        """Uncover every unflagged mine after a loss; flags stay put."""
        for row in self._grid:
            for cell in row:
                if cell.is_mine and cell.is_hidden:
                    cell.state = CellState.REVEALED

    def flag_all_mines(self) -> None:
        """Flag every mine still covered, after a win."""
        for row in self._grid:
            for cell in row:
                if cell.is_mine and cell.is_hidden:
                    cell.state = CellState.FLAGGED
                    self._flag_count += 1

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def mines_placed(self) -> bool:
        return self._mines_placed

    @property
    def revealed_count(self) -> int:
        """Number of non-mine cells uncovered so far."""
        return self._safe_revealed

    @property
    def flag_count(self) -> int:
        return self._flag_count

    @property
    def mines_remaining(self) -> int:
        """Mines left to find by the flag counter; negative when over-flagged."""
        return self.config.mines - self._flag_count

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.in_bounds(row, col):
            return None
        return self._grid[row][col]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array for renderers and agents.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.config.rows, self.config.cols), dtype=np.int8)
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                obs[row, col] = self._grid[row][col].to_observation()
        return obs

    def get_hidden_cells(self) -> List[Tuple[int, int]]:
        """Positions that can still be revealed or flagged."""
        hidden = []
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                if self._grid[row][col].state == CellState.HIDDEN:
                    hidden.append((row, col))
        return hidden

    def reset(self) -> None:
        """Clear the board back to covered, mine-free cells."""
        self._init_grid()


def create_board(rows: int, cols: int, mines: int = 0) -> Board:
    """Build a covered board of the given size."""
    return Board(BoardConfig(rows, cols, mines))


def render_ansi(board: Board) -> str:
    """Render board as ASCII text, one line per row."""
    lines = []
    obs = board.get_observation()

    for row in range(board.config.rows):
        row_str = ""
        for col in range(board.config.cols):
            val = obs[row, col]
            if val == -1:
                row_str += "."
            elif val == -2:
                row_str += "F"
            elif val == 9:
                row_str += "*"
            elif val == 0:
                row_str += " "
            else:
                row_str += str(val)
            row_str += " "
        lines.append(row_str.rstrip())

    return "\n".join(lines)
