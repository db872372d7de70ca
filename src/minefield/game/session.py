"""
Game session for the Minefield engine.

A session owns one board and walks it through a single game:
mines are laid on the first reveal, the timer runs while the game is
in progress, and a win may set a new best time for the difficulty.
"""
from enum import Enum, auto
from typing import Optional, Protocol

from .board import Board, Difficulty, RevealOutcome
from .random_source import NumpyRandomSource, RandomSource


# ============================================================================
# Constants
# ============================================================================

class SessionStatus(Enum):
    """Lifecycle of a single game."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    LOST = auto()
    WON = auto()


class BestTimeStore(Protocol):
    """Persistence used to record best times per difficulty."""

    def get_best_time(self, difficulty: Difficulty) -> Optional[int]:
        ...

    def set_best_time(self, difficulty: Difficulty, seconds: int) -> None:
        ...


# ============================================================================
# Session Class
# ============================================================================

class GameSession:
    """
    One game of Minesweeper at a fixed difficulty.

    Gestures made after the game has ended are ignored rather than
    rejected. Choosing another difficulty means building a new session.
    """

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.EASY,
        rng: Optional[RandomSource] = None,
        scores: Optional[BestTimeStore] = None,
    ) -> None:
        """
        Initialize the session.

        Args:
            difficulty: Preset the board is built from.
            rng: Randomness for mine placement (NumPy, unseeded, if omitted).
            scores: Where best times are kept; None disables recording.
        """
        self.difficulty = difficulty
        self.rng = rng or NumpyRandomSource()
        self.scores = scores
        self.board = Board(difficulty.config)
        self.status = SessionStatus.NOT_STARTED
        self.elapsed = 0
        self.new_record = False

    # ========================================================================
    # Gestures
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealOutcome:
        """
        Uncover a cell; the first reveal of a game also lays the mines.

        Returns:
            The board's outcome, or IGNORED once the game is over.
        """
        if self.is_finished:
            return RevealOutcome.IGNORED
        cell = self.board.get_cell(row, col)
        assert cell is not None
        if cell.is_flagged:
            return RevealOutcome.IGNORED

        if self.status == SessionStatus.NOT_STARTED:
            self._start(row, col)

        outcome = self.board.reveal(row, col)
        self._settle(outcome)
        return outcome

    def toggle_flag(self, row: int, col: int) -> bool:
        """Flag or unflag a covered cell. Allowed before the first reveal."""
        if self.is_finished:
            return False
        return self.board.toggle_flag(row, col)

    def chord(self, row: int, col: int) -> RevealOutcome:
        """Reveal around a satisfied number; ignored unless in progress."""
        if self.status != SessionStatus.IN_PROGRESS:
            return RevealOutcome.IGNORED
        outcome = self.board.chord(row, col)
        self._settle(outcome)
        return outcome

    def tick(self) -> None:
        """Advance the timer by one second while the game is running."""
        if self.status == SessionStatus.IN_PROGRESS:
            self.elapsed += 1

    def reset(self) -> None:
        """Start over at the same difficulty with a fresh board."""
        self.board = Board(self.difficulty.config)
        self.status = SessionStatus.NOT_STARTED
        self.elapsed = 0
        self.new_record = False

    # ========================================================================
    # Transitions
    # ========================================================================

    def _start(self, row: int, col: int) -> None:
        self.board.place_mines(row, col, self.rng)
        self.status = SessionStatus.IN_PROGRESS
        self.elapsed = 0

    def _settle(self, outcome: RevealOutcome) -> None:
        """Move to a terminal state if the last gesture ended the game."""
        if outcome == RevealOutcome.EXPLODED:
            self.status = SessionStatus.LOST
            self.board.reveal_all_mines()
        elif outcome == RevealOutcome.REVEALED and self.board.check_win():
            self.status = SessionStatus.WON
            self.board.flag_all_mines()
            self._record_time()

    def _record_time(self) -> None:
        """Keep the elapsed time if it beats the stored best (lower wins)."""
        if self.scores is None:
            return
        best = self.scores.get_best_time(self.difficulty)
        if best is None or self.elapsed < best:
            self.scores.set_best_time(self.difficulty, self.elapsed)
            self.new_record = True

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def started(self) -> bool:
        return self.status != SessionStatus.NOT_STARTED

    @property
    def over(self) -> bool:
        """True when the game was lost."""
        return self.status == SessionStatus.LOST

    @property
    def won(self) -> bool:
        return self.status == SessionStatus.WON

    @property
    def is_finished(self) -> bool:
        return self.status in (SessionStatus.LOST, SessionStatus.WON)

    @property
    def mines_remaining(self) -> int:
        return self.board.mines_remaining
