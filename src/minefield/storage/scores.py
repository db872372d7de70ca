"""
High-score storage shared by the arcade games.

Scores are addressed by a typed key (game, and difficulty for
Minesweeper) and persisted as a JSON object. Most games keep the
highest score; Minesweeper keeps the lowest time.
"""
import json
import sys
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple

from ..game.board import Difficulty


# ============================================================================
# Keys
# ============================================================================

class Game(Enum):
    """Games that keep a score."""

    SNAKE = "snake"
    PONG = "pong"
    GAME_2048 = "2048"
    BREAKOUT = "breakout"
    FLAPPY = "flappy"
    MINESWEEPER = "minesweeper"
    WORDLE = "wordle"


class ScoreOrder(Enum):
    """Which direction counts as an improvement."""

    HIGHER_IS_BETTER = auto()
    LOWER_IS_BETTER = auto()

    def improves(self, new: int, current: Optional[int]) -> bool:
        if current is None:
            return True
        if self == ScoreOrder.LOWER_IS_BETTER:
            return new < current
        return new > current


@dataclass(frozen=True)
class ScoreKey:
    """
    Address of one stored score.

    Attributes:
        game: Which game the score belongs to.
        difficulty: Board preset; required for Minesweeper, absent otherwise.
    """

    game: Game
    difficulty: Optional[Difficulty] = None

    def __post_init__(self) -> None:
        if self.game == Game.MINESWEEPER and self.difficulty is None:
            raise ValueError("Minesweeper scores need a difficulty")
        if self.game != Game.MINESWEEPER and self.difficulty is not None:
            raise ValueError(f"{self.game.value} scores have no difficulty")

    @property
    def order(self) -> ScoreOrder:
        # Times: a faster clear is the better one.
        if self.game == Game.MINESWEEPER:
            return ScoreOrder.LOWER_IS_BETTER
        return ScoreOrder.HIGHER_IS_BETTER

    @property
    def name(self) -> str:
        """Name used in the JSON file."""
        if self.difficulty is None:
            return self.game.value
        return f"{self.game.value}.{self.difficulty.value}"

    @classmethod
    def from_name(cls, name: str) -> "ScoreKey":
        game, _, difficulty = name.partition(".")
        return cls(Game(game), Difficulty(difficulty) if difficulty else None)


# ============================================================================
# Store
# ============================================================================

def _score_value(value) -> int:
    """Scores are stored as plain JSON integers."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"score must be an integer, not {value!r}")
    return value


class ScoreStore:
    """
    Best scores keyed by ScoreKey.

    With a path, every change is written straight to disk; without one
    the scores live only as long as the object.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else None
        self._scores: Dict[ScoreKey, int] = {}
        self._load()

    def _load(self) -> None:
        """Read scores from disk; a missing file is an empty store."""
        if self.path is None or not self.path.exists():
            return
        try:
            with open(self.path, encoding="utf-8") as f:
                raw = json.load(f)
            self._scores = {
                ScoreKey.from_name(name): _score_value(value)
                for name, value in raw.items()
            }
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            print(
                f"Warning: ignoring unreadable score file {self.path}: {exc}",
                file=sys.stderr,
            )
            self._scores = {}

    def _save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {key.name: value for key, value in self._scores.items()}
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True)

    def get(self, key: ScoreKey) -> Optional[int]:
        """Stored score for key, or None if nothing was recorded yet."""
        return self._scores.get(key)

    def set(self, key: ScoreKey, value: int) -> None:
        """Store value unconditionally."""
        self._scores[key] = value
        self._save()

    def submit(self, key: ScoreKey, value: int) -> bool:
        """
        Store value only if it beats the current best for key.

        Returns:
            True if the score was stored.
        """
        if not key.order.improves(value, self.get(key)):
            return False
        self.set(key, value)
        return True

    def get_best_time(self, difficulty: Difficulty) -> Optional[int]:
        return self.get(ScoreKey(Game.MINESWEEPER, difficulty))

    def set_best_time(self, difficulty: Difficulty, seconds: int) -> None:
        self.set(ScoreKey(Game.MINESWEEPER, difficulty), seconds)

    def items(self) -> Iterator[Tuple[ScoreKey, int]]:
        return iter(sorted(self._scores.items(), key=lambda kv: kv[0].name))

    def clear(self) -> None:
        self._scores = {}
        self._save()
