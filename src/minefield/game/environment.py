"""
Gymnasium environment wrapper for the Minefield engine.

Lets automated players and renderers drive a GameSession through the
standard reset/step interface.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Difficulty, RevealOutcome, render_ansi
from .random_source import NumpyRandomSource
from .session import GameSession


# ============================================================================
# Constants
# ============================================================================

REVEAL = 0
FLAG = 1
CHORD = 2
GESTURES = (REVEAL, FLAG, CHORD)


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine (after a loss)

    Actions:
        Discrete action space of size 3 * rows * cols.
        Action i is gesture i // (rows * cols) (reveal, flag, chord)
        applied to cell index i % (rows * cols), row-major.

    Rewards:
        - +1 for a gesture that changed the board
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an ignored gesture
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.EASY,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            difficulty: Board preset (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.difficulty = difficulty
        self.config = difficulty.config
        self.session = GameSession(difficulty)
        self.render_mode = render_mode
        self._cells = self.config.rows * self.config.cols

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(len(GESTURES) * self._cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game.

        Args:
            seed: Seeds mine placement for this and later games.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.session.rng = NumpyRandomSource(seed)
        self.session.reset()
        self._steps = 0

        return self.session.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Apply one gesture.

        Args:
            action: Encoded (gesture, cell) index.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        gesture, row, col = self.decode_action(action)
        self._steps += 1

        reward = self._apply(gesture, row, col)
        observation = self.session.board.get_observation()
        terminated = self.session.is_finished

        return observation, reward, terminated, False, self._get_info()

    def decode_action(self, action: int) -> Tuple[int, int, int]:
        """Split a flat action index into (gesture, row, col)."""
        gesture, cell = divmod(int(action), self._cells)
        row, col = divmod(cell, self.config.cols)
        return gesture, row, col

    def encode_action(self, gesture: int, row: int, col: int) -> int:
        return gesture * self._cells + row * self.config.cols + col

    def _apply(self, gesture: int, row: int, col: int) -> float:
        """Perform a gesture on the session and score it."""
        if gesture == FLAG:
            return 1.0 if self.session.toggle_flag(row, col) else -0.1

        if gesture == REVEAL:
            outcome = self.session.reveal(row, col)
        else:
            outcome = self.session.chord(row, col)

        if outcome == RevealOutcome.IGNORED:
            return -0.1
        if self.session.won:
            return 10.0
        if self.session.over:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        return {
            "steps": self._steps,
            "revealed": self.session.board.revealed_count,
            "total_safe": self.config.safe_cells,
            "mines_remaining": self.session.mines_remaining,
            "game_state": self.session.status.name,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_ansi(self.session.board)
        if self.render_mode == "human":
            print(render_ansi(self.session.board))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of gestures that would change the board.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.session.is_finished:
            return mask
        board = self.session.board
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                cell = board.get_cell(row, col)
                if cell.is_hidden:
                    mask[self.encode_action(REVEAL, row, col)] = True
                if not cell.is_revealed:
                    mask[self.encode_action(FLAG, row, col)] = True
                elif cell.value > 0 and self.session.started:
                    mask[self.encode_action(CHORD, row, col)] = True
        return mask
