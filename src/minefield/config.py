"""
Application configuration.
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .game.board import Difficulty
from .i18n.translator import DEFAULT_LANGUAGE


def default_data_dir() -> Path:
    """Directory holding user data; MINEFIELD_HOME overrides ~/.minefield."""
    env = os.environ.get("MINEFIELD_HOME")
    if env:
        return Path(env)
    return Path.home() / ".minefield"


@dataclass
class AppConfig:
    """Settings for the terminal front end."""

    # Storage
    data_dir: Path = field(default_factory=default_data_dir)
    scores_file: Optional[Path] = None

    # Presentation
    language: str = DEFAULT_LANGUAGE
    difficulty: Difficulty = Difficulty.EASY

    @property
    def scores_path(self) -> Path:
        if self.scores_file is not None:
            return self.scores_file
        return self.data_dir / "scores.json"
