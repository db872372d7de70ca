"""
Unit tests for the terminal front end.
"""
import argparse
import json
import re
from pathlib import Path
from typing import Iterable, List

from conftest import WALL_MINES, scripted_mines
from minefield import cli
from minefield.config import AppConfig
from minefield.game import Difficulty, GameSession
from minefield.i18n import Translator


def scripted_input(lines: Iterable[str]):
    """input() replacement that feeds lines, then signals end of input."""
    pending: List[str] = list(lines)

    def read(prompt: str) -> str:
        if not pending:
            raise EOFError
        return pending.pop(0)

    return read


class ScriptedClock:
    """Clock that returns the given readings in turn, then holds the last."""

    def __init__(self, readings: Iterable[float]) -> None:
        self.readings: List[float] = list(readings)

    def __call__(self) -> float:
        if len(self.readings) > 1:
            return self.readings.pop(0)
        return self.readings[0]


def shown_times(out: str) -> List[int]:
    """Seconds displayed by each status bar, in order."""
    return [int(seconds) for seconds in re.findall(r"Time: (\d+)s", out)]


class TestRenderSession:
    """Test the status bar and board rendering."""

    def test_status_and_rulers(self) -> None:
        session = GameSession(Difficulty.EASY)
        session.toggle_flag(0, 0)
        text = cli.render_session(session, Translator("en"))
        lines = text.split("\n")
        assert lines[0] == "Easy | Mines: 9 | Time: 0s"
        assert lines[1] == "    0 1 2 3 4 5 6 7 8"
        assert lines[2] == " 0  F . . . . . . . ."
        assert len(lines) == 11


class TestPlay:
    """Test the interactive loop with scripted input."""

    def test_quit_immediately(self, tmp_path: Path, capsys) -> None:
        config = AppConfig(data_dir=tmp_path, language="en")
        cli.play(config, input_fn=scripted_input(["q"]))
        out = capsys.readouterr().out
        assert "Minesweeper" in out
        assert out.rstrip().endswith("Goodbye.")

    def test_invalid_commands_reported(self, tmp_path: Path, capsys) -> None:
        config = AppConfig(data_dir=tmp_path, language="en")
        cli.play(
            config,
            input_fn=scripted_input(["x", "r 1", "r a b", "r 9 9", ""]),
        )
        out = capsys.readouterr().out
        assert out.count("Invalid command.") == 3
        assert "That cell is off the board." in out

    def test_timer_counts_whole_seconds_from_first_reveal(
        self, tmp_path: Path, capsys
    ) -> None:
        """Seconds before the first reveal never reach the status bar."""
        config = AppConfig(data_dir=tmp_path, language="en")
        cli.play(
            config,
            input_fn=scripted_input(["f 0 0", "r 4 5", "f 0 8", "f 0 8"]),
            clock=ScriptedClock([0.0, 5.0, 7.0, 9.5, 10.4]),
            rng=scripted_mines(WALL_MINES),
        )
        out = capsys.readouterr().out
        assert shown_times(out) == [0, 0, 0, 2, 3]
        assert "Boom!" not in out

    def test_win_reports_elapsed_time(self, tmp_path: Path, capsys) -> None:
        config = AppConfig(data_dir=tmp_path, language="en")
        safe_rim = [f"r {row} {col}" for row in range(8) for col in (7, 8)]
        cli.play(
            config,
            input_fn=scripted_input(["r 4 2"] + safe_rim + ["r 8 7"]),
            clock=ScriptedClock([0.0, 100.0, 104.2]),
            rng=scripted_mines(WALL_MINES),
        )
        out = capsys.readouterr().out
        assert "You won in 4 seconds!" in out
        assert "New best time!" in out
        assert json.loads((tmp_path / "scores.json").read_text()) == {
            "minesweeper.easy": 4
        }

    def test_difficulty_switch(self, tmp_path: Path, capsys) -> None:
        config = AppConfig(data_dir=tmp_path, language="en")
        cli.play(config, input_fn=scripted_input(["d", "q"]))
        assert "Medium | Mines: 40" in capsys.readouterr().out


class TestScoreCommands:
    """Test the score listing commands."""

    def test_scores_empty(self, tmp_path: Path, capsys) -> None:
        cli.main(["--lang", "en", "--data-dir", str(tmp_path), "scores"])
        assert "No scores yet." in capsys.readouterr().out

    def test_scores_listed_and_cleared(self, tmp_path: Path, capsys) -> None:
        (tmp_path / "scores.json").write_text(
            json.dumps({"minesweeper.easy": 31, "snake": 12})
        )
        cli.main(["--lang", "en", "--data-dir", str(tmp_path), "scores"])
        out = capsys.readouterr().out
        assert "minesweeper (Easy)" in out
        assert "31" in out
        assert "snake" in out

        cli.main(["--lang", "en", "--data-dir", str(tmp_path), "reset-scores"])
        assert "Scores cleared." in capsys.readouterr().out
        assert json.loads((tmp_path / "scores.json").read_text()) == {}

    def test_build_config(self, tmp_path: Path) -> None:
        args = argparse.Namespace(
            lang="en", data_dir=str(tmp_path), difficulty="hard"
        )
        config = cli.build_config(args)
        assert config.difficulty == Difficulty.HARD
        assert config.scores_path == tmp_path / "scores.json"
