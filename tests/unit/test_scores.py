"""
Unit tests for ScoreStore and ScoreKey.
"""
import json
import pytest
from pathlib import Path
from minefield.game import Difficulty
from minefield.storage import Game, ScoreKey, ScoreOrder, ScoreStore


# ============================================================================
# Key Tests
# ============================================================================

class TestScoreKey:
    """Test typed score keys."""

    def test_minesweeper_requires_difficulty(self) -> None:
        with pytest.raises(ValueError, match="need a difficulty"):
            ScoreKey(Game.MINESWEEPER)

    def test_other_games_reject_difficulty(self) -> None:
        with pytest.raises(ValueError, match="no difficulty"):
            ScoreKey(Game.SNAKE, Difficulty.EASY)

    def test_order_is_lower_only_for_minesweeper(self) -> None:
        assert ScoreKey(Game.MINESWEEPER, Difficulty.HARD).order == (
            ScoreOrder.LOWER_IS_BETTER
        )
        for game in Game:
            if game != Game.MINESWEEPER:
                assert ScoreKey(game).order == ScoreOrder.HIGHER_IS_BETTER

    def test_name_round_trips(self) -> None:
        for key in (ScoreKey(Game.GAME_2048), ScoreKey(Game.MINESWEEPER, Difficulty.MEDIUM)):
            assert ScoreKey.from_name(key.name) == key
        assert ScoreKey(Game.MINESWEEPER, Difficulty.MEDIUM).name == "minesweeper.medium"


# ============================================================================
# Store Tests
# ============================================================================

class TestScoreStore:
    """Test in-memory and file-backed stores."""

    def test_missing_score_is_none(self) -> None:
        assert ScoreStore().get(ScoreKey(Game.SNAKE)) is None

    def test_submit_keeps_higher_score(self) -> None:
        store = ScoreStore()
        key = ScoreKey(Game.SNAKE)
        assert store.submit(key, 10) is True
        assert store.submit(key, 5) is False
        assert store.submit(key, 10) is False
        assert store.submit(key, 12) is True
        assert store.get(key) == 12

    def test_submit_keeps_lower_time(self) -> None:
        store = ScoreStore()
        key = ScoreKey(Game.MINESWEEPER, Difficulty.EASY)
        assert store.submit(key, 90) is True
        assert store.submit(key, 120) is False
        assert store.submit(key, 60) is True
        assert store.get_best_time(Difficulty.EASY) == 60

    def test_scores_persist_to_file(self, tmp_path: Path) -> None:
        path = tmp_path / "data" / "scores.json"
        store = ScoreStore(path)
        store.set_best_time(Difficulty.HARD, 300)
        store.submit(ScoreKey(Game.WORDLE), 4)

        assert json.loads(path.read_text()) == {
            "minesweeper.hard": 300,
            "wordle": 4,
        }
        reloaded = ScoreStore(path)
        assert reloaded.get_best_time(Difficulty.HARD) == 300
        assert reloaded.get(ScoreKey(Game.WORDLE)) == 4

    def test_corrupt_file_starts_empty(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "scores.json"
        path.write_text("{not json")
        store = ScoreStore(path)
        assert list(store.items()) == []
        assert "unreadable score file" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "content",
        [
            {"snake": None},
            {"minesweeper.easy": {"t": 3}},
            {"pong": "12"},
            {"wordle": True},
            ["snake", 3],
        ],
    )
    def test_non_integer_scores_start_empty(
        self, tmp_path: Path, capsys, content
    ) -> None:
        """Well-formed JSON with the wrong shape is treated as corrupt."""
        path = tmp_path / "scores.json"
        path.write_text(json.dumps(content))
        store = ScoreStore(path)
        assert list(store.items()) == []
        assert "unreadable score file" in capsys.readouterr().err

    def test_unknown_game_starts_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "scores.json"
        path.write_text(json.dumps({"tetris": 3}))
        assert list(ScoreStore(path).items()) == []

    def test_clear_empties_file(self, tmp_path: Path) -> None:
        path = tmp_path / "scores.json"
        store = ScoreStore(path)
        store.set(ScoreKey(Game.PONG), 7)
        store.clear()
        assert json.loads(path.read_text()) == {}
        assert ScoreStore(path).get(ScoreKey(Game.PONG)) is None

    def test_items_sorted_by_name(self) -> None:
        store = ScoreStore()
        store.set(ScoreKey(Game.SNAKE), 1)
        store.set_best_time(Difficulty.EASY, 2)
        assert [key.name for key, _ in store.items()] == [
            "minesweeper.easy",
            "snake",
        ]
