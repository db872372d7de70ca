"""
Terminal front end.

Usage:
    python main.py [--lang LANG] [--data-dir DIR] play [--difficulty {easy,medium,hard}]
    python main.py scores
    python main.py reset-scores
"""
import argparse
import time
from pathlib import Path
from typing import Callable, List, Optional

from .config import AppConfig
from .game.board import Difficulty, render_ansi
from .game.random_source import RandomSource
from .game.session import GameSession
from .i18n.translator import Translator
from .storage.scores import ScoreStore


# ============================================================================
# Rendering
# ============================================================================

def render_session(session: GameSession, translator: Translator) -> str:
    """Board with column/row rulers under a one-line status bar."""
    status = translator.t(
        "minesweeper.status",
        difficulty=translator.t(f"minesweeper.difficulty.{session.difficulty.value}"),
        mines=session.mines_remaining,
        seconds=session.elapsed,
    )
    cols = session.board.config.cols
    header = "    " + " ".join(str(col % 10) for col in range(cols))
    rows = [
        f"{row:>2}  {line}"
        for row, line in enumerate(render_ansi(session.board).split("\n"))
    ]
    return "\n".join([status, header] + rows)


# ============================================================================
# Interactive Play
# ============================================================================

def play(
    config: AppConfig,
    input_fn: Callable[[str], str] = input,
    clock: Callable[[], float] = time.monotonic,
    rng: Optional[RandomSource] = None,
) -> None:
    """Run games until the player quits."""
    translator = Translator(config.language)
    scores = ScoreStore(config.scores_path)
    session = GameSession(config.difficulty, rng=rng, scores=scores)
    last_tick = clock()

    print(translator.t("minesweeper.title"))
    print(translator.t("minesweeper.help"))

    while True:
        print(render_session(session, translator))
        try:
            line = input_fn(translator.t("minesweeper.prompt"))
        except EOFError:
            break

        # The timer only moves in whole seconds between commands.
        now = clock()
        if not session.started:
            last_tick = now
        while now - last_tick >= 1:
            session.tick()
            last_tick += 1

        parts = line.split()
        if not parts:
            continue
        command = parts[0].lower()

        if command == "q":
            break
        if command == "n":
            session.reset()
            continue
        if command == "d":
            session = GameSession(session.difficulty.next(), rng=rng, scores=scores)
            continue
        if command not in ("r", "f", "c") or len(parts) != 3:
            print(translator.t("minesweeper.invalid"))
            continue
        try:
            row, col = int(parts[1]), int(parts[2])
        except ValueError:
            print(translator.t("minesweeper.invalid"))
            continue
        if not session.board.in_bounds(row, col):
            print(translator.t("minesweeper.out_of_bounds"))
            continue

        was_started = session.started
        was_finished = session.is_finished
        if command == "f":
            session.toggle_flag(row, col)
        elif command == "r":
            session.reveal(row, col)
        else:
            session.chord(row, col)
        if session.started and not was_started:
            last_tick = now

        if session.is_finished and not was_finished:
            _announce(session, translator)

    print(translator.t("minesweeper.bye"))


def _announce(session: GameSession, translator: Translator) -> None:
    if session.won:
        print(translator.t("minesweeper.won", seconds=session.elapsed))
        if session.new_record:
            print(translator.t("minesweeper.new_record"))
    else:
        print(translator.t("minesweeper.lost"))


# ============================================================================
# Score Commands
# ============================================================================

def show_scores(config: AppConfig) -> None:
    """Print every stored score."""
    translator = Translator(config.language)
    store = ScoreStore(config.scores_path)
    entries = list(store.items())

    print(translator.t("scores.title"))
    if not entries:
        print(translator.t("scores.none"))
        return
    for key, value in entries:
        label = key.game.value
        if key.difficulty is not None:
            difficulty = translator.t(f"minesweeper.difficulty.{key.difficulty.value}")
            label = f"{label} ({difficulty})"
        print(f"  {label:<24} {value:>8}")


def reset_scores(config: AppConfig) -> None:
    """Forget every stored score."""
    translator = Translator(config.language)
    ScoreStore(config.scores_path).clear()
    print(translator.t("scores.cleared"))


# ============================================================================
# Entry Point
# ============================================================================

def build_config(args: argparse.Namespace) -> AppConfig:
    """Turn parsed options into an AppConfig."""
    config = AppConfig(language=args.lang)
    if args.data_dir:
        config.data_dir = Path(args.data_dir)
    if getattr(args, "difficulty", None):
        config.difficulty = Difficulty(args.difficulty)
    return config


def main(argv: Optional[List[str]] = None) -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(
        description="Minefield - Minesweeper in the terminal"
    )
    parser.add_argument(
        "--lang", default=AppConfig.language, help="Language code (es, en)"
    )
    parser.add_argument(
        "--data-dir", default=None, help="Where scores are kept"
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a game")
    play_parser.add_argument(
        "--difficulty",
        choices=[difficulty.value for difficulty in Difficulty],
        default=Difficulty.EASY.value,
        help="Board preset",
    )

    # Score commands
    subparsers.add_parser("scores", help="Show best scores")
    subparsers.add_parser("reset-scores", help="Delete all scores")

    args = parser.parse_args(argv)

    if args.command == "play":
        play(build_config(args))
    elif args.command == "scores":
        show_scores(build_config(args))
    elif args.command == "reset-scores":
        reset_scores(build_config(args))
    else:
        parser.print_help()
