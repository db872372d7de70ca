#!/usr/bin/env python3
"""Watch a random player click its way through Minesweeper."""
import time
import os

import numpy as np

from src.minefield.game import Difficulty, MinesweeperEnv
from src.minefield.game.environment import REVEAL


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def demo(delay: float = 0.3, games: int = 5, difficulty: str = "easy", seed=None):
    """Run demo games with visualization."""
    env = MinesweeperEnv(Difficulty(difficulty), render_mode="ansi")
    rng = np.random.default_rng(seed)
    config = env.config

    print(f"Board: {config.rows}x{config.cols} with {config.mines} mines")
    print("Starting in 2 seconds...")
    time.sleep(2)

    wins = 0

    for game in range(games):
        obs, _ = env.reset(seed=None if seed is None else seed + game)

        clear_screen()
        print(f"=== Game {game + 1}/{games} ===")
        print(f"Wins so far: {wins}\n")
        print(env.render())
        time.sleep(delay)

        done = False
        step = 0

        while not done:
            # Only ever reveal; flags would just slow the random player down.
            mask = env.get_action_mask()
            cells = config.rows * config.cols
            reveals = np.flatnonzero(mask[REVEAL * cells:(REVEAL + 1) * cells])
            action = REVEAL * cells + int(rng.choice(reveals))
            _, row, col = env.decode_action(action)

            obs, reward, terminated, truncated, info = env.step(action)
            done = terminated or truncated
            step += 1

            clear_screen()
            print(f"=== Game {game + 1}/{games} | Step {step} ===")
            print(f"Wins so far: {wins}")
            print(f"Last move: ({row}, {col})\n")
            print(env.render())

            if done:
                if info.get("game_state") == "WON":
                    wins += 1
                    print(f"\n*** WIN! ***")
                else:
                    print(f"\n*** LOST (hit mine) ***")

            time.sleep(delay)

        time.sleep(1.0)  # Pause between games

    print(f"\n=== Final: {wins}/{games} wins ({100*wins/games:.0f}%) ===")


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=0.3, help="Delay between moves")
    parser.add_argument("--games", type=int, default=5, help="Number of games")
    parser.add_argument(
        "--difficulty", choices=["easy", "medium", "hard"], default="easy",
        help="Board preset",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible games")
    args = parser.parse_args()

    demo(delay=args.delay, games=args.games, difficulty=args.difficulty, seed=args.seed)
