"""Autoplay Color Lines games with a random player and print the scores.

Run with: ``python simulate.py --games 20 --seed 7``
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

# Ensure src/ is on the import path when run from a checkout.
SRC_PATH = Path(__file__).parent / "src"
if SRC_PATH.exists() and str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from colorlines.components.game_config import GameConfig  # type: ignore
from colorlines.storage.store import JsonFileStore  # type: ignore
from colorlines.simulation import run_games  # type: ignore
from colorlines.systems.config_ops import load_config, merge_config  # type: ignore
from colorlines.systems.leaderboard_system import LeaderboardSystem  # type: ignore
from colorlines.systems.turn_engine import SpawnCascade  # type: ignore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Color Lines random-play simulator")
    parser.add_argument("--games", type=int, default=10, help="Number of games to play")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed")
    parser.add_argument("--board-size", type=int, default=None, help="Board size (3-12)")
    parser.add_argument("--min-line", type=int, default=None, help="Minimum line length (3-8)")
    parser.add_argument("--balls", type=int, default=None, help="Balls spawned per round (1-5)")
    parser.add_argument(
        "--spawn-cascade",
        choices=[mode.value for mode in SpawnCascade],
        default=SpawnCascade.PER_BALL.value,
        help="Run line removal after each spawned ball or after the whole round",
    )
    parser.add_argument("--max-turns", type=int, default=None, help="Stop a game after this many moves")
    parser.add_argument("--store", type=Path, default=None, help="JSON file holding the leaderboard and saved config")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every game")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    update = {
        "boardSize": args.board_size,
        "minLineLength": args.min_line,
        "ballsPerRound": args.balls,
    }
    store = JsonFileStore(args.store) if args.store else None
    base = load_config(store) if store is not None else GameConfig()
    config = merge_config(base, {k: v for k, v in update.items() if v is not None})
    report = run_games(
        args.games,
        config=config,
        seed=args.seed,
        store=store,
        spawn_cascade=SpawnCascade(args.spawn_cascade),
        max_turns=args.max_turns,
    )
    for index, result in enumerate(report.results, start=1):
        marker = " *" if result.new_high_score else ""
        print(f"game {index:3d}: score {result.score:5d}  turns {result.turns:4d}{marker}")
    print(f"best {report.best}  mean {report.mean:.1f}")
    if store is not None:
        print("leaderboard:")
        for entry in LeaderboardSystem(store).get_top_scores():
            print(f"  {entry.score:5d}  {entry.date}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
