"""Headless autoplay of complete games, used by ``simulate.py`` and tests."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from colorlines.components.game_config import GameConfig
from colorlines.events.bus import EventBus, EVENT_CASCADE_COMPLETE, EVENT_GAME_OVER
from colorlines.storage.store import KeyValueStore
from colorlines.systems.leaderboard_system import LeaderboardSystem
from colorlines.systems.random_player import RandomPlayer
from colorlines.systems.turn_engine import SpawnCascade, TurnEngine
from colorlines.world import create_world

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GameResult:
    score: int
    turns: int
    cascades: int
    finished: bool
    new_high_score: bool = False


@dataclass(slots=True)
class SimulationReport:
    results: List[GameResult] = field(default_factory=list)

    @property
    def scores(self) -> List[int]:
        return [result.score for result in self.results]

    @property
    def best(self) -> int:
        return max(self.scores, default=0)

    @property
    def mean(self) -> float:
        if not self.results:
            return 0.0
        return sum(self.scores) / len(self.results)


def play_one(
    config: GameConfig,
    rng: random.Random,
    leaderboard: LeaderboardSystem,
    *,
    spawn_cascade: SpawnCascade = SpawnCascade.PER_BALL,
    max_turns: Optional[int] = None,
) -> GameResult:
    bus = EventBus()
    outcome = {"cascades": 0, "new_high_score": False}

    def on_cascade(sender, **kwargs):
        outcome["cascades"] += 1

    def on_game_over(sender, **kwargs):
        outcome["new_high_score"] = bool(kwargs.get("is_new_high_score"))

    bus.subscribe(EVENT_CASCADE_COMPLETE, on_cascade)
    bus.subscribe(EVENT_GAME_OVER, on_game_over)
    world = create_world(config, rng=rng)
    engine = TurnEngine(world, bus, leaderboard=leaderboard, spawn_cascade=spawn_cascade)
    player = RandomPlayer(engine, rng=rng)
    score = player.play_game(max_turns=max_turns)
    return GameResult(
        score=score,
        turns=player.turns_played,
        cascades=outcome["cascades"],
        finished=engine.state.is_game_over,
        new_high_score=outcome["new_high_score"],
    )


def run_games(
    games: int,
    *,
    config: GameConfig | None = None,
    seed: Optional[int] = None,
    store: KeyValueStore | None = None,
    spawn_cascade: SpawnCascade = SpawnCascade.PER_BALL,
    max_turns: Optional[int] = None,
) -> SimulationReport:
    """Autoplay ``games`` games with one shared generator and leaderboard."""
    config = config or GameConfig()
    rng = random.Random(seed)
    leaderboard = LeaderboardSystem(store)
    report = SimulationReport()
    for index in range(games):
        result = play_one(
            config, rng, leaderboard, spawn_cascade=spawn_cascade, max_turns=max_turns
        )
        logger.info(
            "Game %d: score %d after %d turns (%d cascades)",
            index + 1, result.score, result.turns, result.cascades,
        )
        report.results.append(result)
    return report
