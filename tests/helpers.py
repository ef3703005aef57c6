from __future__ import annotations

import random
from collections import deque
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from esper import World

from colorlines.components.game_config import GameConfig
from colorlines.events.bus import EventBus
from colorlines.storage.store import KeyValueStore
from colorlines.systems.board_ops import clear_board, place_ball
from colorlines.systems.leaderboard_system import LeaderboardSystem
from colorlines.systems.turn_engine import SpawnCascade, TurnEngine
from colorlines.world import create_world

Position = Tuple[int, int]

RED = 0xFF0000
GREEN = 0x00FF00
BLUE = 0x0000FF
YELLOW = 0xFFFF00


class ScriptedRandom(random.Random):
    """Random generator whose sample/choice results can be queued up front.

    Once a queue runs dry the regular seeded behaviour takes over again.
    """

    def __init__(self, seed: int = 0) -> None:
        super().__init__(seed)
        self.samples: deque = deque()
        self.choices: deque = deque()

    def queue_sample(self, cells: Sequence[Position]) -> None:
        self.samples.append(list(cells))

    def queue_choices(self, values: Sequence[Any]) -> None:
        self.choices.extend(values)

    def sample(self, population, k, *, counts=None):
        if self.samples:
            return self.samples.popleft()
        return super().sample(population, k, counts=counts)

    def choice(self, seq):
        if self.choices:
            return self.choices.popleft()
        return super().choice(seq)


def make_engine(
    config: GameConfig | None = None,
    *,
    store: KeyValueStore | None = None,
    leaderboard: LeaderboardSystem | None = None,
    spawn_cascade: SpawnCascade = SpawnCascade.PER_BALL,
    seed: int = 0,
) -> TurnEngine:
    """Build an engine on a fresh world driven by a ScriptedRandom."""
    world = create_world(config, rng=ScriptedRandom(seed))
    return TurnEngine(
        world,
        EventBus(),
        leaderboard=leaderboard,
        config_store=store,
        spawn_cascade=spawn_cascade,
    )


def load_layout(world: World, layout: Mapping[Position, int]) -> None:
    """Replace every ball on the board with the given layout."""
    clear_board(world)
    for (row, col), color in layout.items():
        assert place_ball(world, row, col, color)


def capture(bus: EventBus, name: str) -> List[Dict[str, Any]]:
    """Record the payload of every emission of name."""
    received: List[Dict[str, Any]] = []
    bus.subscribe(name, lambda sender, **kwargs: received.append(kwargs))
    return received
