import random

from esper import World

from colorlines.components.game_config import GameConfig
from colorlines.components.game_state import GameState
from colorlines.components.score import Score
from colorlines.systems.board_ops import build_board


def create_world(
    config: GameConfig | None = None,
    *,
    rng: random.Random | None = None,
) -> World:
    """Create a world holding an empty board and the game-state singleton.

    The random generator is attached to the world so every system draws from
    the same injectable source.
    """
    config = config or GameConfig()
    world = World()
    setattr(world, "random", rng or random.Random())

    # Register the global game state resource.
    world.create_entity(GameState(), Score(), config)

    build_board(world, config.board_size)
    return world
