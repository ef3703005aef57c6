from esper import World

from colorlines.components.game_config import GameConfig
from colorlines.components.game_state import GameState
from colorlines.components.score import Score


def _state_entity(world: World) -> int:
    existing = list(world.get_component(GameState))
    if existing:
        return existing[0][0]
    return world.create_entity(GameState(), Score(), GameConfig())


def get_game_state(world: World) -> GameState:
    """Return the shared GameState component, creating it if absent."""
    return world.component_for_entity(_state_entity(world), GameState)


def get_score(world: World) -> Score:
    return world.component_for_entity(_state_entity(world), Score)


def get_config(world: World) -> GameConfig:
    entity = _state_entity(world)
    if not world.has_component(entity, GameConfig):
        world.add_component(entity, GameConfig())
    return world.component_for_entity(entity, GameConfig)


def set_config(world: World, config: GameConfig) -> None:
    """Replace the adopted configuration wholesale."""
    entity = _state_entity(world)
    world.add_component(entity, config)
