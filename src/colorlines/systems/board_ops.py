from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from esper import World

from colorlines.components.ball import Ball
from colorlines.components.board import Board
from colorlines.components.board_position import BoardPosition

Position = Tuple[int, int]


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not found")


def has_board(world: World) -> bool:
    for _ in world.get_component(Board):
        return True
    return False


def board_size(world: World) -> int:
    return get_board(world).size


def build_board(world: World, size: int) -> Board:
    """Discard any existing board and create ``size`` x ``size`` empty cells."""
    for entity, _ in list(world.get_component(Board)):
        world.delete_entity(entity, immediate=True)
    for entity, _ in list(world.get_component(BoardPosition)):
        world.delete_entity(entity, immediate=True)
    board = Board(size=size)
    for row in range(size):
        for col in range(size):
            board.cells[(row, col)] = world.create_entity(BoardPosition(row=row, col=col))
    world.create_entity(board)
    return board


def in_bounds(world: World, row: int, col: int) -> bool:
    return get_board(world).contains(row, col)


def get_entity_at(world: World, row: int, col: int) -> int | None:
    return get_board(world).cells.get((row, col))


def ball_color_at(world: World, row: int, col: int) -> Optional[int]:
    """Return the color occupying (row, col), or None when empty or off-board."""
    entity = get_entity_at(world, row, col)
    if entity is None or not world.has_component(entity, Ball):
        return None
    return world.component_for_entity(entity, Ball).color


def is_empty(world: World, row: int, col: int) -> bool:
    entity = get_entity_at(world, row, col)
    if entity is None:
        return False
    return not world.has_component(entity, Ball)


def place_ball(world: World, row: int, col: int, color: int) -> bool:
    """Attach a ball to an empty cell; return False if occupied or off-board."""
    entity = get_entity_at(world, row, col)
    if entity is None or world.has_component(entity, Ball):
        return False
    world.add_component(entity, Ball(color=color))
    return True


def remove_ball(world: World, row: int, col: int) -> Optional[int]:
    """Clear the occupant of (row, col) and return its color (None if already empty)."""
    entity = get_entity_at(world, row, col)
    if entity is None or not world.has_component(entity, Ball):
        return None
    color = world.component_for_entity(entity, Ball).color
    world.remove_component(entity, Ball)
    return color


def move_ball(world: World, src: Position, dst: Position) -> Optional[int]:
    """Relocate the ball at src onto empty dst. Returns the moved color."""
    if ball_color_at(world, *src) is None or not is_empty(world, *dst):
        return None
    color = remove_ball(world, *src)
    place_ball(world, dst[0], dst[1], color)
    return color


def empty_cells(world: World) -> List[Position]:
    """Unoccupied cells in row-major order."""
    board = get_board(world)
    return [
        (row, col)
        for row in range(board.size)
        for col in range(board.size)
        if not world.has_component(board.cells[(row, col)], Ball)
    ]


def ball_color_map(world: World) -> Dict[Position, int]:
    """Return mapping of occupied positions to their ball colors."""
    mapping: Dict[Position, int] = {}
    for entity, (position, ball) in world.get_components(BoardPosition, Ball):
        mapping[(position.row, position.col)] = ball.color
    return mapping


def clear_board(world: World) -> List[Position]:
    """Remove every ball; returns the cleared positions sorted."""
    cleared: List[Position] = []
    for entity, (position, _) in list(world.get_components(BoardPosition, Ball)):
        world.remove_component(entity, Ball)
        cleared.append((position.row, position.col))
    return sorted(cleared)


def board_rows(world: World) -> Tuple[Tuple[Optional[int], ...], ...]:
    """Row-major snapshot of the grid with None for empty cells."""
    size = board_size(world)
    colors = ball_color_map(world)
    return tuple(
        tuple(colors.get((row, col)) for col in range(size))
        for row in range(size)
    )
