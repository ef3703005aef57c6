from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional, Set, Tuple

from esper import World

from colorlines.systems.board_ops import get_board, is_empty

Position = Tuple[int, int]

# Up, down, left, right. Fixed so equal-length paths are chosen deterministically.
NEIGHBOR_STEPS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def neighbors(world: World, pos: Position) -> List[Position]:
    """Orthogonal neighbors of pos that lie on the board."""
    board = get_board(world)
    row, col = pos
    return [
        (row + dr, col + dc)
        for dr, dc in NEIGHBOR_STEPS
        if board.contains(row + dr, col + dc)
    ]


def shortest_path(world: World, src: Position, dst: Position) -> List[Position]:
    """Breadth-first search from src to dst through empty cells.

    Returns the path including both endpoints, or an empty list when dst is
    off-board, occupied, equal to src or unreachable.
    """
    board = get_board(world)
    if not board.contains(*src) or not board.contains(*dst):
        return []
    if src == dst or not is_empty(world, *dst):
        return []
    parent: Dict[Position, Optional[Position]] = {src: None}
    queue = deque([src])
    while queue:
        current = queue.popleft()
        if current == dst:
            path: List[Position] = []
            node: Optional[Position] = current
            while node is not None:
                path.append(node)
                node = parent[node]
            path.reverse()
            return path
        for nxt in neighbors(world, current):
            if nxt in parent:
                continue
            # Only empty cells are traversable; dst passes because it was verified empty.
            if not is_empty(world, *nxt):
                continue
            parent[nxt] = current
            queue.append(nxt)
    return []


def reachable_cells(world: World, src: Position) -> Set[Position]:
    """Every empty cell connected to src through empty cells."""
    if not get_board(world).contains(*src):
        return set()
    seen: Set[Position] = {src}
    queue = deque([src])
    while queue:
        current = queue.popleft()
        for nxt in neighbors(world, current):
            if nxt in seen or not is_empty(world, *nxt):
                continue
            seen.add(nxt)
            queue.append(nxt)
    seen.discard(src)
    return seen
