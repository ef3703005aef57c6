from __future__ import annotations

from typing import Dict, Iterable, List, Set, Tuple

from esper import World

from colorlines.systems.board_ops import ball_color_map

Position = Tuple[int, int]
Direction = Tuple[int, int]

# Horizontal, vertical, diagonal "\" and diagonal "/".
AXES: Tuple[Direction, ...] = ((0, 1), (1, 0), (1, 1), (1, -1))


def find_lines(world: World, min_line_length: int) -> Set[Position]:
    """Return every cell that belongs to a same-color run of at least min_line_length."""
    return scan_lines(ball_color_map(world), min_line_length)


def scan_lines(
    colors: Dict[Position, int],
    min_line_length: int,
    axes: Iterable[Direction] = AXES,
    order: Iterable[Position] | None = None,
) -> Set[Position]:
    """Scan a position -> color map along each axis.

    Every occupied cell is examined, not only run starts. Cells already
    covered by a qualifying run on the current axis are skipped because they
    would rebuild the same run. ``order`` overrides the row-major scan order.
    """
    marked: Set[Position] = set()
    starts = list(order) if order is not None else sorted(colors)
    for axis in axes:
        covered: Set[Position] = set()
        for pos in starts:
            if pos not in colors or pos in covered:
                continue
            run = collect_run(colors, pos, axis)
            if len(run) >= min_line_length:
                covered.update(run)
                marked.update(run)
    return marked


def collect_run(colors: Dict[Position, int], pos: Position, axis: Direction) -> List[Position]:
    """Extend a contiguous same-color run through pos in both directions along axis."""
    color = colors.get(pos)
    if color is None:
        return []
    dr, dc = axis
    run = [pos]
    row, col = pos[0] + dr, pos[1] + dc
    while colors.get((row, col)) == color:
        run.append((row, col))
        row += dr
        col += dc
    row, col = pos[0] - dr, pos[1] - dc
    while colors.get((row, col)) == color:
        run.insert(0, (row, col))
        row -= dr
        col -= dc
    return run
