from dataclasses import dataclass, field
from typing import Dict, Tuple

Position = Tuple[int, int]


@dataclass(slots=True)
class Board:
    """Square grid of cell entities.

    cells maps every (row, col) to the entity carrying that cell's BoardPosition.
    """
    size: int
    cells: Dict[Position, int] = field(default_factory=dict)

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size
