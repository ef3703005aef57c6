from dataclasses import dataclass
from typing import Tuple

from colorlines.constants import (
    DEFAULT_BALLS_PER_ROUND,
    DEFAULT_BOARD_SIZE,
    DEFAULT_COLORS,
    DEFAULT_MIN_LINE_LENGTH,
)


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Validated rule parameters.

    Instances are immutable; use ``config_ops.merge_config`` to derive an
    updated configuration from a partial payload.
    """
    colors: Tuple[int, ...] = DEFAULT_COLORS
    min_line_length: int = DEFAULT_MIN_LINE_LENGTH
    board_size: int = DEFAULT_BOARD_SIZE
    balls_per_round: int = DEFAULT_BALLS_PER_ROUND

    def to_payload(self) -> dict:
        """Return the wire representation (camelCase keys)."""
        return {
            "colors": list(self.colors),
            "minLineLength": self.min_line_length,
            "boardSize": self.board_size,
            "ballsPerRound": self.balls_per_round,
        }
