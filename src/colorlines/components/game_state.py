"""Game state resource describing the turn phase and queued balls."""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Tuple

Position = Tuple[int, int]


class TurnPhase(Enum):
    """Phases of the turn engine; only IDLE and SELECTED accept input."""
    IDLE = auto()
    SELECTED = auto()
    RESOLVING = auto()
    GAME_OVER = auto()


@dataclass
class GameState:
    """Singleton component storing the current phase, selection and next balls."""
    phase: TurnPhase = TurnPhase.IDLE
    selection: Optional[Position] = None
    next_balls: List[int] = field(default_factory=list)

    @property
    def accepts_input(self) -> bool:
        return self.phase in (TurnPhase.IDLE, TurnPhase.SELECTED)

    @property
    def is_game_over(self) -> bool:
        return self.phase is TurnPhase.GAME_OVER


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view handed to presentation collaborators."""
    board: Tuple[Tuple[Optional[int], ...], ...]
    next_balls: Tuple[int, ...]
    score: int
    phase: TurnPhase
    selection: Optional[Position]
