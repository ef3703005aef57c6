from __future__ import annotations

import logging
import random
from typing import List, Optional, Tuple

from colorlines.systems.board_ops import ball_color_map
from colorlines.systems.path_finder import reachable_cells
from colorlines.systems.turn_engine import TurnEngine

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
Move = Tuple[Position, Position]


class RandomPlayer:
    """Plays uniformly random legal moves through the engine's command surface."""

    def __init__(self, engine: TurnEngine, rng: Optional[random.Random] = None) -> None:
        self.engine = engine
        self.random = rng or random.Random()
        self.turns_played = 0

    def legal_moves(self) -> List[Move]:
        world = self.engine.world
        moves: List[Move] = []
        for src in sorted(ball_color_map(world)):
            for dst in sorted(reachable_cells(world, src)):
                moves.append((src, dst))
        return moves

    def choose_move(self) -> Optional[Move]:
        moves = self.legal_moves()
        if not moves:
            return None
        return self.random.choice(moves)

    def play_turn(self) -> bool:
        """Issue one move as two clicks; False when no move could be made."""
        if not self.engine.state.accepts_input:
            return False
        move = self.choose_move()
        if move is None:
            return False
        src, dst = move
        if self.engine.selection is not None:
            # Clear a selection left over from outside input.
            self.engine.select_or_move(*self.engine.selection)
        self.engine.select_or_move(*src)
        self.engine.select_or_move(*dst)
        self.turns_played += 1
        return True

    def play_game(self, max_turns: int | None = None) -> int:
        """Play until game over, no legal move, or max_turns; returns the score."""
        while max_turns is None or self.turns_played < max_turns:
            if not self.play_turn():
                break
        logger.debug("Random player stopped after %d turns", self.turns_played)
        return self.engine.score
