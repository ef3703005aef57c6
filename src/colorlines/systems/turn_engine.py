from __future__ import annotations

import logging
import random
from contextlib import contextmanager
from enum import Enum
from typing import Any, Iterator, List, Mapping, Optional, Tuple

from esper import World

from colorlines.components.game_config import GameConfig
from colorlines.components.game_state import GameSnapshot, GameState, TurnPhase
from colorlines.events.bus import (
    EventBus,
    EVENT_BALL_MOVED,
    EVENT_BALL_PLACED,
    EVENT_BALL_REMOVED,
    EVENT_CASCADE_COMPLETE,
    EVENT_CONFIG_CHANGED,
    EVENT_GAME_OVER,
    EVENT_GAME_RESET,
    EVENT_LINES_CLEARED,
    EVENT_NEXT_BALLS_CHANGED,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
)
from colorlines.storage.store import KeyValueStore
from colorlines.systems import board_ops
from colorlines.systems.config_ops import merge_config, read_stored_config, save_config
from colorlines.systems.leaderboard_system import LeaderboardSystem
from colorlines.systems.line_verifier import find_lines
from colorlines.systems.path_finder import shortest_path
from colorlines.systems.score_system import ScoreSystem
from colorlines.systems.state_utils import get_config, get_game_state, get_score, set_config

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class SpawnCascade(Enum):
    """When line removal runs during a spawn round."""
    PER_BALL = "per_ball"    # after every individual placement
    PER_BATCH = "per_batch"  # once, after the whole round is placed


class TurnEngine:
    """Orchestrates selection, movement, cascades, spawning and game over.

    Flow of a move:
      - select_or_move picks a ball, then an empty reachable destination.
      - The ball is relocated and the engine enters RESOLVING.
      - Cascade passes remove qualifying lines until the board is stable.
      - If the move cleared nothing, a round of queued balls is spawned.
      - The game ends when a spawn cannot fit or the board is full.
    Every command runs to completion before returning; commands issued while
    RESOLVING (for instance by an event subscriber) are ignored.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        leaderboard: LeaderboardSystem | None = None,
        config_store: KeyValueStore | None = None,
        spawn_cascade: SpawnCascade = SpawnCascade.PER_BALL,
        start: bool = True,
    ):
        self.world = world
        self.event_bus = event_bus
        self.leaderboard = leaderboard if leaderboard is not None else LeaderboardSystem()
        self.config_store = config_store
        self.spawn_cascade = spawn_cascade
        self._resolving = False
        if not isinstance(getattr(world, "random", None), random.Random):
            setattr(world, "random", random.Random())
        self.score_system = ScoreSystem(world, event_bus)
        if config_store is not None:
            stored = read_stored_config(config_store)
            if stored is not None:
                set_config(world, stored)
        if not board_ops.has_board(world) or board_ops.board_size(world) != self.config.board_size:
            board_ops.build_board(world, self.config.board_size)
        if start:
            self.reset()

    # Read-only accessors -------------------------------------------------

    @property
    def config(self) -> GameConfig:
        return get_config(self.world)

    @property
    def state(self) -> GameState:
        return get_game_state(self.world)

    @property
    def phase(self) -> TurnPhase:
        return self.state.phase

    @property
    def selection(self) -> Optional[Position]:
        return self.state.selection

    @property
    def score(self) -> int:
        return get_score(self.world).value

    @property
    def next_balls(self) -> List[int]:
        return list(self.state.next_balls)

    def snapshot(self) -> GameSnapshot:
        state = self.state
        return GameSnapshot(
            board=board_ops.board_rows(self.world),
            next_balls=tuple(state.next_balls),
            score=self.score,
            phase=state.phase,
            selection=state.selection,
        )

    # Commands ------------------------------------------------------------

    def select_or_move(self, row: Any, col: Any) -> None:
        state = self.state
        if not state.accepts_input:
            return
        if not self._is_coordinate(row, col):
            return
        target = (row, col)
        occupied = not board_ops.is_empty(self.world, row, col)
        if state.selection is None:
            if occupied:
                self._select(target)
            return
        if target == state.selection:
            self._deselect(reason="toggle")
            return
        if occupied:
            self._deselect(reason="reselect")
            self._select(target)
            return
        path = shortest_path(self.world, state.selection, target)
        if not path:
            return
        self._commit_move(path)

    def reset(self) -> None:
        """Start a new game on a fresh board with the current configuration."""
        if self._resolving:
            return
        config = self.config
        with self._resolution():
            self._deselect(reason="reset")
            board_ops.build_board(self.world, config.board_size)
            self.event_bus.emit(EVENT_GAME_RESET, board_size=config.board_size)
            logger.info(
                "New game: %dx%d board, lines of %d, %d balls per round",
                config.board_size, config.board_size, config.min_line_length, config.balls_per_round,
            )
            self._generate_next_balls()
            self._spawn_round()

    def configure(self, update: Mapping[str, Any] | None) -> GameConfig:
        """Adopt the valid fields of update; returns the configuration in force."""
        current = self.config
        if self._resolving:
            return current
        adopted = merge_config(current, update)
        if adopted == current:
            return current
        set_config(self.world, adopted)
        if self.config_store is not None:
            save_config(self.config_store, adopted)
        self.event_bus.emit(EVENT_CONFIG_CHANGED, config=adopted)
        if adopted.board_size != current.board_size:
            self.reset()
        elif not self.state.is_game_over:
            self._generate_next_balls()
        return adopted

    # Selection -----------------------------------------------------------

    def _is_coordinate(self, row: Any, col: Any) -> bool:
        for value in (row, col):
            if isinstance(value, bool) or not isinstance(value, int):
                return False
        return board_ops.in_bounds(self.world, row, col)

    def _select(self, target: Position) -> None:
        state = self.state
        state.selection = target
        state.phase = TurnPhase.SELECTED
        self.event_bus.emit(EVENT_TILE_SELECTED, row=target[0], col=target[1])

    def _deselect(self, reason: str) -> None:
        state = self.state
        previous = state.selection
        state.selection = None
        if state.phase is TurnPhase.SELECTED:
            state.phase = TurnPhase.IDLE
        if previous is not None:
            self.event_bus.emit(
                EVENT_TILE_DESELECTED, reason=reason, prev_row=previous[0], prev_col=previous[1]
            )

    # Resolution ----------------------------------------------------------

    def _commit_move(self, path: List[Position]) -> None:
        src, dst = path[0], path[-1]
        with self._resolution():
            self._deselect(reason="move")
            color = board_ops.move_ball(self.world, src, dst)
            if color is None:
                return
            self.event_bus.emit(EVENT_BALL_MOVED, path=list(path), color=color)
            removed = self.run_cascade(reason="move")
            if removed == 0:
                self._spawn_round()

    @contextmanager
    def _resolution(self) -> Iterator[None]:
        """Hold the engine in RESOLVING; always settle into IDLE or GAME_OVER on exit."""
        self._resolving = True
        self.state.phase = TurnPhase.RESOLVING
        try:
            yield
        finally:
            self._resolving = False
            self._finish_resolution()

    def run_cascade(self, reason: str) -> int:
        """Remove lines pass by pass until none remain; returns balls removed."""
        min_line_length = self.config.min_line_length
        depth = 0
        removed = 0
        while True:
            marked = find_lines(self.world, min_line_length)
            if not marked:
                break
            depth += 1
            positions = sorted(marked)
            for row, col in positions:
                color = board_ops.remove_ball(self.world, row, col)
                self.event_bus.emit(EVENT_BALL_REMOVED, row=row, col=col, color=color)
            removed += len(positions)
            self.event_bus.emit(EVENT_LINES_CLEARED, positions=positions, depth=depth, reason=reason)
        if depth:
            self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=depth, removed=removed, reason=reason)
        return removed

    def _spawn_round(self) -> None:
        state = self.state
        count = self.config.balls_per_round
        empties = board_ops.empty_cells(self.world)
        if len(empties) < count:
            self._enter_game_over(reason="no_room_to_spawn")
            return
        # Cells are drawn up front; cascades only ever free cells, so they stay empty.
        targets = self._random.sample(empties, count)
        colors = list(state.next_balls)
        for (row, col), color in zip(targets, colors):
            board_ops.place_ball(self.world, row, col, color)
            self.event_bus.emit(EVENT_BALL_PLACED, row=row, col=col, color=color)
            if self.spawn_cascade is SpawnCascade.PER_BALL:
                self.run_cascade(reason="spawn")
        if self.spawn_cascade is SpawnCascade.PER_BATCH:
            self.run_cascade(reason="spawn")
        self._generate_next_balls()

    def _finish_resolution(self) -> None:
        state = self.state
        if state.is_game_over:
            return
        if not board_ops.empty_cells(self.world):
            self._enter_game_over(reason="board_full")
            return
        state.phase = TurnPhase.IDLE

    def _enter_game_over(self, reason: str) -> None:
        state = self.state
        if state.is_game_over:
            return
        state.phase = TurnPhase.GAME_OVER
        state.selection = None
        final_score = self.score
        is_new_high_score = self.leaderboard.add_score(final_score)
        logger.info("Game over (%s) with score %d", reason, final_score)
        self.event_bus.emit(
            EVENT_GAME_OVER, final_score=final_score, is_new_high_score=is_new_high_score
        )

    def _generate_next_balls(self) -> None:
        state = self.state
        palette = self.config.colors
        state.next_balls = [self._random.choice(palette) for _ in range(self.config.balls_per_round)]
        self.event_bus.emit(EVENT_NEXT_BALLS_CHANGED, colors=list(state.next_balls))

    @property
    def _random(self) -> random.Random:
        return getattr(self.world, "random")
