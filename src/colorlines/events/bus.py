import logging

from blinker import Signal
from typing import Dict

logger = logging.getLogger(__name__)

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if not sig:
            return
        # One failing receiver must not starve the others or abort the emitter.
        for receiver in list(sig.receivers_for(self)):
            try:
                receiver(self, **payload)
            except Exception:
                logger.exception("Subscriber %r failed while handling %s", receiver, name)


# ============================================================================
# SELECTION
# ============================================================================
EVENT_TILE_SELECTED = "tile_selected"        # payload: row, col
EVENT_TILE_DESELECTED = "tile_deselected"    # payload: reason=str, prev_row, prev_col


# ============================================================================
# BALLS & BOARD
# ============================================================================
EVENT_BALL_PLACED = "ball_placed"            # payload: row, col, color=int
EVENT_BALL_REMOVED = "ball_removed"          # payload: row, col, color=int
EVENT_BALL_MOVED = "ball_moved"              # payload: path=[(r,c),...], color=int
EVENT_NEXT_BALLS_CHANGED = "next_balls_changed"  # payload: colors=list[int]


# ============================================================================
# CASCADE
# ============================================================================
EVENT_LINES_CLEARED = "lines_cleared"        # payload: positions=[(r,c),...], depth=int, reason=str
EVENT_CASCADE_COMPLETE = "cascade_complete"  # payload: depth=int, removed=int, reason=str


# ============================================================================
# SCORE & GAME FLOW
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"        # payload: score=int, delta=int
EVENT_GAME_OVER = "game_over"                # payload: final_score=int, is_new_high_score=bool
EVENT_GAME_RESET = "game_reset"              # payload: board_size=int
EVENT_CONFIG_CHANGED = "config_changed"      # payload: config=GameConfig
