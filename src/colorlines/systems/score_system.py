from esper import World

from colorlines.constants import POINTS_PER_BALL
from colorlines.events.bus import EventBus, EVENT_GAME_RESET, EVENT_LINES_CLEARED, EVENT_SCORE_CHANGED
from colorlines.systems.state_utils import get_score


class ScoreSystem:
    """Keeps the Score component in step with cascade passes.

    Subscribes to EVENT_LINES_CLEARED (one award of POINTS_PER_BALL per removed
    ball, once per pass) and EVENT_GAME_RESET (back to zero). Emits
    EVENT_SCORE_CHANGED after every mutation.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_LINES_CLEARED, self.on_lines_cleared)
        self.event_bus.subscribe(EVENT_GAME_RESET, self.on_game_reset)

    @staticmethod
    def points_for(removed: int) -> int:
        return POINTS_PER_BALL * max(removed, 0)

    def on_lines_cleared(self, sender, **kwargs):
        positions = kwargs.get('positions') or []
        points = self.points_for(len(positions))
        if points <= 0:
            return
        score = get_score(self.world)
        score.add(points)
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=score.value, delta=points)

    def on_game_reset(self, sender, **kwargs):
        score = get_score(self.world)
        previous = score.reset()
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=score.value, delta=-previous)
