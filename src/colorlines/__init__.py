"""Color Lines rules engine.

Board cells and game state live in an esper ``World``; systems mutate them and
announce changes on a blinker-backed ``EventBus``. Modules:
- components/: plain dataclass components (board, ball, game state, score)
- events/: the event bus and event name constants
- systems/: board operations, line detection, path finding, scoring,
  leaderboard, configuration, the turn engine and a random player
- storage/: key/value store collaborators used for persistence
- simulation: headless autoplay used by ``simulate.py``
"""
