from dataclasses import dataclass

@dataclass(slots=True)
class Ball:
    """Occupant of a cell.

    A ball is nothing more than its color; the cell entity it is attached to
    gives it a position. Moving a ball detaches it from one cell and attaches a
    fresh Ball with the same color to another.
    """
    color: int
