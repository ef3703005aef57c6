from dataclasses import dataclass

@dataclass(frozen=True, slots=True)
class BoardPosition:
    row: int
    col: int
