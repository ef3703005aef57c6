from dataclasses import dataclass

@dataclass
class Score:
    value: int = 0

    def add(self, points: int) -> int:
        if points > 0:
            self.value += points
        return self.value

    def reset(self) -> int:
        previous = self.value
        self.value = 0
        return previous
