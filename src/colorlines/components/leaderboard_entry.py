from dataclasses import dataclass

@dataclass(frozen=True, slots=True)
class LeaderboardEntry:
    """Single persisted high score; date is an ISO-8601 UTC timestamp."""
    score: int
    date: str

    def to_record(self) -> dict:
        return {"score": self.score, "date": self.date}
