from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List

from colorlines.components.leaderboard_entry import LeaderboardEntry
from colorlines.constants import LEADERBOARD_SIZE, LEADERBOARD_STORAGE_KEY
from colorlines.storage.store import KeyValueStore, MemoryStore, read_json_record, write_json_record

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 with millisecond precision and a trailing Z for UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class LeaderboardSystem:
    """Maintains and persists the top scores across games."""

    def __init__(
        self,
        store: KeyValueStore | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
        storage_key: str = LEADERBOARD_STORAGE_KEY,
        load_existing: bool = True,
    ) -> None:
        self._store = store if store is not None else MemoryStore()
        self._clock = clock or _utc_now
        self._storage_key = storage_key
        self._entries: List[LeaderboardEntry] = []
        if load_existing:
            self.load()

    def load(self) -> None:
        payload = read_json_record(self._store, self._storage_key)
        if payload is None:
            self._entries = []
            return
        if not isinstance(payload, list):
            logger.warning("Leaderboard record is not a list; starting empty")
            self._entries = []
            return
        entries: List[LeaderboardEntry] = []
        for item in payload:
            entry = self._entry_from_record(item)
            if entry is None:
                logger.warning("Skipping malformed leaderboard entry: %r", item)
                continue
            entries.append(entry)
        entries.sort(key=lambda entry: entry.score, reverse=True)
        self._entries = entries[:LEADERBOARD_SIZE]

    @staticmethod
    def _entry_from_record(item: object) -> LeaderboardEntry | None:
        if not isinstance(item, dict):
            return None
        score = item.get("score")
        date = item.get("date")
        if isinstance(score, bool) or not isinstance(score, int) or score < 0:
            return None
        if not isinstance(date, str):
            return None
        return LeaderboardEntry(score=score, date=date)

    def save(self) -> None:
        write_json_record(
            self._store,
            self._storage_key,
            [entry.to_record() for entry in self._entries],
        )

    def qualifies(self, score: int) -> bool:
        if len(self._entries) < LEADERBOARD_SIZE:
            return True
        return score > self._entries[-1].score

    def add_score(self, score: int) -> bool:
        """Record score if it reaches the top list; return True when admitted."""
        if isinstance(score, bool) or not isinstance(score, int) or score < 0:
            return False
        if not self.qualifies(score):
            return False
        self._entries.append(LeaderboardEntry(score=score, date=format_timestamp(self._clock())))
        # list.sort is stable, so an equal newcomer stays behind existing entries.
        self._entries.sort(key=lambda entry: entry.score, reverse=True)
        del self._entries[LEADERBOARD_SIZE:]
        self.save()
        return True

    def get_top_scores(self) -> List[LeaderboardEntry]:
        return list(self._entries)

    def clear(self) -> None:
        self._entries = []
        self.save()
