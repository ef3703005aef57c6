"""Key/value store collaborators used to persist configuration and scores.

Both stores speak strings only; callers serialise their own records. Reads of
missing or unreadable data return None and writes that fail are logged, so a
broken store degrades to "nothing persisted" instead of interrupting a game.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """Dictionary-backed store for tests and ephemeral sessions."""

    def __init__(self, initial: Dict[str, str] | None = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """Store persisting every key into a single JSON object on disk."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> Dict[str, str]:
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable store %s: %s", self._path, exc)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Ignoring store %s: expected a JSON object", self._path)
            return {}
        return {key: value for key, value in payload.items() if isinstance(value, str)}

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2)
        except OSError as exc:
            logger.warning("Failed to write store %s: %s", self._path, exc)


def read_json_record(store: KeyValueStore, key: str) -> object | None:
    """Fetch and decode a JSON record; None when absent or malformed."""
    try:
        raw = store.get(key)
    except Exception as exc:  # collaborator failures must not reach the engine
        logger.warning("Failed to read %r from store: %s", key, exc)
        return None
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as exc:
        logger.warning("Discarding malformed %r record: %s", key, exc)
        return None


def write_json_record(store: KeyValueStore, key: str, record: object) -> bool:
    try:
        store.set(key, json.dumps(record))
    except Exception as exc:  # collaborator failures must not reach the engine
        logger.warning("Failed to save %r to store: %s", key, exc)
        return False
    return True
