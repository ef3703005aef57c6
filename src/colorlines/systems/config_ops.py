from __future__ import annotations

import logging
from dataclasses import replace
from collections.abc import Iterable, Mapping
from typing import Any, Dict, Optional, Tuple

from colorlines.components.game_config import GameConfig
from colorlines.constants import (
    ALLOWED_BALLS_PER_ROUND,
    ALLOWED_BOARD_SIZES,
    ALLOWED_MIN_LINE_LENGTHS,
    CONFIG_STORAGE_KEY,
    MAX_COLOR_VALUE,
    MIN_PALETTE_SIZE,
)
from colorlines.storage.store import KeyValueStore, read_json_record, write_json_record

logger = logging.getLogger(__name__)

# Wire names (camelCase) and field names both map onto GameConfig fields.
FIELD_ALIASES: Dict[str, str] = {
    "colors": "colors",
    "minLineLength": "min_line_length",
    "min_line_length": "min_line_length",
    "boardSize": "board_size",
    "board_size": "board_size",
    "ballsPerRound": "balls_per_round",
    "balls_per_round": "balls_per_round",
}

ALLOWED_VALUES: Dict[str, Tuple[int, ...]] = {
    "min_line_length": ALLOWED_MIN_LINE_LENGTHS,
    "board_size": ALLOWED_BOARD_SIZES,
    "balls_per_round": ALLOWED_BALLS_PER_ROUND,
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_choice(field_name: str, value: Any) -> Optional[int]:
    """Return value if it is one of the allowed settings for field_name."""
    if _is_int(value) and value in ALLOWED_VALUES[field_name]:
        return value
    return None


def validate_colors(value: Any) -> Optional[Tuple[int, ...]]:
    """Return the distinct valid colors in order, or None if fewer than two remain."""
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        return None
    palette: list[int] = []
    for color in value:
        if _is_int(color) and 0 <= color <= MAX_COLOR_VALUE and color not in palette:
            palette.append(color)
    if len(palette) < MIN_PALETTE_SIZE:
        return None
    return tuple(palette)


def normalize_payload(update: Mapping[str, Any]) -> Dict[str, Any]:
    normalized: Dict[str, Any] = {}
    for key, value in update.items():
        field_name = FIELD_ALIASES.get(key)
        if field_name is None:
            logger.debug("Ignoring unknown config key %r", key)
            continue
        normalized[field_name] = value
    return normalized


def merge_config(base: GameConfig, update: Mapping[str, Any] | None) -> GameConfig:
    """Apply a partial payload field by field.

    Fields missing from the update, and fields whose value is invalid, keep
    the value they have in base; valid fields are adopted independently.
    """
    if update is None:
        return base
    if not isinstance(update, Mapping):
        logger.warning("Ignoring config update of type %s", type(update).__name__)
        return base
    changes: Dict[str, Any] = {}
    for field_name, value in normalize_payload(update).items():
        if field_name == "colors":
            palette = validate_colors(value)
            if palette is None:
                logger.warning("Rejected palette %r; keeping %d colors", value, len(base.colors))
                continue
            changes["colors"] = palette
            continue
        checked = validate_choice(field_name, value)
        if checked is None:
            logger.warning(
                "Rejected %s=%r; keeping %r", field_name, value, getattr(base, field_name)
            )
            continue
        changes[field_name] = checked
    if not changes:
        return base
    return replace(base, **changes)


def read_stored_config(store: KeyValueStore, *, key: str = CONFIG_STORAGE_KEY) -> Optional[GameConfig]:
    """Stored configuration merged over the defaults; None when nothing is stored."""
    payload = read_json_record(store, key)
    if payload is None:
        return None
    if not isinstance(payload, Mapping):
        logger.warning("Stored config is not an object; using defaults")
        return GameConfig()
    return merge_config(GameConfig(), payload)


def load_config(store: KeyValueStore, *, key: str = CONFIG_STORAGE_KEY) -> GameConfig:
    """Read the stored configuration, reverting to defaults field by field."""
    stored = read_stored_config(store, key=key)
    return stored if stored is not None else GameConfig()


def save_config(store: KeyValueStore, config: GameConfig, *, key: str = CONFIG_STORAGE_KEY) -> bool:
    return write_json_record(store, key, config.to_payload())
