import json
import logging

from colorlines.components.game_config import GameConfig
from colorlines.constants import CONFIG_STORAGE_KEY, DEFAULT_COLORS
from colorlines.storage.store import MemoryStore
from colorlines.systems.config_ops import (
    load_config,
    merge_config,
    read_stored_config,
    save_config,
    validate_colors,
)


def test_valid_fields_apply_independently_of_invalid_ones():
    adopted = merge_config(GameConfig(), {"boardSize": 99, "ballsPerRound": 4})
    assert adopted.board_size == 9
    assert adopted.balls_per_round == 4


def test_invalid_field_keeps_prior_value_not_default():
    base = GameConfig(min_line_length=4, board_size=7)
    adopted = merge_config(base, {"minLineLength": 2, "boardSize": "big"})
    assert adopted == base


def test_snake_case_keys_are_accepted():
    adopted = merge_config(GameConfig(), {"min_line_length": 3, "board_size": 12})
    assert (adopted.min_line_length, adopted.board_size) == (3, 12)


def test_booleans_and_floats_are_not_integers():
    adopted = merge_config(GameConfig(), {"ballsPerRound": True, "boardSize": 8.0})
    assert adopted == GameConfig()


def test_unknown_keys_and_non_mappings_are_ignored(caplog):
    assert merge_config(GameConfig(), {"speed": 3}) == GameConfig()
    with caplog.at_level(logging.WARNING):
        assert merge_config(GameConfig(), ["boardSize", 5]) == GameConfig()
    assert merge_config(GameConfig(), None) == GameConfig()
    assert caplog.records


def test_palette_needs_two_distinct_valid_colors():
    base = GameConfig(colors=(1, 2, 3))
    assert merge_config(base, {"colors": [0xFF0000]}).colors == (1, 2, 3)
    assert merge_config(base, {"colors": [5, 5, 5]}).colors == (1, 2, 3)
    assert merge_config(base, {"colors": "red"}).colors == (1, 2, 3)
    assert merge_config(base, {"colors": [0xFF0000, 0x1000000, -1, 0x00FF00]}).colors == (
        0xFF0000,
        0x00FF00,
    )


def test_validate_colors_keeps_order_and_drops_duplicates():
    assert validate_colors([3, 1, 3, 2]) == (3, 1, 2)
    assert validate_colors([True, 4]) is None
    assert validate_colors(None) is None


def test_load_returns_defaults_when_absent_or_corrupt(caplog):
    assert load_config(MemoryStore()) == GameConfig()
    store = MemoryStore({CONFIG_STORAGE_KEY: "{broken"})
    with caplog.at_level(logging.WARNING):
        assert load_config(store) == GameConfig()
    assert caplog.records


def test_load_reverts_invalid_fields_to_defaults():
    payload = {"colors": [1], "minLineLength": 4, "boardSize": 40, "ballsPerRound": 2}
    store = MemoryStore({CONFIG_STORAGE_KEY: json.dumps(payload)})
    loaded = load_config(store)
    assert loaded.colors == DEFAULT_COLORS
    assert loaded.min_line_length == 4
    assert loaded.board_size == 9
    assert loaded.balls_per_round == 2


def test_load_non_object_record_gives_defaults():
    store = MemoryStore({CONFIG_STORAGE_KEY: "[1, 2, 3]"})
    assert load_config(store) == GameConfig()


def test_save_then_load_round_trip_uses_wire_names():
    store = MemoryStore()
    config = GameConfig(colors=(1, 2), min_line_length=3, board_size=5, balls_per_round=1)
    assert save_config(store, config)
    assert json.loads(store.get(CONFIG_STORAGE_KEY)) == {
        "colors": [1, 2],
        "minLineLength": 3,
        "boardSize": 5,
        "ballsPerRound": 1,
    }
    assert load_config(store) == config


def test_read_stored_config_distinguishes_missing_record():
    assert read_stored_config(MemoryStore()) is None
    store = MemoryStore({CONFIG_STORAGE_KEY: json.dumps({"boardSize": 6})})
    assert read_stored_config(store) == GameConfig(board_size=6)
