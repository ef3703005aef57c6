import json
import logging

from colorlines.storage.store import JsonFileStore, MemoryStore, read_json_record, write_json_record


class BrokenStore:
    def get(self, key):
        raise OSError("disk on fire")

    def set(self, key, value):
        raise OSError("disk on fire")


def test_memory_store_round_trip():
    store = MemoryStore({"a": "1"})
    assert store.get("a") == "1"
    assert store.get("missing") is None
    store.set("b", "2")
    assert store.get("b") == "2"


def test_json_file_store_persists_between_instances(tmp_path):
    path = tmp_path / "nested" / "store.json"
    JsonFileStore(path).set("colorlines.config", '{"boardSize": 7}')
    JsonFileStore(path).set("other", "x")

    reopened = JsonFileStore(path)
    assert reopened.get("colorlines.config") == '{"boardSize": 7}'
    assert json.loads(path.read_text()) == {"colorlines.config": '{"boardSize": 7}', "other": "x"}


def test_json_file_store_ignores_corrupt_file(tmp_path, caplog):
    path = tmp_path / "store.json"
    path.write_text("{not json")
    store = JsonFileStore(path)
    with caplog.at_level(logging.WARNING):
        assert store.get("anything") is None
    assert "unreadable" in caplog.text
    store.set("k", "v")
    assert store.get("k") == "v"


def test_json_file_store_missing_file_is_empty(tmp_path):
    assert JsonFileStore(tmp_path / "absent.json").get("k") is None


def test_read_json_record_handles_malformed_and_failing_stores(caplog):
    store = MemoryStore({"good": "[1, 2]", "bad": "{oops"})
    assert read_json_record(store, "good") == [1, 2]
    assert read_json_record(store, "missing") is None
    with caplog.at_level(logging.WARNING):
        assert read_json_record(store, "bad") is None
        assert read_json_record(BrokenStore(), "good") is None
    assert "malformed" in caplog.text


def test_write_json_record_reports_failure():
    store = MemoryStore()
    assert write_json_record(store, "k", {"a": 1})
    assert json.loads(store.get("k")) == {"a": 1}
    assert not write_json_record(BrokenStore(), "k", {"a": 1})
