"""
Unit tests for the file-backed streamer list.
"""

import json

from live_notifier.storage.streamers import StreamerStore


def test_load_missing_file_is_empty(tmp_path):
    store = StreamerStore(tmp_path / "streamers.json")
    assert store.load() == []


def test_load_existing_file(tmp_path):
    path = tmp_path / "streamers.json"
    path.write_text(json.dumps({"streamers": ["alice", "bob"]}), encoding="utf-8")
    store = StreamerStore(path)
    assert store.load() == ["alice", "bob"]


def test_load_invalid_json_is_empty(tmp_path):
    path = tmp_path / "streamers.json"
    path.write_text("{not json", encoding="utf-8")
    assert StreamerStore(path).load() == []


def test_add_persists_and_is_idempotent(tmp_path):
    path = tmp_path / "streamers.json"
    store = StreamerStore(path)
    assert store.add("alice") is True
    assert store.add("alice") is False
    assert json.loads(path.read_text(encoding="utf-8")) == {"streamers": ["alice"]}
    assert StreamerStore(path).load() == ["alice"]


def test_remove(tmp_path):
    path = tmp_path / "streamers.json"
    store = StreamerStore(path)
    store.add("alice")
    store.add("bob")
    assert store.remove("alice") is True
    assert store.remove("alice") is False
    assert StreamerStore(path).load() == ["bob"]
    assert not (tmp_path / "streamers.tmp").exists()


def test_list_returns_copy(tmp_path):
    store = StreamerStore(tmp_path / "s.json")
    store.add("alice")
    listed = store.list()
    listed.append("mallory")
    assert store.list() == ["alice"]
