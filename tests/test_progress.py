import json
from pathlib import Path

from boxman.progress import ProgressStore


def test_missing_file_starts_at_level_one(tmp_path: Path) -> None:
    store = ProgressStore(tmp_path / "none.json")
    assert store.read("default") == 1


def test_write_then_read(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "progress.json"
    store = ProgressStore(path)
    store.write("alice", 4)
    store.write("bob", 2)
    assert store.read("alice") == 4
    assert store.read("bob") == 2
    assert store.read("carol") == 1
    assert json.loads(path.read_text()) == {"alice": 4, "bob": 2}


def test_overwrite_keeps_other_sessions(tmp_path: Path) -> None:
    store = ProgressStore(tmp_path / "progress.json")
    store.write("alice", 4)
    store.write("bob", 2)
    store.write("alice", 5)
    assert store.read("alice") == 5
    assert store.read("bob") == 2


def test_unreadable_file_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / "progress.json"
    path.write_text("{not json")
    store = ProgressStore(path)
    assert store.read("alice") == 1
    store.write("alice", 3)
    assert store.read("alice") == 3


def test_malformed_entries_are_ignored(tmp_path: Path) -> None:
    path = tmp_path / "progress.json"
    path.write_text(json.dumps({"alice": "three", "bob": 0, "carol": 2}))
    store = ProgressStore(path)
    assert store.read("alice") == 1
    assert store.read("bob") == 1
    assert store.read("carol") == 2

    path.write_text(json.dumps([1, 2, 3]))
    assert store.read("carol") == 1


def test_user_directory_is_expanded(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    store = ProgressStore("~/progress.json")
    assert store.path == tmp_path / "progress.json"
