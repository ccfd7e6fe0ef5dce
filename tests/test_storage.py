# tests/test_storage.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from worktravel.manager import ToDoManager
from worktravel.schema import STORAGE_KEY, IdGenerator, ListMode, ToDo, dump_todos, load_todos
from worktravel.storage import FileKeyValueStore, MemoryKeyValueStore, StorageError

from .fakes import FrozenClock, ScriptedConfirm


def test_memory_store_get_set() -> None:
    store = MemoryKeyValueStore()
    assert store.get("k") is None
    store.set("k", "v1")
    store.set("k", "v2")
    assert store.get("k") == "v2"


def test_file_store_missing_file_reads_none(file_storage: FileKeyValueStore) -> None:
    assert file_storage.get(STORAGE_KEY) is None


def test_file_store_keeps_keys_side_by_side(file_storage: FileKeyValueStore, data_path: Path) -> None:
    file_storage.set("@toDos", "{}")
    file_storage.set("@listType", "false")

    on_disk = json.loads(data_path.read_text(encoding="utf-8"))
    assert on_disk == {"@toDos": "{}", "@listType": "false"}
    assert FileKeyValueStore(data_path).get("@listType") == "false"


def test_file_store_creates_parent_dirs(tmp_path: Path) -> None:
    store = FileKeyValueStore(tmp_path / "nested" / "deeper" / "storage.json")
    store.set("k", "v")
    assert store.get("k") == "v"


def test_file_store_rejects_non_object(data_path: Path) -> None:
    data_path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(StorageError):
        FileKeyValueStore(data_path).get("k")


def test_file_store_write_failure_raises_storage_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    store = FileKeyValueStore(blocker / "storage.json")
    with pytest.raises(StorageError):
        store.set("k", "v")


def test_manager_survives_restart_on_disk(data_path: Path) -> None:
    clock = FrozenClock()
    first = ToDoManager(FileKeyValueStore(data_path), id_generator=IdGenerator(clock))
    first.load_list_mode()
    first.load()
    milk, _ = first.add("Buy milk", working=True)
    bag, _ = first.add("Pack bag", working=False)
    first.toggle_complete(milk)
    first.set_list_mode(False)
    first.delete(bag, ScriptedConfirm(True))

    second = ToDoManager(FileKeyValueStore(data_path))
    assert second.load_list_mode() is ListMode.TRAVEL
    assert second.load() == {milk: ToDo(text="Buy milk", working=True, is_complete=True)}


def test_manager_write_failure_on_disk_is_swallowed(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")
    m = ToDoManager(FileKeyValueStore(blocker / "storage.json"))
    m.load()

    result = m.add("Still here", working=True)

    assert result is not None
    assert m.get(result[0]).text == "Still here"


def test_dump_uses_stored_field_names() -> None:
    todos = {"1": ToDo(text="a", working=False, is_complete=True, is_edit=True)}
    assert json.loads(dump_todos(todos)) == {
        "1": {"text": "a", "working": False, "isComplete": True}
    }
    assert json.loads(dump_todos(todos, include_edit=True))["1"]["isEdit"] is True


def test_load_todos_preserves_key_order() -> None:
    raw = json.dumps({
        "3": {"text": "c", "working": True},
        "1": {"text": "a", "working": True},
        "2": {"text": "b", "working": False},
    })
    assert list(load_todos(raw)) == ["3", "1", "2"]


def test_id_generator_is_timestamp_and_monotonic() -> None:
    clock = FrozenClock(1_700_000_000.5)
    ids = IdGenerator(clock)

    first = ids.next_id()
    second = ids.next_id()
    clock.advance(-5)
    third = ids.next_id()

    assert first == "1700000000500"
    assert int(second) == int(first) + 1
    assert int(third) == int(second) + 1


def test_id_generator_skips_taken_ids() -> None:
    ids = IdGenerator(FrozenClock(1.0))
    assert ids.next_id(taken={"1000": None, "1001": None}) == "1002"


def test_list_mode_placeholders() -> None:
    assert ListMode.WORK.placeholder == "Add a To Do"
    assert ListMode.TRAVEL.placeholder == "Where do you want to go?"
    assert ListMode.from_working(False) is ListMode.TRAVEL
    assert ListMode.TRAVEL.working is False


def test_failed_replace_leaves_no_temp_file(data_path: Path, monkeypatch) -> None:
    store = FileKeyValueStore(data_path)
    store.set("k", "v1")

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("worktravel.storage.os.replace", broken_replace)
    with pytest.raises(StorageError):
        store.set("k", "v2")

    assert sorted(p.name for p in data_path.parent.iterdir()) == [data_path.name]
    assert FileKeyValueStore(data_path).get("k") == "v1"


def test_manager_failed_saves_do_not_pile_up_temp_files(data_path: Path, monkeypatch) -> None:
    m = ToDoManager(FileKeyValueStore(data_path))
    m.load()

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("worktravel.storage.os.replace", broken_replace)
    m.add("one", working=True)
    m.add("two", working=True)

    assert list(data_path.parent.iterdir()) == []


def test_file_store_non_string_value_is_corruption(data_path: Path) -> None:
    data_path.write_text(json.dumps({"@listType": True}), encoding="utf-8")
    with pytest.raises(StorageError):
        FileKeyValueStore(data_path).get("@listType")
