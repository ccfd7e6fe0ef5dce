# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from worktravel.manager import ToDoManager
from worktravel.schema import IdGenerator
from worktravel.storage import FileKeyValueStore, MemoryKeyValueStore

from .fakes import FrozenClock, ScriptedConfirm


@pytest.fixture()
def storage() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture()
def manager(storage: MemoryKeyValueStore, clock: FrozenClock) -> ToDoManager:
    """Manager on an empty memory store, loaded the way the app starts up."""
    m = ToDoManager(storage, id_generator=IdGenerator(clock))
    m.load_list_mode()
    m.load()
    return m


@pytest.fixture()
def data_path(tmp_path: Path) -> Path:
    return tmp_path / "storage.json"


@pytest.fixture()
def file_storage(data_path: Path) -> FileKeyValueStore:
    return FileKeyValueStore(data_path)


@pytest.fixture()
def yes() -> ScriptedConfirm:
    return ScriptedConfirm(True)


@pytest.fixture()
def no() -> ScriptedConfirm:
    return ScriptedConfirm(False)
