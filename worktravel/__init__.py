"""
WORK / TRAVEL TO-DO
===================
Two independent to-do lists (work and travel) kept in a local key-value store.

Usage:
    from worktravel import ToDoManager, FileKeyValueStore

    manager = ToDoManager(FileKeyValueStore("~/.worktravel/storage.json"))
    manager.load_list_mode()
    manager.load()

    todo_id, todo = manager.add("Buy milk", working=True)
    manager.toggle_complete(todo_id)
    manager.set_list_mode(False)    # travel list on screen

Author: worktravel contributors
"""

from .schema import (
    ToDo,
    ToDoMap,
    ListMode,
    IdGenerator,
    STORAGE_KEY,
    LIST_TYPE_KEY,
    dump_todos,
    load_todos
)

from .storage import (
    KeyValueStore,
    FileKeyValueStore,
    MemoryKeyValueStore,
    StorageError
)

from .manager import ToDoManager

__version__ = "1.0.0"
__all__ = [
    "ToDoManager",
    "ToDo",
    "ToDoMap",
    "ListMode",
    "IdGenerator",
    "STORAGE_KEY",
    "LIST_TYPE_KEY",
    "dump_todos",
    "load_todos",
    "KeyValueStore",
    "FileKeyValueStore",
    "MemoryKeyValueStore",
    "StorageError"
]
