"""
WORK / TRAVEL TO-DO - Schema Definition
=======================================
Record shape for the two-list to-do app and the storage keys it lives under.

Author: worktravel contributors
"""

from enum import Enum
from typing import Dict, Optional
import json
import time

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


STORAGE_KEY = "@toDos"
LIST_TYPE_KEY = "@listType"


class ListMode(str, Enum):
    """Which list is on screen"""
    WORK = "work"
    TRAVEL = "travel"

    @classmethod
    def from_working(cls, working: bool) -> "ListMode":
        return cls.WORK if working else cls.TRAVEL

    @property
    def working(self) -> bool:
        return self is ListMode.WORK

    @property
    def placeholder(self) -> str:
        return "Add a To Do" if self.working else "Where do you want to go?"


class ToDo(BaseModel):
    """Single to-do entry"""
    model_config = ConfigDict(populate_by_name=True)

    text: str
    working: bool                                      # True = work, False = travel
    is_complete: bool = Field(default=False, alias="isComplete")
    is_edit: bool = Field(default=False, alias="isEdit")  # transient, inline editing


ToDoMap = Dict[str, ToDo]

_todo_map_adapter = TypeAdapter(ToDoMap)


def dump_todos(todos: ToDoMap, include_edit: bool = False) -> str:
    """Serialize the whole collection to the stored JSON document"""
    exclude = None if include_edit else {"is_edit"}
    payload = {
        key: todo.model_dump(by_alias=True, exclude=exclude)
        for key, todo in todos.items()
    }
    return json.dumps(payload)


def load_todos(raw: str, include_edit: bool = False) -> ToDoMap:
    """
    Parse the stored JSON document.

    Malformed JSON or records that fail validation raise; callers decide
    whether that is fatal.
    """
    todos = _todo_map_adapter.validate_json(raw)
    if not include_edit:
        for todo in todos.values():
            todo.is_edit = False
    return todos


class IdGenerator:
    """
    Millisecond-timestamp ids that never repeat.

    Two calls within the same millisecond get consecutive values instead of
    the same one.
    """

    def __init__(self, clock=None):
        self._clock = clock or time.time
        self._last: Optional[int] = None

    def next_id(self, taken=()) -> str:
        candidate = int(self._clock() * 1000)
        if self._last is not None and candidate <= self._last:
            candidate = self._last + 1
        while str(candidate) in taken:
            candidate += 1
        self._last = candidate
        return str(candidate)
