"""
WORK / TRAVEL TO-DO - Manager
=============================
Owns the in-memory to-do map and mirrors it to storage after every change.
Whole-document overwrite under one key; the list mode lives under another.

Author: worktravel contributors
"""

import json
import logging
from typing import Callable, Dict, List, Optional, Tuple

from .schema import (
    ToDo, ToDoMap, ListMode, IdGenerator,
    STORAGE_KEY, LIST_TYPE_KEY, dump_todos, load_todos
)
from .storage import KeyValueStore

logger = logging.getLogger("worktravel")

DELETE_TITLE = "Delete To Do?"
DELETE_MESSAGE = "Are you sure?"
DELETE_CANCEL = "Cancel"
DELETE_CONFIRM = "I'm sure"

# (title, message, cancel_label, confirm_label) -> True when the destructive option is chosen
ConfirmFn = Callable[[str, str, str, str], bool]


class ToDoManager:
    """
    Work / Travel to-do store

    Build one at startup and hand it to whatever needs it. Every mutating
    call except set_text() saves before returning, so writes land in the
    order the mutations happened.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        persist_edit_state: bool = False,
        id_generator: Optional[IdGenerator] = None
    ):
        self.storage = storage
        self.persist_edit_state = persist_edit_state
        self._ids = id_generator or IdGenerator()
        self.todos: ToDoMap = {}
        self.mode: ListMode = ListMode.WORK

    # ========================================
    # PERSISTENCE OPERATIONS
    # ========================================

    def load(self) -> ToDoMap:
        """Load the to-do map; nothing stored yet means an empty map"""
        raw = self.storage.get(STORAGE_KEY)
        if not raw:
            self.todos = {}
            logger.info("No stored to-dos, starting empty")
            return self.todos

        self.todos = load_todos(raw, include_edit=self.persist_edit_state)
        logger.info(f"Loaded {len(self.todos)} to-dos")
        return self.todos

    def save(self) -> bool:
        """Write the whole map back; failures are logged and dropped"""
        try:
            self.storage.set(
                STORAGE_KEY,
                dump_todos(self.todos, include_edit=self.persist_edit_state)
            )
        except Exception as e:
            logger.warning(f"Saving to-dos failed: {e}")
            return False

        logger.debug(f"Saved {len(self.todos)} to-dos")
        return True

    def load_list_mode(self) -> ListMode:
        """Restore the selected list; first run defaults to work and stores it"""
        raw = self.storage.get(LIST_TYPE_KEY)
        if raw:
            return self.set_list_mode(bool(json.loads(raw)))
        return self.set_list_mode(True)

    def set_list_mode(self, working: bool) -> ListMode:
        """Switch lists; a failed write is logged and the switch still holds"""
        self.mode = ListMode.from_working(working)
        try:
            self.storage.set(LIST_TYPE_KEY, json.dumps(self.mode.working))
        except Exception as e:
            logger.warning(f"Saving list mode failed: {e}")
        logger.info(f"List mode: {self.mode.value}")
        return self.mode

    # ========================================
    # TO-DO OPERATIONS
    # ========================================

    def add(self, text: str, working: Optional[bool] = None) -> Optional[Tuple[str, ToDo]]:
        """Add a to-do to the given list (default: the one on screen)"""
        if text == "":
            logger.debug("Ignoring empty to-do")
            return None

        if working is None:
            working = self.mode.working

        todo_id = self._ids.next_id(taken=self.todos)
        todo = ToDo(text=text, working=working)
        self.todos[todo_id] = todo
        self.save()

        logger.info(f"Added to-do {todo_id} ({ListMode.from_working(working).value})")
        return todo_id, todo

    def set_text(self, todo_id: str, text: str) -> Optional[ToDo]:
        """Live edit; not saved until the edit is committed"""
        todo = self._get_todo(todo_id)
        if not todo:
            return None
        todo.text = text
        return todo

    def toggle_complete(self, todo_id: str) -> Optional[ToDo]:
        todo = self._get_todo(todo_id)
        if not todo:
            return None
        todo.is_complete = not todo.is_complete
        self.save()
        return todo

    def begin_edit(self, todo_id: str) -> Optional[ToDo]:
        todo = self._get_todo(todo_id)
        if not todo:
            return None
        todo.is_edit = True
        self.save()
        return todo

    def commit_edit(self, todo_id: str) -> Optional[ToDo]:
        """Leave edit mode; empty text keeps the entry in edit mode"""
        todo = self._get_todo(todo_id)
        if not todo:
            return None
        if todo.text == "":
            logger.debug(f"Refusing to commit empty text for {todo_id}")
            return todo
        todo.is_edit = False
        self.save()
        return todo

    def delete(self, todo_id: str, confirm: ConfirmFn) -> Optional[ToDo]:
        """
        Remove a to-do after the user confirms.

        Returns the removed entry, or None when the id is unknown or the
        user cancelled.
        """
        if not self._get_todo(todo_id):
            return None

        if not confirm(DELETE_TITLE, DELETE_MESSAGE, DELETE_CANCEL, DELETE_CONFIRM):
            logger.debug(f"Delete of {todo_id} cancelled")
            return None

        todo = self.todos.pop(todo_id)
        self.save()
        logger.info(f"Deleted to-do {todo_id}")
        return todo

    # ========================================
    # QUERIES
    # ========================================

    def get(self, todo_id: str) -> Optional[ToDo]:
        return self.todos.get(todo_id)

    def visible(self) -> List[Tuple[str, ToDo]]:
        """Entries of the current list, in insertion order"""
        return [
            (todo_id, todo) for todo_id, todo in self.todos.items()
            if todo.working == self.mode.working
        ]

    def counts(self) -> Dict[str, int]:
        summary = {mode.value: 0 for mode in ListMode}
        for todo in self.todos.values():
            summary[ListMode.from_working(todo.working).value] += 1
        return summary

    # ========================================
    # HELPER METHODS
    # ========================================

    def _get_todo(self, todo_id: str) -> Optional[ToDo]:
        todo = self.todos.get(todo_id)
        if todo is None:
            logger.warning(f"To-do not found: {todo_id}")
        return todo
