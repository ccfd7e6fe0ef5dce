#!/usr/bin/env python3
"""
WORK / TRAVEL TO-DO - CLI Interface
===================================
Command-line tool and interactive screen for the two to-do lists.

Usage:
    worktravel add "Buy milk"
    worktravel add "Lisbon" --travel
    worktravel list
    worktravel complete 1760880000000
    worktravel edit 1760880000000 "Buy oat milk"
    worktravel delete 1760880000000
    worktravel mode travel
    worktravel shell

Author: worktravel contributors
"""

import argparse
import json
import logging
import os
import sys
from typing import Callable, List, Optional, Tuple

from .manager import ToDoManager
from .schema import ListMode, ToDo
from .storage import FileKeyValueStore, MemoryKeyValueStore

DEFAULT_DATA_PATH = "~/.worktravel/storage.json"

InputFn = Callable[[str], str]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="worktravel",
        description="Work / Travel - two to-do lists in your terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  worktravel add "Send report"          Add to the list on screen
  worktravel add "Lisbon" --travel      Add to the travel list
  worktravel list                       Show the list on screen
  worktravel list --all --json          Dump every to-do as JSON
  worktravel complete <id>              Toggle done / not done
  worktravel edit <id> "New text"       Replace the text of a to-do
  worktravel delete <id> --yes          Delete without asking
  worktravel mode travel                Switch to the travel list
  worktravel shell                      Interactive screen
        """
    )
    parser.add_argument(
        "--data",
        default=os.environ.get("WORKTRAVEL_DATA", DEFAULT_DATA_PATH),
        help="Storage file (env: WORKTRAVEL_DATA)"
    )
    parser.add_argument("--memory", action="store_true", help="Keep nothing on disk")
    parser.add_argument(
        "--persist-edit-state",
        action="store_true",
        help="Store the in-progress edit flag with each to-do"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # ADD command
    add_parser = subparsers.add_parser("add", help="Add a to-do")
    add_parser.add_argument("text", help="To-do text")
    group = add_parser.add_mutually_exclusive_group()
    group.add_argument("--work", dest="working", action="store_const", const=True)
    group.add_argument("--travel", dest="working", action="store_const", const=False)

    # LIST command
    list_parser = subparsers.add_parser("list", help="Show to-dos")
    list_parser.add_argument("--all", action="store_true", help="Both lists")
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # COMPLETE command
    complete_parser = subparsers.add_parser("complete", help="Toggle done / not done")
    complete_parser.add_argument("todo_id", help="To-do ID")

    # EDIT command
    edit_parser = subparsers.add_parser("edit", help="Replace the text of a to-do")
    edit_parser.add_argument("todo_id", help="To-do ID")
    edit_parser.add_argument("text", help="New text")

    # DELETE command
    delete_parser = subparsers.add_parser("delete", help="Delete a to-do")
    delete_parser.add_argument("todo_id", help="To-do ID")
    delete_parser.add_argument("-y", "--yes", action="store_true", help="Don't ask")

    # MODE command
    mode_parser = subparsers.add_parser("mode", help="Switch the list on screen")
    mode_parser.add_argument("mode", choices=[m.value for m in ListMode])

    # SHELL command
    subparsers.add_parser("shell", help="Interactive screen")

    return parser


def make_manager(args: argparse.Namespace) -> ToDoManager:
    if args.memory:
        storage = MemoryKeyValueStore()
    else:
        storage = FileKeyValueStore(args.data)
    manager = ToDoManager(storage, persist_edit_state=args.persist_edit_state)
    manager.load_list_mode()
    manager.load()
    return manager


def prompt_confirm(input_fn: Optional[InputFn] = None) -> Callable[[str, str, str, str], bool]:
    """Two-option prompt; only the destructive choice confirms"""
    input_fn = input_fn or input

    def confirm(title: str, message: str, cancel: str, destructive: str) -> bool:
        print(f"{title} {message}")
        try:
            answer = input_fn(f"  [1] {cancel}  [2] {destructive}: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return False
        return answer == "2"
    return confirm


def always_confirm(title: str, message: str, cancel: str, destructive: str) -> bool:
    return True


# ========================================
# RENDERING
# ========================================

def format_todo(todo_id: str, todo: ToDo, number: Optional[int] = None) -> str:
    icon = "✅" if todo.is_complete else "⬜"
    label = f"{number}." if number is not None else f"[{todo_id}]"
    editing = " ✏️" if todo.is_edit else ""
    return f"  {icon} {label} {todo.text}{editing}"


def render_screen(manager: ToDoManager) -> List[Tuple[str, ToDo]]:
    """Print header and the list on screen; returns the numbered entries"""
    work = "[Work]" if manager.mode is ListMode.WORK else " Work "
    travel = "[Travel]" if manager.mode is ListMode.TRAVEL else " Travel "
    print(f"{work}   {travel}")
    print("-" * 40)
    entries = manager.visible()
    if not entries:
        print("  (nothing here)")
    for number, (todo_id, todo) in enumerate(entries, start=1):
        print(format_todo(todo_id, todo, number))
    print("-" * 40)
    return entries


# ========================================
# INTERACTIVE SHELL
# ========================================

SHELL_HELP = """Commands:
  w / t      Switch to Work / Travel
  <text>     Add a to-do to the list on screen
  c N        Toggle done for entry N
  e N        Edit entry N (type new text, empty line to finish)
  d N        Delete entry N
  q          Quit"""


def _entry_id(entries: List[Tuple[str, ToDo]], raw: str) -> Optional[str]:
    if not raw.isdigit():
        return None
    idx = int(raw) - 1
    if idx < 0 or idx >= len(entries):
        return None
    return entries[idx][0]


def _edit_loop(manager: ToDoManager, todo_id: str, input_fn: InputFn) -> None:
    manager.begin_edit(todo_id)
    while True:
        todo = manager.get(todo_id)
        try:
            line = input_fn(f"  edit ({todo.text}): ")
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if line == "":
            committed = manager.commit_edit(todo_id)
            if not committed.is_edit:
                return
            print("  Text can't be empty.")
            continue
        manager.set_text(todo_id, line)


def run_shell(manager: ToDoManager, input_fn: Optional[InputFn] = None) -> int:
    input_fn = input_fn or input
    print(SHELL_HELP)
    confirm = prompt_confirm(input_fn)
    while True:
        entries = render_screen(manager)
        try:
            line = input_fn(f"{manager.mode.placeholder}: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return 0

        if not line:
            continue

        cmd, _, rest = line.partition(" ")
        lower = cmd.lower()
        if lower == "q" and not rest:
            return 0
        if lower in ("w", "t") and not rest:
            manager.set_list_mode(lower == "w")
            continue
        if lower in ("c", "e", "d") and rest:
            todo_id = _entry_id(entries, rest.strip())
            if todo_id is None:
                print(f"No entry #{rest.strip()}.")
                continue
            if lower == "c":
                manager.toggle_complete(todo_id)
            elif lower == "e":
                _edit_loop(manager, todo_id, input_fn)
            else:
                manager.delete(todo_id, confirm)
            continue

        manager.add(line)


# ========================================
# ENTRY POINT
# ========================================

def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    manager = make_manager(args)

    # Execute command
    if args.command == "add":
        result = manager.add(args.text, working=args.working)
        if not result:
            print("❌ Text required")
            return 1
        todo_id, todo = result
        print(f"✅ Added [{todo_id}] to {ListMode.from_working(todo.working).value}")

    elif args.command == "list":
        entries = list(manager.todos.items()) if args.all else manager.visible()
        if args.json:
            payload = {
                todo_id: todo.model_dump(by_alias=True) for todo_id, todo in entries
            }
            print(json.dumps(payload, indent=2))
        else:
            counts = manager.counts()
            print(f"📋 {manager.mode.value.title()} "
                  f"(work: {counts['work']}, travel: {counts['travel']})")
            print("-" * 40)
            if not entries:
                print("  (nothing here)")
            for todo_id, todo in entries:
                print(format_todo(todo_id, todo))

    elif args.command == "complete":
        todo = manager.toggle_complete(args.todo_id)
        if not todo:
            print(f"❌ To-do not found: {args.todo_id}")
            return 1
        print(f"{'✅ Done' if todo.is_complete else '⬜ Not done'}: {todo.text}")

    elif args.command == "edit":
        if not manager.begin_edit(args.todo_id):
            print(f"❌ To-do not found: {args.todo_id}")
            return 1
        manager.set_text(args.todo_id, args.text)
        todo = manager.commit_edit(args.todo_id)
        if todo.is_edit:
            print("❌ Text can't be empty")
            return 1
        print(f"✏️ Updated: {todo.text}")

    elif args.command == "delete":
        if not manager.get(args.todo_id):
            print(f"❌ To-do not found: {args.todo_id}")
            return 1
        confirm = always_confirm if args.yes else prompt_confirm()
        todo = manager.delete(args.todo_id, confirm)
        if todo:
            print(f"🗑️ Deleted: {todo.text}")
        else:
            print("Cancelled")

    elif args.command == "mode":
        mode = manager.set_list_mode(args.mode == ListMode.WORK.value)
        print(f"📋 Showing {mode.value}")

    elif args.command == "shell":
        return run_shell(manager)

    return 0


if __name__ == "__main__":
    sys.exit(main())
