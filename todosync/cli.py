#!/usr/bin/env python3
"""
TODOSYNC - CLI Interface
========================
Command-line front end for the shared todo list.

Usage:
    todosync list
    todosync add "buy milk"
    todosync edit <id> "buy oat milk"
    todosync toggle <id>
    todosync rm <id>

Author: todosync contributors
"""

import argparse
import asyncio
import json
import logging
import sys

from .config import TodoSyncConfig
from .errors import ConfigError, TodoStoreError
from .manager import TodoManager
from .store import connect_store
from .view import TodoEditor, render_banner, render_todos


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todosync",
        description="todosync - shared todo list backed by Supabase",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  todosync list                         Show all todos, newest first
  todosync list --json                  Dump todos as JSON
  todosync add "buy milk"               Add a todo
  todosync edit 3f2a... "buy oat milk"  Change a todo's text
  todosync toggle 3f2a...               Flip a todo's completed flag
  todosync rm 3f2a...                   Delete a todo

Environment:
  SUPABASE_URL, SUPABASE_KEY, TODOSYNC_TABLE (default: todos)
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # LIST command
    list_parser = subparsers.add_parser("list", help="List todos")
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # ADD command
    add_parser = subparsers.add_parser("add", help="Add a todo")
    add_parser.add_argument("text", help="Todo text")

    # EDIT command
    edit_parser = subparsers.add_parser("edit", help="Change a todo's text")
    edit_parser.add_argument("todo_id", help="Todo ID")
    edit_parser.add_argument("text", help="New text (blank keeps the old text)")

    # TOGGLE command
    toggle_parser = subparsers.add_parser("toggle", help="Toggle completion")
    toggle_parser.add_argument("todo_id", help="Todo ID")

    # RM command
    rm_parser = subparsers.add_parser("rm", help="Delete a todo")
    rm_parser.add_argument("todo_id", help="Todo ID")

    return parser


async def run_command(args: argparse.Namespace, manager: TodoManager) -> int:
    """Execute one command against a manager; returns the exit code"""
    await manager.ensure_loaded()
    if manager.error:
        # List never loaded; ids cannot be resolved
        print(render_banner(manager.error))
        return 1

    try:
        if args.command == "add":
            await manager.add(args.text)

        elif args.command == "edit":
            todo = manager.get(args.todo_id)
            if todo is None:
                print(f"❌ Todo not found: {args.todo_id}")
                return 1
            editor = TodoEditor(manager)
            editor.begin(todo)
            if not await editor.save(args.text):
                print("Nothing to save")

        elif args.command == "toggle":
            if manager.get(args.todo_id) is None:
                print(f"❌ Todo not found: {args.todo_id}")
                return 1
            await manager.toggle_complete(args.todo_id)

        elif args.command == "rm":
            await manager.remove(args.todo_id)

    except TodoStoreError:
        # Already recorded in manager.error; shown below
        pass

    state = manager.snapshot()

    if args.command == "list" and args.json:
        print(json.dumps([t.model_dump(mode="json") for t in state.todos], indent=2))
    else:
        banner = render_banner(state.error)
        if banner:
            print(banner)
        print(render_todos(state))

    return 1 if state.error else 0


async def _main(args: argparse.Namespace) -> int:
    try:
        config = TodoSyncConfig.from_env()
    except ConfigError as e:
        print(f"❌ {e}")
        return 1

    store = await connect_store(config)
    try:
        return await run_command(args, TodoManager(store))
    finally:
        await store.aclose()


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    return asyncio.run(_main(args))


if __name__ == "__main__":
    sys.exit(main())
