"""
TODOSYNC - Shared Todo List
===========================

A single todo list kept in a Supabase table, with a local state-holder
that mirrors it for rendering.

Usage:
    from todosync import TodoManager, TodoSyncConfig, connect_store, render_todos

    store = await connect_store(TodoSyncConfig.from_env())
    manager = TodoManager(store)
    manager.subscribe(lambda state: print(render_todos(state)))

    await manager.ensure_loaded()
    todo = await manager.add("buy milk")
    await manager.toggle_complete(todo.id)
    await manager.remove(todo.id)
"""

from .schema import Todo, TodoState
from .errors import TodoSyncError, TodoStoreError, ConfigError
from .config import TodoSyncConfig
from .store import TodoStore, connect_store
from .manager import TodoManager
from .view import TodoEditor, render_todos, render_banner

__version__ = "1.0.0"
__all__ = [
    "Todo",
    "TodoState",
    "TodoSyncError",
    "TodoStoreError",
    "ConfigError",
    "TodoSyncConfig",
    "TodoStore",
    "connect_store",
    "TodoManager",
    "TodoEditor",
    "render_todos",
    "render_banner",
]
