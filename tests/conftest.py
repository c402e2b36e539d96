from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Set

import pytest

from todosync.errors import TodoStoreError
from todosync.manager import TodoManager
from todosync.schema import Todo
from todosync.store import TodoStore

T0 = datetime(2020, 1, 1, tzinfo=timezone.utc)


class FakeQuery:
    """Enough of the postgrest request builder for TodoStore."""

    def __init__(self, client: "FakeSupabase", table: str) -> None:
        self.client = client
        self.table = table
        self.op = "select"
        self.payload: Dict[str, Any] = {}
        self.filters: List[tuple] = []
        self.order_by: Optional[tuple] = None

    def select(self, *_columns: str) -> "FakeQuery":
        self.op = "select"
        return self

    def insert(self, payload: Dict[str, Any]) -> "FakeQuery":
        self.op = "insert"
        self.payload = payload
        return self

    def update(self, payload: Dict[str, Any]) -> "FakeQuery":
        self.op = "update"
        self.payload = payload
        return self

    def delete(self) -> "FakeQuery":
        self.op = "delete"
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self.filters.append((column, value))
        return self

    def order(self, column: str, desc: bool = False) -> "FakeQuery":
        self.order_by = (column, desc)
        return self

    def _matches(self, row: Dict[str, Any]) -> bool:
        return all(row.get(column) == value for column, value in self.filters)

    async def execute(self) -> SimpleNamespace:
        self.client.calls.append((self.op, self.table, dict(self.payload), list(self.filters)))
        if self.op in self.client.fail_on:
            raise ConnectionError(f"{self.op} refused")

        rows = self.client.rows
        if self.op == "insert":
            row = {
                "id": f"row-{next(self.client.ids)}",
                "completed": False,
                "created_at": self.client.now().isoformat(),
                "updated_at": self.client.now().isoformat(),
                **self.payload,
            }
            rows.append(row)
            return SimpleNamespace(data=[dict(row)])

        if self.op == "update":
            matched = [row for row in rows if self._matches(row)]
            for row in matched:
                row.update(self.payload)
            return SimpleNamespace(data=[dict(row) for row in matched])

        if self.op == "delete":
            matched = [row for row in rows if self._matches(row)]
            self.client.rows = [row for row in rows if not self._matches(row)]
            return SimpleNamespace(data=matched)

        selected = [dict(row) for row in rows if self._matches(row)]
        if self.order_by:
            column, desc = self.order_by
            selected.sort(key=lambda row: row[column], reverse=desc)
        return SimpleNamespace(data=selected)


class FakePostgrest:
    def __init__(self) -> None:
        self.closed = False

    async def aclose(self) -> None:
        self.closed = True


class FakeSupabase:
    """In-memory stand-in for supabase.AsyncClient."""

    def __init__(self) -> None:
        self.rows: List[Dict[str, Any]] = []
        self.calls: List[tuple] = []
        self.fail_on: Set[str] = set()
        self.ids = itertools.count(1)
        self._tick = itertools.count(1)
        self.postgrest = FakePostgrest()

    def now(self) -> datetime:
        return T0 + timedelta(minutes=next(self._tick))

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


class FakeStore:
    """Recording TodoStore replacement with per-verb failure injection."""

    def __init__(self, todos: Optional[List[Todo]] = None) -> None:
        self.todos: List[Todo] = list(todos or [])
        self.calls: List[tuple] = []
        self.fail_on: Set[str] = set()
        self.ids = itertools.count(100)
        self.closed = False

    def _check(self, operation: str, message: str) -> None:
        if operation in self.fail_on:
            raise TodoStoreError(operation, message)

    async def create(self, text: str) -> Todo:
        self.calls.append(("create", text))
        self._check("create", "Failed to create todo")
        todo = Todo(id=str(next(self.ids)), text=text, created_at=T0, updated_at=T0)
        self.todos.insert(0, todo)
        return todo

    async def list(self) -> List[Todo]:
        self.calls.append(("list",))
        self._check("list", "Failed to fetch todos")
        return [todo.model_copy() for todo in self.todos]

    async def update(self, todo_id: str, fields: Dict[str, Any]) -> None:
        self.calls.append(("update", todo_id, fields))
        self._check("update", "Failed to update todo")

    async def delete(self, todo_id: str) -> None:
        self.calls.append(("delete", todo_id))
        self._check("delete", "Failed to delete todo")
        self.todos = [t for t in self.todos if t.id != todo_id]

    async def toggle_complete(self, todo_id: str, completed: bool) -> None:
        self.calls.append(("toggle", todo_id, completed))
        self._check("toggle", "Failed to toggle todo completion")

    async def aclose(self) -> None:
        self.closed = True


def make_todo(todo_id: str, text: str = "task", minutes: int = 0, completed: bool = False) -> Todo:
    stamp = T0 + timedelta(minutes=minutes)
    return Todo(id=todo_id, text=text, completed=completed, created_at=stamp, updated_at=stamp)


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def store(fake_supabase: FakeSupabase) -> TodoStore:
    return TodoStore(fake_supabase, table="todos")


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore([make_todo("2", "second", minutes=2), make_todo("1", "first", minutes=1)])


@pytest.fixture
def manager(fake_store: FakeStore) -> TodoManager:
    return TodoManager(fake_store)
