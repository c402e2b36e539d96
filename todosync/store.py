"""
TODOSYNC - Remote Store Adapter
===============================
Four verbs (create, list, update, delete) against a Supabase table.
Every failure surfaces as a generic TodoStoreError; nothing is retried.

Author: todosync contributors
"""

import logging
from typing import Any, Dict, List

from supabase import AsyncClient, acreate_client

from .config import TodoSyncConfig
from .errors import TodoStoreError
from .schema import Todo

logger = logging.getLogger("todosync")

# Postgres resolves the special input 'now' to the transaction timestamp,
# so updated_at is assigned by the server, not by this process.
SERVER_TIMESTAMP = "now"


class TodoStore:
    """
    Remote store for todo records.

    Table layout (see sql/todos.sql):
        id uuid, text text, completed bool, created_at, updated_at
    """

    def __init__(self, client: AsyncClient, table: str = "todos"):
        self.client = client
        self.table = table

    async def create(self, text: str) -> Todo:
        """Insert a record; id and timestamps come back from the store"""
        try:
            response = await self.client.table(self.table).insert({
                "text": text,
                "completed": False,
            }).execute()
            rows = response.data
            if not rows:
                raise LookupError("insert returned no rows")
            todo = Todo.from_row(rows[0])
        except Exception as e:
            logger.error(f"❌ Error creating todo: {e}")
            raise TodoStoreError("create", "Failed to create todo") from e

        logger.info(f"✅ Created todo: {todo.id}")
        return todo

    async def list(self) -> List[Todo]:
        """All records, newest first"""
        try:
            response = await (
                self.client.table(self.table)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
            todos = [Todo.from_row(row) for row in response.data or []]
        except Exception as e:
            logger.error(f"❌ Error getting todos: {e}")
            raise TodoStoreError("list", "Failed to fetch todos") from e

        logger.info(f"📂 Fetched {len(todos)} todos")
        return todos

    async def _update_row(self, todo_id: str, fields: Dict[str, Any]) -> None:
        response = await self.client.table(self.table).update({
            **fields,
            "updated_at": SERVER_TIMESTAMP,
        }).eq("id", todo_id).execute()
        if not response.data:
            raise LookupError(f"no todo with id {todo_id}")

    async def update(self, todo_id: str, fields: Dict[str, Any]) -> None:
        """Merge fields into a record and refresh its updated_at"""
        try:
            await self._update_row(todo_id, fields)
        except Exception as e:
            logger.error(f"❌ Error updating todo {todo_id}: {e}")
            raise TodoStoreError("update", "Failed to update todo") from e

        logger.debug(f"💾 Updated todo {todo_id}: {sorted(fields)}")

    async def delete(self, todo_id: str) -> None:
        try:
            await self.client.table(self.table).delete().eq("id", todo_id).execute()
        except Exception as e:
            logger.error(f"❌ Error deleting todo {todo_id}: {e}")
            raise TodoStoreError("delete", "Failed to delete todo") from e

        logger.info(f"🗑️ Deleted todo: {todo_id}")

    async def toggle_complete(self, todo_id: str, completed: bool) -> None:
        try:
            await self._update_row(todo_id, {"completed": completed})
        except Exception as e:
            logger.error(f"❌ Error toggling todo completion {todo_id}: {e}")
            raise TodoStoreError("toggle", "Failed to toggle todo completion") from e

        logger.debug(f"💾 Toggled todo {todo_id}: completed={completed}")

    async def aclose(self) -> None:
        """Release the HTTP session held by the client"""
        await self.client.postgrest.aclose()


async def connect_store(config: TodoSyncConfig) -> TodoStore:
    """Build a store bound to the configured Supabase project"""
    client = await acreate_client(config.supabase_url, config.supabase_key)
    return TodoStore(client, table=config.table)
