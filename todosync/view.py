"""
TODOSYNC - Text Presentation
============================
Stateless rendering of a TodoState and the single-item edit session.
"""

import logging
from typing import Optional

from .manager import TodoManager
from .schema import Todo, TodoState

logger = logging.getLogger("todosync")

EMPTY_MESSAGE = "No tasks yet! Add some above."
LOADING_MESSAGE = "⏳ Loading todos..."


def render_banner(error: Optional[str]) -> str:
    """Single error banner, or nothing"""
    if not error:
        return ""
    return f"❌ {error}"


def render_todos(state: TodoState) -> str:
    """Human-readable list, newest first"""
    if state.loading:
        return LOADING_MESSAGE

    if not state.todos:
        return EMPTY_MESSAGE

    lines = []
    for todo in state.todos:
        icon = "✅" if todo.completed else "⬜"
        busy = ""
        if todo.id == state.is_deleting:
            busy = " [deleting]"
        elif todo.id == state.is_updating:
            busy = " [saving]"
        lines.append(f"  {icon} [{todo.id}] {todo.text}{busy}")

    lines.extend([
        "",
        f"{state.active_count} active, {state.completed_count} completed",
    ])
    if state.is_adding:
        lines.append("➕ Adding...")

    return "\n".join(lines)


class TodoEditor:
    """
    Edit session for one record.

    Blank text reverts to the previous text and unchanged text is dropped;
    neither reaches the store. Store failures propagate to the caller.
    """

    def __init__(self, manager: TodoManager):
        self.manager = manager
        self.todo: Optional[Todo] = None
        self.text = ""

    @property
    def editing(self) -> bool:
        return self.todo is not None

    def begin(self, todo: Todo) -> None:
        self.todo = todo
        self.text = todo.text

    def cancel(self) -> None:
        if self.todo is not None:
            self.text = self.todo.text
        self.todo = None

    async def save(self, text: str) -> bool:
        """Returns True if the edit was sent to the store"""
        if self.todo is None:
            raise RuntimeError("No todo is being edited")

        todo = self.todo
        new_text = text.strip()
        if not new_text or new_text == todo.text:
            logger.debug(f"Edit of {todo.id} discarded")
            self.cancel()
            return False

        await self.manager.update_text(todo.id, new_text)
        self.text = new_text
        self.todo = None
        return True
