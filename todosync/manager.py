"""
TODOSYNC - Todo Manager
=======================
Single source of truth for the list shown to the user.
Every action follows the same shape: set busy flag, call the store,
reconcile the local list (or record the error), clear the flag.

Author: todosync contributors
"""

import logging
from typing import Callable, List, Optional

from .errors import TodoStoreError
from .schema import Todo, TodoState, utcnow
from .store import TodoStore

logger = logging.getLogger("todosync")

Listener = Callable[[TodoState], None]


class TodoManager:
    """
    Todo state-holder

    State:  todos, loading, error
    Flags:  is_adding, is_updating (one id), is_deleting (one id)

    Listeners registered with subscribe() get a fresh snapshot after
    every change, so a renderer never reads a half-applied state.
    """

    def __init__(self, store: TodoStore):
        self.store = store
        self.todos: List[Todo] = []
        self.loading = True
        self.error: Optional[str] = None
        self.is_adding = False
        self.is_updating: Optional[str] = None
        self.is_deleting: Optional[str] = None
        self._loaded_once = False
        self._listeners: List[Listener] = []

    # ========================================
    # SUBSCRIPTIONS
    # ========================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self) -> TodoState:
        return TodoState(
            todos=[todo.model_copy() for todo in self.todos],
            loading=self.loading,
            error=self.error,
            is_adding=self.is_adding,
            is_updating=self.is_updating,
            is_deleting=self.is_deleting,
        )

    def _notify(self) -> None:
        if not self._listeners:
            return
        state = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                # A broken renderer must not leave busy flags set
                logger.warning(f"Listener {listener!r} failed: {e}")

    def _fail(self, error: Exception) -> None:
        self.error = str(error) or "Operation failed"
        logger.warning(f"⚠️ {self.error}")

    # ========================================
    # LOADING
    # ========================================

    async def load(self) -> None:
        """Replace the local list with the remote one; never raises store errors"""
        self.loading = True
        self.error = None
        try:
            self._notify()
            self.todos = await self.store.list()
            logger.info(f"📂 Loaded {len(self.todos)} todos")
        except TodoStoreError as e:
            self._fail(e)
        finally:
            self._loaded_once = True
            self.loading = False
            self._notify()

    async def ensure_loaded(self) -> None:
        """Load on first use only"""
        if not self._loaded_once:
            await self.load()

    async def refresh(self) -> None:
        await self.load()

    # ========================================
    # MUTATIONS
    # ========================================

    async def add(self, text: str) -> Optional[Todo]:
        """Create a todo and put it at the top of the list.

        Blank text is ignored. Store failures are recorded in ``error``
        and re-raised so the caller can keep the input for a retry.
        """
        text = text.strip()
        if not text:
            logger.debug("Ignoring blank todo")
            return None

        self.is_adding = True
        try:
            self._notify()
            todo = await self.store.create(text)
            self.todos = [todo] + self.todos
            logger.info(f"✅ Added todo: {todo.text} ({todo.id})")
            return todo
        except TodoStoreError as e:
            self._fail(e)
            raise
        finally:
            self.is_adding = False
            self._notify()

    async def update_text(self, todo_id: str, text: str) -> None:
        """Persist new text; callers suppress empty or unchanged edits"""
        self.is_updating = todo_id
        try:
            self._notify()
            await self.store.update(todo_id, {"text": text})
            self._patch(todo_id, text=text)
            logger.info(f"✏️ Updated todo: {todo_id}")
        except TodoStoreError as e:
            self._fail(e)
            raise
        finally:
            self.is_updating = None
            self._notify()

    async def toggle_complete(self, todo_id: str) -> None:
        todo = self.get(todo_id)
        if todo is None:
            logger.debug(f"Toggle ignored, no local todo {todo_id}")
            return

        completed = not todo.completed
        self.is_updating = todo_id
        try:
            self._notify()
            await self.store.toggle_complete(todo_id, completed)
            self._patch(todo_id, completed=completed)
            logger.info(f"{'✅' if completed else '⬜'} Toggled todo: {todo_id}")
        except TodoStoreError as e:
            self._fail(e)
            raise
        finally:
            self.is_updating = None
            self._notify()

    async def remove(self, todo_id: str) -> None:
        self.is_deleting = todo_id
        try:
            self._notify()
            await self.store.delete(todo_id)
            self.todos = [t for t in self.todos if t.id != todo_id]
            logger.info(f"🗑️ Removed todo: {todo_id}")
        except TodoStoreError as e:
            self._fail(e)
            raise
        finally:
            self.is_deleting = None
            self._notify()

    def clear_error(self) -> None:
        self.error = None
        self._notify()

    # ========================================
    # HELPER METHODS
    # ========================================

    def get(self, todo_id: str) -> Optional[Todo]:
        for todo in self.todos:
            if todo.id == todo_id:
                return todo
        return None

    def _patch(self, todo_id: str, **fields) -> None:
        """Copy-on-write update of one record, stamping updated_at"""
        fields["updated_at"] = utcnow()
        self.todos = [
            t.model_copy(update=fields) if t.id == todo_id else t
            for t in self.todos
        ]
