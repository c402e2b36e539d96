"""
TODOSYNC - Todo Schema Definition
=================================
Records as stored remotely, plus the state snapshot handed to renderers.
"""

from datetime import datetime, timezone
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Todo(BaseModel):
    """Single todo record (id and timestamps are assigned by the store)"""
    id: str
    text: str
    completed: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Todo":
        """Map a wire row onto a record, filling in missing timestamps"""
        return cls(
            id=str(row["id"]),
            text=row.get("text") or "",
            completed=bool(row.get("completed", False)),
            created_at=row.get("created_at") or utcnow(),
            updated_at=row.get("updated_at") or utcnow(),
        )


class TodoState(BaseModel):
    """Point-in-time copy of everything the presentation layer reads"""
    todos: List[Todo] = Field(default_factory=list)
    loading: bool = True
    error: Optional[str] = None

    # Busy flags
    is_adding: bool = False
    is_updating: Optional[str] = None   # id of the record being updated
    is_deleting: Optional[str] = None   # id of the record being deleted

    @property
    def active_count(self) -> int:
        return sum(1 for t in self.todos if not t.completed)

    @property
    def completed_count(self) -> int:
        return sum(1 for t in self.todos if t.completed)
