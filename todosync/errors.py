"""
Domain exceptions for todosync.
"""

from typing import Optional


class TodoSyncError(RuntimeError):
    """Base exception for all todosync failures."""


class ConfigError(TodoSyncError):
    """Raised when required settings are missing."""


class TodoStoreError(TodoSyncError):
    """Raised when a remote store call fails, for whatever reason.

    The underlying fault (network, permission, validation) is not classified;
    it is chained as ``__cause__`` for logging only.
    """

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        super().__init__(message or f"Failed to {operation} todo")
