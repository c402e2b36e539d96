"""
TODOSYNC - Configuration
========================
Connection settings for the remote store, read from the environment.

    SUPABASE_URL      project URL (required)
    SUPABASE_KEY      anon or service key (required)
    TODOSYNC_TABLE    table name (default: todos)
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel

from .errors import ConfigError


class TodoSyncConfig(BaseModel):
    supabase_url: str
    supabase_key: str
    table: str = "todos"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TodoSyncConfig":
        env = os.environ if environ is None else environ

        missing = [name for name in ("SUPABASE_URL", "SUPABASE_KEY") if not env.get(name)]
        if missing:
            raise ConfigError(f"Missing environment variables: {', '.join(missing)}")

        return cls(
            supabase_url=env["SUPABASE_URL"],
            supabase_key=env["SUPABASE_KEY"],
            table=env.get("TODOSYNC_TABLE") or "todos",
        )
