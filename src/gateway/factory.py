# src/gateway/factory.py

"""Build the gateway + session provider pair for the configured backend."""

import logging
from dataclasses import dataclass
from pathlib import Path

from src.auth.local_session import LocalSessionProvider
from src.auth.session import SessionProvider
from src.config.settings import Settings
from src.gateway.base_gateway import PersistenceGateway
from src.gateway.local_store import LocalStore
from src.gateway.sqlite_gateway import SqliteGateway

logger = logging.getLogger("swipeshop.backend")


@dataclass
class Backend:
    """The two external collaborators every controller talks to."""

    name: str
    gateway: PersistenceGateway
    sessions: SessionProvider

    def close(self) -> None:
        """Release connections held by the backend."""
        close_sessions = getattr(self.sessions, "close", None)
        if callable(close_sessions):
            close_sessions()
        self.gateway.close()


def build_local_backend(db_path: Path | None = None) -> Backend:
    """SQLite-backed backend; ``Path(":memory:")`` for throwaway stores."""
    store = LocalStore(db_path=db_path)
    return Backend(
        name="local",
        gateway=SqliteGateway(store),
        sessions=LocalSessionProvider(store),
    )


def build_supabase_backend(
    url: str | None = None,
    key: str | None = None,
) -> Backend:
    """Backend talking to a hosted Supabase project."""
    from supabase import create_client

    from src.auth.supabase_session import SupabaseSessionProvider
    from src.gateway.supabase_gateway import SupabaseGateway

    project_url = url or Settings.SUPABASE_URL
    project_key = key or Settings.SUPABASE_KEY
    if not project_url or not project_key:
        raise ValueError(
            "SUPABASE_URL and SUPABASE_KEY must be set for the "
            "supabase backend"
        )
    client = create_client(project_url, project_key)
    return Backend(
        name="supabase",
        gateway=SupabaseGateway(client),
        sessions=SupabaseSessionProvider(client),
    )


def build_backend(name: str | None = None) -> Backend:
    """Build the backend named *name* (defaults to Settings.BACKEND)."""
    choice = (name or Settings.BACKEND).lower()
    logger.info("Using %s backend", choice)
    if choice == "local":
        return build_local_backend()
    if choice == "supabase":
        return build_supabase_backend()
    raise ValueError(f"Unknown backend: {choice}")
