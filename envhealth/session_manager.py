"""Session manager facade over the dashboard session store."""
from typing import Optional

from envhealth.config import settings
from envhealth.dashboard import HealthDashboard
from envhealth.session_store import InMemorySessionStore, SessionStore
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="session_manager")


def _init_store() -> SessionStore:
    """Initialize the backing session store based on configuration."""
    logger.debug(
        "Initializing session store",
        extra={"ttl_seconds": settings.session_ttl_seconds, "max_age_seconds": settings.session_max_age_seconds},
    )
    return InMemorySessionStore(
        ttl_seconds=settings.session_ttl_seconds,
        max_age_seconds=settings.session_max_age_seconds,
    )


_store: SessionStore = _init_store()


def use_in_memory_store_for_tests(ttl_seconds: int = 3600) -> None:
    """Override store for tests to ensure isolation and determinism."""
    global _store
    _store = InMemorySessionStore(ttl_seconds=ttl_seconds)


def create_session(dashboard: HealthDashboard) -> str:
    """Persist a new dashboard, returning its session ID."""
    return _store.create_session(dashboard)


def get_session(session_id: str) -> Optional[HealthDashboard]:
    """Fetch a dashboard by session ID, refreshing TTL if applicable."""
    return _store.get_session(session_id)


def update_session(session_id: str, dashboard: HealthDashboard) -> None:
    return _store.update_session(session_id, dashboard)


def delete_session(session_id: str) -> None:
    """Delete a session by ID."""
    return _store.delete_session(session_id)


def clear_sessions() -> None:
    """Clear all sessions from the backing store (dev/testing)."""
    return _store.clear()
