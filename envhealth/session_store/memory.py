"""In-memory dashboard session store with sliding TTL and optional absolute max age."""

import threading
import time
import uuid
from dataclasses import dataclass
from typing import Dict, Optional

from envhealth.dashboard import HealthDashboard
from envhealth.session_store.base import SessionStore

from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="session_store/in_memory_session_store")


@dataclass
class _Entry:
    dashboard: HealthDashboard
    created_at: float
    expires_at: float


class InMemorySessionStore(SessionStore):
    """Thread-safe store of per-user dashboards.

    Each access pushes the expiry out by ``ttl_seconds``; ``max_age_seconds``,
    when set, caps a session's lifetime regardless of activity. Expired entries
    are swept whenever a new session is created.
    """

    def __init__(self, ttl_seconds: int = 3600, max_age_seconds: int | None = None) -> None:
        logger.debug(
            "Initializing InMemorySessionStore",
            extra={"ttl_seconds": ttl_seconds, "max_age_seconds": max_age_seconds},
        )
        self.ttl = ttl_seconds
        self.max_age = max_age_seconds
        self._sessions: Dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def _is_live(self, entry: _Entry, now: float) -> bool:
        return now <= entry.expires_at

    def _extend(self, entry: _Entry, now: float) -> None:
        expires_at = now + self.ttl
        if self.max_age is not None:
            expires_at = min(expires_at, entry.created_at + self.max_age)
        entry.expires_at = expires_at

    def _sweep(self, now: float) -> None:
        """Drop every expired entry; caller must hold the lock."""
        expired = [sid for sid, entry in self._sessions.items() if not self._is_live(entry, now)]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.debug("Swept expired sessions", extra={"count": len(expired)})

    def _live_entry(self, session_id: str, now: float) -> Optional[_Entry]:
        entry = self._sessions.get(session_id)
        if entry is None:
            return None
        if not self._is_live(entry, now):
            del self._sessions[session_id]
            return None
        return entry

    def create_session(self, dashboard: HealthDashboard) -> str:
        now = time.monotonic()
        with self._lock:
            self._sweep(now)
            sid = str(uuid.uuid4())
            entry = _Entry(dashboard=dashboard, created_at=now, expires_at=now)
            self._extend(entry, now)
            self._sessions[sid] = entry
            return sid

    def get_session(self, session_id: str) -> Optional[HealthDashboard]:
        """Return the session's dashboard and refresh its expiry, or None if missing or expired."""
        now = time.monotonic()
        with self._lock:
            entry = self._live_entry(session_id, now)
            if entry is None:
                return None
            self._extend(entry, now)
            return entry.dashboard

    def update_session(self, session_id: str, dashboard: HealthDashboard) -> None:
        now = time.monotonic()
        with self._lock:
            entry = self._live_entry(session_id, now)
            if entry is None:
                return
            entry.dashboard = dashboard
            self._extend(entry, now)

    def delete_session(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()
