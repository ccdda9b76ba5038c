"""Shared protocol for session storage backends."""

from typing import Optional, Protocol

from envhealth.dashboard import HealthDashboard


class SessionStore(Protocol):
    """Protocol for session storage backends."""
    def create_session(self, dashboard: HealthDashboard) -> str:
        """Persist a new dashboard session and return its id."""

    def get_session(self, session_id: str) -> Optional[HealthDashboard]:
        """Fetch a session by id, returning None if missing or expired."""

    def update_session(self, session_id: str, dashboard: HealthDashboard) -> None:
        """Replace the dashboard stored under an id, ignoring missing/expired ids."""

    def delete_session(self, session_id: str) -> None:
        """Delete a session without raising if it is absent."""

    def clear(self) -> None:
        """Clear all stored sessions."""
