"""HTTP API exposing per-session dashboard view models."""

import hmac
from datetime import datetime
from typing import Dict, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, status
from pydantic import BaseModel

from .config import settings
from .dashboard import HealthDashboard
from .data_sources import build_data_source
from .profile import UserContext
from .query import QueryStatus
from .session_manager import create_session, delete_session, get_session, update_session
from .views import HealthPageView, Tab
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="api")


def require_api_key(x_api_key: str | None = Header(default=None)):
    """Validate the X-API-Key header against the static api_key setting, if one is configured."""
    if not settings.api_key:
        logger.debug("No API key configured; allowing all requests")
        return

    if not x_api_key:
        logger.debug("No API key provided")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing API key")

    if hmac.compare_digest(str(x_api_key), str(settings.api_key)):
        return

    logger.debug("Invalid API key provided")
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


router = APIRouter(dependencies=[Depends(require_api_key)])
DATA_SOURCE = build_data_source(settings)


class StartRequest(BaseModel):
    """Optional session bootstrap payload."""
    profile: Optional[UserContext] = None
    tab: Tab = Tab.AIR_QUALITY


class TabRequest(BaseModel):
    tab: Tab


class DashboardResponse(BaseModel):
    """Session id plus the view model of the active tab."""
    session_id: str
    view: HealthPageView


class QueryStatusView(BaseModel):
    status: QueryStatus
    enabled: bool
    has_data: bool
    attempts: int
    error: Optional[str] = None
    updated_at: Optional[datetime] = None


class StatusResponse(BaseModel):
    session_id: str
    active_tab: Tab
    queries: Dict[str, QueryStatusView]


class ProfileResponse(BaseModel):
    profile: UserContext


def build_dashboard(profile: UserContext | None = None, tab: Tab = Tab.AIR_QUALITY) -> HealthDashboard:
    """Create a dashboard wired to the configured data source."""
    return HealthDashboard(DATA_SOURCE, user=profile, settings=settings, active_tab=tab)


def _require_dashboard(session_id: str) -> HealthDashboard:
    dashboard = get_session(session_id)
    if dashboard is None:
        raise HTTPException(status_code=404, detail="Unknown session ID")
    return dashboard


@router.post("/dashboard/session", response_model=DashboardResponse)
def start_session(req: Optional[StartRequest] = None):
    """Create a dashboard session, load the default tab, and return its view."""
    req = req or StartRequest()
    dashboard = build_dashboard(req.profile, req.tab)
    dashboard.load()
    session_id = create_session(dashboard)
    logger.info("Started dashboard session", extra={"session_id": session_id, "tab": dashboard.active_tab.value})
    return DashboardResponse(session_id=session_id, view=dashboard.view())


@router.delete("/dashboard/session/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def end_session(session_id: str):
    """Drop the session; unknown ids are ignored."""
    delete_session(session_id)
    logger.info("Ended dashboard session", extra={"session_id": session_id})


@router.get("/dashboard/session/{session_id}", response_model=DashboardResponse)
def get_view(session_id: str):
    """Return the current view without fetching."""
    dashboard = _require_dashboard(session_id)
    return DashboardResponse(session_id=session_id, view=dashboard.view())


@router.post("/dashboard/session/{session_id}/tab", response_model=DashboardResponse)
def select_tab(session_id: str, req: TabRequest):
    """Switch tabs; queries owned by the new tab start a fresh fetch cycle."""
    dashboard = _require_dashboard(session_id)
    dashboard.select_tab(req.tab)
    dashboard.load()
    update_session(session_id, dashboard)
    return DashboardResponse(session_id=session_id, view=dashboard.view())


@router.post("/dashboard/session/{session_id}/refresh", response_model=DashboardResponse)
def refresh(session_id: str):
    """Re-run every enabled query for the session."""
    dashboard = _require_dashboard(session_id)
    dashboard.load(force=True)
    update_session(session_id, dashboard)
    return DashboardResponse(session_id=session_id, view=dashboard.view())


@router.get("/dashboard/session/{session_id}/status", response_model=StatusResponse)
def query_status(session_id: str):
    """Per-query loading/error/data flags for the session."""
    dashboard = _require_dashboard(session_id)
    queries = {
        key: QueryStatusView(
            status=query.state.status,
            enabled=query.enabled,
            has_data=query.state.data is not None,
            attempts=query.state.attempts,
            error=query.state.error,
            updated_at=query.state.updated_at,
        )
        for key, query in dashboard.queries.items()
    }
    return StatusResponse(session_id=session_id, active_tab=dashboard.active_tab, queries=queries)


@router.get("/dashboard/session/{session_id}/profile", response_model=ProfileResponse)
def get_profile(session_id: str):
    dashboard = _require_dashboard(session_id)
    return ProfileResponse(profile=dashboard.user)


@router.post("/dashboard/session/{session_id}/profile", response_model=ProfileResponse)
def set_profile(session_id: str, profile: UserContext):
    """Replace the health profile used to personalize the session's views."""
    dashboard = _require_dashboard(session_id)
    dashboard.update_user(profile)
    update_session(session_id, dashboard)
    return ProfileResponse(profile=profile)
