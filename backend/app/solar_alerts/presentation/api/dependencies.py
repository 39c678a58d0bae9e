"""Shared FastAPI dependencies for the API routers."""

from typing import Annotated, Optional

from fastapi import Header, Request

from app.solar_alerts.application.interfaces.kp_source import KpDataSource
from app.solar_alerts.application.use_cases.kp_status import ViewerLatchRegistry
from app.solar_alerts.domain.entities.subscriber import AlertSettings
from app.solar_alerts.domain.repositories.settings_store import EphemeralSettingsStore
from app.solar_alerts.domain.value_objects.session import (
    AnonymousSession,
    AuthenticatedSession,
    DemoSession,
    ViewerSession,
)


def get_viewer_session(
    x_user_id: Annotated[Optional[str], Header()] = None,
    x_demo_session: Annotated[Optional[str], Header()] = None,
) -> ViewerSession:
    """Resolve the viewer from request headers.

    Authentication happens upstream; a verified user id arrives in
    X-User-Id, and the demo account is flagged with X-Demo-Session.
    """
    if x_user_id and x_user_id.strip():
        return AuthenticatedSession(user_id=x_user_id.strip())
    if x_demo_session and x_demo_session.strip().lower() in ("1", "true", "yes"):
        return DemoSession()
    return AnonymousSession()


def get_demo_store(request: Request) -> EphemeralSettingsStore:
    return request.app.state.demo_settings


def get_latch_registry(request: Request) -> ViewerLatchRegistry:
    return request.app.state.viewer_latches


def get_kp_source(request: Request) -> KpDataSource:
    return request.app.state.kp_source


def get_default_settings(request: Request) -> AlertSettings:
    return request.app.state.default_alert_settings


def get_page_session(
    x_viewer_session: Annotated[Optional[str], Header()] = None,
) -> Optional[str]:
    """Id the dashboard generates on each page load, sent as X-Viewer-Session."""
    if x_viewer_session and x_viewer_session.strip():
        return x_viewer_session.strip()[:128]
    return None
