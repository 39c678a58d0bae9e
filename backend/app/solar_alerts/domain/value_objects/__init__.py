"""Domain value objects for Solar Dash alerts.

This module exports immutable value objects used throughout the domain layer:
- KpReading: A validated planetary Kp observation
- EmailAddress: Validated subscriber contact addresses
- ViewerSession variants: Who is looking at the dashboard
"""

from app.solar_alerts.domain.value_objects.email_address import EmailAddress
from app.solar_alerts.domain.value_objects.kp_reading import KP_MAX, KP_MIN, KpReading
from app.solar_alerts.domain.value_objects.session import (
    AnonymousSession,
    AuthenticatedSession,
    DemoSession,
    ViewerSession,
)

__all__ = [
    "AnonymousSession",
    "AuthenticatedSession",
    "DemoSession",
    "EmailAddress",
    "KP_MAX",
    "KP_MIN",
    "KpReading",
    "ViewerSession",
]
