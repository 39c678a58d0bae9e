"""Domain entities for Solar Dash alerts.

This module exports the core business entities used throughout the domain layer.
"""

from app.solar_alerts.domain.entities.outbox_message import OutboxMessage
from app.solar_alerts.domain.entities.subscriber import (
    DEFAULT_KP_THRESHOLD,
    AlertFrequency,
    AlertSettings,
    Subscriber,
    normalize_threshold,
)

__all__ = [
    "DEFAULT_KP_THRESHOLD",
    "AlertFrequency",
    "AlertSettings",
    "OutboxMessage",
    "Subscriber",
    "normalize_threshold",
]
