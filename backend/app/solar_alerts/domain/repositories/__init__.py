"""Domain repository interfaces for Solar Dash alerts.

These interfaces keep the domain independent of the database and let the
alert engine be exercised with fakes. Concrete implementations live in the
infrastructure layer.
"""

from app.solar_alerts.domain.repositories.outbox_repository import MailOutbox
from app.solar_alerts.domain.repositories.settings_store import EphemeralSettingsStore
from app.solar_alerts.domain.repositories.subscriber_repository import (
    NotificationStateWriter,
    SubscriberRepository,
)

__all__ = [
    "EphemeralSettingsStore",
    "MailOutbox",
    "NotificationStateWriter",
    "SubscriberRepository",
]
