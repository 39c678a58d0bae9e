"""Infrastructure repository implementations.

This module exports concrete repository implementations that fulfill
the abstract interfaces defined in the domain layer.
"""

from app.solar_alerts.infrastructure.repositories.memory_settings_store import (
    InMemorySettingsStore,
)
from app.solar_alerts.infrastructure.repositories.sql_outbox_repository import (
    SqlMailOutbox,
)
from app.solar_alerts.infrastructure.repositories.sql_subscriber_repository import (
    SqlNotificationStateWriter,
    SqlSubscriberRepository,
)

__all__ = [
    "InMemorySettingsStore",
    "SqlMailOutbox",
    "SqlNotificationStateWriter",
    "SqlSubscriberRepository",
]
