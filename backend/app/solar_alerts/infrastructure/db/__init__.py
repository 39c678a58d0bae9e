"""Database infrastructure components.

This module exports SQLAlchemy models, session management utilities,
and the Base class for ORM model definitions.
"""

from app.solar_alerts.infrastructure.db.models import (
    Base,
    OutboxMailModel,
    SubscriberModel,
)
from app.solar_alerts.infrastructure.db.session import (
    dispose_engine,
    get_async_session_local,
    get_db_session,
    get_engine,
)

__all__ = [
    # Base class
    "Base",
    # Models
    "OutboxMailModel",
    "SubscriberModel",
    # Session utilities
    "dispose_engine",
    "get_engine",
    "get_async_session_local",
    "get_db_session",
]
