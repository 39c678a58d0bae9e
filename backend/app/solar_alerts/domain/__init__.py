# Domain layer - pure business rules, no framework dependencies

from app.solar_alerts.domain.entities import AlertFrequency, AlertSettings, Subscriber
from app.solar_alerts.domain.services import (
    BatchDigestPolicy,
    CooldownPolicy,
    DecisionReason,
    NotificationDecision,
    NotificationPolicy,
    ThresholdLatch,
)
from app.solar_alerts.domain.value_objects import KpReading

__all__ = [
    "AlertFrequency",
    "AlertSettings",
    "BatchDigestPolicy",
    "CooldownPolicy",
    "DecisionReason",
    "KpReading",
    "NotificationDecision",
    "NotificationPolicy",
    "Subscriber",
    "ThresholdLatch",
]
