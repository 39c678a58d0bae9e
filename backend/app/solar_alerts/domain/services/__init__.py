"""Domain services implementing core alerting rules.

These are pure domain services with no infrastructure dependencies:
- NotificationPolicy and its CooldownPolicy / BatchDigestPolicy variants
- ThresholdLatch: edge-triggered in-app notification state
- kp_scale: NOAA G-scale, color and aurora visibility mapping
"""

from app.solar_alerts.domain.services.kp_scale import (
    AuroraVisibility,
    aurora_visibility_info,
    aurora_visibility_latitude,
    is_storm_condition,
    kp_to_color,
    kp_to_description,
    kp_to_noaa_scale,
)
from app.solar_alerts.domain.services.notification_policy import (
    BatchDigestPolicy,
    CooldownPolicy,
    DecisionReason,
    DeliveryMode,
    NotificationDecision,
    NotificationPolicy,
    create_policy,
)
from app.solar_alerts.domain.services.threshold_latch import LatchState, ThresholdLatch

__all__ = [
    "AuroraVisibility",
    "BatchDigestPolicy",
    "CooldownPolicy",
    "DecisionReason",
    "DeliveryMode",
    "LatchState",
    "NotificationDecision",
    "NotificationPolicy",
    "ThresholdLatch",
    "aurora_visibility_info",
    "aurora_visibility_latitude",
    "create_policy",
    "is_storm_condition",
    "kp_to_color",
    "kp_to_description",
    "kp_to_noaa_scale",
]
