"""Subscriber entity representing a user's Kp alert subscription."""

import math
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Optional

from app.solar_alerts.domain.value_objects.email_address import EmailAddress
from app.solar_alerts.domain.value_objects.kp_reading import KP_MAX, KP_MIN

DEFAULT_KP_THRESHOLD = 5.0


class AlertFrequency(Enum):
    """How often a user wants to hear about storm conditions."""

    IMMEDIATELY = "immediately"
    DAILY = "daily"
    WEEKLY = "weekly"


def normalize_threshold(raw: Any, default: float = DEFAULT_KP_THRESHOLD) -> float:
    """Coerce a stored threshold into the usable Kp range.

    Missing or non-numeric values fall back to ``default``; numbers outside
    [0, 9] are clamped to the nearest bound.
    """
    if raw is None or isinstance(raw, bool):
        return default
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    if math.isnan(value):
        return default
    return min(max(value, KP_MIN), KP_MAX)


@dataclass(frozen=True)
class AlertSettings:
    """A user's alert preferences as edited on the profile screen.

    Attributes:
        kp_threshold: Kp value at or above which the user wants to be told.
        email_alerts: Whether the scheduled job may email this user.
        push_notifications: Whether in-app toasts are wanted.
        alert_frequency: Preferred cadence of notifications.
        locations: Free-form viewing locations the user cares about.
    """

    kp_threshold: float = DEFAULT_KP_THRESHOLD
    email_alerts: bool = False
    push_notifications: bool = False
    alert_frequency: AlertFrequency = AlertFrequency.IMMEDIATELY
    locations: tuple[str, ...] = ()

    def merged(self, **changes: Any) -> "AlertSettings":
        """Return a copy with the given fields replaced (None values ignored)."""
        updates = {k: v for k, v in changes.items() if v is not None}
        if "kp_threshold" in updates:
            updates["kp_threshold"] = normalize_threshold(updates["kp_threshold"])
        if "locations" in updates:
            updates["locations"] = tuple(updates["locations"])
        return replace(self, **updates)


@dataclass
class Subscriber:
    """Domain entity for a user who may receive Kp alerts.

    Attributes:
        id: Directory identifier of the user.
        contact_address: Raw email address as stored; may be blank.
        alert_settings: The user's alert preferences.
        last_notified_at: When the last alert was successfully dispatched.
    """

    id: str
    contact_address: Optional[str]
    alert_settings: AlertSettings = field(default_factory=AlertSettings)
    last_notified_at: Optional[datetime] = None

    @property
    def alerts_enabled(self) -> bool:
        return self.alert_settings.email_alerts

    @property
    def kp_threshold(self) -> float:
        return normalize_threshold(self.alert_settings.kp_threshold)

    @property
    def email(self) -> Optional[EmailAddress]:
        """The usable contact address, or None when there is none."""
        return EmailAddress.try_parse(self.contact_address)

    def in_cooldown(self, now: datetime, cooldown: timedelta) -> bool:
        """Check whether the last notification is still within the cooldown window.

        Naive timestamps are taken to be UTC.
        """
        if self.last_notified_at is None:
            return False
        last = self.last_notified_at
        if last.tzinfo is None:
            last = last.replace(tzinfo=timezone.utc)
        return now - last < cooldown

    def mark_notified(self, at: datetime) -> None:
        """Record a successful dispatch."""
        self.last_notified_at = at
