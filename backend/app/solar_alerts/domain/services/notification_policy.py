"""Notification policies deciding which subscribers hear about a Kp reading.

Two policies share one interface:
- CooldownPolicy: dispatch immediately, at most once per cooldown window
  per subscriber.
- BatchDigestPolicy: queue one message for every subscriber whose threshold
  is met, ignoring cooldown; de-duplication is left to the delivery pipeline.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from app.solar_alerts.domain.entities.subscriber import Subscriber
from app.solar_alerts.domain.value_objects.kp_reading import KpReading


class DecisionReason(Enum):
    """Why a subscriber was or was not selected for notification."""

    THRESHOLD_NOT_MET = "threshold_not_met"
    COOLDOWN_ACTIVE = "cooldown_active"
    NO_CONTACT = "no_contact"
    ELIGIBLE = "eligible"


class DeliveryMode(Enum):
    """How eligible subscribers are handed to the dispatcher."""

    IMMEDIATE = "immediate"
    QUEUED = "queued"


@dataclass(frozen=True)
class NotificationDecision:
    """Per-cycle verdict for one subscriber. Never persisted."""

    subscriber_id: str
    reason: DecisionReason

    @property
    def eligible(self) -> bool:
        return self.reason is DecisionReason.ELIGIBLE


class NotificationPolicy(ABC):
    """Decides eligibility for a (subscriber, reading) pair."""

    name: str
    delivery: DeliveryMode

    @abstractmethod
    def evaluate(
        self,
        subscriber: Subscriber,
        reading: KpReading,
        now: datetime,
    ) -> NotificationDecision:
        """Compute the decision for one subscriber."""
        ...

    def directory_max_threshold(self, reading: KpReading) -> Optional[float]:
        """Upper bound on thresholds the directory may filter by, if any."""
        return None


class CooldownPolicy(NotificationPolicy):
    """Immediate dispatch with a per-subscriber cooldown window.

    Rules, checked in order:
    1. Reading below the subscriber's threshold -> THRESHOLD_NOT_MET
    2. No usable contact address -> NO_CONTACT
    3. Last notification less than ``cooldown`` ago -> COOLDOWN_ACTIVE
    4. Otherwise -> ELIGIBLE

    The cooldown is time based, so a reading that dips below the threshold
    and comes back inside the window is still suppressed, while a sustained
    excursion longer than the window is notified again.
    """

    name = "cooldown"
    delivery = DeliveryMode.IMMEDIATE

    def __init__(self, cooldown: timedelta = timedelta(hours=1)) -> None:
        if cooldown < timedelta(0):
            raise ValueError("Cooldown must not be negative")
        self.cooldown = cooldown

    def evaluate(
        self,
        subscriber: Subscriber,
        reading: KpReading,
        now: datetime,
    ) -> NotificationDecision:
        if not reading.meets(subscriber.kp_threshold):
            reason = DecisionReason.THRESHOLD_NOT_MET
        elif subscriber.email is None:
            reason = DecisionReason.NO_CONTACT
        elif subscriber.in_cooldown(now, self.cooldown):
            reason = DecisionReason.COOLDOWN_ACTIVE
        else:
            reason = DecisionReason.ELIGIBLE
        return NotificationDecision(subscriber_id=subscriber.id, reason=reason)


class BatchDigestPolicy(NotificationPolicy):
    """Queue a message for everyone at or above threshold, no cooldown."""

    name = "batch_digest"
    delivery = DeliveryMode.QUEUED

    def evaluate(
        self,
        subscriber: Subscriber,
        reading: KpReading,
        now: datetime,
    ) -> NotificationDecision:
        if not reading.meets(subscriber.kp_threshold):
            reason = DecisionReason.THRESHOLD_NOT_MET
        elif subscriber.email is None:
            reason = DecisionReason.NO_CONTACT
        else:
            reason = DecisionReason.ELIGIBLE
        return NotificationDecision(subscriber_id=subscriber.id, reason=reason)

    def directory_max_threshold(self, reading: KpReading) -> Optional[float]:
        return reading.value


def create_policy(name: str, cooldown: timedelta) -> NotificationPolicy:
    """Build the policy registered under ``name``.

    Raises:
        ValueError: If the name is not a known policy.
    """
    if name == CooldownPolicy.name:
        return CooldownPolicy(cooldown=cooldown)
    if name == BatchDigestPolicy.name:
        return BatchDigestPolicy()
    raise ValueError(f"Unknown notification policy: {name}")
