"""Unit tests for the cooldown and batch-digest notification policies."""

from datetime import datetime, timedelta, timezone

import pytest

from app.solar_alerts.domain.entities.subscriber import AlertSettings, Subscriber
from app.solar_alerts.domain.services.notification_policy import (
    BatchDigestPolicy,
    CooldownPolicy,
    DecisionReason,
    DeliveryMode,
    create_policy,
)
from app.solar_alerts.domain.value_objects.kp_reading import KpReading

NOW = datetime(2024, 5, 10, 18, 0, tzinfo=timezone.utc)


def make_subscriber(
    threshold: float = 5,
    email: str | None = "aurora@example.com",
    last_notified_at: datetime | None = None,
) -> Subscriber:
    return Subscriber(
        id="user-1",
        contact_address=email,
        alert_settings=AlertSettings(kp_threshold=threshold, email_alerts=True),
        last_notified_at=last_notified_at,
    )


def reading(value: float) -> KpReading:
    return KpReading(value=value, observed_at=NOW)


@pytest.fixture
def cooldown_policy() -> CooldownPolicy:
    return CooldownPolicy(cooldown=timedelta(hours=1))


class TestCooldownPolicy:
    """Tests for CooldownPolicy.evaluate."""

    def test_eligible_when_at_threshold_and_never_notified(
        self, cooldown_policy: CooldownPolicy
    ) -> None:
        """A reading equal to the threshold counts as reaching it."""
        decision = cooldown_policy.evaluate(make_subscriber(threshold=5), reading(5.0), NOW)

        assert decision.reason is DecisionReason.ELIGIBLE
        assert decision.eligible is True
        assert decision.subscriber_id == "user-1"

    def test_threshold_not_met(self, cooldown_policy: CooldownPolicy) -> None:
        decision = cooldown_policy.evaluate(make_subscriber(threshold=6), reading(5.67), NOW)

        assert decision.reason is DecisionReason.THRESHOLD_NOT_MET
        assert decision.eligible is False

    def test_cooldown_active_inside_window(self, cooldown_policy: CooldownPolicy) -> None:
        subscriber = make_subscriber(last_notified_at=NOW - timedelta(minutes=59))

        decision = cooldown_policy.evaluate(subscriber, reading(7.0), NOW)

        assert decision.reason is DecisionReason.COOLDOWN_ACTIVE

    def test_eligible_once_window_has_elapsed(self, cooldown_policy: CooldownPolicy) -> None:
        """Exactly one cooldown after the last send the subscriber is eligible again."""
        subscriber = make_subscriber(last_notified_at=NOW - timedelta(hours=1))

        decision = cooldown_policy.evaluate(subscriber, reading(7.0), NOW)

        assert decision.reason is DecisionReason.ELIGIBLE

    def test_naive_last_notified_is_treated_as_utc(
        self, cooldown_policy: CooldownPolicy
    ) -> None:
        naive = (NOW - timedelta(minutes=10)).replace(tzinfo=None)
        subscriber = make_subscriber(last_notified_at=naive)

        decision = cooldown_policy.evaluate(subscriber, reading(7.0), NOW)

        assert decision.reason is DecisionReason.COOLDOWN_ACTIVE

    @pytest.mark.parametrize("email", [None, "", "   ", "not-an-address"])
    def test_no_contact_when_address_unusable(
        self, cooldown_policy: CooldownPolicy, email: str | None
    ) -> None:
        decision = cooldown_policy.evaluate(make_subscriber(email=email), reading(6.0), NOW)

        assert decision.reason is DecisionReason.NO_CONTACT

    def test_threshold_checked_before_contact(self, cooldown_policy: CooldownPolicy) -> None:
        """Below-threshold subscribers are not reported as missing a contact."""
        decision = cooldown_policy.evaluate(
            make_subscriber(threshold=8, email=None), reading(6.0), NOW
        )

        assert decision.reason is DecisionReason.THRESHOLD_NOT_MET

    def test_contact_checked_before_cooldown(self, cooldown_policy: CooldownPolicy) -> None:
        subscriber = make_subscriber(email=None, last_notified_at=NOW - timedelta(minutes=5))

        decision = cooldown_policy.evaluate(subscriber, reading(6.0), NOW)

        assert decision.reason is DecisionReason.NO_CONTACT

    def test_out_of_range_threshold_is_clamped(self, cooldown_policy: CooldownPolicy) -> None:
        """A stored threshold above 9 behaves like 9."""
        decision = cooldown_policy.evaluate(make_subscriber(threshold=12), reading(9.0), NOW)

        assert decision.reason is DecisionReason.ELIGIBLE

    def test_negative_cooldown_rejected(self) -> None:
        with pytest.raises(ValueError):
            CooldownPolicy(cooldown=timedelta(minutes=-1))

    def test_no_directory_filter(self, cooldown_policy: CooldownPolicy) -> None:
        assert cooldown_policy.directory_max_threshold(reading(6.0)) is None
        assert cooldown_policy.delivery is DeliveryMode.IMMEDIATE


class TestBatchDigestPolicy:
    """Tests for BatchDigestPolicy.evaluate."""

    def test_ignores_cooldown(self) -> None:
        policy = BatchDigestPolicy()
        subscriber = make_subscriber(last_notified_at=NOW - timedelta(minutes=1))

        decision = policy.evaluate(subscriber, reading(6.0), NOW)

        assert decision.reason is DecisionReason.ELIGIBLE

    def test_threshold_not_met(self) -> None:
        decision = BatchDigestPolicy().evaluate(make_subscriber(threshold=7), reading(6.0), NOW)

        assert decision.reason is DecisionReason.THRESHOLD_NOT_MET

    def test_no_contact(self) -> None:
        decision = BatchDigestPolicy().evaluate(make_subscriber(email=None), reading(6.0), NOW)

        assert decision.reason is DecisionReason.NO_CONTACT

    def test_directory_filter_uses_reading(self) -> None:
        policy = BatchDigestPolicy()

        assert policy.directory_max_threshold(reading(6.33)) == 6.33
        assert policy.delivery is DeliveryMode.QUEUED


class TestCreatePolicy:
    """Tests for create_policy."""

    def test_cooldown_policy_gets_configured_window(self) -> None:
        policy = create_policy("cooldown", timedelta(minutes=30))

        assert isinstance(policy, CooldownPolicy)
        assert policy.cooldown == timedelta(minutes=30)

    def test_batch_digest(self) -> None:
        assert isinstance(create_policy("batch_digest", timedelta(hours=1)), BatchDigestPolicy)

    def test_unknown_name(self) -> None:
        with pytest.raises(ValueError, match="Unknown notification policy"):
            create_policy("excursion", timedelta(hours=1))
