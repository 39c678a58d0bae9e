"""Use case for one scheduled Kp alert evaluation cycle.

Orchestrates:
- Current Kp reading via KpDataSource
- Alerting subscribers via SubscriberRepository
- Eligibility via a NotificationPolicy
- Delivery via EmailSender (immediate) or MailOutbox (queued)
- Cooldown bookkeeping via NotificationStateWriter
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, List, Optional, TypeVar

from app.solar_alerts.application.alert_email import render_alert_email
from app.solar_alerts.application.dto.cycle_dto import CycleReport
from app.solar_alerts.application.exceptions import (
    ConfigurationError,
    DirectoryError,
    DispatchError,
    KpFetchError,
)
from app.solar_alerts.application.interfaces.email_sender import EmailSender
from app.solar_alerts.application.interfaces.kp_source import KpDataSource
from app.solar_alerts.domain.entities.outbox_message import OutboxMessage
from app.solar_alerts.domain.entities.subscriber import Subscriber
from app.solar_alerts.domain.repositories.outbox_repository import MailOutbox
from app.solar_alerts.domain.repositories.subscriber_repository import (
    NotificationStateWriter,
    SubscriberRepository,
)
from app.solar_alerts.domain.services.notification_policy import (
    DecisionReason,
    DeliveryMode,
    NotificationPolicy,
)
from app.solar_alerts.domain.value_objects.kp_reading import KpReading

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_IO_TIMEOUT_SECONDS = 10.0


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AlertEvaluationEngine:
    """Application service deciding and delivering Kp threshold alerts.

    The engine holds no global state; every collaborator is passed in at
    construction so the whole cycle can be driven with fakes. Each call to
    evaluate_cycle() is independent, so overlapping runs only ever race on
    keyed per-subscriber timestamp writes.
    """

    def __init__(
        self,
        kp_source: KpDataSource,
        subscriber_repository: SubscriberRepository,
        policy: NotificationPolicy,
        email_sender: Optional[EmailSender] = None,
        state_writer: Optional[NotificationStateWriter] = None,
        outbox: Optional[MailOutbox] = None,
        dashboard_url: str = "",
        io_timeout_seconds: float = DEFAULT_IO_TIMEOUT_SECONDS,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the engine with its collaborators.

        Args:
            kp_source: Adapter for the Kp feed.
            subscriber_repository: Directory of alerting subscribers.
            policy: Eligibility and delivery policy.
            email_sender: Dispatcher for immediate delivery.
            state_writer: Writer for last-notified timestamps.
            outbox: Mail outbox for queued delivery.
            dashboard_url: Link included in alert emails.
            io_timeout_seconds: Upper bound for every remote call.
            clock: Source of the current UTC time.

        Raises:
            ConfigurationError: If the collaborators required by the
                policy's delivery mode are missing.
        """
        if policy.delivery is DeliveryMode.IMMEDIATE:
            if email_sender is None:
                raise ConfigurationError("email_sender", f"required by policy '{policy.name}'")
            if state_writer is None:
                raise ConfigurationError("state_writer", f"required by policy '{policy.name}'")
        elif outbox is None:
            raise ConfigurationError("outbox", f"required by policy '{policy.name}'")

        self._kp_source = kp_source
        self._subscriber_repository = subscriber_repository
        self._policy = policy
        self._email_sender = email_sender
        self._state_writer = state_writer
        self._outbox = outbox
        self._dashboard_url = dashboard_url
        self._io_timeout = io_timeout_seconds
        self._clock = clock

    @property
    def policy(self) -> NotificationPolicy:
        return self._policy

    async def evaluate_cycle(self) -> CycleReport:
        """Run one evaluation cycle.

        A failed Kp fetch or directory query aborts the cycle before any
        dispatch or state write. Per-subscriber failures are logged and
        recorded in the report without affecting other subscribers.

        Returns:
            Summary of the cycle.
        """
        report = CycleReport(policy=self._policy.name, started_at=self._clock())

        # 1. Current Kp
        try:
            reading = await self._bounded(self._kp_source.fetch_latest())
        except KpFetchError as e:
            logger.error(f"Skipping alert cycle: {e.message}")
            return report.abort(e.message)
        except asyncio.TimeoutError:
            error = KpFetchError(f"timed out after {self._io_timeout}s")
            logger.error(f"Skipping alert cycle: {error.message}")
            return report.abort(error.message)
        except Exception as e:
            error = KpFetchError(str(e) or e.__class__.__name__)
            logger.exception(f"Skipping alert cycle: {error.message}")
            return report.abort(error.message)

        report.kp_value = reading.value
        logger.info(f"Current Kp index: {reading.value} (observed {reading.observed_at.isoformat()})")

        # 2. Alerting subscribers
        try:
            subscribers = await self._bounded(
                self._subscriber_repository.list_alerting(
                    max_threshold=self._policy.directory_max_threshold(reading)
                )
            )
        except Exception as e:
            reason = "timed out" if isinstance(e, asyncio.TimeoutError) else str(e)
            error = DirectoryError(reason or e.__class__.__name__)
            logger.error(f"Skipping alert cycle: {error.message}")
            return report.abort(error.message)

        if not subscribers:
            logger.info("No subscribers with alerts enabled.")
            return report

        # 3. Decisions
        now = self._clock()
        eligible: List[Subscriber] = []
        for subscriber in subscribers:
            if not subscriber.alerts_enabled:
                continue
            report.subscribers_checked += 1
            decision = self._policy.evaluate(subscriber, reading, now)
            report.count(decision.reason)

            if decision.reason is DecisionReason.NO_CONTACT:
                logger.warning(
                    f"[Subscriber {subscriber.id}] Skipping alert: no usable email address"
                )
            elif decision.reason is DecisionReason.COOLDOWN_ACTIVE:
                logger.debug(f"[Subscriber {subscriber.id}] Cooldown active, not alerting")
            elif decision.eligible:
                eligible.append(subscriber)

        # 4-6. Delivery
        if eligible:
            if self._policy.delivery is DeliveryMode.IMMEDIATE:
                await asyncio.gather(
                    *(self._notify(subscriber, reading, report) for subscriber in eligible)
                )
            else:
                await self._enqueue(eligible, reading, report)

        logger.info(
            f"Alert check complete: {report.subscribers_checked} checked, "
            f"{report.dispatched} sent, {report.queued} queued, {report.failed} failed"
        )
        return report

    async def _notify(
        self,
        subscriber: Subscriber,
        reading: KpReading,
        report: CycleReport,
    ) -> None:
        """Dispatch to one subscriber, then record the send on success only."""
        email = render_alert_email(reading.value, subscriber.kp_threshold, self._dashboard_url)
        to_email = str(subscriber.email)
        logger.info(f"Alerting subscriber {subscriber.id} (threshold: {subscriber.kp_threshold:g})")

        try:
            sent = await self._bounded(
                self._email_sender.send(
                    to_email=to_email,
                    subject=email.subject,
                    text_body=email.text,
                    html_body=email.html,
                )
            )
            failure = None if sent else "rejected by email backend"
        except asyncio.TimeoutError:
            failure = f"timed out after {self._io_timeout}s"
        except Exception as e:
            failure = str(e) or e.__class__.__name__

        if failure is not None:
            error = DispatchError(subscriber.id, failure)
            logger.error(error.message)
            report.failed += 1
            report.errors.append(error.message)
            return

        report.dispatched += 1
        notified_at = self._clock()
        try:
            await self._bounded(
                self._state_writer.set_last_notified_at(subscriber.id, notified_at)
            )
        except Exception as e:
            reason = "timed out" if isinstance(e, asyncio.TimeoutError) else str(e)
            error_msg = f"Failed to record notification for subscriber {subscriber.id}: {reason}"
            logger.error(error_msg)
            report.errors.append(error_msg)
            return

        subscriber.mark_notified(notified_at)
        report.state_writes += 1

    async def _enqueue(
        self,
        subscribers: List[Subscriber],
        reading: KpReading,
        report: CycleReport,
    ) -> None:
        """Queue one outbox message per subscriber in a single batched write."""
        messages = []
        for subscriber in subscribers:
            email = render_alert_email(
                reading.value, subscriber.kp_threshold, self._dashboard_url
            )
            messages.append(
                OutboxMessage(
                    id=None,
                    to=str(subscriber.email),
                    subject=email.subject,
                    text=email.text,
                    html=email.html,
                    subscriber_id=subscriber.id,
                    created_at=self._clock(),
                )
            )

        logger.info(f"Queueing {len(messages)} alert emails")
        try:
            stored = await self._bounded(self._outbox.enqueue_batch(messages))
        except Exception as e:
            reason = "timed out" if isinstance(e, asyncio.TimeoutError) else str(e)
            error_msg = f"Failed to queue {len(messages)} alert emails: {reason}"
            logger.error(error_msg)
            report.failed += len(messages)
            report.errors.append(error_msg)
            return

        report.queued += len(stored)
        logger.info("Successfully queued alert emails.")

    async def _bounded(self, awaitable: Awaitable[T]) -> T:
        return await asyncio.wait_for(awaitable, timeout=self._io_timeout)
