"""Wiring of the alert evaluation engine with its production collaborators."""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import AsyncIterator, Optional

from app.core.config import Settings
from app.solar_alerts.application.dto.cycle_dto import CycleReport
from app.solar_alerts.application.exceptions import ConfigurationError
from app.solar_alerts.application.use_cases.evaluate_alerts import AlertEvaluationEngine
from app.solar_alerts.domain.services.notification_policy import (
    DeliveryMode,
    NotificationPolicy,
    create_policy,
)
from app.solar_alerts.infrastructure.db.session import get_async_session_local
from app.solar_alerts.infrastructure.external.noaa_kp_client import NoaaKpClient
from app.solar_alerts.infrastructure.external.sender_factory import create_email_sender
from app.solar_alerts.infrastructure.repositories.sql_outbox_repository import SqlMailOutbox
from app.solar_alerts.infrastructure.repositories.sql_subscriber_repository import (
    SqlNotificationStateWriter,
    SqlSubscriberRepository,
)

logger = logging.getLogger(__name__)


def build_policy(settings: Settings, policy_name: Optional[str] = None) -> NotificationPolicy:
    """Build the configured notification policy (or an explicit override).

    Raises:
        ConfigurationError: If the policy name is unknown.
    """
    name = policy_name or settings.notification_policy
    try:
        return create_policy(name, timedelta(minutes=settings.alert_cooldown_minutes))
    except ValueError as e:
        raise ConfigurationError("notification_policy", str(e)) from e


async def validate_alert_configuration(settings: Settings) -> None:
    """Check at startup that an alert cycle could be wired.

    Raises:
        ConfigurationError: On an unknown policy or missing email credentials.
    """
    policy = build_policy(settings)
    if policy.delivery is DeliveryMode.IMMEDIATE:
        sender = create_email_sender(settings)
        await sender.close()
    logger.info(f"Alert configuration OK (policy: {policy.name})")


@asynccontextmanager
async def alert_engine_scope(
    settings: Settings,
    policy_name: Optional[str] = None,
) -> AsyncIterator[AlertEvaluationEngine]:
    """Yield a fully wired engine and release its resources afterwards."""
    policy = build_policy(settings, policy_name)
    email_sender = (
        create_email_sender(settings)
        if policy.delivery is DeliveryMode.IMMEDIATE
        else None
    )
    kp_source = NoaaKpClient(url=settings.kp_index_url, timeout=settings.io_timeout_seconds)
    session_factory = get_async_session_local()

    try:
        async with session_factory() as session:
            yield AlertEvaluationEngine(
                kp_source=kp_source,
                subscriber_repository=SqlSubscriberRepository(session),
                policy=policy,
                email_sender=email_sender,
                state_writer=SqlNotificationStateWriter(session_factory),
                outbox=SqlMailOutbox(session_factory),
                dashboard_url=settings.dashboard_url,
                io_timeout_seconds=settings.io_timeout_seconds,
            )
    finally:
        await kp_source.close()
        if email_sender is not None:
            await email_sender.close()


async def run_alert_cycle(settings: Settings, policy_name: Optional[str] = None) -> CycleReport:
    """Wire an engine, run one cycle and tear everything down."""
    async with alert_engine_scope(settings, policy_name) as engine:
        return await engine.evaluate_cycle()
