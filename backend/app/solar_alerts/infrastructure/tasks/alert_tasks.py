"""Celery tasks for scheduled Kp alert evaluation."""

import asyncio
import logging
from typing import Any, Optional

from app.core.config import get_settings
from app.solar_alerts.infrastructure.db.session import dispose_engine
from app.solar_alerts.infrastructure.tasks.bootstrap import run_alert_cycle
from app.solar_alerts.infrastructure.tasks.celery_app import celery_app

logger = logging.getLogger(__name__)


async def _check_kp_alerts_async(policy: Optional[str] = None) -> dict[str, Any]:
    """Async implementation of the alert check.

    The engine pool is disposed afterwards because every task invocation
    runs in a fresh event loop.

    Returns:
        JSON-serialisable cycle report.
    """
    try:
        report = await run_alert_cycle(get_settings(), policy_name=policy)
    finally:
        await dispose_engine()
    return report.model_dump(mode="json")


@celery_app.task(
    bind=True,
    name="app.solar_alerts.infrastructure.tasks.alert_tasks.check_kp_alerts",
)
def check_kp_alerts(self, policy: Optional[str] = None) -> dict:
    """Check the current Kp index against every subscriber's threshold.

    This task runs on a schedule (every 15 minutes by default) and:
    1. Fetches the latest planetary Kp reading from NOAA
    2. Loads subscribers with email alerts enabled
    3. Evaluates each subscriber with the configured NotificationPolicy
    4. Sends (or queues) notifications for eligible subscribers
    5. Records last-notified timestamps for successful sends

    Args:
        policy: Optional policy name overriding the configured one.

    Returns:
        Summary of the alert cycle.
    """
    logger.info("Starting check_kp_alerts task")
    try:
        return asyncio.run(_check_kp_alerts_async(policy))
    except Exception as e:
        logger.exception(f"check_kp_alerts failed: {e}")
        raise
