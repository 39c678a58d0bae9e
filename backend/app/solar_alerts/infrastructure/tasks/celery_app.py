"""Celery application configuration."""

import asyncio
import logging

from celery import Celery
from celery.signals import worker_init

from app.core.config import get_settings
from app.core.logging import level_for, setup_logging
from app.solar_alerts.application.exceptions import ConfigurationError

settings = get_settings()
logger = logging.getLogger(__name__)

celery_app = Celery(
    "solar_alerts",
    broker=str(settings.celery_broker_url),
    backend=str(settings.celery_result_backend),
)

# Celery configuration
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=300,  # 5 minutes max per task
    worker_prefetch_multiplier=1,
    worker_hijack_root_logger=False,
    # Beat schedule for periodic tasks
    beat_schedule={
        "check-kp-alerts": {
            "task": "app.solar_alerts.infrastructure.tasks.alert_tasks.check_kp_alerts",
            "schedule": settings.alert_check_interval_seconds,
        },
    },
)

# Auto-discover tasks from the tasks module
celery_app.autodiscover_tasks(
    [
        "app.solar_alerts.infrastructure.tasks",
    ],
    related_name="alert_tasks",
)


@worker_init.connect
def validate_worker_configuration(**kwargs) -> None:
    """Refuse to start a worker that could never deliver a notification."""
    from app.solar_alerts.infrastructure.tasks.bootstrap import validate_alert_configuration

    setup_logging(level=level_for(settings.debug))
    try:
        asyncio.run(validate_alert_configuration(settings))
    except ConfigurationError as e:
        logger.critical(f"CRITICAL: {e.message}")
        raise SystemExit(1) from e
