"""Builds the configured email backend, failing fast on missing credentials."""

import logging

from app.core.config import Settings
from app.solar_alerts.application.exceptions import ConfigurationError
from app.solar_alerts.application.interfaces.email_sender import EmailSender
from app.solar_alerts.infrastructure.external.console_sender import ConsoleEmailSender
from app.solar_alerts.infrastructure.external.postmark_sender import PostmarkEmailSender
from app.solar_alerts.infrastructure.external.smtp_sender import SmtpEmailSender

logger = logging.getLogger(__name__)

# Share of the dispatch deadline given to each blocking SMTP socket operation
SMTP_TIMEOUT_SHARE = 0.25


def create_email_sender(settings: Settings) -> EmailSender:
    """Create the email sender selected by ``settings.email_backend``.

    Raises:
        ConfigurationError: If the selected backend lacks credentials, or the
            console backend is selected in production.
    """
    backend = settings.email_backend

    if backend == "postmark":
        if not settings.postmark_api_token:
            raise ConfigurationError("postmark_api_token", "required for the postmark backend")
        sender: EmailSender = PostmarkEmailSender(
            api_token=settings.postmark_api_token,
            from_email=settings.alert_from_email,
            timeout=settings.io_timeout_seconds,
        )
    elif backend == "smtp":
        missing = [
            name
            for name in ("smtp_host", "smtp_user", "smtp_password")
            if not getattr(settings, name)
        ]
        if missing:
            raise ConfigurationError(", ".join(missing), "required for the smtp backend")
        sender = SmtpEmailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_user,
            password=settings.smtp_password,
            from_email=settings.alert_from_email or settings.smtp_user,
            from_name=settings.alert_from_name,
            timeout=settings.io_timeout_seconds * SMTP_TIMEOUT_SHARE,
        )
    elif backend == "console":
        if settings.is_production:
            raise ConfigurationError("email_backend", "console backend is not allowed in production")
        sender = ConsoleEmailSender()
    else:
        raise ConfigurationError("email_backend", f"unknown backend '{backend}'")

    logger.info(f"Email backend: {sender.backend_name}")
    return sender
