"""Development email backend that only logs what would be sent."""

import logging

from app.solar_alerts.application.interfaces.email_sender import EmailSender

logger = logging.getLogger(__name__)


class ConsoleEmailSender(EmailSender):
    """Logs alert emails instead of delivering them. Always succeeds."""

    @property
    def backend_name(self) -> str:
        return "console"

    async def send(
        self,
        to_email: str,
        subject: str,
        text_body: str,
        html_body: str,
    ) -> bool:
        logger.info(
            f"[DEV MODE] Alert email to {to_email}:\n"
            f"  Subject: {subject}\n"
            f"{text_body}"
        )
        return True
