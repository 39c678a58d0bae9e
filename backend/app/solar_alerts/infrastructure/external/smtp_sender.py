"""SMTP email sender.

Port 465 uses implicit TLS; any other port upgrades with STARTTLS.
smtplib is blocking, so each send runs in a worker thread.

A caller that gives up on ``send`` (asyncio.wait_for, task cancellation)
cannot stop that thread: a slow server may still accept the message after
the caller has recorded a failure, and the next cycle would send it again.
Keep ``timeout``, which bounds each blocking socket operation, well below
the caller's deadline so the thread normally fails first.
"""

import asyncio
import logging
import smtplib
import ssl
from email.message import EmailMessage
from email.utils import formataddr

from app.solar_alerts.application.interfaces.email_sender import EmailSender

logger = logging.getLogger(__name__)

IMPLICIT_TLS_PORT = 465


class SmtpEmailSender(EmailSender):
    """Sends multipart (text + HTML) alert emails over SMTP."""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        from_email: str,
        from_name: str = "Solar Dash Alerts",
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._from_email = from_email
        self._from_name = from_name
        self._timeout = timeout

    @property
    def backend_name(self) -> str:
        return "smtp"

    @property
    def timeout(self) -> float:
        return self._timeout

    def build_message(
        self,
        to_email: str,
        subject: str,
        text_body: str,
        html_body: str,
    ) -> EmailMessage:
        message = EmailMessage()
        message["From"] = formataddr((self._from_name, self._from_email))
        message["To"] = to_email
        message["Subject"] = subject
        message.set_content(text_body)
        message.add_alternative(html_body, subtype="html")
        return message

    def _deliver(self, message: EmailMessage) -> None:
        context = ssl.create_default_context()
        if self._port == IMPLICIT_TLS_PORT:
            with smtplib.SMTP_SSL(
                self._host, self._port, timeout=self._timeout, context=context
            ) as server:
                server.login(self._username, self._password)
                server.send_message(message)
        else:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
                server.starttls(context=context)
                server.login(self._username, self._password)
                server.send_message(message)

    async def send(
        self,
        to_email: str,
        subject: str,
        text_body: str,
        html_body: str,
    ) -> bool:
        message = self.build_message(to_email, subject, text_body, html_body)
        try:
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {to_email}: {e}")
            return False

        logger.info(f"Alert email sent to {to_email}")
        return True
