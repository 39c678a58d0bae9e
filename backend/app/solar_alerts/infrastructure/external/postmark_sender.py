"""Postmark email API sender.

Postmark API documentation: https://postmarkapp.com/developer/api/email-api
"""

import logging
from typing import Optional

import httpx

from app.solar_alerts.application.interfaces.email_sender import EmailSender

logger = logging.getLogger(__name__)

POSTMARK_API_URL = "https://api.postmarkapp.com"

DEFAULT_TIMEOUT_SECONDS = 10.0


class PostmarkEmailSender(EmailSender):
    """Sends transactional email through the Postmark HTTP API."""

    def __init__(
        self,
        api_token: str,
        from_email: str,
        base_url: str = POSTMARK_API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._from_email = from_email
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
        )
        self._headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "X-Postmark-Server-Token": api_token,
        }

    @property
    def backend_name(self) -> str:
        return "postmark"

    async def send(
        self,
        to_email: str,
        subject: str,
        text_body: str,
        html_body: str,
    ) -> bool:
        try:
            response = await self._client.post(
                "/email",
                headers=self._headers,
                json={
                    "From": self._from_email,
                    "To": to_email,
                    "Subject": subject,
                    "HtmlBody": html_body,
                    "TextBody": text_body,
                    "MessageStream": "outbound",  # Default transactional stream
                },
            )
        except httpx.HTTPError as e:
            logger.error(f"Failed to reach Postmark for {to_email}: {e}")
            return False

        if response.status_code != 200:
            logger.error(f"Postmark error: {response.status_code} - {response.text}")
            return False

        logger.info(f"Alert email sent to {to_email}")
        return True

    async def close(self) -> None:
        await self._client.aclose()
