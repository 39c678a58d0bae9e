"""Tests for the email backends and their factory."""

import json
import smtplib
from unittest.mock import patch

import httpx
import pytest

from app.core.config import Settings
from app.solar_alerts.application.exceptions import ConfigurationError
from app.solar_alerts.infrastructure.external.console_sender import ConsoleEmailSender
from app.solar_alerts.infrastructure.external.postmark_sender import PostmarkEmailSender
from app.solar_alerts.infrastructure.external.sender_factory import create_email_sender
from app.solar_alerts.infrastructure.external.smtp_sender import SmtpEmailSender


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestPostmarkEmailSender:
    """Tests for PostmarkEmailSender.send."""

    @pytest.mark.asyncio
    async def test_send_posts_message(self) -> None:
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["path"] = request.url.path
            captured["token"] = request.headers["X-Postmark-Server-Token"]
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json={"ErrorCode": 0})

        client = httpx.AsyncClient(
            base_url="https://api.postmarkapp.com",
            transport=httpx.MockTransport(handler),
        )
        sender = PostmarkEmailSender(
            api_token="token-123", from_email="alerts@example.com", client=client
        )

        sent = await sender.send("user@example.com", "Subject", "text", "<p>html</p>")
        await sender.close()

        assert sent is True
        assert captured["path"] == "/email"
        assert captured["token"] == "token-123"
        assert captured["body"]["To"] == "user@example.com"
        assert captured["body"]["TextBody"] == "text"
        assert captured["body"]["MessageStream"] == "outbound"

    @pytest.mark.asyncio
    async def test_rejected_message_returns_false(self) -> None:
        client = httpx.AsyncClient(
            base_url="https://api.postmarkapp.com",
            transport=httpx.MockTransport(
                lambda request: httpx.Response(422, json={"ErrorCode": 300})
            ),
        )
        sender = PostmarkEmailSender(api_token="t", from_email="a@example.com", client=client)

        assert await sender.send("user@example.com", "s", "t", "h") is False

    @pytest.mark.asyncio
    async def test_network_error_returns_false(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        client = httpx.AsyncClient(
            base_url="https://api.postmarkapp.com",
            transport=httpx.MockTransport(handler),
        )
        sender = PostmarkEmailSender(api_token="t", from_email="a@example.com", client=client)

        assert await sender.send("user@example.com", "s", "t", "h") is False


class TestSmtpEmailSender:
    """Tests for SmtpEmailSender."""

    @pytest.fixture
    def sender(self) -> SmtpEmailSender:
        return SmtpEmailSender(
            host="smtp.example.com",
            port=587,
            username="user",
            password="secret",
            from_email="alerts@example.com",
        )

    def test_build_message_is_multipart(self, sender: SmtpEmailSender) -> None:
        message = sender.build_message("user@example.com", "Subject", "plain", "<b>html</b>")

        assert message["To"] == "user@example.com"
        assert "Solar Dash Alerts" in message["From"]
        assert message.get_content_type() == "multipart/alternative"

    @pytest.mark.asyncio
    async def test_smtp_failure_returns_false(self, sender: SmtpEmailSender) -> None:
        with patch.object(
            SmtpEmailSender, "_deliver", side_effect=smtplib.SMTPAuthenticationError(535, b"no")
        ):
            assert await sender.send("user@example.com", "s", "t", "h") is False

    @pytest.mark.asyncio
    async def test_send_success(self, sender: SmtpEmailSender) -> None:
        with patch.object(SmtpEmailSender, "_deliver") as mock_deliver:
            assert await sender.send("user@example.com", "s", "t", "h") is True

        mock_deliver.assert_called_once()


class TestCreateEmailSender:
    """Tests for create_email_sender."""

    def test_console_in_development(self) -> None:
        sender = create_email_sender(make_settings(email_backend="console"))

        assert isinstance(sender, ConsoleEmailSender)

    def test_console_rejected_in_production(self) -> None:
        with pytest.raises(ConfigurationError):
            create_email_sender(make_settings(email_backend="console", app_env="production"))

    def test_postmark_requires_token(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            create_email_sender(make_settings(email_backend="postmark", postmark_api_token=""))

        assert exc_info.value.setting == "postmark_api_token"

    def test_postmark_backend(self) -> None:
        sender = create_email_sender(
            make_settings(email_backend="postmark", postmark_api_token="token")
        )

        assert sender.backend_name == "postmark"

    def test_smtp_requires_credentials(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            create_email_sender(
                make_settings(email_backend="smtp", smtp_host="smtp.example.com")
            )

        assert "smtp_user" in exc_info.value.setting
        assert "smtp_password" in exc_info.value.setting

    def test_smtp_backend(self) -> None:
        sender = create_email_sender(
            make_settings(
                email_backend="smtp",
                smtp_host="smtp.example.com",
                smtp_user="user",
                smtp_password="secret",
            )
        )

        assert isinstance(sender, SmtpEmailSender)

    def test_smtp_socket_timeout_below_dispatch_deadline(self) -> None:
        """The worker thread gives up before the dispatch deadline expires."""
        sender = create_email_sender(
            make_settings(
                email_backend="smtp",
                smtp_host="smtp.example.com",
                smtp_user="user",
                smtp_password="secret",
                io_timeout_seconds=20.0,
            )
        )

        assert sender.timeout == 5.0
        assert sender.timeout < 20.0

    def test_smtp_timeout_reaches_socket(self) -> None:
        sender = SmtpEmailSender(
            host="smtp.example.com",
            port=587,
            username="user",
            password="secret",
            from_email="alerts@example.com",
            timeout=2.5,
        )
        message = sender.build_message("to@example.com", "Subject", "text", "<p>html</p>")

        with patch("smtplib.SMTP") as mock_smtp:
            sender._deliver(message)

        assert mock_smtp.call_args.kwargs["timeout"] == 2.5


class TestConsoleEmailSender:
    """Tests for ConsoleEmailSender."""

    @pytest.mark.asyncio
    async def test_always_succeeds(self) -> None:
        assert await ConsoleEmailSender().send("user@example.com", "s", "t", "h") is True
