"""Tests for the scheduled alert task and its wiring helpers."""

from datetime import timedelta
from unittest.mock import AsyncMock, patch

import pytest

from app.core.config import Settings
from app.solar_alerts.application.dto.cycle_dto import CycleReport
from app.solar_alerts.application.exceptions import ConfigurationError
from app.solar_alerts.domain.services.notification_policy import (
    BatchDigestPolicy,
    CooldownPolicy,
)
from app.solar_alerts.infrastructure.db.session import to_async_database_url
from app.solar_alerts.infrastructure.tasks import alert_tasks
from app.solar_alerts.infrastructure.tasks.bootstrap import (
    build_policy,
    validate_alert_configuration,
)


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestBuildPolicy:
    """Tests for build_policy."""

    def test_configured_cooldown(self) -> None:
        policy = build_policy(make_settings(alert_cooldown_minutes=90))

        assert isinstance(policy, CooldownPolicy)
        assert policy.cooldown == timedelta(minutes=90)

    def test_override_wins(self) -> None:
        policy = build_policy(make_settings(), policy_name="batch_digest")

        assert isinstance(policy, BatchDigestPolicy)

    def test_unknown_override(self) -> None:
        with pytest.raises(ConfigurationError):
            build_policy(make_settings(), policy_name="hourly")


class TestValidateAlertConfiguration:
    """Tests for the startup configuration check."""

    @pytest.mark.asyncio
    async def test_missing_postmark_token_is_fatal(self) -> None:
        settings = make_settings(email_backend="postmark", postmark_api_token="")

        with pytest.raises(ConfigurationError):
            await validate_alert_configuration(settings)

    @pytest.mark.asyncio
    async def test_batch_digest_needs_no_sender(self) -> None:
        """The queued path never builds an email backend."""
        settings = make_settings(
            notification_policy="batch_digest",
            email_backend="postmark",
            postmark_api_token="",
        )

        await validate_alert_configuration(settings)


class TestCheckKpAlertsTask:
    """Tests for the Celery task body."""

    @pytest.mark.asyncio
    async def test_returns_serialised_report_and_disposes_engine(self) -> None:
        report = CycleReport(policy="cooldown", kp_value=6.0, dispatched=2)

        with (
            patch.object(
                alert_tasks, "run_alert_cycle", AsyncMock(return_value=report)
            ) as mock_run,
            patch.object(alert_tasks, "dispose_engine", AsyncMock()) as mock_dispose,
        ):
            result = await alert_tasks._check_kp_alerts_async("cooldown")

        assert result["kp_value"] == 6.0
        assert result["dispatched"] == 2
        assert isinstance(result["started_at"], str)
        assert mock_run.call_args.kwargs["policy_name"] == "cooldown"
        mock_dispose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_engine_disposed_on_failure(self) -> None:
        with (
            patch.object(
                alert_tasks,
                "run_alert_cycle",
                AsyncMock(side_effect=ConfigurationError("postmark_api_token", "missing")),
            ),
            patch.object(alert_tasks, "dispose_engine", AsyncMock()) as mock_dispose,
        ):
            with pytest.raises(ConfigurationError):
                await alert_tasks._check_kp_alerts_async()

        mock_dispose.assert_awaited_once()


class TestDatabaseUrl:
    """Tests for to_async_database_url."""

    @pytest.mark.parametrize(
        "url",
        [
            "postgresql+psycopg://u:p@db:5432/solar",
            "postgresql://u:p@db:5432/solar",
            "postgres://u:p@db:5432/solar",
        ],
    )
    def test_rewrites_to_asyncpg(self, url: str) -> None:
        assert to_async_database_url(url) == "postgresql+asyncpg://u:p@db:5432/solar"
