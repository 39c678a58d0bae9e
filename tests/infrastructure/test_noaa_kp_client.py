"""Tests for the NOAA SWPC Kp client.

HTTP traffic is served by httpx.MockTransport; no network access is needed.
"""

from datetime import datetime, timezone

import httpx
import pytest

from app.solar_alerts.application.exceptions import KpFetchError
from app.solar_alerts.infrastructure.external.noaa_kp_client import (
    NOAA_KP_URL,
    NoaaKpClient,
    parse_kp_payload,
)

HEADER = ["time_tag", "Kp", "a_running", "station_count"]


def make_client(handler) -> NoaaKpClient:
    transport = httpx.MockTransport(handler)
    return NoaaKpClient(client=httpx.AsyncClient(transport=transport))


class TestParseKpPayload:
    """Tests for parse_kp_payload."""

    def test_uses_last_row(self) -> None:
        payload = [
            HEADER,
            ["2024-05-10 12:00:00.000", "3.33", "18", "8"],
            ["2024-05-10 15:00:00.000", "7.67", "207", "8"],
        ]

        reading = parse_kp_payload(payload)

        assert reading.value == pytest.approx(7.67)
        assert reading.observed_at == datetime(2024, 5, 10, 15, 0, tzinfo=timezone.utc)

    def test_accepts_object_rows(self) -> None:
        payload = [
            {"time_tag": "2024-05-10T15:00:00", "kp": 4.0},
            {"time_tag": "2024-05-10T18:00:00", "Kp": 5.33},
        ]

        reading = parse_kp_payload(payload)

        assert reading.value == pytest.approx(5.33)

    def test_header_only_payload_fails(self) -> None:
        with pytest.raises(KpFetchError):
            parse_kp_payload([HEADER])

    @pytest.mark.parametrize("payload", [[], {}, None, [["2024-05-10"]]])
    def test_malformed_payload_fails(self, payload: object) -> None:
        with pytest.raises(KpFetchError):
            parse_kp_payload(payload)

    def test_non_numeric_value_fails(self) -> None:
        with pytest.raises(KpFetchError):
            parse_kp_payload([HEADER, ["2024-05-10 15:00:00.000", "", "0", "0"]])

    def test_unparseable_time_tag_uses_fetch_time(self) -> None:
        before = datetime.now(timezone.utc)

        reading = parse_kp_payload([HEADER, ["yesterday", "2.0", "7", "8"]])

        assert reading.observed_at >= before


class TestNoaaKpClient:
    """Tests for NoaaKpClient.fetch_latest."""

    @pytest.mark.asyncio
    async def test_fetch_latest(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert str(request.url) == NOAA_KP_URL
            return httpx.Response(
                200, json=[HEADER, ["2024-05-10 18:00:00.000", "8.00", "236", "8"]]
            )

        client = make_client(handler)
        reading = await client.fetch_latest()
        await client.close()

        assert reading.value == 8.0

    @pytest.mark.asyncio
    async def test_http_error_status(self) -> None:
        client = make_client(lambda request: httpx.Response(503))

        with pytest.raises(KpFetchError) as exc_info:
            await client.fetch_latest()

        assert exc_info.value.reason == "HTTP 503"

    @pytest.mark.asyncio
    async def test_timeout(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client(handler)

        with pytest.raises(KpFetchError) as exc_info:
            await client.fetch_latest()

        assert exc_info.value.reason == "request timed out"

    @pytest.mark.asyncio
    async def test_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client(handler)

        with pytest.raises(KpFetchError):
            await client.fetch_latest()

    @pytest.mark.asyncio
    async def test_invalid_json(self) -> None:
        client = make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))

        with pytest.raises(KpFetchError) as exc_info:
            await client.fetch_latest()

        assert exc_info.value.reason == "invalid JSON"
