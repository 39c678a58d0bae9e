"""NOAA SWPC client for the planetary Kp index.

Feed: https://services.swpc.noaa.gov/products/noaa-planetary-k-index.json
The payload is a JSON array whose first row is a header
(["time_tag", "Kp", "a_running", "station_count"]) followed by data rows,
oldest first. Values arrive as strings. Newer SWPC products return a list
of objects instead; both shapes are accepted.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from app.solar_alerts.application.exceptions import KpFetchError
from app.solar_alerts.application.interfaces.kp_source import KpDataSource
from app.solar_alerts.domain.value_objects.kp_reading import KpReading

logger = logging.getLogger(__name__)

NOAA_KP_URL = "https://services.swpc.noaa.gov/products/noaa-planetary-k-index.json"

# Default timeout for HTTP requests
DEFAULT_TIMEOUT_SECONDS = 10.0


def _parse_time_tag(raw: Any) -> datetime:
    """Parse a SWPC time tag such as "2024-05-10 12:00:00.000" as UTC."""
    if isinstance(raw, str):
        try:
            parsed = datetime.fromisoformat(raw.strip())
        except ValueError:
            parsed = None
        if parsed is not None:
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)

    logger.warning(f"Unparseable Kp time tag {raw!r}, using fetch time")
    return datetime.now(timezone.utc)


def parse_kp_payload(data: Any) -> KpReading:
    """Extract the latest reading from a decoded Kp feed payload.

    Raises:
        KpFetchError: If the payload has no usable last row.
    """
    if not isinstance(data, list) or not data:
        raise KpFetchError("empty or malformed payload")

    last = data[-1]
    if isinstance(last, dict):
        raw_value = last.get("Kp", last.get("kp"))
        time_tag = last.get("time_tag")
    elif isinstance(last, (list, tuple)) and len(last) >= 2:
        time_tag, raw_value = last[0], last[1]
    else:
        raise KpFetchError(f"unexpected row format: {last!r}")

    try:
        return KpReading.parse(raw_value, _parse_time_tag(time_tag))
    except ValueError as e:
        raise KpFetchError(str(e)) from e


class NoaaKpClient(KpDataSource):
    """NOAA SWPC Kp feed client implementing the KpDataSource interface.

    No authentication is required.

    Attributes:
        _client: httpx AsyncClient for making HTTP requests.
        _url: Feed URL.
    """

    def __init__(
        self,
        url: str = NOAA_KP_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """Initialize the NOAA client.

        Args:
            url: Kp feed URL (overridable for mirrors and tests).
            timeout: HTTP request timeout in seconds.
            client: Pre-built httpx client; one is created when omitted.
        """
        self._url = url
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={
                "Accept": "application/json",
                "User-Agent": "SolarDashAlerts/1.0",
            },
        )

    async def fetch_latest(self) -> KpReading:
        """Fetch the latest planetary Kp reading.

        Raises:
            KpFetchError: On network errors, HTTP errors or unusable payloads.
        """
        try:
            response = await self._client.get(self._url)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            logger.error("Timeout fetching NOAA Kp index")
            raise KpFetchError("request timed out") from e
        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error fetching NOAA Kp index: {e.response.status_code}")
            raise KpFetchError(f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"Network error fetching NOAA Kp index: {e}")
            raise KpFetchError(str(e) or e.__class__.__name__) from e
        except ValueError as e:
            logger.error(f"NOAA Kp response is not valid JSON: {e}")
            raise KpFetchError("invalid JSON") from e

        reading = parse_kp_payload(data)
        logger.debug(f"NOAA Kp reading: {reading.value} at {reading.observed_at.isoformat()}")
        return reading

    async def close(self) -> None:
        await self._client.aclose()
