"""Use case for the dashboard's current Kp status poll.

Besides classifying the latest reading, it drives one ThresholdLatch per
page session of an identified viewer so the front end can raise its toast
exactly once per upward crossing of that viewer's threshold. A page reload
starts a new page session and therefore a freshly armed latch.
"""

import logging
from collections import OrderedDict
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from app.solar_alerts.application.dto.kp_dto import KpStatusDTO
from app.solar_alerts.application.interfaces.kp_source import KpDataSource
from app.solar_alerts.application.use_cases.alert_settings import load_viewer_settings
from app.solar_alerts.domain.entities.subscriber import AlertSettings
from app.solar_alerts.domain.repositories.settings_store import EphemeralSettingsStore
from app.solar_alerts.domain.repositories.subscriber_repository import SubscriberRepository
from app.solar_alerts.domain.services.kp_scale import (
    aurora_visibility_info,
    aurora_visibility_latitude,
    is_storm_condition,
    kp_to_color,
    kp_to_description,
    kp_to_noaa_scale,
)
from app.solar_alerts.domain.services.threshold_latch import ThresholdLatch
from app.solar_alerts.domain.value_objects.session import AnonymousSession, ViewerSession

logger = logging.getLogger(__name__)

DEFAULT_MAX_LATCHES = 10_000
DEFAULT_LATCH_IDLE_TTL = timedelta(hours=1)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ViewerLatchRegistry:
    """Process-local latches keyed by page session; lost on restart.

    Bounded two ways: latches idle for longer than ``idle_ttl`` are dropped,
    and once ``max_latches`` is reached the least recently polled one is
    evicted. An evicted latch comes back armed on the next poll.
    """

    def __init__(
        self,
        max_latches: int = DEFAULT_MAX_LATCHES,
        idle_ttl: timedelta = DEFAULT_LATCH_IDLE_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if max_latches < 1:
            raise ValueError("max_latches must be at least 1")
        self._max_latches = max_latches
        self._idle_ttl = idle_ttl
        self._clock = clock
        # key -> (latch, last polled at), least recently polled first
        self._latches: OrderedDict[str, tuple[ThresholdLatch, datetime]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._latches)

    def observe(self, viewer_key: str, threshold: float, kp_value: float) -> bool:
        now = self._clock()
        self._expire_idle(now)

        entry = self._latches.pop(viewer_key, None)
        if entry is None:
            latch = ThresholdLatch(threshold)
            while len(self._latches) >= self._max_latches:
                evicted, _ = self._latches.popitem(last=False)
                logger.debug(f"Evicted toast latch for {evicted}")
        else:
            latch = entry[0]
            latch.retarget(threshold)

        self._latches[viewer_key] = (latch, now)
        return latch.observe(kp_value)

    def get(self, viewer_key: str) -> Optional[ThresholdLatch]:
        entry = self._latches.get(viewer_key)
        return entry[0] if entry else None

    def reset(self, viewer_key: str) -> None:
        self._latches.pop(viewer_key, None)

    def _expire_idle(self, now: datetime) -> None:
        while self._latches:
            key, (_, last_seen) = next(iter(self._latches.items()))
            if now - last_seen <= self._idle_ttl:
                break
            del self._latches[key]


def latch_key(session: ViewerSession, page_session: str) -> str:
    """Key of the latch for one page load of one viewer."""
    return f"{session.key}#{page_session}"


class GetKpStatusUseCase:
    """Application service returning the latest Kp reading for a viewer.

    Raises KpFetchError from the data source unchanged; the presentation
    layer maps it to a 503.
    """

    def __init__(
        self,
        kp_source: KpDataSource,
        subscriber_repository: SubscriberRepository,
        demo_store: EphemeralSettingsStore,
        latches: ViewerLatchRegistry,
        defaults: Optional[AlertSettings] = None,
    ) -> None:
        self._kp_source = kp_source
        self._subscriber_repository = subscriber_repository
        self._demo_store = demo_store
        self._latches = latches
        self._defaults = defaults or AlertSettings()

    async def execute(
        self,
        session: ViewerSession,
        page_session: Optional[str] = None,
        latitude: Optional[float] = None,
    ) -> KpStatusDTO:
        """Build the status for one poll.

        Args:
            session: The viewer making the request.
            page_session: Id generated by the page on load; without it no
                latch is kept and ``notify`` stays False.
            latitude: Observer latitude for the aurora visibility hint.
        """
        reading = await self._kp_source.fetch_latest()

        status = KpStatusDTO(
            kp_value=reading.value,
            observed_at=reading.observed_at,
            noaa_scale=kp_to_noaa_scale(reading.value),
            color=kp_to_color(reading.value),
            description=kp_to_description(reading.value),
            storm=is_storm_condition(reading.value),
            aurora_latitude=aurora_visibility_latitude(reading.value),
        )

        if latitude is not None:
            visibility = aurora_visibility_info(reading.value, latitude)
            status.aurora_visible = visibility.visible
            status.aurora_message = visibility.message

        if isinstance(session, AnonymousSession):
            return status

        # Polling must not create subscriber records
        settings, _ = await load_viewer_settings(
            session,
            self._subscriber_repository,
            self._demo_store,
            self._defaults,
            initialise=False,
        )
        threshold = settings.kp_threshold
        status.threshold = threshold
        status.threshold_reached = reading.meets(threshold)

        if page_session:
            key = latch_key(session, page_session)
            status.notify = self._latches.observe(key, threshold, reading.value)
            if status.notify:
                logger.info(f"Kp {reading.value} crossed threshold {threshold:g} for {key}")
        return status
