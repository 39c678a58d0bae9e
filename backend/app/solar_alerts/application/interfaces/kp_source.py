"""Kp data source interface for fetching the current planetary Kp index."""

from abc import ABC, abstractmethod

from app.solar_alerts.domain.value_objects.kp_reading import KpReading


class KpDataSource(ABC):
    """Abstract base class for Kp feed adapters.

    Implementations do their own payload parsing and raise KpFetchError
    for anything that is not a usable reading.
    """

    @abstractmethod
    async def fetch_latest(self) -> KpReading:
        """Fetch the most recent Kp reading.

        Raises:
            KpFetchError: If the feed is unreachable or the payload is unusable.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        ...
