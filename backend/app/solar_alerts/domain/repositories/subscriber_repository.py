"""Abstract repository interfaces for subscriber records."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from ..entities.subscriber import AlertSettings, Subscriber


class SubscriberRepository(ABC):
    """Abstract repository acting as the subscriber directory.

    "Alerting" subscribers are those whose settings have email alerts
    enabled. All methods are async to support non-blocking I/O in the
    infrastructure layer.
    """

    @abstractmethod
    async def list_alerting(
        self, max_threshold: Optional[float] = None
    ) -> List[Subscriber]:
        """Retrieve all subscribers with email alerts enabled.

        Args:
            max_threshold: When given, only subscribers whose stored
                threshold is at or below this value are returned.

        Returns:
            List of Subscriber entities with alerting enabled.
        """
        pass

    @abstractmethod
    async def get_by_id(self, subscriber_id: str) -> Optional[Subscriber]:
        """Retrieve a subscriber by directory id.

        Returns:
            The Subscriber if found, None otherwise.
        """
        pass

    @abstractmethod
    async def save_settings(
        self,
        subscriber_id: str,
        settings: AlertSettings,
        contact_address: Optional[str] = None,
    ) -> Subscriber:
        """Create or update a subscriber's alert settings.

        Only the settings (and the contact address, when given) are written;
        notification state is left as it is.

        Returns:
            The stored Subscriber.
        """
        pass


class NotificationStateWriter(ABC):
    """Persists per-subscriber notification state after a dispatch."""

    @abstractmethod
    async def set_last_notified_at(self, subscriber_id: str, at: datetime) -> None:
        """Record when a subscriber was last notified.

        Must be a keyed update touching only the notification timestamp,
        safe to run concurrently for different subscribers.
        """
        pass
