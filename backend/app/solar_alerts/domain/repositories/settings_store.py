"""Abstract interface for settings kept outside the subscriber directory."""

from abc import ABC, abstractmethod
from typing import Optional

from ..entities.subscriber import AlertSettings


class EphemeralSettingsStore(ABC):
    """Process-local settings storage used for the demo account."""

    @abstractmethod
    async def load(self) -> Optional[AlertSettings]:
        """Return the stored settings, or None if nothing was saved yet."""
        pass

    @abstractmethod
    async def store(self, settings: AlertSettings) -> None:
        """Replace the stored settings."""
        pass
