"""In-memory settings store for the demo account."""

from typing import Optional

from app.solar_alerts.domain.entities.subscriber import AlertSettings
from app.solar_alerts.domain.repositories.settings_store import EphemeralSettingsStore


class InMemorySettingsStore(EphemeralSettingsStore):
    """Holds one AlertSettings value for the lifetime of the process."""

    def __init__(self, initial: Optional[AlertSettings] = None) -> None:
        self._settings = initial

    async def load(self) -> Optional[AlertSettings]:
        return self._settings

    async def store(self, settings: AlertSettings) -> None:
        self._settings = settings
