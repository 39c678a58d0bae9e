"""Use cases for reading and updating a viewer's alert settings.

Storage is chosen by the kind of viewer session:
- AuthenticatedSession: the subscriber directory
- DemoSession: a process-local ephemeral store
- AnonymousSession: read-only defaults
"""

import logging
from typing import Optional

from app.solar_alerts.application.dto.alert_settings_dto import (
    AlertSettingsDTO,
    UpdateAlertSettingsRequest,
)
from app.solar_alerts.application.exceptions import SettingsNotWritableError
from app.solar_alerts.domain.entities.subscriber import AlertSettings
from app.solar_alerts.domain.repositories.settings_store import EphemeralSettingsStore
from app.solar_alerts.domain.repositories.subscriber_repository import SubscriberRepository
from app.solar_alerts.domain.value_objects.session import (
    AuthenticatedSession,
    DemoSession,
    ViewerSession,
)

logger = logging.getLogger(__name__)

STORAGE_DIRECTORY = "directory"
STORAGE_DEMO = "demo"
STORAGE_DEFAULTS = "defaults"


async def load_viewer_settings(
    session: ViewerSession,
    subscriber_repository: SubscriberRepository,
    demo_store: EphemeralSettingsStore,
    defaults: AlertSettings,
    initialise: bool = True,
) -> tuple[AlertSettings, str]:
    """Resolve the settings for a session, initialising them on first access.

    With ``initialise=False`` nothing is written; a viewer without stored
    settings simply gets the defaults.

    Returns:
        The settings and the name of the storage they came from.
    """
    if isinstance(session, AuthenticatedSession):
        subscriber = await subscriber_repository.get_by_id(session.user_id)
        if subscriber is None:
            if not initialise:
                return defaults, STORAGE_DIRECTORY
            logger.info(f"Creating default alert settings for user {session.user_id}")
            subscriber = await subscriber_repository.save_settings(session.user_id, defaults)
        return subscriber.alert_settings, STORAGE_DIRECTORY

    if isinstance(session, DemoSession):
        settings = await demo_store.load()
        if settings is None:
            if initialise:
                await demo_store.store(defaults)
            settings = defaults
        return settings, STORAGE_DEMO

    return defaults, STORAGE_DEFAULTS


class GetAlertSettingsUseCase:
    """Application service returning the current viewer's alert settings."""

    def __init__(
        self,
        subscriber_repository: SubscriberRepository,
        demo_store: EphemeralSettingsStore,
        defaults: Optional[AlertSettings] = None,
    ) -> None:
        self._subscriber_repository = subscriber_repository
        self._demo_store = demo_store
        self._defaults = defaults or AlertSettings()

    async def execute(self, session: ViewerSession) -> AlertSettingsDTO:
        settings, storage = await load_viewer_settings(
            session, self._subscriber_repository, self._demo_store, self._defaults
        )
        return AlertSettingsDTO.from_settings(settings, storage)


class UpdateAlertSettingsUseCase:
    """Application service merging a partial update into a viewer's settings."""

    def __init__(
        self,
        subscriber_repository: SubscriberRepository,
        demo_store: EphemeralSettingsStore,
        defaults: Optional[AlertSettings] = None,
    ) -> None:
        """Initialize the use case with required dependencies.

        Args:
            subscriber_repository: Directory holding signed-in users' settings.
            demo_store: Ephemeral store for the demo account.
            defaults: Settings used before anything has been saved.
        """
        self._subscriber_repository = subscriber_repository
        self._demo_store = demo_store
        self._defaults = defaults or AlertSettings()

    async def execute(
        self,
        session: ViewerSession,
        request: UpdateAlertSettingsRequest,
    ) -> AlertSettingsDTO:
        """Apply the update.

        Raises:
            SettingsNotWritableError: If the viewer is anonymous.
        """
        if not isinstance(session, (AuthenticatedSession, DemoSession)):
            raise SettingsNotWritableError()

        current, storage = await load_viewer_settings(
            session, self._subscriber_repository, self._demo_store, self._defaults
        )
        updated = current.merged(**request.changes())

        if isinstance(session, AuthenticatedSession):
            await self._subscriber_repository.save_settings(
                session.user_id,
                updated,
                contact_address=str(request.email) if request.email else None,
            )
        else:
            await self._demo_store.store(updated)

        return AlertSettingsDTO.from_settings(updated, storage)
