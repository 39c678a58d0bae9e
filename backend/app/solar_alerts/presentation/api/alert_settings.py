"""Alert settings API endpoints.

- GET /api/alert-settings - Current viewer's alert settings
- PUT /api/alert-settings - Partial update of the current viewer's settings
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.solar_alerts.application.dto.alert_settings_dto import (
    AlertSettingsDTO,
    UpdateAlertSettingsRequest,
)
from app.solar_alerts.application.exceptions import SettingsNotWritableError
from app.solar_alerts.application.use_cases.alert_settings import (
    GetAlertSettingsUseCase,
    UpdateAlertSettingsUseCase,
)
from app.solar_alerts.domain.entities.subscriber import AlertSettings
from app.solar_alerts.domain.repositories.settings_store import EphemeralSettingsStore
from app.solar_alerts.domain.value_objects.session import ViewerSession
from app.solar_alerts.infrastructure.db.session import get_db_session
from app.solar_alerts.infrastructure.repositories.sql_subscriber_repository import (
    SqlSubscriberRepository,
)
from app.solar_alerts.presentation.api.dependencies import (
    get_default_settings,
    get_demo_store,
    get_viewer_session,
)

router = APIRouter()


@router.get("/alert-settings", response_model=AlertSettingsDTO)
async def get_alert_settings(
    viewer: ViewerSession = Depends(get_viewer_session),
    demo_store: EphemeralSettingsStore = Depends(get_demo_store),
    defaults: AlertSettings = Depends(get_default_settings),
    session: AsyncSession = Depends(get_db_session),
) -> AlertSettingsDTO:
    """Return the viewer's alert settings.

    Signed-in users without stored settings get defaults written to the
    directory; anonymous viewers get read-only defaults.
    """
    use_case = GetAlertSettingsUseCase(
        subscriber_repository=SqlSubscriberRepository(session),
        demo_store=demo_store,
        defaults=defaults,
    )
    result = await use_case.execute(viewer)
    await session.commit()
    return result


@router.put("/alert-settings", response_model=AlertSettingsDTO)
async def update_alert_settings(
    request: UpdateAlertSettingsRequest,
    viewer: ViewerSession = Depends(get_viewer_session),
    demo_store: EphemeralSettingsStore = Depends(get_demo_store),
    defaults: AlertSettings = Depends(get_default_settings),
    session: AsyncSession = Depends(get_db_session),
) -> AlertSettingsDTO:
    """Merge the provided fields into the viewer's alert settings.

    Raises:
        HTTPException: 401 if the viewer is not signed in.
    """
    use_case = UpdateAlertSettingsUseCase(
        subscriber_repository=SqlSubscriberRepository(session),
        demo_store=demo_store,
        defaults=defaults,
    )

    try:
        result = await use_case.execute(viewer, request)
        await session.commit()
        return result
    except SettingsNotWritableError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
        ) from e
