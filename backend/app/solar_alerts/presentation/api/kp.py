"""Current Kp status endpoint polled by the dashboard.

- GET /api/kp/status - Latest reading, storm classification and toast flag
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.solar_alerts.application.dto.kp_dto import KpStatusDTO
from app.solar_alerts.application.exceptions import KpFetchError
from app.solar_alerts.application.interfaces.kp_source import KpDataSource
from app.solar_alerts.application.use_cases.kp_status import (
    GetKpStatusUseCase,
    ViewerLatchRegistry,
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
    get_kp_source,
    get_latch_registry,
    get_page_session,
    get_viewer_session,
)

router = APIRouter()


@router.get("/kp/status", response_model=KpStatusDTO)
async def get_kp_status(
    latitude: Optional[float] = Query(
        None, ge=-90, le=90, description="Observer latitude for the aurora visibility hint"
    ),
    viewer: ViewerSession = Depends(get_viewer_session),
    page_session: Optional[str] = Depends(get_page_session),
    kp_source: KpDataSource = Depends(get_kp_source),
    demo_store: EphemeralSettingsStore = Depends(get_demo_store),
    latches: ViewerLatchRegistry = Depends(get_latch_registry),
    defaults: AlertSettings = Depends(get_default_settings),
    session: AsyncSession = Depends(get_db_session),
) -> KpStatusDTO:
    """Return the latest planetary Kp reading for the current viewer.

    For signed-in and demo viewers the response also carries their alert
    threshold. When the page sends X-Viewer-Session, ``notify`` is true only
    on the poll where the reading first reaches the threshold for that page.

    Raises:
        HTTPException: 503 if the Kp feed is unavailable.
    """
    use_case = GetKpStatusUseCase(
        kp_source=kp_source,
        subscriber_repository=SqlSubscriberRepository(session),
        demo_store=demo_store,
        latches=latches,
        defaults=defaults,
    )

    try:
        return await use_case.execute(viewer, page_session=page_session, latitude=latitude)
    except KpFetchError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=e.message,
        ) from e
