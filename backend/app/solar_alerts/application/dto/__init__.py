"""Data transfer objects for application layer."""

from app.solar_alerts.application.dto.alert_settings_dto import (
    AlertSettingsDTO,
    UpdateAlertSettingsRequest,
)
from app.solar_alerts.application.dto.cycle_dto import CycleReport
from app.solar_alerts.application.dto.kp_dto import KpStatusDTO

__all__ = [
    "AlertSettingsDTO",
    "CycleReport",
    "KpStatusDTO",
    "UpdateAlertSettingsRequest",
]
