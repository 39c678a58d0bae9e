"""Application use cases for orchestrating domain logic."""

from app.solar_alerts.application.use_cases.alert_settings import (
    GetAlertSettingsUseCase,
    UpdateAlertSettingsUseCase,
)
from app.solar_alerts.application.use_cases.evaluate_alerts import AlertEvaluationEngine
from app.solar_alerts.application.use_cases.kp_status import (
    GetKpStatusUseCase,
    ViewerLatchRegistry,
)

__all__ = [
    "AlertEvaluationEngine",
    "GetAlertSettingsUseCase",
    "GetKpStatusUseCase",
    "UpdateAlertSettingsUseCase",
    "ViewerLatchRegistry",
]
