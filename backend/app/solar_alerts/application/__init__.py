"""Application layer - use cases and orchestration.

This layer contains:
- DTOs: Data Transfer Objects for API input/output and cycle reports
- Use Cases: The alert evaluation engine and viewer-facing services
- Interfaces: Ports for the Kp feed and email delivery
- Exceptions: Application-level error types
"""

from app.solar_alerts.application.dto import (
    AlertSettingsDTO,
    CycleReport,
    KpStatusDTO,
    UpdateAlertSettingsRequest,
)
from app.solar_alerts.application.exceptions import (
    ApplicationError,
    ConfigurationError,
    DirectoryError,
    DispatchError,
    KpFetchError,
    SettingsNotWritableError,
    SubscriberNotFoundError,
)
from app.solar_alerts.application.use_cases import (
    AlertEvaluationEngine,
    GetAlertSettingsUseCase,
    GetKpStatusUseCase,
    UpdateAlertSettingsUseCase,
    ViewerLatchRegistry,
)

__all__ = [
    # DTOs
    "AlertSettingsDTO",
    "CycleReport",
    "KpStatusDTO",
    "UpdateAlertSettingsRequest",
    # Use Cases
    "AlertEvaluationEngine",
    "GetAlertSettingsUseCase",
    "GetKpStatusUseCase",
    "UpdateAlertSettingsUseCase",
    "ViewerLatchRegistry",
    # Exceptions
    "ApplicationError",
    "ConfigurationError",
    "DirectoryError",
    "DispatchError",
    "KpFetchError",
    "SettingsNotWritableError",
    "SubscriberNotFoundError",
]
