"""Data Transfer Objects for the alert settings API.

These DTOs are the external contract of the profile/alert settings screen.
They are decoupled from the AlertSettings domain entity.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.solar_alerts.domain.entities.subscriber import AlertFrequency, AlertSettings


class AlertSettingsDTO(BaseModel):
    """A viewer's alert settings as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    kp_threshold: float = Field(ge=0, le=9, description="Kp value that triggers an alert")
    email_alerts: bool = Field(description="Whether alert emails are enabled")
    push_notifications: bool = Field(description="Whether in-app toasts are enabled")
    alert_frequency: AlertFrequency = Field(description="Preferred notification cadence")
    locations: list[str] = Field(default_factory=list, description="Viewing locations")
    storage: str = Field(
        description="Where the settings live: 'directory', 'demo' or 'defaults'"
    )

    @classmethod
    def from_settings(cls, settings: AlertSettings, storage: str) -> "AlertSettingsDTO":
        return cls(
            kp_threshold=settings.kp_threshold,
            email_alerts=settings.email_alerts,
            push_notifications=settings.push_notifications,
            alert_frequency=settings.alert_frequency,
            locations=list(settings.locations),
            storage=storage,
        )


class UpdateAlertSettingsRequest(BaseModel):
    """Partial update of a viewer's alert settings.

    All fields are optional - only provided fields will be updated.
    """

    kp_threshold: Optional[float] = Field(
        default=None,
        ge=0,
        le=9,
        description="New Kp alert threshold (0-9)"
    )
    email_alerts: Optional[bool] = Field(default=None)
    push_notifications: Optional[bool] = Field(default=None)
    alert_frequency: Optional[AlertFrequency] = Field(default=None)
    locations: Optional[list[str]] = Field(default=None)
    email: Optional[EmailStr] = Field(
        default=None,
        description="Contact address for alert emails (signed-in users only)"
    )

    def changes(self) -> dict:
        """Settings fields that were explicitly provided."""
        return self.model_dump(exclude_unset=True, exclude={"email"})
