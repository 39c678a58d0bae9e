"""Data Transfer Objects for current Kp status responses."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class KpStatusDTO(BaseModel):
    """Latest Kp reading enriched for dashboard display."""

    kp_value: float = Field(description="Latest planetary Kp index")
    observed_at: datetime = Field(description="Time tag of the reading (UTC)")
    noaa_scale: str = Field(description="NOAA geomagnetic storm scale (G0-G5)")
    color: str = Field(description="Hex display color for the Kp band")
    description: str = Field(description="Human-readable storm description")
    storm: bool = Field(description="Whether Kp indicates storm conditions (>= 5)")
    aurora_latitude: float = Field(
        description="Approximate latitude down to which aurora may be visible"
    )
    aurora_visible: Optional[bool] = Field(
        default=None,
        description="Whether aurora may be visible at the requested latitude"
    )
    aurora_message: Optional[str] = Field(
        default=None,
        description="Visibility hint for the requested latitude"
    )
    threshold: Optional[float] = Field(
        default=None,
        description="The viewer's alert threshold, when the viewer is identified"
    )
    threshold_reached: bool = Field(
        default=False,
        description="Whether the latest reading is at or above the viewer's threshold"
    )
    notify: bool = Field(
        default=False,
        description="True only on the poll where the in-app toast should fire"
    )
