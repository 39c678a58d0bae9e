"""Kp index classification helpers.

Maps Kp values onto the NOAA geomagnetic storm scale (G0-G5), display
colors and rough aurora visibility latitudes. Values are rounded up before
banding, so Kp 4.33 lands in the G1 band.
"""

import math
from dataclasses import dataclass

STORM_KP = 5

_BANDS: dict[int, tuple[str, str, str]] = {
    # ceil(kp): (noaa scale, color, description)
    5: ("G1", "#ffff00", "Minor geomagnetic storm (G1)"),
    6: ("G2", "#ffc000", "Moderate geomagnetic storm (G2)"),
    7: ("G3", "#ff0000", "Strong geomagnetic storm (G3)"),
    8: ("G4", "#7f0000", "Severe geomagnetic storm (G4)"),
    9: ("G5", "#7f0000", "Extreme geomagnetic storm (G5)"),
}
_QUIET = ("G0", "#00b050", "No geomagnetic storm")
_UNKNOWN = ("Unknown", "#3f3f3f", "Unknown")


def _band(kp_value: float) -> tuple[str, str, str]:
    if kp_value is None or math.isnan(kp_value):
        return _UNKNOWN
    rounded = math.ceil(kp_value)
    if rounded < STORM_KP:
        return _QUIET
    return _BANDS.get(rounded, _UNKNOWN)


def kp_to_noaa_scale(kp_value: float) -> str:
    """NOAA G-scale label for a Kp value ("G0" to "G5")."""
    return _band(kp_value)[0]


def kp_to_color(kp_value: float) -> str:
    """Hex display color for a Kp value."""
    return _band(kp_value)[1]


def kp_to_description(kp_value: float) -> str:
    """Human-readable storm description for a Kp value."""
    return _band(kp_value)[2]


def is_storm_condition(kp_value: float) -> bool:
    return kp_value >= STORM_KP


def aurora_visibility_latitude(kp_value: float) -> float:
    """Approximate magnetic latitude down to which aurora may be seen.

    Linear from ~70 degrees at Kp 1 to 40 degrees at Kp 9, never below 40.
    """
    return max(40.0, 70.0 - (kp_value - 1) * 3.75)


@dataclass(frozen=True)
class AuroraVisibility:
    visible: bool
    message: str


def aurora_visibility_info(kp_value: float, latitude: float) -> AuroraVisibility:
    """Describe whether aurora may be visible at an observer's latitude."""
    abs_latitude = abs(latitude)
    limit = aurora_visibility_latitude(kp_value)

    if abs_latitude >= limit:
        return AuroraVisibility(
            visible=True,
            message=f"Aurora may be visible at your latitude ({abs_latitude:.1f}°)",
        )
    return AuroraVisibility(
        visible=False,
        message=(
            f"Aurora is unlikely to be visible at your latitude ({abs_latitude:.1f}°). "
            f"Typically visible above {limit:.1f}° during current conditions."
        ),
    )
