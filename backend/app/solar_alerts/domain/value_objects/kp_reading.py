"""KpReading value object for a single planetary Kp observation."""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Self

KP_MIN = 0.0
KP_MAX = 9.0


@dataclass(frozen=True)
class KpReading:
    """Immutable value object representing one planetary Kp index reading.

    A reading that cannot be interpreted as a real number in [0, 9] is never
    coerced to zero; construction fails instead so callers treat it as a
    failed fetch.

    Attributes:
        value: The Kp index value (0-9 scale).
        observed_at: UTC timestamp the value applies to.
    """

    value: float
    observed_at: datetime

    def __post_init__(self) -> None:
        """Validate the value range and normalise the timestamp to UTC."""
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise ValueError(f"Kp value must be numeric, got {self.value!r}")
        if math.isnan(self.value) or not KP_MIN <= self.value <= KP_MAX:
            raise ValueError(f"Kp value out of range [0, 9]: {self.value}")
        if self.observed_at.tzinfo is None:
            object.__setattr__(
                self, "observed_at", self.observed_at.replace(tzinfo=timezone.utc)
            )

    @classmethod
    def parse(cls, raw_value: Any, observed_at: datetime) -> Self:
        """Build a reading from a raw feed value (usually a string like "4.67").

        Raises:
            ValueError: If the raw value is missing or not a usable number.
        """
        if raw_value is None or isinstance(raw_value, bool):
            raise ValueError(f"Missing Kp value: {raw_value!r}")
        try:
            value = float(raw_value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Non-numeric Kp value: {raw_value!r}") from e
        return cls(value=value, observed_at=observed_at)

    def meets(self, threshold: float) -> bool:
        """Check whether this reading is at or above a threshold."""
        return self.value >= threshold
