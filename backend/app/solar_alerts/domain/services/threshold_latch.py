"""Edge-triggered latch for one viewer's in-app storm toast."""

from enum import Enum

from app.solar_alerts.domain.entities.subscriber import normalize_threshold


class LatchState(Enum):
    ARMED = "armed"
    NOTIFIED = "notified"


class ThresholdLatch:
    """Fires once per upward crossing of a threshold.

    ARMED -> NOTIFIED when a reading is at or above the threshold (this is
    the only transition that fires). NOTIFIED -> ARMED when a reading drops
    below it. Readings that stay on the same side do nothing.

    The first observation counts as a crossing if it is already at or
    above the threshold.
    """

    def __init__(self, threshold: float) -> None:
        self._threshold = normalize_threshold(threshold)
        self._state = LatchState.ARMED

    @property
    def state(self) -> LatchState:
        return self._state

    @property
    def threshold(self) -> float:
        return self._threshold

    def retarget(self, threshold: float) -> None:
        """Change the threshold; re-arms when the value actually changes."""
        threshold = normalize_threshold(threshold)
        if threshold != self._threshold:
            self._threshold = threshold
            self._state = LatchState.ARMED

    def observe(self, value: float) -> bool:
        """Feed the latest reading. Returns True when the toast should fire."""
        above = value >= self._threshold
        if self._state is LatchState.ARMED and above:
            self._state = LatchState.NOTIFIED
            return True
        if self._state is LatchState.NOTIFIED and not above:
            self._state = LatchState.ARMED
        return False
