"""Unit tests for the in-app toast ThresholdLatch."""

from app.solar_alerts.domain.services.threshold_latch import LatchState, ThresholdLatch


class TestThresholdLatch:
    """Tests for ThresholdLatch.observe and retarget."""

    def test_fires_once_per_upward_crossing(self) -> None:
        """Readings 4, 5, 6, 5, 4, 6 at threshold 5 fire on the 5 and the final 6."""
        latch = ThresholdLatch(threshold=5)

        fired = [latch.observe(value) for value in (4, 5, 6, 5, 4, 6)]

        assert fired == [False, True, False, False, False, True]

    def test_first_observation_above_threshold_fires(self) -> None:
        latch = ThresholdLatch(threshold=5)

        assert latch.observe(7.33) is True
        assert latch.state is LatchState.NOTIFIED

    def test_stays_quiet_while_above(self) -> None:
        latch = ThresholdLatch(threshold=5)
        latch.observe(6)

        assert latch.observe(6.67) is False
        assert latch.observe(8) is False
        assert latch.state is LatchState.NOTIFIED

    def test_rearms_when_reading_drops_below(self) -> None:
        latch = ThresholdLatch(threshold=5)
        latch.observe(6)

        latch.observe(4.67)

        assert latch.state is LatchState.ARMED

    def test_retarget_rearms_on_change(self) -> None:
        latch = ThresholdLatch(threshold=5)
        latch.observe(6)

        latch.retarget(6)

        assert latch.state is LatchState.ARMED
        assert latch.threshold == 6
        assert latch.observe(6) is True

    def test_retarget_to_same_threshold_keeps_state(self) -> None:
        latch = ThresholdLatch(threshold=5)
        latch.observe(6)

        latch.retarget(5)

        assert latch.state is LatchState.NOTIFIED
        assert latch.observe(6) is False

    def test_threshold_is_normalised(self) -> None:
        assert ThresholdLatch(threshold=None).threshold == 5.0
        assert ThresholdLatch(threshold=11).threshold == 9.0
