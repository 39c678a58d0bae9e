"""Unit tests for the KpReading value object."""

from datetime import datetime, timezone

import pytest

from app.solar_alerts.domain.value_objects.kp_reading import KpReading

OBSERVED = datetime(2024, 5, 10, 18, 0, tzinfo=timezone.utc)


class TestKpReading:
    """Tests for KpReading construction and parsing."""

    def test_parse_string_value(self) -> None:
        reading = KpReading.parse("4.67", OBSERVED)

        assert reading.value == pytest.approx(4.67)
        assert reading.observed_at == OBSERVED

    @pytest.mark.parametrize("raw", [None, "", "n/a", True, [5]])
    def test_parse_rejects_unusable_values(self, raw: object) -> None:
        with pytest.raises(ValueError):
            KpReading.parse(raw, OBSERVED)

    @pytest.mark.parametrize("value", [-0.1, 9.01, float("nan")])
    def test_rejects_out_of_range(self, value: float) -> None:
        with pytest.raises(ValueError):
            KpReading(value=value, observed_at=OBSERVED)

    def test_bounds_are_inclusive(self) -> None:
        assert KpReading(value=0, observed_at=OBSERVED).value == 0
        assert KpReading(value=9, observed_at=OBSERVED).value == 9

    def test_naive_timestamp_becomes_utc(self) -> None:
        reading = KpReading(value=3, observed_at=datetime(2024, 5, 10, 18, 0))

        assert reading.observed_at.tzinfo is timezone.utc

    def test_meets_is_inclusive(self) -> None:
        reading = KpReading(value=5, observed_at=OBSERVED)

        assert reading.meets(5) is True
        assert reading.meets(5.33) is False
