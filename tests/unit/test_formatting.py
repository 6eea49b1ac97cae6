"""Unit tests for display formatting helpers."""

import pytest

from src.shared.config.settings import UnitSystem
from src.shared.formatting import format_date_time, format_temperature, format_wind_speed

# 2023-11-14 22:13:20 UTC, a Tuesday
TIMESTAMP = 1_700_000_000


class TestFormatTemperature:
    """Tests for format_temperature."""

    def test_metric(self) -> None:
        """Test Celsius formatting with one decimal."""
        assert format_temperature(21.549, UnitSystem.METRIC, 1) == "21.5°C"

    def test_imperial(self) -> None:
        """Test Fahrenheit formatting."""
        assert format_temperature(70.0, "imperial", 1) == "70.0°F"

    def test_standard(self) -> None:
        """Test Kelvin formatting."""
        assert format_temperature(294.65, UnitSystem.STANDARD, 0) == "295K"

    def test_missing_value(self) -> None:
        """Test None renders the placeholder."""
        assert format_temperature(None) == "--"

    def test_zero_is_not_missing(self) -> None:
        """Test zero degrees is formatted, not treated as missing."""
        assert format_temperature(0) == "0.0°C"


class TestFormatWindSpeed:
    """Tests for format_wind_speed."""

    @pytest.mark.parametrize(
        ("units", "expected"),
        [
            (UnitSystem.METRIC, "4.1 m/s"),
            (UnitSystem.IMPERIAL, "4.1 mph"),
            (UnitSystem.STANDARD, "4.1 m/s"),
        ],
    )
    def test_units(self, units: UnitSystem, expected: str) -> None:
        """Test unit suffix per unit system."""
        assert format_wind_speed(4.08, units) == expected

    def test_missing_value(self) -> None:
        """Test None renders the placeholder."""
        assert format_wind_speed(None) == "--"


class TestFormatDateTime:
    """Tests for format_date_time."""

    def test_date_style(self) -> None:
        """Test date-only formatting."""
        assert format_date_time(TIMESTAMP, "date") == "Nov 14, 2023"

    def test_time_style(self) -> None:
        """Test time-only formatting."""
        assert format_date_time(TIMESTAMP, "time") == "10:13 PM"

    def test_day_style(self) -> None:
        """Test weekday formatting."""
        assert format_date_time(TIMESTAMP, "day") == "Tue, Nov 14"

    def test_datetime_style(self) -> None:
        """Test combined date and time formatting."""
        assert format_date_time(TIMESTAMP) == "Nov 14, 2023, 10:13 PM"

    def test_timezone_applied(self) -> None:
        """Test timestamps are rendered in the requested timezone."""
        assert format_date_time(TIMESTAMP, "time", tz="America/New_York") == "05:13 PM"

    def test_day_number_not_padded(self) -> None:
        """Test single-digit days have no leading zero."""
        # 2023-11-05 12:00:00 UTC
        assert format_date_time(1_699_185_600, "date") == "Nov 5, 2023"

    def test_missing_timestamp(self) -> None:
        """Test missing timestamps render the placeholder."""
        assert format_date_time(None) == "--"
        assert format_date_time(0) == "--"
