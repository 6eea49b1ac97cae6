"""Weather snapshot and alert severity models.

A snapshot bundles current conditions, forecasts and alerts for one
location. Snapshots are rebuilt on every successful refresh and replaced
atomically.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum

from src.shared.api.response_models import (
    Alert,
    CurrentConditions,
    DayForecast,
    HourForecast,
)
from src.shared.models.location import Location


class AlertSeverity(Enum):
    """Alert severity levels, most severe first."""

    SEVERE = "severe"
    MODERATE = "moderate"
    MINOR = "minor"


@dataclass(frozen=True)
class WeatherSnapshot:
    """Complete weather data for one location.

    Attributes:
        location: Location the data was fetched for
        current: Current conditions
        daily: Upcoming days, today excluded
        hourly: Upcoming hours (empty when not requested)
        alerts: Alerts from the most recent successful poll
        fetched_at: When the snapshot was built
    """

    location: Location
    current: CurrentConditions
    daily: tuple[DayForecast, ...] = ()
    hourly: tuple[HourForecast, ...] = ()
    alerts: tuple[Alert, ...] = ()
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def with_alerts(self, alerts: list[Alert] | tuple[Alert, ...]) -> "WeatherSnapshot":
        """Return a copy whose alerts are replaced by a newer poll."""
        return replace(self, alerts=tuple(alerts))

    def age_seconds(self) -> float:
        """Get age of the snapshot in seconds."""
        return (datetime.now(timezone.utc) - self.fetched_at).total_seconds()

    @property
    def has_alerts(self) -> bool:
        """Whether any alert is active."""
        return len(self.alerts) > 0
