"""Domain models for the weather dashboard."""

from src.shared.models.account import SavedLocation, Theme, UserAccount
from src.shared.models.location import Location
from src.shared.models.snapshot import AlertSeverity, WeatherSnapshot

__all__ = [
    "Location",
    "WeatherSnapshot",
    "AlertSeverity",
    "Theme",
    "SavedLocation",
    "UserAccount",
]
