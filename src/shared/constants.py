"""Core constants for the weather dashboard.

This module defines provider endpoints, unit systems, and the default
intervals and limits used across the application.
"""

from typing import Final

# Provider endpoints
OPENWEATHER_BASE_URL: Final[str] = "https://api.openweathermap.org/data/2.5"
OPENWEATHER_GEO_URL: Final[str] = "https://api.openweathermap.org/geo/1.0"
OPENWEATHER_ICON_URL: Final[str] = "https://openweathermap.org/img/wn/"
OPENWEATHER_TILE_URL: Final[str] = "https://tile.openweathermap.org/map/"
RAINVIEWER_MANIFEST_URL: Final[str] = "https://api.rainviewer.com/public/weather-maps.json"

# Geocoding
GEOCODING_RESULT_LIMIT: Final[int] = 5

# Refresh timing (seconds)
REFRESH_INTERVAL_SEC: Final[int] = 30 * 60  # Full data refresh
ALERT_CHECK_INTERVAL_SEC: Final[int] = 15 * 60  # Alert re-poll
NOTIFICATION_DURATION_SEC: Final[int] = 10  # Auto-dismiss for non-severe alerts
ERROR_DISPLAY_SEC: Final[int] = 5  # Transient error banner

# Display limits
MAX_FORECAST_DAYS: Final[int] = 5
MAX_HOURLY_FORECAST: Final[int] = 24
TEMPERATURE_DECIMAL_PLACES: Final[int] = 1
SAVED_LOCATIONS_LIMIT: Final[int] = 5

# Maps
DEFAULT_MAP_TYPE: Final[str] = "precipitation"
MAP_ZOOM_LEVEL: Final[int] = 5
MAP_LAYERS: Final[dict[str, str]] = {
    "precipitation": "precipitation_new",
    "temperature": "temp_new",
    "clouds": "clouds_new",
    "wind": "wind_new",
}

# Severity keyword tables, checked in declaration order
SEVERITY_KEYWORDS: Final[dict[str, list[str]]] = {
    "severe": ["Hurricane", "Tornado", "Extreme Thunderstorm", "Flood", "Tsunami"],
    "moderate": ["Thunderstorm", "Rain", "Snow", "Fog", "Wind"],
    "minor": ["Cloudy", "Drizzle", "Light Rain"],
}

# Local storage
STORAGE_PREFIX: Final[str] = "weather_app_"
DEFAULT_USERNAME: Final[str] = "Guest"

# Placeholder for missing numeric values
MISSING_VALUE: Final[str] = "--"
