"""Application settings and environment configuration.

Uses pydantic-settings to load and validate configuration from environment
variables with type safety and validation.
"""

from enum import Enum
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.shared import constants


class UnitSystem(Enum):
    """Unit system enumeration.

    METRIC: Celsius, metres per second
    IMPERIAL: Fahrenheit, miles per hour
    STANDARD: Kelvin, metres per second
    """

    METRIC = "metric"
    IMPERIAL = "imperial"
    STANDARD = "standard"


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings are loaded from .env file or environment variables.
    Every value can also be overridden by passing keyword arguments.
    """

    model_config = SettingsConfigDict(
        env_prefix="DASHBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # OpenWeatherMap API
    openweather_api_key: str | None = Field(
        default=None,
        description="OpenWeatherMap API key (appid)",
    )
    openweather_base_url: str = Field(
        default=constants.OPENWEATHER_BASE_URL,
        description="OpenWeatherMap data API base URL",
    )
    openweather_geo_url: str = Field(
        default=constants.OPENWEATHER_GEO_URL,
        description="OpenWeatherMap geocoding API base URL",
    )
    openweather_icon_url: str = Field(
        default=constants.OPENWEATHER_ICON_URL,
        description="Weather icon asset URL prefix",
    )
    openweather_tile_url: str = Field(
        default=constants.OPENWEATHER_TILE_URL,
        description="Weather map tile URL prefix",
    )
    rainviewer_manifest_url: str = Field(
        default=constants.RAINVIEWER_MANIFEST_URL,
        description="RainViewer radar manifest URL",
    )
    http_timeout_sec: float | None = Field(
        default=None,
        gt=0,
        description="Provider request timeout in seconds (None waits indefinitely)",
    )

    # Units and locale
    units: UnitSystem = Field(
        default=UnitSystem.METRIC,
        description="Unit system: metric, imperial, or standard",
    )
    language: str = Field(
        default="en",
        min_length=2,
        description="Language code for provider responses and date formatting",
    )
    timezone: str = Field(
        default="UTC",
        description="IANA timezone used when formatting timestamps",
    )

    # Default fallback location
    default_latitude: float = Field(default=40.7128, ge=-90, le=90)
    default_longitude: float = Field(default=-74.0060, ge=-180, le=180)
    default_location_name: str = Field(default="New York")
    default_country_code: str = Field(default="US")

    # Refresh and alert timing
    refresh_interval_sec: int = Field(
        default=constants.REFRESH_INTERVAL_SEC,
        ge=1,
        description="Seconds between full data refreshes",
    )
    alert_check_interval_sec: int = Field(
        default=constants.ALERT_CHECK_INTERVAL_SEC,
        ge=1,
        description="Seconds between alert re-polls",
    )
    alerts_enabled: bool = Field(
        default=True,
        description="Poll for alerts while a location is active",
    )
    notification_duration_sec: int = Field(
        default=constants.NOTIFICATION_DURATION_SEC,
        ge=1,
        description="Seconds before non-severe notifications auto-dismiss",
    )
    error_display_sec: int = Field(
        default=constants.ERROR_DISPLAY_SEC,
        ge=1,
        description="Seconds an error message stays visible",
    )

    # Display limits
    max_forecast_days: int = Field(default=constants.MAX_FORECAST_DAYS, ge=1, le=8)
    max_hourly_forecast: int = Field(default=constants.MAX_HOURLY_FORECAST, ge=1, le=48)
    temperature_decimal_places: int = Field(
        default=constants.TEMPERATURE_DECIMAL_PLACES, ge=0, le=3
    )
    saved_locations_limit: int = Field(default=constants.SAVED_LOCATIONS_LIMIT, ge=1)
    default_map_type: str = Field(default=constants.DEFAULT_MAP_TYPE)
    map_zoom_level: int = Field(default=constants.MAP_ZOOM_LEVEL, ge=0, le=9)
    default_username: str = Field(default=constants.DEFAULT_USERNAME)

    # Severity classification
    severity_keywords: dict[str, list[str]] = Field(
        default_factory=lambda: {
            level: list(words) for level, words in constants.SEVERITY_KEYWORDS.items()
        },
        description="Ordered severity -> keywords table, first match wins",
    )

    # Local storage
    storage_url: str = Field(
        default="sqlite:///weather_dashboard.db",
        description="SQLAlchemy URL for the key-value store",
    )
    storage_prefix: str = Field(
        default=constants.STORAGE_PREFIX,
        description="Namespace prefix for stored keys",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )

    @field_validator("severity_keywords")
    @classmethod
    def validate_severity_keywords(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        """Ensure severity table keys are known severity levels."""
        allowed = {"severe", "moderate", "minor"}
        normalized: dict[str, list[str]] = {}
        for level, keywords in v.items():
            key = level.lower()
            if key not in allowed:
                raise ValueError(f"Unknown severity level: {level}")
            normalized[key] = list(keywords)
        return normalized

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Ensure the timezone is a known IANA name."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @field_validator("default_map_type")
    @classmethod
    def validate_map_type(cls, v: str) -> str:
        """Ensure the default map type is a known layer or radar."""
        if v not in constants.MAP_LAYERS and v != "radar":
            raise ValueError(f"Unknown map type: {v}")
        return v


# Global settings instance - lazily created on first use
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
