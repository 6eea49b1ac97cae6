"""Response models for provider API clients.

Pydantic models for parsing and validating responses from the OpenWeatherMap
and RainViewer APIs. Provides type safety and automatic validation for
external API data.
"""

from typing import TYPE_CHECKING, NamedTuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from src.shared.models.location import Location


# ============================================================================
# Shared Weather Models
# ============================================================================


class WeatherCondition(BaseModel):
    """Provider weather condition descriptor (e.g., "light rain", icon 10d)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int | None = Field(None, description="Condition code")
    main: str = Field(default="", description="Condition group (e.g., 'Rain')")
    description: str = Field(default="", description="Localized description")
    icon: str = Field(default="", description="Icon code (e.g., '10d')")


class _ConditionsMixin(BaseModel):
    """Accessors shared by models carrying a weather condition list."""

    weather: list[WeatherCondition] = Field(default_factory=list)

    @property
    def description(self) -> str:
        """Primary condition description, empty when unavailable."""
        return self.weather[0].description if self.weather else ""

    @property
    def icon(self) -> str | None:
        """Primary condition icon code."""
        return self.weather[0].icon if self.weather else None


# ============================================================================
# Current Weather Models
# ============================================================================


class MainReadings(BaseModel):
    """Temperature, pressure and humidity block of the current weather."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    temp: float | None = Field(None, description="Temperature in configured units")
    feels_like: float | None = Field(None, description="Apparent temperature")
    temp_min: float | None = Field(None, description="Minimum observed temperature")
    temp_max: float | None = Field(None, description="Maximum observed temperature")
    pressure: float | None = Field(None, description="Pressure in hPa")
    humidity: float | None = Field(None, description="Relative humidity %")


class WindReadings(BaseModel):
    """Wind block of the current weather."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    speed: float | None = Field(None, description="Wind speed in configured units")
    deg: float | None = Field(None, description="Wind direction in degrees")
    gust: float | None = Field(None, description="Wind gust in configured units")


class CurrentConditions(_ConditionsMixin):
    """Current weather conditions for a location."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    dt: int = Field(..., description="Observation time (unix seconds)")
    name: str = Field(default="", description="Provider location name")
    main: MainReadings = Field(default_factory=MainReadings)
    wind: WindReadings = Field(default_factory=WindReadings)
    visibility: float | None = Field(None, description="Visibility in metres")
    timezone: int | None = Field(None, description="UTC offset in seconds")

    @property
    def temperature(self) -> float | None:
        """Current temperature."""
        return self.main.temp

    @property
    def feels_like(self) -> float | None:
        """Apparent temperature."""
        return self.main.feels_like

    @property
    def humidity(self) -> float | None:
        """Relative humidity."""
        return self.main.humidity

    @property
    def wind_speed(self) -> float | None:
        """Wind speed."""
        return self.wind.speed


# ============================================================================
# Forecast Models
# ============================================================================


class DailyTemperatures(BaseModel):
    """Daily temperature breakdown."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    day: float | None = None
    min: float | None = None
    max: float | None = None
    night: float | None = None
    eve: float | None = None
    morn: float | None = None


class DayForecast(_ConditionsMixin):
    """Single day of the multi-day forecast."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    dt: int = Field(..., description="Forecast day (unix seconds)")
    temp: DailyTemperatures = Field(default_factory=DailyTemperatures)
    humidity: float | None = Field(None, description="Relative humidity %")
    wind_speed: float | None = Field(None, description="Wind speed")
    pop: float | None = Field(None, description="Probability of precipitation (0-1)")
    sunrise: int | None = None
    sunset: int | None = None


class HourForecast(_ConditionsMixin):
    """Single hour of the hourly forecast."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    dt: int = Field(..., description="Forecast hour (unix seconds)")
    temp: float | None = Field(None, description="Temperature")
    feels_like: float | None = Field(None, description="Apparent temperature")
    humidity: float | None = Field(None, description="Relative humidity %")
    wind_speed: float | None = Field(None, description="Wind speed")
    pop: float | None = Field(None, description="Probability of precipitation (0-1)")


class AlertIdentity(NamedTuple):
    """Deduplication key for an alert occurrence."""

    event: str
    starts_at: int
    ends_at: int


class Alert(BaseModel):
    """Government weather alert attached to the combined forecast."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    event: str = Field(..., description="Alert event name")
    description: str = Field(default="", description="Alert description text")
    starts_at: int = Field(..., alias="start", description="Start (unix seconds)")
    ends_at: int = Field(..., alias="end", description="End (unix seconds)")
    sender_name: str | None = Field(None, description="Issuing agency")
    tags: list[str] = Field(default_factory=list, description="Provider alert tags")

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v: str | None) -> str:
        """Treat a missing description as empty text."""
        return v or ""

    @property
    def identity(self) -> AlertIdentity:
        """Identity used to suppress repeat notifications."""
        return AlertIdentity(self.event, self.starts_at, self.ends_at)


class ForecastBundle(BaseModel):
    """Combined forecast response: daily, optional hourly, and alerts."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    timezone: str | None = Field(None, description="IANA timezone of the location")
    timezone_offset: int | None = Field(None, description="UTC offset in seconds")
    daily: list[DayForecast] = Field(default_factory=list)
    hourly: list[HourForecast] = Field(default_factory=list)
    alerts: list[Alert] = Field(default_factory=list)


# ============================================================================
# Geocoding Models
# ============================================================================


class GeocodingResult(BaseModel):
    """Direct or reverse geocoding candidate."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(..., description="Place name")
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)
    country: str = Field(default="", description="ISO 3166 country code")
    state: str | None = Field(None, description="State or region")

    def to_location(self) -> "Location":
        """Convert the candidate into a canonical Location."""
        from src.shared.models.location import Location

        return Location(
            latitude=self.lat,
            longitude=self.lon,
            display_name=self.name,
            country_code=self.country,
        )


# ============================================================================
# Radar Models
# ============================================================================


class RadarFrame(BaseModel):
    """Single radar frame descriptor."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    time: int = Field(..., description="Frame time (unix seconds)")
    path: str = Field(..., description="Path relative to the manifest host")


class RadarFrames(BaseModel):
    """Past and nowcast radar frames."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    past: list[RadarFrame] = Field(default_factory=list)
    nowcast: list[RadarFrame] = Field(default_factory=list)


class RadarManifest(BaseModel):
    """RainViewer weather-maps manifest."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    version: str | None = None
    generated: int | None = None
    host: str = Field(..., description="Tile host URL")
    radar: RadarFrames = Field(default_factory=RadarFrames)
