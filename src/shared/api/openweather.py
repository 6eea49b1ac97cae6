"""OpenWeatherMap API client.

Fetches current conditions, the combined daily/hourly/alerts forecast, and
direct/reverse geocoding results, and builds icon and map tile URLs.
No caching and no retries: every call goes to the provider.
"""

from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from src.shared.api.errors import DataError, NotFoundError, UpstreamError, classify_error
from src.shared.api.response_models import (
    CurrentConditions,
    ForecastBundle,
    GeocodingResult,
)
from src.shared.config.logging import get_logger
from src.shared.config.settings import Settings, UnitSystem, get_settings
from src.shared.constants import GEOCODING_RESULT_LIMIT, MAP_LAYERS
from src.shared.models.location import Location

logger = get_logger(__name__)


class OpenWeatherClient:
    """Async client for the OpenWeatherMap data, geocoding and tile APIs.

    Example:
        async with OpenWeatherClient(api_key="key") as client:
            current = await client.fetch_current_conditions(location)
            print(current.temperature)
    """

    def __init__(
        self,
        api_key: str | None = None,
        units: UnitSystem | None = None,
        language: str | None = None,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize OpenWeatherMap client.

        Args:
            api_key: Provider API key (from settings if not provided)
            units: Unit system for responses (from settings if not provided)
            language: Response language code (from settings if not provided)
            settings: Settings to read endpoints and defaults from
            http_client: Preconfigured httpx client (created if not provided)
        """
        settings = settings or get_settings()

        self.api_key = api_key or settings.openweather_api_key or ""
        self.units = units or settings.units
        self.language = language or settings.language
        self.base_url = settings.openweather_base_url.rstrip("/")
        self.geo_url = settings.openweather_geo_url.rstrip("/")
        self.icon_base_url = settings.openweather_icon_url
        self.tile_base_url = settings.openweather_tile_url
        self._client = http_client or httpx.AsyncClient(timeout=settings.http_timeout_sec)

        if not self.api_key:
            logger.warning("openweather_api_key_missing")

        logger.info(
            "openweather_client_initialized",
            units=self.units.value,
            language=self.language,
        )

    async def _make_request(
        self, url: str, params: dict[str, Any], label: str
    ) -> Any:
        """Make GET request to the provider.

        Args:
            url: Full endpoint URL
            params: Query parameters (appid is added here)
            label: Human-readable API name used in error messages

        Returns:
            Decoded JSON response

        Raises:
            UpstreamError: If the provider returns a non-success status
            NetworkError: If the request could not be completed
        """
        query = {**params, "appid": self.api_key}

        logger.debug("openweather_request", url=url, label=label)

        try:
            response = await self._client.get(url, params=query)
        except httpx.HTTPError as e:
            logger.error("openweather_request_error", url=url, error=str(e))
            raise classify_error(e, endpoint=url) from e

        if not response.is_success:
            logger.error(
                "openweather_request_failed",
                url=url,
                status=response.status_code,
            )
            raise UpstreamError(
                f"{label} API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                status_text=response.reason_phrase,
                endpoint=url,
            )

        logger.debug("openweather_request_success", url=url, status=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise DataError(f"{label} API returned invalid JSON", endpoint=url) from e

    def _weather_params(self, location: Location) -> dict[str, Any]:
        return {
            "lat": location.latitude,
            "lon": location.longitude,
            "units": self.units.value,
            "lang": self.language,
        }

    async def fetch_current_conditions(self, location: Location) -> CurrentConditions:
        """Get current weather for a location.

        Args:
            location: Location to fetch

        Returns:
            Parsed current conditions

        Raises:
            UpstreamError: If the provider returns a non-success status
        """
        url = f"{self.base_url}/weather"

        logger.info("fetching_current_conditions", location=str(location))

        data = await self._make_request(url, self._weather_params(location), "Weather")
        return self._parse(CurrentConditions, data, url)

    async def fetch_forecast(
        self, location: Location, include_hourly: bool = True
    ) -> ForecastBundle:
        """Get the combined daily forecast, hourly forecast and alerts.

        Args:
            location: Location to fetch
            include_hourly: Request hourly data as well (larger payload)

        Returns:
            ForecastBundle; hourly is empty unless include_hourly is set

        Raises:
            UpstreamError: If the provider returns a non-success status
        """
        url = f"{self.base_url}/onecall"
        params = self._weather_params(location)
        params["exclude"] = "minutely" if include_hourly else "minutely,hourly"

        logger.info(
            "fetching_forecast",
            location=str(location),
            include_hourly=include_hourly,
        )

        data = await self._make_request(url, params, "OneCall")
        bundle = self._parse(ForecastBundle, data, url)

        if not include_hourly and bundle.hourly:
            bundle = bundle.model_copy(update={"hourly": []})

        return bundle

    async def search_locations(
        self, query: str, limit: int = GEOCODING_RESULT_LIMIT
    ) -> list[Location]:
        """Search locations by free text, provider-ranked.

        Args:
            query: City name or "city, country" text
            limit: Maximum candidates to return

        Returns:
            Candidate locations, best match first

        Raises:
            NotFoundError: If no location matches
            UpstreamError: If the provider returns a non-success status
        """
        url = f"{self.geo_url}/direct"

        logger.info("searching_locations", query=query, limit=limit)

        data = await self._make_request(url, {"q": query, "limit": limit}, "Geocoding")
        candidates = [self._parse(GeocodingResult, item, url) for item in data or []]

        if not candidates:
            raise NotFoundError(f'No locations found for "{query}"', endpoint=url)

        return [candidate.to_location() for candidate in candidates[:limit]]

    async def reverse_geocode(self, latitude: float, longitude: float) -> Location:
        """Get the location name for coordinates.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees

        Returns:
            Location named by the provider

        Raises:
            NotFoundError: If the provider has no match
            UpstreamError: If the provider returns a non-success status
        """
        url = f"{self.geo_url}/reverse"
        params = {"lat": latitude, "lon": longitude, "limit": 1}

        logger.info("reverse_geocoding", latitude=latitude, longitude=longitude)

        data = await self._make_request(url, params, "Reverse geocoding")

        if not data:
            raise NotFoundError("No location data found for these coordinates", endpoint=url)

        return self._parse(GeocodingResult, data[0], url).to_location()

    def icon_url(self, icon_code: str, size: int = 2) -> str:
        """Build a weather icon URL.

        Args:
            icon_code: Provider icon code (e.g., "10d")
            size: Size multiplier (1 small, 2 medium, 4 large)
        """
        return f"{self.icon_base_url}{icon_code}@{size}x.png"

    def map_tile_url(
        self,
        layer: str = "precipitation_new",
        zoom: int = 5,
        x: int = 0,
        y: int = 0,
    ) -> str:
        """Build a weather map tile URL.

        Args:
            layer: Provider layer id or dashboard layer name
                (precipitation, temperature, clouds, wind)
            zoom: Zoom level (0-9)
            x: Tile X coordinate
            y: Tile Y coordinate
        """
        layer_id = MAP_LAYERS.get(layer, layer)
        return f"{self.tile_base_url}{layer_id}/{zoom}/{x}/{y}.png?appid={self.api_key}"

    @staticmethod
    def _parse(model: Any, data: Any, url: str) -> Any:
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise DataError(
                f"Unexpected response from {url}",
                endpoint=url,
                details={"errors": e.error_count()},
            ) from e

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "OpenWeatherClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
