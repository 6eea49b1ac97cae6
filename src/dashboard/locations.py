"""Location resolution.

Turns a free-text query, coordinates or a device position fix into one
canonical Location via the geocoding endpoints.
"""

from enum import Enum

from src.dashboard.view import GeolocationProvider
from src.shared.api.errors import ErrorCode, GeolocationError, PermissionError, ValidationError
from src.shared.api.openweather import OpenWeatherClient
from src.shared.config.logging import get_logger
from src.shared.config.settings import Settings
from src.shared.models.location import Location

logger = get_logger(__name__)


class GeolocationFailure(Enum):
    """Failure kinds reported by the platform location service."""

    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"


GEOLOCATION_MESSAGES: dict[GeolocationFailure, str] = {
    GeolocationFailure.PERMISSION_DENIED: (
        "Location access was denied. Please enable location services."
    ),
    GeolocationFailure.POSITION_UNAVAILABLE: "Location information is unavailable.",
    GeolocationFailure.TIMEOUT: "Location request timed out.",
}


class DevicePositionError(Exception):
    """Raised by GeolocationProvider implementations when no fix is available."""

    def __init__(self, failure: GeolocationFailure) -> None:
        super().__init__(failure.value)
        self.failure = failure


def geolocation_error(failure: GeolocationFailure) -> PermissionError | GeolocationError:
    """Map a device location failure to its user-facing error."""
    message = GEOLOCATION_MESSAGES[failure]
    if failure is GeolocationFailure.PERMISSION_DENIED:
        return PermissionError(message, capability="geolocation")
    if failure is GeolocationFailure.TIMEOUT:
        return GeolocationError(message, error_code=ErrorCode.GEOLOCATION_TIMEOUT)
    return GeolocationError(message)


def fallback_location(settings: Settings) -> Location:
    """Configured default location used when nothing else is known."""
    return Location(
        latitude=settings.default_latitude,
        longitude=settings.default_longitude,
        display_name=settings.default_location_name,
        country_code=settings.default_country_code,
    )


class LocationResolver:
    """Resolve queries and coordinates into Locations."""

    def __init__(self, gateway: OpenWeatherClient) -> None:
        self._gateway = gateway

    async def resolve_by_query(self, text: str) -> Location:
        """Resolve free text to the provider's best match.

        Raises:
            ValidationError: If the query is empty
            NotFoundError: If nothing matches
        """
        query = text.strip()
        if not query:
            raise ValidationError("Enter a location to search for")

        candidates = await self._gateway.search_locations(query)
        location = candidates[0]

        logger.info(
            "location_resolved",
            query=query,
            location=str(location),
            candidates=len(candidates),
        )
        return location

    async def resolve_by_coordinates(self, latitude: float, longitude: float) -> Location:
        """Name a coordinate pair, keeping the given coordinates.

        Raises:
            NotFoundError: If the provider has no match
        """
        named = await self._gateway.reverse_geocode(latitude, longitude)
        location = named.model_copy(update={"latitude": latitude, "longitude": longitude})

        logger.info("coordinates_resolved", location=str(location))
        return location

    async def resolve_by_device(self, provider: GeolocationProvider) -> Location:
        """Resolve the device's current position.

        Raises:
            PermissionError: If location access was denied
            GeolocationError: If the position is unavailable or timed out
            NotFoundError: If the provider cannot name the position
        """
        try:
            latitude, longitude = await provider.get_position()
        except DevicePositionError as e:
            raise geolocation_error(e.failure) from e

        return await self.resolve_by_coordinates(latitude, longitude)
