"""API clients for external services."""

from src.shared.api.errors import (
    AuthenticationError,
    DashboardError,
    DataError,
    ErrorCode,
    GeolocationError,
    NetworkError,
    NotFoundError,
    PermissionError,
    UpstreamError,
    ValidationError,
    classify_error,
    is_retryable,
)
from src.shared.api.openweather import OpenWeatherClient
from src.shared.api.rainviewer import RainViewerClient

__all__ = [
    "OpenWeatherClient",
    "RainViewerClient",
    "DashboardError",
    "UpstreamError",
    "NetworkError",
    "NotFoundError",
    "PermissionError",
    "GeolocationError",
    "ValidationError",
    "AuthenticationError",
    "DataError",
    "ErrorCode",
    "classify_error",
    "is_retryable",
]
