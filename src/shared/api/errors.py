"""Centralized error handling for the weather dashboard.

Provides a custom exception hierarchy with error codes, retry hints,
and structured logging integration.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

import httpx

from src.shared.config.logging import get_logger

logger = get_logger(__name__)


class ErrorCode(Enum):
    """Error codes for dashboard exceptions."""

    # Network errors (1xxx)
    NETWORK_TIMEOUT = 1001
    NETWORK_CONNECTION = 1002

    # Upstream HTTP errors (2xxx)
    HTTP_BAD_REQUEST = 2400
    HTTP_UNAUTHORIZED = 2401
    HTTP_FORBIDDEN = 2403
    HTTP_NOT_FOUND = 2404
    HTTP_RATE_LIMIT = 2429
    HTTP_SERVER_ERROR = 2500
    HTTP_BAD_GATEWAY = 2502
    HTTP_SERVICE_UNAVAILABLE = 2503
    HTTP_GATEWAY_TIMEOUT = 2504

    # Authentication and permission errors (3xxx)
    AUTH_INVALID_CREDENTIALS = 3001
    PERMISSION_DENIED = 3101

    # Data errors (4xxx)
    DATA_INVALID_RESPONSE = 4001
    DATA_NOT_FOUND = 4004

    # Local validation errors (5xxx)
    VALIDATION_FAILED = 5001

    # Device location errors (6xxx)
    GEOLOCATION_UNAVAILABLE = 6001
    GEOLOCATION_TIMEOUT = 6002

    # Unknown/Other
    UNKNOWN_ERROR = 9999


class DashboardError(Exception):
    """Base exception for all dashboard errors.

    Provides structured error information including error codes,
    retry hints, and context for logging.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        retryable: bool = False,
        endpoint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dashboard error.

        Args:
            message: Human-readable error message
            error_code: Structured error code
            retryable: Whether the operation can be retried
            endpoint: Provider endpoint that failed
            details: Additional error context
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.retryable = retryable
        self.endpoint = endpoint
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)

        logger.warning(
            "dashboard_error",
            error_code=error_code.name,
            message=message,
            retryable=retryable,
            endpoint=endpoint,
            details=details,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization.

        Returns:
            Dictionary representation of error
        """
        return {
            "error_code": self.error_code.name,
            "error_value": self.error_code.value,
            "message": self.message,
            "retryable": self.retryable,
            "endpoint": self.endpoint,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class UpstreamError(DashboardError):
    """Non-success status returned by a weather provider."""

    def __init__(
        self,
        message: str,
        status_code: int,
        status_text: str = "",
        endpoint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize upstream error.

        Args:
            message: Error message
            status_code: HTTP status code
            status_text: HTTP reason phrase
            endpoint: Failed endpoint
            details: Additional context
        """
        details = details or {}
        details["status_code"] = status_code
        details["status_text"] = status_text

        super().__init__(
            message=message,
            error_code=self._error_code_from_status(status_code),
            retryable=status_code in [429, 500, 502, 503, 504],
            endpoint=endpoint,
            details=details,
        )
        self.status_code = status_code
        self.status_text = status_text

    @staticmethod
    def _error_code_from_status(status_code: int) -> ErrorCode:
        """Map HTTP status code to error code.

        Args:
            status_code: HTTP status code

        Returns:
            Corresponding ErrorCode
        """
        mapping = {
            400: ErrorCode.HTTP_BAD_REQUEST,
            401: ErrorCode.HTTP_UNAUTHORIZED,
            403: ErrorCode.HTTP_FORBIDDEN,
            404: ErrorCode.HTTP_NOT_FOUND,
            429: ErrorCode.HTTP_RATE_LIMIT,
            500: ErrorCode.HTTP_SERVER_ERROR,
            502: ErrorCode.HTTP_BAD_GATEWAY,
            503: ErrorCode.HTTP_SERVICE_UNAVAILABLE,
            504: ErrorCode.HTTP_GATEWAY_TIMEOUT,
        }
        return mapping.get(status_code, ErrorCode.UNKNOWN_ERROR)


class NetworkError(DashboardError):
    """Transport failures (timeouts, connection failures, DNS)."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.NETWORK_CONNECTION,
        endpoint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            retryable=True,
            endpoint=endpoint,
            details=details,
        )


class NotFoundError(DashboardError):
    """Geocoding query matched no locations."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=ErrorCode.DATA_NOT_FOUND,
            retryable=False,
            endpoint=endpoint,
            details=details,
        )


class PermissionError(DashboardError):
    """Device location or notification permission denied."""

    def __init__(
        self,
        message: str,
        capability: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize permission error.

        Args:
            message: Corrective instruction shown to the user
            capability: Platform capability that was denied
            details: Additional context
        """
        details = details or {}
        details["capability"] = capability

        super().__init__(
            message=message,
            error_code=ErrorCode.PERMISSION_DENIED,
            retryable=False,
            details=details,
        )
        self.capability = capability


class GeolocationError(DashboardError):
    """Device position could not be determined."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.GEOLOCATION_UNAVAILABLE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            retryable=True,
            details=details,
        )


class ValidationError(DashboardError):
    """Local precondition violated."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_FAILED,
            retryable=False,
            details=details,
        )


class AuthenticationError(DashboardError):
    """Local account credentials did not match."""

    def __init__(
        self,
        message: str = "Invalid email or password",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=ErrorCode.AUTH_INVALID_CREDENTIALS,
            retryable=False,
            details=details,
        )


class DataError(DashboardError):
    """Provider payload failed validation."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=ErrorCode.DATA_INVALID_RESPONSE,
            retryable=False,
            endpoint=endpoint,
            details=details,
        )


def classify_error(exception: Exception, endpoint: str | None = None) -> DashboardError:
    """Classify a generic exception into a DashboardError.

    Args:
        exception: Exception to classify
        endpoint: Provider endpoint that failed

    Returns:
        Classified DashboardError instance
    """
    if isinstance(exception, DashboardError):
        return exception

    if isinstance(exception, httpx.TimeoutException):
        return NetworkError(
            message="Request timed out",
            error_code=ErrorCode.NETWORK_TIMEOUT,
            endpoint=endpoint,
        )

    if isinstance(exception, httpx.HTTPStatusError):
        response = exception.response
        return UpstreamError(
            message=str(exception),
            status_code=response.status_code,
            status_text=response.reason_phrase,
            endpoint=endpoint,
        )

    if isinstance(exception, httpx.RequestError):
        return NetworkError(
            message=f"Request failed: {exception}",
            endpoint=endpoint,
            details={"exception_type": type(exception).__name__},
        )

    return DashboardError(
        message=str(exception),
        error_code=ErrorCode.UNKNOWN_ERROR,
        endpoint=endpoint,
        details={"exception_type": type(exception).__name__},
    )


def is_retryable(error: Exception) -> bool:
    """Check if an error is retryable.

    Args:
        error: Exception to check

    Returns:
        True if error is retryable
    """
    return classify_error(error).retryable
