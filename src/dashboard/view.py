"""Collaborator interfaces for presentation and platform services.

The scheduler talks to rendering, notifications and device location only
through these protocols. Logging implementations are provided for headless
runs.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from src.shared.api.response_models import Alert
from src.shared.config.logging import get_logger
from src.shared.config.settings import Settings, get_settings
from src.shared.formatting import format_date_time, format_temperature, format_wind_speed
from src.shared.models.location import Location
from src.shared.models.snapshot import WeatherSnapshot

logger = get_logger(__name__)


class NotificationPermission(Enum):
    """Platform notification permission state."""

    GRANTED = "granted"
    DENIED = "denied"
    DEFAULT = "default"


@dataclass(frozen=True)
class AlertNotification:
    """User-facing notification for a weather alert.

    Attributes:
        title: Notification title
        body: Notification body text
        tag: Platform tag used to collapse duplicates
        require_interaction: Stay visible until dismissed
        dismiss_after: Seconds before auto-dismiss (None when sticky)
    """

    title: str
    body: str
    tag: str
    require_interaction: bool
    dismiss_after: float | None


class DashboardView(Protocol):
    """Rendering surface for weather data and transient messages."""

    def show_loading(self) -> None: ...

    def hide_loading(self) -> None: ...

    def render_snapshot(self, snapshot: WeatherSnapshot) -> None: ...

    def render_alerts(self, alerts: Sequence[Alert]) -> None: ...

    def show_error(self, message: str, display_seconds: float) -> None: ...


class NotificationService(Protocol):
    """Platform notification service."""

    def permission(self) -> NotificationPermission: ...

    async def request_permission(self) -> NotificationPermission: ...

    def show(self, notification: AlertNotification) -> None: ...


class GeolocationProvider(Protocol):
    """Platform location service returning (latitude, longitude)."""

    async def get_position(self) -> tuple[float, float]: ...


class LoggingView:
    """DashboardView that writes every update to the structured log.

    Values are formatted with the configured units and timezone.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    def show_loading(self) -> None:
        logger.debug("view_loading")

    def hide_loading(self) -> None:
        logger.debug("view_loading_done")

    def render_snapshot(self, snapshot: WeatherSnapshot) -> None:
        settings = self._settings
        current = snapshot.current
        logger.info(
            "view_snapshot",
            location=str(snapshot.location),
            description=current.description,
            temperature=format_temperature(
                current.temperature, settings.units, settings.temperature_decimal_places
            ),
            wind=format_wind_speed(current.wind_speed, settings.units),
            observed=format_date_time(current.dt, "datetime", settings.language, settings.timezone),
            days=len(snapshot.daily),
            hours=len(snapshot.hourly),
            alerts=len(snapshot.alerts),
        )

    def render_alerts(self, alerts: Sequence[Alert]) -> None:
        logger.info("view_alerts", events=[alert.event for alert in alerts])

    def show_error(self, message: str, display_seconds: float) -> None:
        logger.warning("view_error", message=message, display_seconds=display_seconds)


class LoggingNotificationService:
    """NotificationService that logs notifications instead of displaying them."""

    def __init__(self, permission: NotificationPermission = NotificationPermission.GRANTED) -> None:
        self._permission = permission
        self.shown: list[AlertNotification] = []

    def permission(self) -> NotificationPermission:
        return self._permission

    async def request_permission(self) -> NotificationPermission:
        if self._permission is NotificationPermission.DEFAULT:
            self._permission = NotificationPermission.GRANTED
        return self._permission

    def show(self, notification: AlertNotification) -> None:
        self.shown.append(notification)
        logger.warning(
            "weather_alert_notification",
            title=notification.title,
            body=notification.body,
            tag=notification.tag,
            sticky=notification.require_interaction,
        )


class StaticGeolocationProvider:
    """GeolocationProvider that always reports the same position."""

    def __init__(self, location: Location) -> None:
        self._location = location

    async def get_position(self) -> tuple[float, float]:
        return self._location.latitude, self._location.longitude
