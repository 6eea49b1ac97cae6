"""Refresh and alert scheduler.

Owns the active location and its weather snapshot. Fetches data when the
location changes, then keeps it fresh on two independent timers: a full
refresh and a lighter alert re-poll. Fetch errors are shown to the user and
never disarm the timers.

States:
    IDLE: no active location
    LOADING: fetch in flight
    READY: snapshot available, timers armed
    ERROR: last fetch failed, previous snapshot (if any) retained
"""

import asyncio
from collections.abc import Sequence
from enum import Enum

from src.dashboard.notifications import AlertNotifier
from src.dashboard.preferences import PreferenceStore
from src.dashboard.timers import PeriodicTask, SleepFunc
from src.dashboard.view import DashboardView, NotificationPermission, NotificationService
from src.shared.api.errors import DashboardError
from src.shared.api.openweather import OpenWeatherClient
from src.shared.api.response_models import Alert, CurrentConditions, ForecastBundle
from src.shared.config.logging import get_logger
from src.shared.config.settings import Settings, get_settings
from src.shared.models.location import Location
from src.shared.models.snapshot import WeatherSnapshot

logger = get_logger(__name__)


class SchedulerState(Enum):
    """Refresh lifecycle state."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class RefreshScheduler:
    """Keep the active location's weather data fresh.

    Every fetch is tagged with the location it targets; a result that
    arrives after the active location changed is discarded, so the view
    never shows data for a location the user has moved away from.
    """

    def __init__(
        self,
        gateway: OpenWeatherClient,
        notifier: AlertNotifier,
        store: PreferenceStore,
        view: DashboardView,
        notification_service: NotificationService,
        settings: Settings | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """Initialize scheduler.

        Args:
            gateway: Weather provider client
            notifier: Alert notifier (deduplicates notifications)
            store: Preference store the active location is persisted to
            view: Presentation layer
            notification_service: Platform notification service
            settings: Intervals and limits (global settings if not provided)
            sleep: Sleep implementation for the timers
        """
        self._settings = settings or get_settings()
        self._gateway = gateway
        self._notifier = notifier
        self._store = store
        self._view = view
        self._notification_service = notification_service

        self._state = SchedulerState.IDLE
        self._location: Location | None = None
        self._snapshot: WeatherSnapshot | None = None
        self._alerts_enabled = self._settings.alerts_enabled

        self._refresh_timer = PeriodicTask(
            "refresh", self._settings.refresh_interval_sec, self.refresh, sleep
        )
        self._alert_timer = PeriodicTask(
            "alerts", self._settings.alert_check_interval_sec, self.poll_alerts, sleep
        )

        logger.info(
            "scheduler_initialized",
            refresh_interval_sec=self._settings.refresh_interval_sec,
            alert_check_interval_sec=self._settings.alert_check_interval_sec,
            alerts_enabled=self._alerts_enabled,
        )

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def location(self) -> Location | None:
        return self._location

    @property
    def snapshot(self) -> WeatherSnapshot | None:
        return self._snapshot

    @property
    def alerts_enabled(self) -> bool:
        return self._alerts_enabled

    @property
    def refresh_timer(self) -> PeriodicTask:
        return self._refresh_timer

    @property
    def alert_timer(self) -> PeriodicTask:
        return self._alert_timer

    async def set_location(self, location: Location) -> WeatherSnapshot | None:
        """Make a location active and load its weather.

        Args:
            location: New active location

        Returns:
            The new snapshot, or None if the fetch failed or was superseded
        """
        self._location = location
        self._store.save_location(location)

        logger.info("active_location_changed", location=str(location))

        return await self._load(location, restart_refresh=True)

    async def refresh(self) -> WeatherSnapshot | None:
        """Reload the active location (full-refresh timer body)."""
        if self._location is None:
            return None

        logger.info("scheduled_refresh", location=str(self._location))
        return await self._load(self._location, restart_refresh=False)

    async def restore(self, fallback: Location | None = None) -> WeatherSnapshot | None:
        """Activate the last-viewed location, or the fallback if none is stored.

        Returns:
            The loaded snapshot, or None when there is nothing to load
        """
        location = self._store.load_location() or fallback
        if location is None:
            logger.info("no_location_to_restore")
            return None

        return await self.set_location(location)

    async def _load(self, location: Location, restart_refresh: bool) -> WeatherSnapshot | None:
        self._state = SchedulerState.LOADING
        self._view.show_loading()

        try:
            forecast = await self._gateway.fetch_forecast(location, include_hourly=True)
            current = await self._gateway.fetch_current_conditions(location)
        except DashboardError as e:
            if location != self._location:
                logger.info("superseded_fetch_failed", location=str(location))
                return None

            self._state = SchedulerState.ERROR
            self._view.hide_loading()
            self._view.show_error(e.message, self._settings.error_display_sec)
            logger.warning(
                "weather_refresh_failed",
                location=str(location),
                error_code=e.error_code.name,
                has_previous_snapshot=self._snapshot is not None,
            )
            return None

        if location != self._location:
            logger.info("superseded_weather_discarded", location=str(location))
            return None

        snapshot = self._build_snapshot(location, current, forecast)
        self._snapshot = snapshot
        self._state = SchedulerState.READY
        self._arm_timers(restart_refresh)

        self._view.hide_loading()
        try:
            self._view.render_snapshot(snapshot)
        except Exception as e:
            logger.error("snapshot_render_failed", location=str(location), error=str(e), exc_info=True)
        self._publish_alerts(location, snapshot.alerts)

        logger.info(
            "weather_refreshed",
            location=str(location),
            days=len(snapshot.daily),
            hours=len(snapshot.hourly),
            alerts=len(snapshot.alerts),
        )
        return snapshot

    def _build_snapshot(
        self,
        location: Location,
        current: CurrentConditions,
        forecast: ForecastBundle,
    ) -> WeatherSnapshot:
        # The first daily entry is today; the forecast shows the days after it
        days = forecast.daily[1 : self._settings.max_forecast_days + 1]
        hours = forecast.hourly[: self._settings.max_hourly_forecast]
        return WeatherSnapshot(
            location=location,
            current=current,
            daily=tuple(days),
            hourly=tuple(hours),
            alerts=tuple(forecast.alerts),
        )

    def _publish_alerts(self, location: Location, alerts: Sequence[Alert]) -> None:
        # Rendering and notification failures are logged; the snapshot and timers stand
        try:
            self._view.render_alerts(alerts)
            self._notifier.process(alerts)
        except Exception as e:
            logger.error("alert_publish_failed", location=str(location), error=str(e), exc_info=True)

    def _arm_timers(self, restart_refresh: bool) -> None:
        # A tick of the refresh timer must not restart its own task
        if restart_refresh or not self._refresh_timer.is_running:
            self._refresh_timer.start()
        if self._alerts_enabled:
            self._alert_timer.start()

    async def poll_alerts(self) -> list[Alert] | None:
        """Re-fetch alerts only (alert timer body).

        Failures are logged and the previous alerts stay in place.

        Returns:
            Alerts from this poll, or None when skipped or failed
        """
        location = self._location
        if location is None or not self._alerts_enabled:
            return None

        try:
            forecast = await self._gateway.fetch_forecast(location, include_hourly=False)
        except DashboardError as e:
            logger.warning("alert_poll_failed", location=str(location), error=e.message)
            return None

        if location != self._location:
            logger.info("superseded_alerts_discarded", location=str(location))
            return None

        alerts = list(forecast.alerts)
        if self._snapshot is not None and self._snapshot.location == location:
            self._snapshot = self._snapshot.with_alerts(alerts)

        self._publish_alerts(location, alerts)

        logger.debug("alerts_polled", location=str(location), alerts=len(alerts))
        return alerts

    def set_alerts_enabled(self, enabled: bool) -> None:
        """Turn alert polling on or off.

        Disabling stops the alert timer only. Enabling with an active
        location polls immediately, then on the regular interval. Must be
        called from within the running event loop.
        """
        self._alerts_enabled = enabled

        if not enabled:
            self._alert_timer.cancel()
        elif self._location is not None:
            self._alert_timer.start(run_immediately=True)

        logger.info("alerts_toggled", enabled=enabled)

    async def request_notification_permission(self) -> NotificationPermission:
        """Ask the platform for notification permission.

        Starts alert polling when permission is granted and a location is active.
        """
        permission = await self._notification_service.request_permission()

        logger.info("notification_permission", permission=permission.value)

        if (
            permission is NotificationPermission.GRANTED
            and self._location is not None
            and self._alerts_enabled
        ):
            self._alert_timer.start()

        return permission

    def stop(self) -> None:
        """Cancel both timers."""
        self._refresh_timer.cancel()
        self._alert_timer.cancel()
        logger.info("scheduler_stopped")
