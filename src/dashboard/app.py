"""Dashboard composition root and entry point.

Builds every component once and wires them together by reference.
Run headless with ``python -m src.dashboard.app [location query]``.
"""

import argparse
import asyncio
import sys
from dataclasses import dataclass

import httpx

from src.dashboard.locations import LocationResolver, fallback_location
from src.dashboard.notifications import AlertNotifier
from src.dashboard.preferences import PreferenceStore, UserRegistry
from src.dashboard.scheduler import RefreshScheduler
from src.dashboard.severity import build_severity_table
from src.dashboard.view import (
    DashboardView,
    GeolocationProvider,
    LoggingNotificationService,
    LoggingView,
    NotificationService,
)
from src.shared.api.errors import DashboardError
from src.shared.api.openweather import OpenWeatherClient
from src.shared.api.rainviewer import RainViewerClient
from src.shared.config.logging import configure_logging, get_logger
from src.shared.config.settings import Settings, get_settings
from src.shared.db import DatabaseManager, KeyValueRepository
from src.shared.models.account import SavedLocation
from src.shared.models.snapshot import WeatherSnapshot

logger = get_logger(__name__)


@dataclass
class Dashboard:
    """Fully wired dashboard.

    User actions (search, device location, saved locations) resolve a
    location and hand it to the scheduler; resolution errors are shown on
    the view instead of raised.
    """

    settings: Settings
    gateway: OpenWeatherClient
    radar: RainViewerClient
    resolver: LocationResolver
    preferences: PreferenceStore
    users: UserRegistry
    notifier: AlertNotifier
    scheduler: RefreshScheduler
    view: DashboardView
    db_manager: DatabaseManager
    http_client: httpx.AsyncClient
    owns_http_client: bool = False

    def _show_error(self, error: DashboardError) -> None:
        self.view.show_error(error.message, self.settings.error_display_sec)

    async def start(self) -> WeatherSnapshot | None:
        """Load the last-viewed location, or the configured default."""
        return await self.scheduler.restore(fallback=fallback_location(self.settings))

    async def search(self, query: str) -> WeatherSnapshot | None:
        """Search a location by name and make the best match active."""
        try:
            location = await self.resolver.resolve_by_query(query)
        except DashboardError as e:
            self._show_error(e)
            return None
        return await self.scheduler.set_location(location)

    async def use_device_location(self, provider: GeolocationProvider) -> WeatherSnapshot | None:
        """Make the device's current position active."""
        try:
            location = await self.resolver.resolve_by_device(provider)
        except DashboardError as e:
            self._show_error(e)
            return None
        return await self.scheduler.set_location(location)

    async def open_saved_location(self, saved: SavedLocation) -> WeatherSnapshot | None:
        """Make a bookmarked location active, refreshing its name."""
        try:
            location = await self.resolver.resolve_by_coordinates(saved.latitude, saved.longitude)
        except DashboardError as e:
            self._show_error(e)
            return None
        return await self.scheduler.set_location(location)

    async def radar_frame_urls(self, zoom: int | None = None, x: int = 0, y: int = 0) -> list[str]:
        """Tile URLs for every past radar frame, oldest first."""
        zoom = self.settings.map_zoom_level if zoom is None else zoom
        try:
            manifest = await self.radar.fetch_radar_manifest()
        except DashboardError as e:
            self._show_error(e)
            return []

        urls = (
            self.radar.radar_frame_url(manifest, index, zoom, x, y)
            for index in range(len(manifest.radar.past))
        )
        return [url for url in urls if url is not None]

    async def map_tile_urls(
        self, layer: str | None = None, zoom: int | None = None, x: int = 0, y: int = 0
    ) -> list[str]:
        """Tile URLs for a map layer, the configured default map type if none given.

        The radar layer yields one URL per past frame; other layers yield one tile.
        """
        layer = layer or self.settings.default_map_type
        zoom = self.settings.map_zoom_level if zoom is None else zoom
        if layer == "radar":
            return await self.radar_frame_urls(zoom, x, y)
        return [self.gateway.map_tile_url(layer, zoom, x, y)]

    async def close(self) -> None:
        """Stop timers and release network and storage resources."""
        self.scheduler.stop()
        # Caller-supplied clients stay open
        if self.owns_http_client:
            await self.http_client.aclose()
        self.db_manager.close()


def build_dashboard(
    settings: Settings | None = None,
    view: DashboardView | None = None,
    notification_service: NotificationService | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> Dashboard:
    """Construct and wire every dashboard component.

    Args:
        settings: Settings (global settings if not provided)
        view: Presentation layer (logs updates if not provided)
        notification_service: Platform notifications (logged if not provided)
        http_client: Shared httpx client for both providers (left open on close
            when supplied by the caller)

    Returns:
        Ready-to-start Dashboard
    """
    settings = settings or get_settings()
    view = view or LoggingView(settings)
    notification_service = notification_service or LoggingNotificationService()
    owns_http_client = http_client is None
    if http_client is None:
        http_client = httpx.AsyncClient(timeout=settings.http_timeout_sec)

    db_manager = DatabaseManager(settings.storage_url)
    db_manager.create_tables()
    repository = KeyValueRepository(db_manager, settings.storage_prefix)

    preferences = PreferenceStore(repository)
    users = UserRegistry(
        repository,
        saved_locations_limit=settings.saved_locations_limit,
        default_username=settings.default_username,
    )

    gateway = OpenWeatherClient(settings=settings, http_client=http_client)
    radar = RainViewerClient(settings=settings, http_client=http_client)

    notifier = AlertNotifier(
        notification_service,
        preferences,
        severity_table=build_severity_table(settings.severity_keywords),
        notification_duration_sec=settings.notification_duration_sec,
    )
    scheduler = RefreshScheduler(
        gateway=gateway,
        notifier=notifier,
        store=preferences,
        view=view,
        notification_service=notification_service,
        settings=settings,
    )

    logger.info("dashboard_built", units=settings.units.value, storage=settings.storage_url)

    return Dashboard(
        settings=settings,
        gateway=gateway,
        radar=radar,
        resolver=LocationResolver(gateway),
        preferences=preferences,
        users=users,
        notifier=notifier,
        scheduler=scheduler,
        view=view,
        db_manager=db_manager,
        http_client=http_client,
        owns_http_client=owns_http_client,
    )


async def run(query: str | None = None) -> None:
    """Run the dashboard until cancelled."""
    dashboard = build_dashboard()
    try:
        if query:
            await dashboard.search(query)
        else:
            await dashboard.start()
        await asyncio.Event().wait()
    finally:
        await dashboard.close()


def main(argv: list[str] | None = None) -> int:
    """Entry point for headless runs."""
    parser = argparse.ArgumentParser(description="Headless weather dashboard")
    parser.add_argument("query", nargs="*", help="Location to show (defaults to last viewed)")
    args = parser.parse_args(argv)

    configure_logging()
    logger.info("dashboard_starting")

    try:
        asyncio.run(run(" ".join(args.query) or None))
    except KeyboardInterrupt:
        logger.info("dashboard_interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
