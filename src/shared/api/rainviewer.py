"""RainViewer radar API client.

Fetches the public weather-maps manifest and builds radar frame tile URLs.
"""

from typing import Any

import httpx

from src.shared.api.errors import DataError, UpstreamError, classify_error
from src.shared.api.response_models import RadarManifest
from src.shared.config.logging import get_logger
from src.shared.config.settings import Settings, get_settings

logger = get_logger(__name__)


class RainViewerClient:
    """Async client for the RainViewer radar manifest."""

    def __init__(
        self,
        manifest_url: str | None = None,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize RainViewer client.

        Args:
            manifest_url: Manifest URL override
            settings: Settings to read defaults from
            http_client: Preconfigured httpx client (created if not provided)
        """
        settings = settings or get_settings()
        self.manifest_url = manifest_url or settings.rainviewer_manifest_url
        self._client = http_client or httpx.AsyncClient(timeout=settings.http_timeout_sec)

    async def fetch_radar_manifest(self) -> RadarManifest:
        """Get the current radar manifest.

        Returns:
            Parsed manifest with past and nowcast frames

        Raises:
            UpstreamError: If the provider returns a non-success status
        """
        url = self.manifest_url
        logger.info("fetching_radar_manifest", url=url)

        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            logger.error("radar_request_error", url=url, error=str(e))
            raise classify_error(e, endpoint=url) from e

        if not response.is_success:
            raise UpstreamError(
                f"Radar API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
                status_text=response.reason_phrase,
                endpoint=url,
            )

        try:
            manifest = RadarManifest.model_validate(response.json())
        except ValueError as e:
            raise DataError("Unexpected radar manifest", endpoint=url) from e

        logger.debug("radar_manifest_fetched", past_frames=len(manifest.radar.past))
        return manifest

    @staticmethod
    def radar_frame_url(
        manifest: RadarManifest | None,
        frame_index: int = 0,
        zoom: int = 5,
        x: int = 0,
        y: int = 0,
    ) -> str | None:
        """Build the tile URL for a past radar frame.

        Args:
            manifest: Manifest from fetch_radar_manifest
            frame_index: Index into the past frames
            zoom: Zoom level
            x: Tile X coordinate
            y: Tile Y coordinate

        Returns:
            Tile URL, or None if the frame index is out of range
        """
        if manifest is None:
            return None

        frames = manifest.radar.past
        if not 0 <= frame_index < len(frames):
            return None

        frame = frames[frame_index]
        return f"{manifest.host}{frame.path}/{zoom}/{x}/{y}/0/0_0.png"

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "RainViewerClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
