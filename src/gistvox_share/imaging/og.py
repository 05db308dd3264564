"""Open Graph preview images rendered by the HTML-to-image service, with static fallbacks."""

from dataclasses import dataclass

import httpx
import structlog

from ..backend.client import BackendClient
from ..config import Settings
from ..errors import ConfigurationError, NotFoundError, ShareServiceError, UpstreamError
from ..rendering.formatting import format_duration, join_parts
from ..rendering.pages import OG_IMAGE_HEIGHT, OG_IMAGE_WIDTH, render_og_card

logger = structlog.get_logger()

TEMPLATE_IMAGE = "gistvox-resized.png"


@dataclass
class ImageRedirect:
    """Where to send the client for a preview image."""

    url: str
    status_code: int
    cache_control: str
    source: str
    error: ShareServiceError | None = None


class OgImageService:
    """Generates preview images, degrading to static assets on any failure."""

    def __init__(self, http: httpx.AsyncClient, backend: BackendClient, settings: Settings):
        """Initialize preview image service.

        Args:
            http: Shared async HTTP client
            backend: Backend client for record lookups
            settings: Application settings with image API credentials
        """
        self.http = http
        self.backend = backend
        self.settings = settings

    async def post_image(self, post_id: str) -> ImageRedirect:
        """Resolve the preview image for a post."""
        try:
            found = await self.backend.get_post_with_creator(post_id)
            if found is None:
                raise NotFoundError("Post not found")
            post, creator = found
            html = render_og_card(
                post.display_title,
                f"@{creator.display_handle}",
                join_parts(format_duration(post.audio_duration), "Audio Story"),
                self.settings,
            )
            return await self._generated(html, record_id=post_id)
        except ShareServiceError as e:
            logger.warning("og_image_fallback", post_id=post_id, reason=e.message)
            return await self._fallback(f"og/{post_id}.png", error=e)

    async def series_image(self, series_id: str) -> ImageRedirect:
        """Resolve the preview image for a series."""
        try:
            listing = await self.backend.get_series_listing(series_id)
            if listing is None:
                raise NotFoundError("Series not found")
            html = render_og_card(
                listing.series.display_title,
                listing.creator.name,
                join_parts(
                    f"{listing.chapter_count} chapters",
                    format_duration(listing.duration_seconds),
                    "Audio Series",
                ),
                self.settings,
            )
            return await self._generated(html, record_id=series_id)
        except ShareServiceError as e:
            logger.warning("og_image_fallback", series_id=series_id, reason=e.message)
            return await self._fallback(f"og/series/{series_id}.png", error=e)

    async def _generated(self, html: str, record_id: str) -> ImageRedirect:
        url = await self.render_html(html)
        logger.info("og_image_generated", record_id=record_id, url=url)
        return ImageRedirect(
            url=url,
            status_code=302,
            cache_control=self.settings.og_cache_control,
            source="generated",
        )

    async def render_html(self, html: str) -> str:
        """Render an HTML snippet to an image through the HCTI API.

        Args:
            html: Card markup

        Returns:
            URL of the rendered image
        """
        if not self.settings.has_image_credentials:
            raise ConfigurationError(
                "Image rendering credentials are missing",
                detail="HCTI_USER_ID and HCTI_API_KEY must be set",
            )

        payload = {
            "html": html,
            "google_fonts": "Inter",
            "viewport_width": OG_IMAGE_WIDTH,
            "viewport_height": OG_IMAGE_HEIGHT,
            "device_scale": 1,
        }

        try:
            response = await self.http.post(
                self.settings.hcti_endpoint,
                json=payload,
                auth=(self.settings.hcti_user_id, self.settings.hcti_api_key),
            )
        except httpx.HTTPError as e:
            raise UpstreamError("Image rendering request failed", detail=str(e)) from e

        if response.is_error:
            raise UpstreamError(
                f"Image rendering returned {response.status_code}",
                detail=response.text[:500],
            )

        try:
            url = response.json().get("url")
        except (ValueError, AttributeError) as e:
            raise UpstreamError("Image rendering returned an unreadable body") from e
        if not url:
            raise UpstreamError("Image rendering returned no URL")
        return url

    def fallback_candidates(self, custom_path: str) -> list[tuple[str, str]]:
        """Ordered (source, url) pairs tried when rendering fails."""
        candidates = []
        storage = self.settings.storage_public_url
        if storage:
            candidates.append(("custom", f"{storage}/{custom_path}"))
            candidates.append(("template", f"{storage}/{TEMPLATE_IMAGE}"))
        candidates.append(("logo", self.settings.logo_url))
        return candidates

    async def _fallback(self, custom_path: str, error: ShareServiceError) -> ImageRedirect:
        candidates = self.fallback_candidates(custom_path)

        for source, url in candidates:
            if await self._exists(url):
                logger.info("og_image_fallback_selected", source=source, url=url)
                return ImageRedirect(
                    url=url,
                    status_code=301,
                    cache_control=self.settings.og_fallback_cache_control,
                    source=source,
                    error=error,
                )

        source, url = candidates[-1]
        logger.warning("og_image_no_fallback_available", url=url)
        return ImageRedirect(
            url=url,
            status_code=301,
            cache_control=self.settings.og_fallback_cache_control,
            source=source,
            error=error,
        )

    async def _exists(self, url: str) -> bool:
        try:
            response = await self.http.head(url, follow_redirects=True)
        except httpx.HTTPError as e:
            logger.debug("og_image_probe_failed", url=url, error=str(e))
            return False
        return response.is_success
