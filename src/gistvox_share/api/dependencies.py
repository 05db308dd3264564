"""Dependency injection for FastAPI."""

import httpx
from fastapi import Depends, Request

from ..backend.client import BackendClient
from ..backend.listen_guard import ListenGuard
from ..config import Settings
from ..errors import ConfigurationError
from ..imaging.og import OgImageService
from ..rendering.bots import BotDetector


def get_settings(request: Request) -> Settings:
    """Get the settings the application was created with."""
    return request.app.state.settings


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Get the shared outbound HTTP client opened by the lifespan handler.

    Raises:
        ConfigurationError: If the application has not been started
    """
    http = getattr(request.app.state, "http", None)
    if http is None:
        raise ConfigurationError("HTTP client is not initialised")
    return http


async def get_backend(
    settings: Settings = Depends(get_settings),
    http: httpx.AsyncClient = Depends(get_http_client),
) -> BackendClient:
    """Get backend client instance.

    Returns:
        BackendClient bound to the shared HTTP client
    """
    return BackendClient(http, settings)


async def get_og_service(
    settings: Settings = Depends(get_settings),
    http: httpx.AsyncClient = Depends(get_http_client),
    backend: BackendClient = Depends(get_backend),
) -> OgImageService:
    return OgImageService(http=http, backend=backend, settings=settings)


def get_bot_detector(settings: Settings = Depends(get_settings)) -> BotDetector:
    return BotDetector(settings.bot_user_agent_tokens)


def get_listen_guard(request: Request) -> ListenGuard:
    return request.app.state.listen_guard


def get_base_url(request: Request, settings: Settings = Depends(get_settings)) -> str:
    """Absolute base URL used in meta tags and share links.

    Uses the configured public URL, else the request host over https.
    """
    if settings.public_base_url:
        return settings.public_base_url.rstrip("/")
    host = request.headers.get("host") or request.url.netloc
    return f"https://{host}"


def debug_requested(request: Request) -> bool:
    """Whether the `debug` query flag is switched on (`1`, `true` or `yes`)."""
    return request.query_params.get("debug", "").lower() in ("1", "true", "yes")


def diagnostics_enabled(request: Request) -> bool:
    """Whether error responses may carry diagnostic detail."""
    if debug_requested(request):
        return True
    settings: Settings = request.app.state.settings
    return not settings.is_production
